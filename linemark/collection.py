"""Ordered collection of renderable lines forming a document."""

from __future__ import annotations

import copy
import io
import logging
from typing import Iterable, Optional, TextIO

from .constants import LayoutConstants
from .errors import (
    ContextLike,
    ErrorContext,
    InvalidElementError,
    LineRenderError,
    NilArgumentError,
    TextLayoutError,
    ValidationError,
)
from .fields import FieldSpec
from .lines import (
    BlankLines,
    PlainTextLine,
    SolidLine,
    StandardLine,
    TextLine,
    check_index,
    coerce_line,
)

logger = logging.getLogger(__name__)


class LineCollection:
    """An ordered, heterogeneous sequence of TextLine objects.

    The collection holds deep copies of the lines given to it, and peeks
    return deep copies, so no line is ever shared with a caller. Addressed
    operations check their arguments in a fixed order: a None argument,
    then an empty collection, then the index range, then the validity of
    the element itself.
    """

    def __init__(self, lines: Optional[Iterable[TextLine]] = None):
        self._lines: list[TextLine] = []
        if lines is not None:
            self.import_lines(lines)

    def __len__(self) -> int:
        return len(self._lines)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LineCollection):
            return NotImplemented
        return self.equal(other)

    def _context(self, context: ContextLike, operation: str) -> ErrorContext:
        return ErrorContext.coerce(context).extend(f"LineCollection.{operation}()")

    def _checked_element(self, index: int, context: ErrorContext) -> TextLine:
        check_index(index, len(self._lines), context, "line collection")
        line = self._lines[index]
        _check_element(index, line, context)
        return line

    # Accessors

    def peek_at(self, index: int, context: ContextLike = None) -> TextLine:
        """Return a deep copy of the line at ``index`` without removing it."""
        context = self._context(context, "peek_at")
        return self._checked_element(index, context).deep_copy()

    def peek_first(self, context: ContextLike = None) -> TextLine:
        """Return a deep copy of the first line.

        Raises:
            EmptyCollectionError: If the collection is empty.
            InvalidElementError: If the first line fails validation.
        """
        context = self._context(context, "peek_first")
        return self._checked_element(0, context).deep_copy()

    def peek_last(self, context: ContextLike = None) -> TextLine:
        """Return a deep copy of the last line; see peek_first."""
        context = self._context(context, "peek_last")
        return self._checked_element(len(self._lines) - 1, context).deep_copy()

    def export(self) -> list[TextLine]:
        """Return deep copies of every line, in order."""
        return [line.deep_copy() for line in self._lines]

    # Mutators

    def add_line(self, line: TextLine, context: ContextLike = None) -> int:
        """Append a deep copy of ``line``; returns its index."""
        context = self._context(context, "add_line")
        new_line = coerce_line(line, context)
        new_line.validate(context.extend("line"))
        self._lines.append(new_line)
        return len(self._lines) - 1

    def add_blank_lines(self, count: int = 1,
                        terminator: str = LayoutConstants.DEFAULT_LINE_TERMINATOR,
                        context: ContextLike = None) -> int:
        """Append ``count`` blank lines as one BlankLines entry.

        Args:
            count: Number of terminators to emit, 1 to 1,000,000.
            terminator: Line terminator; an empty string means newline.

        Returns:
            The index of the new entry.
        """
        context = self._context(context, "add_blank_lines")
        return self.add_line(BlankLines(count, terminator), context)

    def add_solid_line(self, unit: str, repeat_count: int, left_margin: str = "",
                       right_margin: str = "",
                       terminator: str = LayoutConstants.DEFAULT_LINE_TERMINATOR,
                       suppress_terminator: bool = False,
                       context: ContextLike = None) -> int:
        """Append a rule of ``unit`` repeated ``repeat_count`` times; returns its index."""
        context = self._context(context, "add_solid_line")
        return self.add_line(
            SolidLine(unit, repeat_count, left_margin, right_margin,
                      terminator, suppress_terminator), context)

    def add_plain_text(self, text: str, left_margin: str = "", right_margin: str = "",
                       terminator: str = LayoutConstants.DEFAULT_LINE_TERMINATOR,
                       suppress_terminator: bool = False,
                       context: ContextLike = None) -> int:
        context = self._context(context, "add_plain_text")
        return self.add_line(
            PlainTextLine(text, left_margin, right_margin, terminator,
                          suppress_terminator), context)

    def add_standard_line(self, fields: Iterable[FieldSpec], repeat_count: int = 1,
                          terminator: str = LayoutConstants.DEFAULT_LINE_TERMINATOR,
                          suppress_terminator: bool = False,
                          context: ContextLike = None) -> int:
        """Append a StandardLine built from copies of ``fields``.

        Args:
            fields: Field specifications, rendered left to right.
            repeat_count: Times the rendered fields repeat before the terminator.

        Returns:
            The index of the new line.

        Raises:
            NilArgumentError: If ``fields`` is None.
            ValidationError: If the line would not render.
        """
        context = self._context(context, "add_standard_line")
        if fields is None:
            raise NilArgumentError("fields", context)
        return self.add_line(
            StandardLine(list(fields), repeat_count, terminator, suppress_terminator),
            context)

    def insert_at(self, index: int, line: TextLine, context: ContextLike = None) -> None:
        """Insert a deep copy of ``line`` before the line now at ``index``."""
        context = self._context(context, "insert_at")
        new_line = coerce_line(line, context)
        check_index(index, len(self._lines), context, "line collection", empty_error=False)
        _validate_new_element(index, new_line, context)
        self._lines.insert(index, new_line)

    def replace_at(self, index: int, line: TextLine, context: ContextLike = None) -> None:
        """Discard the line at ``index`` and store a deep copy of ``line`` there."""
        context = self._context(context, "replace_at")
        new_line = coerce_line(line, context)
        check_index(index, len(self._lines), context, "line collection")
        _validate_new_element(index, new_line, context)
        self._lines[index] = new_line

    def pop_at(self, index: int, context: ContextLike = None) -> TextLine:
        """Remove and return the line at ``index``.

        The line is validated before removal; on any error the collection
        is unchanged.

        Raises:
            EmptyCollectionError: If the collection is empty.
            IndexOutOfRangeError: If ``index`` is outside the collection.
            InvalidElementError: If the stored line fails validation.
        """
        context = self._context(context, "pop_at")
        self._checked_element(index, context)
        return self._lines.pop(index)

    def pop_first(self, context: ContextLike = None) -> TextLine:
        context = self._context(context, "pop_first")
        self._checked_element(0, context)
        return self._lines.pop(0)

    def pop_last(self, context: ContextLike = None) -> TextLine:
        context = self._context(context, "pop_last")
        self._checked_element(len(self._lines) - 1, context)
        return self._lines.pop()

    def delete_at(self, index: int, context: ContextLike = None) -> None:
        """Remove the line at ``index`` without validating it."""
        context = self._context(context, "delete_at")
        check_index(index, len(self._lines), context, "line collection")
        del self._lines[index]

    def import_lines(self, lines: Iterable[TextLine], context: ContextLike = None) -> None:
        """Replace the whole collection with deep copies of ``lines``.

        Every element is validated first; if any fails the collection is left
        unchanged.
        """
        context = self._context(context, "import_lines")
        if lines is None:
            raise NilArgumentError("lines", context)
        new_lines = []
        for index, line in enumerate(lines):
            _check_element(index, line, context)
            new_lines.append(line.deep_copy())
        self._lines = new_lines

    def copy_in(self, other: "LineCollection", context: ContextLike = None) -> None:
        """Replace this collection with deep copies of the lines in ``other``."""
        context = self._context(context, "copy_in")
        if other is None:
            raise NilArgumentError("other", context)
        if not isinstance(other, LineCollection):
            raise ValidationError(
                f"Error: Cannot copy a '{type(other).__name__}' into a LineCollection.",
                context)
        self.import_lines(other._lines, context)

    def copy_out(self, context: ContextLike = None) -> "LineCollection":
        context = self._context(context, "copy_out")
        self.validate(context)
        return self.deep_copy()

    def deep_copy(self) -> "LineCollection":
        new = LineCollection()
        new._lines = copy.deepcopy(self._lines)
        return new

    def reset(self) -> None:
        self._lines = []

    # Validation and comparison

    def validate(self, context: ContextLike = None) -> None:
        """Check every stored line.

        An empty collection is valid.

        Raises:
            InvalidElementError: For the first line that is None, not a
                TextLine, or fails its own validation.
        """
        context = ErrorContext.coerce(context)
        for index, line in enumerate(self._lines):
            _check_element(index, line, context)

    def is_valid(self) -> bool:
        try:
            self.validate()
        except TextLayoutError:
            return False
        return True

    def equal(self, other: "LineCollection") -> bool:
        """True when both hold equal lines in the same order."""
        if not isinstance(other, LineCollection) or len(self) != len(other):
            return False
        return all(mine.equal(theirs) for mine, theirs in zip(self._lines, other._lines))

    # Rendering

    def render_into(self, buffer: TextIO, context: ContextLike = None) -> int:
        """Write every line to ``buffer`` in order; returns the number written.

        Each line is written only after it rendered successfully. On failure
        the buffer holds exactly the lines before the failing one and a
        LineRenderError reports the failing index.
        """
        context = self._context(context, "render_into")
        if buffer is None:
            raise NilArgumentError("buffer", context)
        rendered = []
        for index, line in enumerate(self._lines):
            item_context = context.extend(f"lines[{index}]")
            try:
                if line is None:
                    raise InvalidElementError(
                        index, f"Error: lines[{index}] is None.", item_context)
                text = line.render(item_context)
            except TextLayoutError as e:
                logger.debug(f"Line {index} of {len(self._lines)} failed to render")
                raise LineRenderError(
                    index,
                    f"Error: Text line lines[{index}] failed to render.\n{e.message}",
                    "".join(rendered), context) from e
            buffer.write(text)
            rendered.append(text)
        logger.debug(f"Rendered {len(rendered)} lines")
        return len(rendered)

    def render(self, context: ContextLike = None) -> str:
        """Render every line and return the concatenated text; see render_into."""
        context = self._context(context, "render")
        buffer = io.StringIO()
        self.render_into(buffer, context)
        return buffer.getvalue()

    def render_lines(self, context: ContextLike = None) -> list[str]:
        """Render the collection and split the text into lines without terminators."""
        return self.render(context).splitlines()


def _check_element(index, line, context):
    if line is None:
        raise InvalidElementError(index, f"Error: lines[{index}] is None.", context)
    if not isinstance(line, TextLine):
        raise InvalidElementError(
            index,
            f"Error: lines[{index}] is a '{type(line).__name__}', not a text line.",
            context)
    try:
        line.validate(context.extend(f"lines[{index}]"))
    except ValidationError as e:
        raise InvalidElementError(
            index, f"Error: lines[{index}] is invalid.\n{e.message}", context) from e


def _validate_new_element(index, line, context):
    try:
        line.validate(context.extend("line"))
    except ValidationError as e:
        raise InvalidElementError(
            index, f"Error: The new line for index {index} is invalid.\n{e.message}",
            context) from e
