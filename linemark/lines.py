"""Renderable line types.

Every line placed in a LineCollection implements the TextLine capability:
render, validate, equality, deep copy and reset. Lines are dataclasses, so
value equality and deep copies come from the dataclass machinery rather than
from per-type helpers.
"""

from __future__ import annotations

import copy
import dataclasses
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import ClassVar, Iterable, Optional

from .constants import LayoutConstants
from .enums import TextFieldType
from .errors import (
    ContextLike,
    EmptyCollectionError,
    ErrorContext,
    IndexOutOfRangeError,
    NilArgumentError,
    ValidationError,
)
from .fields import FieldSpec, check_count, check_text, render_field, reset_to_defaults
from .line_length import LineLengthManager, LineLengthPolicy


def check_index(index: int, length: int, context: ContextLike = None,
                what: str = "collection", empty_error: bool = True) -> None:
    """Raise EmptyCollectionError or IndexOutOfRangeError for a bad index.

    With ``empty_error`` false an empty sequence reports the index as out of
    range instead.
    """
    if length == 0 and empty_error:
        raise EmptyCollectionError(f"Error: The {what} is empty!", context)
    if isinstance(index, bool) or not isinstance(index, int):
        raise ValidationError(
            f"Error: Index must be an integer.\nindex = '{index!r}'", context)
    if index < 0 or index >= length:
        raise IndexOutOfRangeError(index, length, context)


def resolve_terminator(terminator: str) -> str:
    return terminator or LayoutConstants.DEFAULT_LINE_TERMINATOR


def _comparable(line):
    if dataclasses.is_dataclass(line) and getattr(line, "terminator", None) == "":
        return dataclasses.replace(line, terminator=resolve_terminator(""))
    return line


class TextLine(ABC):
    """Capability shared by every line a LineCollection can hold."""

    line_type: ClassVar[TextFieldType] = TextFieldType.NONE

    @abstractmethod
    def render(self, context: ContextLike = None) -> str:
        """Validate the line and return its text, terminator included."""

    @abstractmethod
    def validate(self, context: ContextLike = None) -> None:
        """Raise ValidationError if the line cannot be rendered."""

    def is_valid(self) -> bool:
        try:
            self.validate()
        except ValidationError:
            return False
        return True

    def equal(self, other: object) -> bool:
        """Compare by value; an empty terminator equals the default one."""
        if type(self) is not type(other):
            return False
        return _comparable(self) == _comparable(other)

    def deep_copy(self):
        return copy.deepcopy(self)

    def reset(self) -> None:
        reset_to_defaults(self)

    def _context(self, context: ContextLike, operation: str) -> ErrorContext:
        return ErrorContext.coerce(context).extend(f"{type(self).__name__}.{operation}()")


@dataclass
class StandardLine(TextLine):
    """An ordered run of fields rendered as one line, repeated ``repeat_count`` times.

    The body is every field rendered in order. The output is the body
    repeated ``repeat_count`` times followed by a single terminator, unless
    ``suppress_terminator`` is set.
    """

    fields: list[FieldSpec] = field(default_factory=list)
    repeat_count: int = 1
    terminator: str = LayoutConstants.DEFAULT_LINE_TERMINATOR
    suppress_terminator: bool = False

    line_type: ClassVar[TextFieldType] = TextFieldType.LINE_1_COLUMN

    def __post_init__(self):
        self.fields = copy.deepcopy(list(self.fields))

    def validate(self, context: ContextLike = None) -> None:
        context = ErrorContext.coerce(context)
        check_count(self.repeat_count, "repeat_count", context)
        check_text(self.terminator, "terminator", context)
        if not self.fields:
            raise ValidationError(
                "Error: This Standard Line has no fields!\n"
                "Add at least one field before rendering.", context)
        for index, field_spec in enumerate(self.fields):
            item_context = context.extend(f"fields[{index}]")
            if field_spec is None:
                raise ValidationError(f"Error: fields[{index}] is None.", item_context)
            if not isinstance(field_spec, FieldSpec):
                raise ValidationError(
                    f"Error: fields[{index}] is a '{type(field_spec).__name__}', "
                    f"not a field specification.", item_context)
            field_spec.validate(item_context)

    def render_body(self, context: ContextLike = None) -> list[str]:
        """Validate and return the rendered text of each field, in order."""
        context = self._context(context, "render")
        self.validate(context)
        return [render_field(field_spec, context.extend(f"fields[{index}]"))
                for index, field_spec in enumerate(self.fields)]

    def render(self, context: ContextLike = None) -> str:
        body = "".join(self.render_body(context))
        text = body * self.repeat_count
        if self.suppress_terminator:
            return text
        return text + resolve_terminator(self.terminator)

    def render_wrapped(self, policy: LineLengthPolicy, context: ContextLike = None) -> str:
        """Render the line, breaking between fields once ``policy`` is exceeded."""
        context = self._context(context, "render_wrapped")
        policy.validate(context)
        field_texts = self.render_body(context)
        manager = LineLengthManager(policy, resolve_terminator(self.terminator))
        for _ in range(self.repeat_count):
            for text in field_texts:
                manager.append(text)
        manager.end_line(self.suppress_terminator)
        return manager.getvalue()

    def field_count(self) -> int:
        return len(self.fields)

    def add_field(self, field_spec: FieldSpec, context: ContextLike = None) -> None:
        context = self._context(context, "add_field")
        self.fields.append(_copy_field(field_spec, context))

    def insert_field(self, index: int, field_spec: FieldSpec,
                     context: ContextLike = None) -> None:
        context = self._context(context, "insert_field")
        new_field = _copy_field(field_spec, context)
        check_index(index, len(self.fields), context, "field list", empty_error=False)
        self.fields.insert(index, new_field)

    def peek_field(self, index: int, context: ContextLike = None) -> FieldSpec:
        """Return a deep copy of the field at ``index``."""
        context = self._context(context, "peek_field")
        check_index(index, len(self.fields), context, "field list")
        return self.fields[index].deep_copy()

    def pop_field(self, index: int, context: ContextLike = None) -> FieldSpec:
        context = self._context(context, "pop_field")
        check_index(index, len(self.fields), context, "field list")
        return self.fields.pop(index)

    def set_fields(self, fields: Iterable[FieldSpec], context: ContextLike = None) -> None:
        context = self._context(context, "set_fields")
        if fields is None:
            raise NilArgumentError("fields", context)
        self.fields = [_copy_field(f, context.extend(f"fields[{i}]"))
                       for i, f in enumerate(fields)]

    def copy_in(self, other: "StandardLine", context: ContextLike = None) -> None:
        """Replace this line's data with a deep copy of ``other``.

        ``other`` is validated first; on failure this line is unchanged.
        """
        context = self._context(context, "copy_in")
        if other is None:
            raise NilArgumentError("other", context)
        if not isinstance(other, StandardLine):
            raise ValidationError(
                f"Error: Cannot copy a '{type(other).__name__}' into a StandardLine.", context)
        other.validate(context.extend("other"))
        self.fields = copy.deepcopy(other.fields)
        self.repeat_count = other.repeat_count
        self.terminator = other.terminator
        self.suppress_terminator = other.suppress_terminator

    def copy_out(self, context: ContextLike = None) -> "StandardLine":
        context = self._context(context, "copy_out")
        self.validate(context)
        return self.deep_copy()


def _copy_field(field_spec, context):
    if field_spec is None:
        raise NilArgumentError("field_spec", context)
    if not isinstance(field_spec, FieldSpec):
        raise ValidationError(
            f"Error: '{type(field_spec).__name__}' is not a field specification.", context)
    return field_spec.deep_copy()


@dataclass
class BlankLines(TextLine):
    """``count`` empty lines."""

    count: int = 1
    terminator: str = LayoutConstants.DEFAULT_LINE_TERMINATOR

    line_type: ClassVar[TextFieldType] = TextFieldType.BLANK_LINE

    def validate(self, context: ContextLike = None) -> None:
        context = ErrorContext.coerce(context)
        check_count(self.count, "count", context)
        check_text(self.terminator, "terminator", context)

    def render(self, context: ContextLike = None) -> str:
        self.validate(self._context(context, "render"))
        return resolve_terminator(self.terminator) * self.count


@dataclass
class SolidLine(TextLine):
    """A rule made of ``unit`` repeated ``repeat_count`` times between margins."""

    unit: str = ""
    repeat_count: int = 1
    left_margin: str = ""
    right_margin: str = ""
    terminator: str = LayoutConstants.DEFAULT_LINE_TERMINATOR
    suppress_terminator: bool = False

    line_type: ClassVar[TextFieldType] = TextFieldType.SOLID_LINE

    def validate(self, context: ContextLike = None) -> None:
        context = ErrorContext.coerce(context)
        check_text(self.unit, "unit", context, allow_empty=False)
        check_count(self.repeat_count, "repeat_count", context)
        check_text(self.left_margin, "left_margin", context)
        check_text(self.right_margin, "right_margin", context)
        check_text(self.terminator, "terminator", context)

    def render(self, context: ContextLike = None) -> str:
        self.validate(self._context(context, "render"))
        text = f"{self.left_margin}{self.unit * self.repeat_count}{self.right_margin}"
        if self.suppress_terminator:
            return text
        return text + resolve_terminator(self.terminator)


@dataclass
class PlainTextLine(TextLine):
    """A single line of verbatim text between margins."""

    text: str = ""
    left_margin: str = ""
    right_margin: str = ""
    terminator: str = LayoutConstants.DEFAULT_LINE_TERMINATOR
    suppress_terminator: bool = False

    line_type: ClassVar[TextFieldType] = TextFieldType.PLAIN_TEXT_LINE

    def validate(self, context: ContextLike = None) -> None:
        context = ErrorContext.coerce(context)
        check_text(self.text, "text", context, allow_empty=False)
        check_text(self.left_margin, "left_margin", context)
        check_text(self.right_margin, "right_margin", context)
        check_text(self.terminator, "terminator", context)

    def render(self, context: ContextLike = None) -> str:
        self.validate(self._context(context, "render"))
        text = f"{self.left_margin}{self.text}{self.right_margin}"
        if self.suppress_terminator:
            return text
        return text + resolve_terminator(self.terminator)


def coerce_line(line: Optional[TextLine], context: ContextLike = None) -> TextLine:
    """Return a deep copy of ``line`` after checking it is a TextLine."""
    if line is None:
        raise NilArgumentError("line", context)
    if not isinstance(line, TextLine):
        raise ValidationError(
            f"Error: '{type(line).__name__}' does not implement TextLine.", context)
    return line.deep_copy()
