"""Title marquee: centered title lines framed by solid rule lines."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar

from .collection import LineCollection
from .constants import LayoutConstants
from .enums import TextFieldType, TextJustify
from .errors import ContextLike, ErrorContext, ValidationError
from .fields import (
    JustifyLike,
    LabelField,
    check_field_length,
    check_text,
    normalize_justify,
)
from .lines import PlainTextLine, SolidLine, StandardLine, TextLine


def _check_line_count(value, name, context):
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"Error: '{name}' must be an integer.\n{name} = '{value!r}'", context)
    if not 0 <= value <= LayoutConstants.MAX_REPEAT_COUNT:
        raise ValidationError(
            f"Error: '{name}' must be between zero and one-million (1,000,000).\n"
            f"{name} = '{value}'", context)


@dataclass
class TitleMarquee(TextLine):
    """A block of title lines with optional blank and solid lines above and below.

    From top to bottom the marquee holds leading blank lines, leading solid
    lines, framed blank lines, one justified line per title, framed blank
    lines, trailing solid lines and trailing blank lines. Solid lines repeat
    their unit to cover the title field width.
    """

    title_lines: list[str] = field(default_factory=list)
    field_length: int = LayoutConstants.DEFAULT_MARQUEE_WIDTH
    justify: JustifyLike = TextJustify.CENTER
    title_left_margin: str = ""
    title_right_margin: str = ""
    solid_left_margin: str = ""
    solid_right_margin: str = ""
    leading_blank_lines: int = 0
    leading_solid_unit: str = LayoutConstants.DEFAULT_MARQUEE_SOLID_UNIT
    leading_solid_lines: int = 1
    top_title_blank_lines: int = 0
    bottom_title_blank_lines: int = 0
    trailing_solid_unit: str = LayoutConstants.DEFAULT_MARQUEE_SOLID_UNIT
    trailing_solid_lines: int = 1
    trailing_blank_lines: int = 0
    terminator: str = LayoutConstants.DEFAULT_LINE_TERMINATOR

    line_type: ClassVar[TextFieldType] = TextFieldType.TITLE_MARQUEE

    def __post_init__(self):
        self.title_lines = list(self.title_lines)
        self.justify = normalize_justify(self.justify)

    def add_title(self, text: str) -> None:
        self.title_lines.append(text)

    def width(self) -> int:
        """Width of the title field: the field length or the longest title."""
        longest = max((len(title) for title in self.title_lines), default=0)
        return max(self.field_length, longest)

    def validate(self, context: ContextLike = None) -> None:
        context = ErrorContext.coerce(context)
        if not self.title_lines:
            raise ValidationError("Error: The title marquee has no title lines!", context)
        for index, title in enumerate(self.title_lines):
            check_text(title, f"title_lines[{index}]", context, allow_empty=False)
        check_field_length(self.field_length, "field_length", context)
        TextJustify.coerce(self.justify, context)
        for name in ("title_left_margin", "title_right_margin", "solid_left_margin",
                     "solid_right_margin", "terminator"):
            check_text(getattr(self, name), name, context)
        for name in ("leading_blank_lines", "leading_solid_lines", "top_title_blank_lines",
                     "bottom_title_blank_lines", "trailing_solid_lines", "trailing_blank_lines"):
            _check_line_count(getattr(self, name), name, context)
        if self.leading_solid_lines:
            check_text(self.leading_solid_unit, "leading_solid_unit", context, allow_empty=False)
        if self.trailing_solid_lines:
            check_text(self.trailing_solid_unit, "trailing_solid_unit", context, allow_empty=False)

    def to_collection(self, context: ContextLike = None) -> LineCollection:
        """Build the LineCollection this marquee renders through."""
        context = self._context(context, "to_collection")
        self.validate(context)
        width = self.width()
        lines = LineCollection()

        if self.leading_blank_lines:
            lines.add_blank_lines(self.leading_blank_lines, self.terminator, context)
        for _ in range(self.leading_solid_lines):
            lines.add_line(self._solid_line(self.leading_solid_unit, width), context)
        for _ in range(self.top_title_blank_lines):
            lines.add_line(self._framed_blank_line(width), context)
        for title in self.title_lines:
            lines.add_line(StandardLine(
                [LabelField(title, width, self.justify,
                            left_margin=self.title_left_margin,
                            right_margin=self.title_right_margin)],
                terminator=self.terminator), context)
        for _ in range(self.bottom_title_blank_lines):
            lines.add_line(self._framed_blank_line(width), context)
        for _ in range(self.trailing_solid_lines):
            lines.add_line(self._solid_line(self.trailing_solid_unit, width), context)
        if self.trailing_blank_lines:
            lines.add_blank_lines(self.trailing_blank_lines, self.terminator, context)
        return lines

    def render(self, context: ContextLike = None) -> str:
        context = self._context(context, "render")
        return self.to_collection(context).render(context)

    def _solid_line(self, unit, width):
        return SolidLine(unit, max(1, -(-width // len(unit))),
                         self.solid_left_margin, self.solid_right_margin, self.terminator)

    def _framed_blank_line(self, width):
        return PlainTextLine(" " * max(width, 1), self.solid_left_margin,
                             self.solid_right_margin, self.terminator)
