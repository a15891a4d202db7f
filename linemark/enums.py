"""Closed enumerations for justification and field/line type tags."""

from __future__ import annotations

from enum import Enum
from typing import Union

from .constants import LayoutConstants
from .errors import ContextLike, ValidationError


_JUSTIFY_NAMES = {0: "None", 1: "Left", 2: "Right", 3: "Center"}
_JUSTIFY_ALIASES = {"Centered": 3}


class TextJustify(Enum):
    """Padding policy applied when a field is wider than its content."""
    NONE = 0
    LEFT = 1
    RIGHT = 2
    CENTER = 3

    def __str__(self) -> str:
        return _JUSTIFY_NAMES[self.value]

    @classmethod
    def parse(cls, text: str, case_sensitive: bool = True,
              context: ContextLike = None) -> "TextJustify":
        """Parse a justification name such as ``"Left"`` or ``"centered"``."""
        code = _lookup_code(text, _JUSTIFY_NAMES, _JUSTIFY_ALIASES, case_sensitive)
        if code is None:
            raise ValidationError(
                f"Text justification '{text}' is not a recognized value.", context)
        return cls(code)

    @classmethod
    def coerce(cls, value: Union["TextJustify", str, int],
               context: ContextLike = None) -> "TextJustify":
        """Accept an enum member, a name or an integer code."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            return cls.parse(value, case_sensitive=False, context=context)
        if isinstance(value, int) and not isinstance(value, bool):
            try:
                return cls(value)
            except ValueError:
                pass
        raise ValidationError(
            f"Text justification code '{value!r}' is invalid.", context)


_FIELD_TYPE_NAMES = {
    0: "None",
    1: "Label",
    2: "DateTime",
    3: "Filler",
    4: "Spacer",
    5: "BlankLine",
    6: "SolidLine",
    7: "Line1Column",
    8: "Line2Column",
    9: "Line3Column",
    10: "Line4Column",
    11: "Line5Column",
    12: "Line6Column",
    13: "Line7Column",
    14: "Line8Column",
    15: "TimerStartStop",
    16: "AdHocText",
    17: "PlainTextLine",
    18: "TitleMarquee",
    19: "AverageTime",
}
_FIELD_TYPE_ALIASES = {"Date Time": 2, "Date": 2}


class TextFieldType(Enum):
    """Tags identifying field and line kinds in formatter requests."""
    NONE = 0
    LABEL = 1
    DATE_TIME = 2
    FILLER = 3
    SPACER = 4
    BLANK_LINE = 5
    SOLID_LINE = 6
    LINE_1_COLUMN = 7
    LINE_2_COLUMN = 8
    LINE_3_COLUMN = 9
    LINE_4_COLUMN = 10
    LINE_5_COLUMN = 11
    LINE_6_COLUMN = 12
    LINE_7_COLUMN = 13
    LINE_8_COLUMN = 14
    TIMER_START_STOP = 15
    AD_HOC_TEXT = 16
    PLAIN_TEXT_LINE = 17
    TITLE_MARQUEE = 18
    AVERAGE_TIME = 19

    def __str__(self) -> str:
        return _FIELD_TYPE_NAMES[self.value]

    @property
    def is_line_columns(self) -> bool:
        return 7 <= self.value <= 14

    @property
    def column_count(self) -> int:
        """Number of content columns a request of this type carries."""
        if self.is_line_columns:
            return self.value - 6
        if self in (TextFieldType.LABEL, TextFieldType.DATE_TIME):
            return 1
        return 0

    @classmethod
    def for_columns(cls, count: int, context: ContextLike = None) -> "TextFieldType":
        """Return the line-column tag for ``count`` columns (1-8)."""
        if not 1 <= count <= LayoutConstants.MAX_COLUMNS:
            raise ValidationError(
                f"Number of columns must be between 1 and {LayoutConstants.MAX_COLUMNS}.\n"
                f"Number of columns = '{count}'", context)
        return cls(count + 6)

    @classmethod
    def parse(cls, text: str, case_sensitive: bool = True,
              context: ContextLike = None) -> "TextFieldType":
        code = _lookup_code(text, _FIELD_TYPE_NAMES, _FIELD_TYPE_ALIASES, case_sensitive)
        if code is None:
            raise ValidationError(
                f"Text field type '{text}' is not a recognized value.", context)
        return cls(code)


def _lookup_code(text, names, aliases, case_sensitive):
    if not isinstance(text, str):
        return None
    table = {name: code for code, name in names.items()}
    table.update(aliases)
    if case_sensitive:
        return table.get(text)
    lowered = {name.lower(): code for name, code in table.items()}
    return lowered.get(text.strip().lower())
