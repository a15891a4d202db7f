"""Field specifications and the field renderer.

A field is the smallest renderable unit of a line: a label, a formatted
date/time, a run of filler characters, a block of spaces or a piece of ad
hoc text. Every field carries a left and right margin string. Rendering a
field produces ``left_margin + body + right_margin`` where the body of a
label or date/time field is padded out to its field length according to
its justification.

Field lengths run from -1 (size the field to its content) to 1,000,000. A
field length shorter than the content is not an error; the field simply
grows to fit the content.
"""

from __future__ import annotations

import copy
import dataclasses
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from typing import ClassVar, Optional, Union

from .constants import LayoutConstants
from .enums import TextFieldType, TextJustify
from .errors import ContextLike, ErrorContext, NilArgumentError, ValidationError


JustifyLike = Union[TextJustify, str, int]


def check_field_length(value: int, name: str, context: ContextLike = None) -> None:
    """Validate a field length against the range [-1, 1,000,000]."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(
            f"Error: '{name}' must be an integer.\n{name} = '{value!r}'", context)
    if value < LayoutConstants.MIN_FIELD_LENGTH:
        raise ValidationError(
            f"Error: '{name}' is invalid!\n"
            f"'{name}' has a value less than minus one (-1).\n"
            f"{name} = '{value}'", context)
    if value > LayoutConstants.MAX_FIELD_LENGTH:
        raise ValidationError(
            f"Error: '{name}' is invalid!\n"
            f"'{name}' has a value greater than one-million (1,000,000).\n"
            f"{name} = '{value}'", context)


def check_count(value: int, name: str, context: ContextLike = None) -> None:
    """Validate a repeat count, width or line count against [1, 1,000,000]."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(
            f"Error: '{name}' must be an integer.\n{name} = '{value!r}'", context)
    if value < 1:
        raise ValidationError(
            f"Error: '{name}' is invalid!\n"
            f"'{name}' has a value less than one (+1).\n"
            f"{name} = '{value}'", context)
    if value > LayoutConstants.MAX_REPEAT_COUNT:
        raise ValidationError(
            f"Error: '{name}' is invalid!\n"
            f"'{name}' has a value greater than one-million (1,000,000).\n"
            f"{name} = '{value}'", context)


def check_text(value: str, name: str, context: ContextLike = None,
               allow_empty: bool = True) -> None:
    if not isinstance(value, str):
        raise ValidationError(
            f"Error: '{name}' must be a string.\n{name} = '{value!r}'", context)
    if not allow_empty and not value:
        raise ValidationError(
            f"Error: '{name}' is an empty string!", context)


def normalize_justify(value: JustifyLike) -> JustifyLike:
    """Return ``value`` as a TextJustify member when it names or codes one.

    Values that cannot be coerced are returned unchanged so that validation
    reports them when the field is rendered.
    """
    try:
        return TextJustify.coerce(value)
    except ValidationError:
        return value


def justify_text(text: str, field_length: int, justify: JustifyLike,
                 context: ContextLike = None) -> str:
    """Pad ``text`` to ``field_length`` columns.

    A field length of -1, or one no longer than the text, returns the text
    unchanged. Otherwise Left pads on the right, Right pads on the left and
    Center splits the padding with the odd space on the right.
    """
    context = ErrorContext.coerce(context)
    check_field_length(field_length, "field_length", context)
    justify = TextJustify.coerce(justify, context)

    padding = field_length - len(text)
    if field_length == -1 or padding <= 0:
        return text

    if justify is TextJustify.LEFT:
        return text + " " * padding
    if justify is TextJustify.RIGHT:
        return " " * padding + text
    if justify is TextJustify.CENTER:
        left = padding // 2
        return " " * left + text + " " * (padding - left)
    raise ValidationError(
        f"Error: Text justification 'None' cannot pad text to a field length of {field_length}.\n"
        f"Text length = '{len(text)}'", context)


def format_timestamp(timestamp: datetime, date_format: str = "",
                     context: ContextLike = None) -> str:
    """Format a timestamp; naive timestamps are treated as UTC."""
    if not date_format:
        date_format = LayoutConstants.DEFAULT_DATETIME_FORMAT
    if timestamp.tzinfo is None:
        timestamp = timestamp.replace(tzinfo=timezone.utc)
    try:
        return timestamp.strftime(date_format)
    except ValueError as e:
        raise ValidationError(
            f"Error: Date/time format '{date_format}' could not be applied: {e}",
            context) from e


def reset_to_defaults(instance) -> None:
    """Restore every dataclass field of ``instance`` to its declared default."""
    for f in dataclasses.fields(instance):
        if f.default is not dataclasses.MISSING:
            setattr(instance, f.name, f.default)
        elif f.default_factory is not dataclasses.MISSING:
            setattr(instance, f.name, f.default_factory())


@dataclass
class FieldSpec(ABC):
    """Base class for the field variants; margins are keyword-only."""

    left_margin: str = field(default="", kw_only=True)
    right_margin: str = field(default="", kw_only=True)

    field_type: ClassVar[TextFieldType] = TextFieldType.NONE

    @abstractmethod
    def _check(self, context: ErrorContext) -> None:
        """Raise ValidationError if the variant-specific data is invalid."""

    @abstractmethod
    def _body(self, context: ErrorContext) -> str:
        """Return the field text without margins; assumes a valid field."""

    def validate(self, context: ContextLike = None) -> None:
        context = ErrorContext.coerce(context)
        check_text(self.left_margin, "left_margin", context)
        check_text(self.right_margin, "right_margin", context)
        self._check(context)

    def is_valid(self) -> bool:
        try:
            self.validate()
        except ValidationError:
            return False
        return True

    def render(self, context: ContextLike = None) -> str:
        return render_field(self, context)

    def deep_copy(self):
        return copy.deepcopy(self)

    def reset(self) -> None:
        reset_to_defaults(self)


def render_field(field_spec: Optional[FieldSpec], context: ContextLike = None) -> str:
    """Render one field to ``left_margin + body + right_margin``.

    Raises:
        NilArgumentError: If ``field_spec`` is None.
        ValidationError: If the field fails validation.
    """
    context = ErrorContext.coerce(context)
    if field_spec is None:
        raise NilArgumentError("field_spec", context.extend("render_field()"))
    if not isinstance(field_spec, FieldSpec):
        raise ValidationError(
            f"Error: Object of type '{type(field_spec).__name__}' is not a field specification.",
            context.extend("render_field()"))
    context = context.extend(f"{type(field_spec).__name__}.render()")
    field_spec.validate(context)
    return f"{field_spec.left_margin}{field_spec._body(context)}{field_spec.right_margin}"


@dataclass
class LabelField(FieldSpec):
    """A text label padded to a field length."""

    content: str = ""
    field_length: int = -1
    justify: JustifyLike = TextJustify.LEFT

    field_type: ClassVar[TextFieldType] = TextFieldType.LABEL

    def __post_init__(self):
        self.justify = normalize_justify(self.justify)

    def _check(self, context):
        check_text(self.content, "content", context, allow_empty=False)
        check_field_length(self.field_length, "field_length", context)
        TextJustify.coerce(self.justify, context)

    def _body(self, context):
        return justify_text(self.content, self.field_length, self.justify, context)


@dataclass
class DateTimeField(FieldSpec):
    """A timestamp formatted with ``date_format`` and padded like a label."""

    timestamp: Optional[datetime] = None
    date_format: str = ""
    field_length: int = -1
    justify: JustifyLike = TextJustify.LEFT

    field_type: ClassVar[TextFieldType] = TextFieldType.DATE_TIME

    def __post_init__(self):
        self.justify = normalize_justify(self.justify)

    def _check(self, context):
        if self.timestamp is None:
            raise ValidationError("Error: 'timestamp' has not been set!", context)
        if not isinstance(self.timestamp, datetime):
            raise ValidationError(
                f"Error: 'timestamp' must be a datetime.\ntimestamp = '{self.timestamp!r}'",
                context)
        check_text(self.date_format, "date_format", context)
        check_field_length(self.field_length, "field_length", context)
        TextJustify.coerce(self.justify, context)

    def _body(self, context):
        text = format_timestamp(self.timestamp, self.date_format, context)
        return justify_text(text, self.field_length, self.justify, context)


@dataclass
class FillerField(FieldSpec):
    """A unit string repeated ``repeat_count`` times."""

    unit: str = ""
    repeat_count: int = 1

    field_type: ClassVar[TextFieldType] = TextFieldType.FILLER

    def _check(self, context):
        check_text(self.unit, "unit", context, allow_empty=False)
        check_count(self.repeat_count, "repeat_count", context)

    def _body(self, context):
        return self.unit * self.repeat_count


@dataclass
class SpacerField(FieldSpec):
    """``width`` space characters."""

    width: int = 1

    field_type: ClassVar[TextFieldType] = TextFieldType.SPACER

    def _check(self, context):
        check_count(self.width, "width", context)

    def _body(self, context):
        return " " * self.width


@dataclass
class AdHocField(FieldSpec):
    """Text inserted verbatim between its margins."""

    text: str = ""

    field_type: ClassVar[TextFieldType] = TextFieldType.AD_HOC_TEXT

    def _check(self, context):
        check_text(self.text, "text", context)

    def _body(self, context):
        return self.text


class FieldContent:
    """Content of one column in a multi-column formatter request.

    ``FieldContent.of(value)`` picks the variant when the request is built,
    so the formatter never has to inspect raw values while rendering.
    """

    @classmethod
    def of(cls, value) -> "FieldContent":
        if value is None:
            raise NilArgumentError("value", "FieldContent.of()")
        if isinstance(value, FieldContent):
            return value
        if isinstance(value, FieldSpec):
            return NestedContent(value.deep_copy())
        if isinstance(value, datetime):
            return TimestampContent(value)
        if isinstance(value, str):
            return TextContent(value)
        if isinstance(value, (int, float, Decimal)) and not isinstance(value, bool):
            return NumberContent(value)
        return TextContent(str(value))


@dataclass(frozen=True)
class TextContent(FieldContent):
    text: str


@dataclass(frozen=True)
class TimestampContent(FieldContent):
    timestamp: datetime
    date_format: str = ""


@dataclass(frozen=True)
class NumberContent(FieldContent):
    value: Union[int, float, Decimal]
    format_spec: str = ""

    def to_text(self, context: ContextLike = None) -> str:
        """Format the value with ``format_spec``.

        Raises:
            ValidationError: If ``format_spec`` does not apply to the value.
        """
        try:
            return format(self.value, self.format_spec)
        except (ValueError, TypeError) as e:
            raise ValidationError(
                f"Error: Number format '{self.format_spec}' could not be applied "
                f"to '{self.value!r}': {e}", context) from e


@dataclass(frozen=True)
class NestedContent(FieldContent):
    field_spec: FieldSpec
