"""Start time, end time and elapsed time report lines.

A TimerLines instance renders a small report::

      Start Time: 2021-08-13 03:19:32.462108000 +0000 UTC
        End Time: 2021-08-13 03:19:32.462163000 +0000 UTC
    Elapsed Time: 55 Microseconds 0 Nanoseconds
                  Total Elapsed Nanoseconds: 55,000

Labels are right-justified to the longest label so the values line up.
Long elapsed time breakdowns wrap onto continuation lines indented to the
value column.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import ClassVar, Optional

from .constants import LayoutConstants
from .enums import TextFieldType, TextJustify
from .errors import ContextLike, ErrorContext, ValidationError
from .fields import (
    AdHocField,
    JustifyLike,
    LabelField,
    SpacerField,
    check_field_length,
    check_text,
    format_timestamp,
    normalize_justify,
)
from .lines import StandardLine, TextLine


NANOSECONDS_PER_UNIT = (
    ("Days", 86_400 * 10**9),
    ("Hours", 3_600 * 10**9),
    ("Minutes", 60 * 10**9),
    ("Seconds", 10**9),
    ("Milliseconds", 10**6),
    ("Microseconds", 10**3),
)


def total_nanoseconds(elapsed: timedelta) -> int:
    return ((elapsed.days * 86_400 + elapsed.seconds) * 10**6 + elapsed.microseconds) * 1_000


def allocate_duration(nanoseconds: int) -> dict[str, int]:
    """Split a duration into days, hours, ... down to leftover nanoseconds."""
    parts = {}
    remaining = nanoseconds
    for name, size in NANOSECONDS_PER_UNIT:
        parts[name], remaining = divmod(remaining, size)
    parts["Nanoseconds"] = remaining
    return parts


def format_duration(nanoseconds: int,
                    max_length: int = LayoutConstants.TIMER_SUMMARY_LINE_WIDTH,
                    context: ContextLike = None) -> list[str]:
    """Break a duration in nanoseconds into display lines.

    Units are listed from the first non-zero one down to nanoseconds, with
    thousands separators. A new line starts when adding the next unit would
    reach ``max_length`` columns. The last line is the total elapsed
    nanoseconds.
    """
    if isinstance(nanoseconds, bool) or not isinstance(nanoseconds, int) or nanoseconds < 0:
        raise ValidationError(
            f"Error: A duration must be a non-negative number of nanoseconds.\n"
            f"nanoseconds = '{nanoseconds!r}'", context)

    counts = list(allocate_duration(nanoseconds).items())
    *units, (_, leftover) = counts
    first = next((i for i, (_, count) in enumerate(units) if count), len(units))
    pieces = [f"{count:,} {name} " for name, count in units[first:]]
    pieces.append(f"{leftover:,} Nanoseconds")

    lines = []
    current = ""
    for piece in pieces:
        if current and len(current) + len(piece) >= max_length:
            lines.append(current)
            current = ""
        current += piece
    lines.append(current)
    lines.append(f"Total Elapsed Nanoseconds: {nanoseconds:,}")
    return lines


def format_elapsed(start_time: datetime, end_time: datetime, indent: int = 0,
                   context: ContextLike = None) -> list[str]:
    """Break the time between two timestamps into display lines.

    Lines wrap before column ``78 - indent``; see format_duration.
    """
    context = ErrorContext.coerce(context).extend("format_elapsed()")
    check_summary_indent(indent, context)
    check_interval(start_time, end_time, context)
    return format_duration(total_nanoseconds(end_time - start_time),
                           LayoutConstants.TIMER_SUMMARY_LINE_WIDTH - indent, context)


def check_summary_indent(indent: int, context: ContextLike = None) -> None:
    if not 0 <= indent <= LayoutConstants.MAX_TIMER_SUMMARY_INDENT:
        raise ValidationError(
            f"Error: The summary line indent is invalid!\n"
            f"The valid range is 0-{LayoutConstants.MAX_TIMER_SUMMARY_INDENT}, inclusive.\n"
            f"indent = '{indent}'", context)


def render_label_rows(rows, label_width: int, label_justify: JustifyLike,
                      label_left_margin: str, label_right_margin: str,
                      terminator: str, context: ContextLike = None) -> str:
    """Render ``(label, value)`` rows with the labels justified to one width.

    A row whose label is None continues the previous value, indented to the
    value column.
    """
    indent = len(label_left_margin) + label_width + len(label_right_margin)
    out = []
    for label, value in rows:
        line = StandardLine(terminator=terminator)
        if label is None:
            line.add_field(SpacerField(width=indent))
        else:
            line.add_field(LabelField(
                label, label_width, label_justify,
                left_margin=label_left_margin, right_margin=label_right_margin))
        line.add_field(AdHocField(value))
        out.append(line.render(context))
    return "".join(out)


def check_interval(start_time, end_time, context: ContextLike = None) -> None:
    if start_time is None:
        raise ValidationError("Error: 'start_time' has not been set!", context)
    if end_time is None:
        raise ValidationError("Error: 'end_time' has not been set!", context)
    for name, value in (("start_time", start_time), ("end_time", end_time)):
        if not isinstance(value, datetime):
            raise ValidationError(
                f"Error: '{name}' must be a datetime.\n{name} = '{value!r}'", context)
    if (start_time.tzinfo is None) != (end_time.tzinfo is None):
        raise ValidationError(
            "Error: 'start_time' and 'end_time' must both be naive "
            "or both be timezone aware.", context)
    if end_time < start_time:
        raise ValidationError(
            "Error: 'start_time' and 'end_time' are invalid!\n"
            "'end_time' occurs before 'start_time'.\n"
            f"'start_time' = '{format_timestamp(start_time)}'\n"
            f"  'end_time' = '{format_timestamp(end_time)}'", context)


@dataclass
class TimerLines(TextLine):
    """Report of a start time, an end time and the time elapsed between them."""

    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    start_time_label: str = LayoutConstants.DEFAULT_START_TIME_LABEL
    end_time_label: str = LayoutConstants.DEFAULT_END_TIME_LABEL
    duration_label: str = LayoutConstants.DEFAULT_DURATION_LABEL
    time_format: str = ""
    label_field_length: int = -1
    label_justify: JustifyLike = TextJustify.RIGHT
    label_left_margin: str = ""
    label_right_margin: str = LayoutConstants.DEFAULT_TIMER_LABEL_RIGHT_MARGIN
    terminator: str = LayoutConstants.DEFAULT_LINE_TERMINATOR

    line_type: ClassVar[TextFieldType] = TextFieldType.TIMER_START_STOP

    def __post_init__(self):
        self.label_justify = normalize_justify(self.label_justify)

    def longest_label_length(self) -> int:
        return max(len(self.start_time_label), len(self.end_time_label),
                   len(self.duration_label))

    def label_width(self) -> int:
        return max(self.longest_label_length(), self.label_field_length)

    def summary_indent(self) -> int:
        """Column at which the time values start."""
        return len(self.label_left_margin) + self.label_width() + len(self.label_right_margin)

    def validate(self, context: ContextLike = None) -> None:
        context = ErrorContext.coerce(context)
        for name in ("start_time_label", "end_time_label", "duration_label"):
            check_text(getattr(self, name), name, context, allow_empty=False)
        for name in ("time_format", "label_left_margin", "label_right_margin", "terminator"):
            check_text(getattr(self, name), name, context)
        check_field_length(self.label_field_length, "label_field_length", context)
        TextJustify.coerce(self.label_justify, context)
        check_interval(self.start_time, self.end_time, context)
        if self.summary_indent() > LayoutConstants.MAX_TIMER_SUMMARY_INDENT:
            raise ValidationError(
                f"Error: The combined label width is greater than "
                f"{LayoutConstants.MAX_TIMER_SUMMARY_INDENT}.\n"
                f"label width = '{self.summary_indent()}'", context)

    def elapsed(self) -> timedelta:
        return self.end_time - self.start_time

    def render(self, context: ContextLike = None) -> str:
        context = self._context(context, "render")
        self.validate(context)

        indent = self.summary_indent()
        rows = [
            (self.start_time_label, format_timestamp(self.start_time, self.time_format, context)),
            (self.end_time_label, format_timestamp(self.end_time, self.time_format, context)),
        ]
        durations = format_elapsed(self.start_time, self.end_time, indent, context)
        rows.append((self.duration_label, durations[0]))
        rows.extend((None, text) for text in durations[1:])
        return render_label_rows(rows, self.label_width(), self.label_justify,
                                 self.label_left_margin, self.label_right_margin,
                                 self.terminator, context)
