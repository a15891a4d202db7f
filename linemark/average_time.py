"""Average, maximum and minimum durations over a series of timed events.

An AverageTimeLine accumulates event durations, either directly or from
start/stop timestamp pairs, and renders a report of the average, longest
and shortest event. The full report frames each duration in rule lines::

    Number of Events: 2
    ========================================
                Average Duration
      2 Seconds 0 Milliseconds
      0 Microseconds 0 Nanoseconds
    ----------------------------------------
    Total Elapsed Nanoseconds: 2,000,000,000
    ========================================

The abbreviated report lists one labelled row per value, laid out like
TimerLines.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import ClassVar, Union

from .collection import LineCollection
from .constants import LayoutConstants
from .enums import TextFieldType, TextJustify
from .errors import ContextLike, ErrorContext, ValidationError
from .fields import LabelField, check_count, check_text
from .lines import TextLine
from .timer_lines import (
    allocate_duration,
    check_interval,
    check_summary_indent,
    format_duration,
    render_label_rows,
    total_nanoseconds,
)

logger = logging.getLogger(__name__)


DurationLike = Union[timedelta, int]


@dataclass(frozen=True)
class AverageTimeStats:
    """Summary of the recorded events; durations are in nanoseconds."""

    event_count: int
    average: int
    maximum: int
    minimum: int


def _duration_nanoseconds(duration: DurationLike, context: ErrorContext) -> int:
    if isinstance(duration, timedelta):
        nanoseconds = total_nanoseconds(duration)
    elif isinstance(duration, int) and not isinstance(duration, bool):
        nanoseconds = duration
    else:
        raise ValidationError(
            f"Error: An event duration must be a timedelta or a number of nanoseconds.\n"
            f"duration = '{duration!r}'", context)
    if nanoseconds < 0:
        raise ValidationError(
            f"Error: An event duration cannot be negative.\nduration = '{duration!r}'", context)
    return nanoseconds


def _check_counter(value, name, context):
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValidationError(
            f"Error: '{name}' must be a non-negative integer.\n{name} = '{value!r}'", context)


@dataclass
class AverageTimeLine(TextLine):
    """Running totals of event durations, rendered as an average time report."""

    event_count: int = 0
    total_nanoseconds: int = 0
    maximum_nanoseconds: int = 0
    minimum_nanoseconds: int = 0
    abbreviated: bool = False
    report_width: int = LayoutConstants.DEFAULT_AVERAGE_REPORT_WIDTH
    label_left_margin: str = ""
    label_right_margin: str = LayoutConstants.DEFAULT_TIMER_LABEL_RIGHT_MARGIN
    terminator: str = LayoutConstants.DEFAULT_LINE_TERMINATOR

    line_type: ClassVar[TextFieldType] = TextFieldType.AVERAGE_TIME

    # Recording events

    def add_duration_event(self, duration: DurationLike, context: ContextLike = None) -> None:
        """Record one event.

        Args:
            duration: A timedelta, or a whole number of nanoseconds.

        Raises:
            ValidationError: If ``duration`` is negative or of the wrong type.
        """
        context = self._context(context, "add_duration_event")
        self._record(_duration_nanoseconds(duration, context))

    def add_start_stop_event(self, start_time: datetime, end_time: datetime,
                             context: ContextLike = None) -> None:
        """Record the event that ran from ``start_time`` to ``end_time``.

        Raises:
            ValidationError: If either time is missing, the two mix naive and
                aware datetimes, or ``end_time`` is before ``start_time``.
        """
        context = self._context(context, "add_start_stop_event")
        check_interval(start_time, end_time, context)
        self._record(total_nanoseconds(end_time - start_time))

    def _record(self, nanoseconds: int) -> None:
        if self.event_count == 0:
            self.maximum_nanoseconds = nanoseconds
            self.minimum_nanoseconds = nanoseconds
        else:
            self.maximum_nanoseconds = max(self.maximum_nanoseconds, nanoseconds)
            self.minimum_nanoseconds = min(self.minimum_nanoseconds, nanoseconds)
        self.event_count += 1
        self.total_nanoseconds += nanoseconds
        logger.debug(f"Recorded event {self.event_count}: {nanoseconds} ns")

    def clear_events(self) -> None:
        """Zero the event counters, keeping the report settings."""
        self.event_count = 0
        self.total_nanoseconds = 0
        self.maximum_nanoseconds = 0
        self.minimum_nanoseconds = 0

    # Statistics

    def calc_average(self, context: ContextLike = None) -> AverageTimeStats:
        """Return the event count and the average, maximum and minimum durations.

        The average is the total divided by the event count, truncated to
        whole nanoseconds.

        Raises:
            ValidationError: If no events have been recorded.
        """
        context = self._context(context, "calc_average")
        if self.event_count == 0:
            raise ValidationError("Error: No timing events have been recorded.", context)
        return AverageTimeStats(
            event_count=self.event_count,
            average=self.total_nanoseconds // self.event_count,
            maximum=self.maximum_nanoseconds,
            minimum=self.minimum_nanoseconds,
        )

    def calc_average_detail(self, context: ContextLike = None) -> dict[str, dict[str, int]]:
        """Return the average, maximum and minimum broken down by time unit."""
        stats = self.calc_average(context)
        return {
            "average": allocate_duration(stats.average),
            "maximum": allocate_duration(stats.maximum),
            "minimum": allocate_duration(stats.minimum),
        }

    # TextLine

    def label_width(self) -> int:
        return max(len(label) for label in
                   (LayoutConstants.EVENT_COUNT_LABEL, *LayoutConstants.AVERAGE_TIME_TITLES))

    def summary_indent(self) -> int:
        return len(self.label_left_margin) + self.label_width() + len(self.label_right_margin)

    def validate(self, context: ContextLike = None) -> None:
        context = ErrorContext.coerce(context)
        for name in ("event_count", "total_nanoseconds", "maximum_nanoseconds",
                     "minimum_nanoseconds"):
            _check_counter(getattr(self, name), name, context)
        if self.event_count == 0:
            raise ValidationError("Error: No timing events have been recorded.", context)
        if self.minimum_nanoseconds > self.maximum_nanoseconds:
            raise ValidationError(
                "Error: 'minimum_nanoseconds' is greater than 'maximum_nanoseconds'.", context)
        if not isinstance(self.abbreviated, bool):
            raise ValidationError(
                f"Error: 'abbreviated' must be a bool.\nabbreviated = '{self.abbreviated!r}'",
                context)
        check_count(self.report_width, "report_width", context)
        if self.report_width < LayoutConstants.MIN_AVERAGE_REPORT_WIDTH:
            raise ValidationError(
                f"Error: 'report_width' must be at least "
                f"{LayoutConstants.MIN_AVERAGE_REPORT_WIDTH}.\n"
                f"report_width = '{self.report_width}'", context)
        for name in ("label_left_margin", "label_right_margin", "terminator"):
            check_text(getattr(self, name), name, context)
        check_summary_indent(self.summary_indent(), context)

    def render(self, context: ContextLike = None) -> str:
        context = self._context(context, "render")
        self.validate(context)
        stats = self.calc_average(context)
        if self.abbreviated:
            return self._render_abbreviated(stats, context)
        return self._render_full(stats, context)

    def _durations(self, stats: AverageTimeStats):
        return zip(LayoutConstants.AVERAGE_TIME_TITLES,
                   (stats.average, stats.maximum, stats.minimum))

    def _render_abbreviated(self, stats: AverageTimeStats, context: ErrorContext) -> str:
        max_length = LayoutConstants.TIMER_SUMMARY_LINE_WIDTH - self.summary_indent()
        rows = [(LayoutConstants.EVENT_COUNT_LABEL, f"{stats.event_count:,}")]
        for title, nanoseconds in self._durations(stats):
            *breakdown, _ = format_duration(nanoseconds, max_length, context)
            rows.append((title, breakdown[0]))
            rows.extend((None, text) for text in breakdown[1:])
        return render_label_rows(rows, self.label_width(), TextJustify.RIGHT,
                                 self.label_left_margin, self.label_right_margin,
                                 self.terminator, context)

    def _render_full(self, stats: AverageTimeStats, context: ErrorContext) -> str:
        width = self.report_width
        terminator = self.terminator
        report = LineCollection()
        report.add_plain_text(f"{LayoutConstants.EVENT_COUNT_LABEL}: {stats.event_count:,}",
                              terminator=terminator, context=context)
        for title, nanoseconds in self._durations(stats):
            *breakdown, total = format_duration(nanoseconds, width - 2, context)
            report.add_solid_line("=", width, terminator=terminator, context=context)
            report.add_standard_line([LabelField(title, width, TextJustify.CENTER)],
                                     terminator=terminator, context=context)
            for text in breakdown:
                report.add_plain_text(text, left_margin="  ", terminator=terminator,
                                      context=context)
            report.add_solid_line("-", width, terminator=terminator, context=context)
            report.add_standard_line([LabelField(total, width, TextJustify.CENTER)],
                                     terminator=terminator, context=context)
            report.add_solid_line("=", width, terminator=terminator, context=context)
            report.add_blank_lines(1, terminator, context=context)
        return report.render(context)
