"""Tests for the start, end and elapsed time report."""

from datetime import datetime, timedelta, timezone

import pytest

from linemark.collection import LineCollection
from linemark.errors import ValidationError
from linemark.timer_lines import (
    TimerLines,
    allocate_duration,
    format_duration,
    format_elapsed,
    total_nanoseconds,
)


START = datetime(2021, 8, 13, 3, 19, 32, 462108, tzinfo=timezone.utc)


def test_sample_report():
    """Labels right-justify to the longest label and values line up."""
    timer = TimerLines(START, START + timedelta(microseconds=55))
    assert timer.render() == (
        "  Start Time: 2021-08-13 03:19:32.462108000 +0000 UTC\n"
        "    End Time: 2021-08-13 03:19:32.462163000 +0000 UTC\n"
        "Elapsed Time: 55 Microseconds 0 Nanoseconds\n"
        "              Total Elapsed Nanoseconds: 55,000\n"
    )


def test_summary_indent():
    timer = TimerLines(START, START)
    assert timer.summary_indent() == 14
    timer.label_left_margin = "  "
    assert timer.summary_indent() == 16
    timer.label_field_length = 20
    assert timer.summary_indent() == 24


def test_zero_elapsed():
    assert format_elapsed(START, START) == [
        "0 Nanoseconds",
        "Total Elapsed Nanoseconds: 0",
    ]


def test_units_after_first_nonzero_are_listed():
    lines = format_elapsed(START, START + timedelta(minutes=1))
    assert lines[0] == "1 Minutes 0 Seconds 0 Milliseconds 0 Microseconds 0 Nanoseconds"
    assert lines[1] == "Total Elapsed Nanoseconds: 60,000,000,000"


def test_long_breakdown_wraps_at_indent():
    end = START + timedelta(days=1, hours=2, minutes=3, seconds=4,
                            milliseconds=5, microseconds=6)
    assert format_elapsed(START, end, indent=14) == [
        "1 Days 2 Hours 3 Minutes 4 Seconds 5 Milliseconds ",
        "6 Microseconds 0 Nanoseconds",
        "Total Elapsed Nanoseconds: 93,784,005,006,000",
    ]


def test_wrapped_lines_are_indented_in_report():
    end = START + timedelta(days=1, hours=2, minutes=3, seconds=4,
                            milliseconds=5, microseconds=6)
    lines = TimerLines(START, end).render().splitlines()
    assert lines[2].startswith("Elapsed Time: 1 Days")
    assert lines[3] == " " * 14 + "6 Microseconds 0 Nanoseconds"
    assert lines[4] == " " * 14 + "Total Elapsed Nanoseconds: 93,784,005,006,000"


def test_thousands_separators():
    lines = format_elapsed(START, START + timedelta(days=1234))
    assert lines[0].startswith("1,234 Days ")


def test_total_nanoseconds():
    assert total_nanoseconds(timedelta(seconds=1, microseconds=2)) == 1_000_002_000


def test_end_before_start():
    with pytest.raises(ValidationError):
        TimerLines(START, START - timedelta(seconds=1)).render()


def test_missing_times():
    with pytest.raises(ValidationError):
        TimerLines(None, START).render()
    with pytest.raises(ValidationError):
        TimerLines(START, None).render()


def test_mixed_naive_and_aware():
    with pytest.raises(ValidationError):
        TimerLines(START, START.replace(tzinfo=None)).render()


def test_naive_times_are_accepted():
    naive = START.replace(tzinfo=None)
    text = TimerLines(naive, naive + timedelta(seconds=2)).render()
    assert "Elapsed Time: 2 Seconds 0 Milliseconds 0 Microseconds 0 Nanoseconds" in text


def test_label_width_limit():
    with pytest.raises(ValidationError):
        TimerLines(START, START, label_field_length=60).render()


def test_indent_limit_in_format_elapsed():
    with pytest.raises(ValidationError):
        format_elapsed(START, START, indent=56)


def test_custom_labels_and_format():
    timer = TimerLines(START, START + timedelta(seconds=1),
                       start_time_label="Begin", end_time_label="Finish",
                       duration_label="Took", time_format="%H:%M:%S")
    assert timer.render().splitlines()[:3] == [
        " Begin: 03:19:32",
        "Finish: 03:19:33",
        "  Took: 1 Seconds 0 Milliseconds 0 Microseconds 0 Nanoseconds",
    ]


def test_empty_label_is_invalid():
    assert not TimerLines(START, START, duration_label="").is_valid()


def test_timer_lines_in_collection():
    lines = LineCollection()
    lines.add_line(TimerLines(START, START + timedelta(microseconds=55)))
    assert lines.render().endswith("Total Elapsed Nanoseconds: 55,000\n")


def test_format_duration_wraps_at_max_length():
    assert format_duration(2_000_000_000, 38) == [
        "2 Seconds 0 Milliseconds ",
        "0 Microseconds 0 Nanoseconds",
        "Total Elapsed Nanoseconds: 2,000,000,000",
    ]


def test_format_duration_rejects_negative():
    with pytest.raises(ValidationError):
        format_duration(-1)


def test_allocate_duration():
    parts = allocate_duration(93_784_005_006_007)
    assert parts == {"Days": 1, "Hours": 2, "Minutes": 3, "Seconds": 4,
                     "Milliseconds": 5, "Microseconds": 6, "Nanoseconds": 7}


def test_label_justify_given_by_name():
    by_name = TimerLines(START, START, label_justify="right")
    assert by_name.equal(TimerLines(START, START))
