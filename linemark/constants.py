"""Constants and limits for the linemark layout engine."""

class LayoutConstants:
    """Central limits and defaults shared by fields, lines and collections."""

    # Numeric limits
    MAX_FIELD_LENGTH = 1_000_000  # Upper bound for field lengths
    MIN_FIELD_LENGTH = -1  # -1 sizes the field to its content
    MAX_REPEAT_COUNT = 1_000_000  # Upper bound for repeat counts and widths
    MAX_COLUMNS = 8  # Columns allowed on one multi-column line

    # Line termination
    DEFAULT_LINE_TERMINATOR = "\n"

    # Date/time layout: nanosecond-width fraction, numeric offset, zone name
    DEFAULT_DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S.%f000 %z %Z"

    # Timer lines
    DEFAULT_START_TIME_LABEL = "Start Time"
    DEFAULT_END_TIME_LABEL = "End Time"
    DEFAULT_DURATION_LABEL = "Elapsed Time"
    DEFAULT_TIMER_LABEL_RIGHT_MARGIN = ": "
    TIMER_SUMMARY_LINE_WIDTH = 78  # Elapsed time lines wrap before this column
    MAX_TIMER_SUMMARY_INDENT = 55

    # Title marquee
    DEFAULT_MARQUEE_WIDTH = 78
    DEFAULT_MARQUEE_SOLID_UNIT = "="

    # Average time report
    AVERAGE_TIME_TITLES = ("Average Duration", "Maximum Duration", "Minimum Duration")
    EVENT_COUNT_LABEL = "Number of Events"
    DEFAULT_AVERAGE_REPORT_WIDTH = 60
    MIN_AVERAGE_REPORT_WIDTH = 20
