"""linemark: compose multi-field lines of text from declarative specifications."""

from .average_time import AverageTimeLine, AverageTimeStats
from .collection import LineCollection
from .enums import TextFieldType, TextJustify
from .errors import (
    EmptyCollectionError,
    ErrorContext,
    IndexOutOfRangeError,
    InvalidElementError,
    LineRenderError,
    MissingStandardParamsError,
    NilArgumentError,
    TextLayoutError,
    ValidationError,
)
from .fields import (
    AdHocField,
    DateTimeField,
    FieldContent,
    FieldSpec,
    FillerField,
    LabelField,
    NestedContent,
    NumberContent,
    SpacerField,
    TextContent,
    TimestampContent,
    justify_text,
    normalize_justify,
    render_field,
)
from .formatter_collection import (
    FieldFormatParams,
    FormatterCollection,
    FormatterRequest,
    LineFormatParams,
)
from .line_length import LineLengthManager, LineLengthPolicy, compose_line
from .lines import BlankLines, PlainTextLine, SolidLine, StandardLine, TextLine
from .timer_lines import TimerLines, format_duration, format_elapsed
from .title_marquee import TitleMarquee
