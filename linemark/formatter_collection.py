"""Queue of line formatting requests resolved against standard parameters.

Callers register "standard" format parameters per field type once, then
enqueue requests that carry only their content. At flush time each request
is rendered with its own explicit parameters if it has them, otherwise with
the standard parameters for its type. A request with neither fails at flush
time, never at enqueue time, so parameters can be registered after the
requests that need them.
"""

from __future__ import annotations

import copy
import io
import logging
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Mapping, Optional, Sequence, TextIO, Union

from .average_time import AverageTimeLine
from .constants import LayoutConstants
from .enums import TextFieldType, TextJustify
from .errors import (
    ContextLike,
    ErrorContext,
    MissingStandardParamsError,
    NilArgumentError,
    ValidationError,
)
from .fields import (
    AdHocField,
    DateTimeField,
    FieldContent,
    FieldSpec,
    FillerField,
    JustifyLike,
    LabelField,
    NestedContent,
    NumberContent,
    SpacerField,
    TextContent,
    TimestampContent,
    check_field_length,
    check_text,
    normalize_justify,
    render_field,
)
from .line_length import LineLengthPolicy, compose_line
from .lines import BlankLines, PlainTextLine, SolidLine, StandardLine, TextLine
from .timer_lines import TimerLines

logger = logging.getLogger(__name__)


FieldTypeLike = Union[TextFieldType, str, int]


def coerce_field_type(value: FieldTypeLike, context: ContextLike = None) -> TextFieldType:
    if isinstance(value, TextFieldType):
        return value
    if isinstance(value, str):
        return TextFieldType.parse(value, case_sensitive=False, context=context)
    if isinstance(value, int) and not isinstance(value, bool):
        try:
            return TextFieldType(value)
        except ValueError:
            pass
    raise ValidationError(f"Text field type '{value!r}' is invalid.", context)


@dataclass
class FieldFormatParams:
    """Format parameters for one column of a content-only request."""

    left_margin: str = ""
    field_length: int = -1
    justify: JustifyLike = TextJustify.LEFT
    date_time_format: str = ""
    right_margin: str = ""

    def __post_init__(self):
        self.justify = normalize_justify(self.justify)

    def validate(self, context: ContextLike = None) -> None:
        context = ErrorContext.coerce(context)
        check_text(self.left_margin, "left_margin", context)
        check_field_length(self.field_length, "field_length", context)
        TextJustify.coerce(self.justify, context)
        check_text(self.date_time_format, "date_time_format", context)
        check_text(self.right_margin, "right_margin", context)

    def to_dict(self) -> dict:
        return {
            "left_margin": self.left_margin,
            "field_length": self.field_length,
            "justify": str(TextJustify.coerce(self.justify)),
            "date_time_format": self.date_time_format,
            "right_margin": self.right_margin,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], context: ContextLike = None) -> "FieldFormatParams":
        try:
            params = cls(
                left_margin=data.get("left_margin", ""),
                field_length=data.get("field_length", -1),
                justify=TextJustify.coerce(data.get("justify", "Left"), context),
                date_time_format=data.get("date_time_format", ""),
                right_margin=data.get("right_margin", ""),
            )
        except AttributeError as e:
            raise ValidationError(
                f"Error: Field format parameters must be a mapping.\ndata = '{data!r}'",
                context) from e
        params.validate(context)
        return params


@dataclass
class LineFormatParams:
    """Format parameters for a whole request: its columns plus line settings."""

    field_type: TextFieldType = TextFieldType.NONE
    columns: list[FieldFormatParams] = field(default_factory=list)
    terminator: str = LayoutConstants.DEFAULT_LINE_TERMINATOR
    max_line_length: int = -1
    auto_wrap: bool = False

    @property
    def policy(self) -> LineLengthPolicy:
        return LineLengthPolicy(self.max_line_length, self.auto_wrap)

    def validate(self, context: ContextLike = None) -> None:
        context = ErrorContext.coerce(context)
        if not isinstance(self.field_type, TextFieldType):
            raise ValidationError(
                f"Error: 'field_type' must be a TextFieldType.\n"
                f"field_type = '{self.field_type!r}'", context)
        expected = self.field_type.column_count
        if len(self.columns) != expected:
            raise ValidationError(
                f"Error: Field type '{self.field_type}' requires {expected} column "
                f"format parameters, but {len(self.columns)} were supplied.", context)
        for index, column in enumerate(self.columns):
            if not isinstance(column, FieldFormatParams):
                raise ValidationError(
                    f"Error: columns[{index}] is not a FieldFormatParams.", context)
            column.validate(context.extend(f"columns[{index}]"))
        check_text(self.terminator, "terminator", context)
        if not isinstance(self.auto_wrap, bool):
            raise ValidationError(
                f"Error: 'auto_wrap' must be a bool.\nauto_wrap = '{self.auto_wrap!r}'", context)
        self.policy.validate(context)

    def to_dict(self) -> dict:
        return {
            "field_type": str(self.field_type),
            "columns": [column.to_dict() for column in self.columns],
            "terminator": self.terminator,
            "max_line_length": self.max_line_length,
            "auto_wrap": self.auto_wrap,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], context: ContextLike = None) -> "LineFormatParams":
        context = ErrorContext.coerce(context).extend("LineFormatParams.from_dict()")
        if not isinstance(data, Mapping):
            raise ValidationError(
                f"Error: Line format parameters must be a mapping.\ndata = '{data!r}'", context)
        if "field_type" not in data:
            raise ValidationError("Error: 'field_type' is missing.", context)
        columns = data.get("columns", [])
        if not isinstance(columns, list):
            raise ValidationError("Error: 'columns' must be a list.", context)
        params = cls(
            field_type=coerce_field_type(data["field_type"], context),
            columns=[FieldFormatParams.from_dict(column, context.extend(f"columns[{i}]"))
                     for i, column in enumerate(columns)],
            terminator=data.get("terminator", LayoutConstants.DEFAULT_LINE_TERMINATOR),
            max_line_length=data.get("max_line_length", -1),
            auto_wrap=data.get("auto_wrap", False),
        )
        params.validate(context)
        return params


Payload = Union[FieldSpec, TextLine, tuple]


@dataclass
class FormatterRequest:
    """One queued line: its type tag, payload and optional explicit parameters.

    The payload is either self-formatted (a FieldSpec or TextLine) or a tuple
    of FieldContent values that needs format parameters to render.
    """

    field_type: TextFieldType
    payload: Payload
    params: Optional[LineFormatParams] = None

    @property
    def is_content_only(self) -> bool:
        return isinstance(self.payload, tuple)


class FormatterCollection:
    """A FIFO queue of formatter requests plus a table of standard parameters."""

    def __init__(self):
        self._queue: deque[FormatterRequest] = deque()
        self._std_params: dict[TextFieldType, LineFormatParams] = {}

    def _context(self, context: ContextLike, operation: str) -> ErrorContext:
        return ErrorContext.coerce(context).extend(f"FormatterCollection.{operation}()")

    # Standard parameters

    def register_std_params(self, field_type: FieldTypeLike, params: LineFormatParams,
                            context: ContextLike = None) -> None:
        """Register ``params`` as the standard for ``field_type``, replacing any existing."""
        context = self._context(context, "register_std_params")
        if params is None:
            raise NilArgumentError("params", context)
        tag = coerce_field_type(field_type, context)
        params = copy.deepcopy(params)
        if params.field_type is TextFieldType.NONE:
            params.field_type = tag
        if params.field_type is not tag:
            raise ValidationError(
                f"Error: Parameters for '{params.field_type}' cannot be registered "
                f"as the standard for '{tag}'.", context)
        params.validate(context)
        self._std_params[tag] = params

    def set_std_params_line_1col(self, left_margin: str = "", field_length: int = -1,
                                 justify: JustifyLike = TextJustify.LEFT,
                                 right_margin: str = "", date_time_format: str = "",
                                 terminator: str = LayoutConstants.DEFAULT_LINE_TERMINATOR,
                                 max_line_length: int = -1, auto_wrap: bool = False,
                                 context: ContextLike = None) -> None:
        """Register the standard parameters for one-column lines.

        Args:
            left_margin: Text placed before the column.
            field_length: Column width, or -1 to size it to the content.
            justify: How the content is padded within ``field_length``.
            right_margin: Text placed after the column.
            date_time_format: strftime format for timestamp content.
            terminator: Line terminator; an empty string means newline.
            max_line_length: Wrap width, or -1 for no limit.
            auto_wrap: Break between fields once ``max_line_length`` is reached.

        Raises:
            ValidationError: If any parameter is out of range.
        """
        context = self._context(context, "set_std_params_line_1col")
        column = FieldFormatParams(left_margin, field_length, justify, date_time_format,
                                   right_margin)
        self.set_std_params_multi_col([column], terminator, max_line_length, auto_wrap,
                                      context)

    def set_std_params_line_2col(self, column1: FieldFormatParams, column2: FieldFormatParams,
                                 terminator: str = LayoutConstants.DEFAULT_LINE_TERMINATOR,
                                 max_line_length: int = -1, auto_wrap: bool = False,
                                 context: ContextLike = None) -> None:
        """Register the standard parameters for two-column lines."""
        context = self._context(context, "set_std_params_line_2col")
        if column1 is None:
            raise NilArgumentError("column1", context)
        if column2 is None:
            raise NilArgumentError("column2", context)
        self.set_std_params_multi_col([column1, column2], terminator, max_line_length,
                                      auto_wrap, context)

    def set_std_params_multi_col(self, columns: Sequence[FieldFormatParams],
                                 terminator: str = LayoutConstants.DEFAULT_LINE_TERMINATOR,
                                 max_line_length: int = -1, auto_wrap: bool = False,
                                 context: ContextLike = None) -> None:
        """Register standard parameters for an N-column line, N being ``len(columns)``."""
        context = self._context(context, "set_std_params_multi_col")
        if columns is None:
            raise NilArgumentError("columns", context)
        tag = TextFieldType.for_columns(len(columns), context)
        self.register_std_params(
            tag, LineFormatParams(tag, list(columns), terminator, max_line_length, auto_wrap),
            context)

    def get_std_params(self, field_type: FieldTypeLike,
                       context: ContextLike = None) -> LineFormatParams:
        """Return a copy of the standard parameters for ``field_type``.

        Raises:
            MissingStandardParamsError: If none are registered for it.
        """
        context = self._context(context, "get_std_params")
        tag = coerce_field_type(field_type, context)
        if tag not in self._std_params:
            raise MissingStandardParamsError(
                f"Error: No standard format parameters are registered for '{tag}'.", context)
        return copy.deepcopy(self._std_params[tag])

    def std_params_length(self) -> int:
        return len(self._std_params)

    def export_std_params(self) -> dict[str, dict]:
        """Return the standard table as plain data keyed by field type name."""
        return {str(tag): params.to_dict() for tag, params in self._std_params.items()}

    def import_std_params(self, data: Mapping[str, Mapping[str, Any]],
                          context: ContextLike = None) -> None:
        """Merge exported standard parameters into the table.

        Every entry is parsed before any is stored; on error the table is
        unchanged.
        """
        context = self._context(context, "import_std_params")
        if data is None:
            raise NilArgumentError("data", context)
        parsed = {}
        for name, entry in data.items():
            tag = coerce_field_type(name, context)
            params = LineFormatParams.from_dict(entry, context.extend(name))
            if params.field_type is not tag:
                raise ValidationError(
                    f"Error: Entry '{name}' holds parameters for '{params.field_type}'.",
                    context)
            parsed[tag] = params
        self._std_params.update(parsed)

    def reset_std_params(self) -> None:
        self._std_params.clear()

    # Queue

    def enqueue(self, field_type: FieldTypeLike, payload: Any,
                params: Optional[LineFormatParams] = None,
                context: ContextLike = None) -> int:
        """Append a request; returns the new queue length.

        ``payload`` is a FieldSpec, a TextLine, or the content of a label,
        date/time or column line: a single value or a sequence with one value
        per column.
        """
        context = self._context(context, "enqueue")
        if payload is None:
            raise NilArgumentError("payload", context)
        tag = coerce_field_type(field_type, context)

        if isinstance(payload, (FieldSpec, TextLine)):
            payload = payload.deep_copy()
        else:
            if tag.column_count == 0:
                raise ValidationError(
                    f"Error: Field type '{tag}' requires a field or line payload, "
                    f"not raw content.", context)
            values = payload if isinstance(payload, (list, tuple)) else (payload,)
            payload = tuple(FieldContent.of(value) for value in values)
            if len(payload) != tag.column_count:
                raise ValidationError(
                    f"Error: Field type '{tag}' requires {tag.column_count} column "
                    f"values, but {len(payload)} were supplied.", context)
            for index, content in enumerate(payload):
                if isinstance(content, NumberContent):
                    content.to_text(context.extend(f"column[{index}]"))

        if params is not None:
            params = copy.deepcopy(params)
            if params.field_type is TextFieldType.NONE:
                params.field_type = tag
            if isinstance(params.field_type, TextFieldType) and params.field_type is not tag:
                raise ValidationError(
                    f"Error: Parameters for '{params.field_type}' cannot format "
                    f"a '{tag}' request.", context)
            params.validate(context.extend("params"))

        self._queue.append(FormatterRequest(tag, payload, params))
        return len(self._queue)

    def queue_length(self) -> int:
        """Number of requests waiting to be flushed."""
        return len(self._queue)

    def reset_queue(self) -> None:
        self._queue.clear()

    # Convenience adders

    def add_label(self, content: str, field_length: int = -1,
                  justify: JustifyLike = TextJustify.LEFT, left_margin: str = "",
                  right_margin: str = "",
                  terminator: str = LayoutConstants.DEFAULT_LINE_TERMINATOR,
                  max_line_length: int = -1, auto_wrap: bool = False,
                  context: ContextLike = None) -> int:
        """Queue a single label line with its own format parameters.

        Args:
            content: The label text; must not be empty.
            field_length: Width the label is padded to, or -1 for its own length.
            justify: Padding policy within ``field_length``.

        Returns:
            The new queue length.
        """
        context = self._context(context, "add_label")
        column = FieldFormatParams(left_margin, field_length, justify, "", right_margin)
        params = LineFormatParams(TextFieldType.LABEL, [column], terminator,
                                  max_line_length, auto_wrap)
        return self.enqueue(TextFieldType.LABEL, TextContent(content), params, context)

    def add_date_time(self, timestamp: datetime, date_time_format: str = "",
                      field_length: int = -1, justify: JustifyLike = TextJustify.LEFT,
                      left_margin: str = "", right_margin: str = "",
                      terminator: str = LayoutConstants.DEFAULT_LINE_TERMINATOR,
                      max_line_length: int = -1, auto_wrap: bool = False,
                      context: ContextLike = None) -> int:
        """Queue a formatted timestamp line; naive timestamps render as UTC."""
        context = self._context(context, "add_date_time")
        if timestamp is None:
            raise NilArgumentError("timestamp", context)
        column = FieldFormatParams(left_margin, field_length, justify, date_time_format,
                                   right_margin)
        params = LineFormatParams(TextFieldType.DATE_TIME, [column], terminator,
                                  max_line_length, auto_wrap)
        return self.enqueue(TextFieldType.DATE_TIME, TimestampContent(timestamp), params,
                            context)

    def add_filler(self, unit: str, repeat_count: int = 1, left_margin: str = "",
                   right_margin: str = "",
                   terminator: str = LayoutConstants.DEFAULT_LINE_TERMINATOR,
                   context: ContextLike = None) -> int:
        """Queue a line of ``unit`` repeated ``repeat_count`` times.

        Returns:
            The new queue length.
        """
        context = self._context(context, "add_filler")
        return self.enqueue(
            TextFieldType.FILLER,
            FillerField(unit, repeat_count, left_margin=left_margin, right_margin=right_margin),
            LineFormatParams(TextFieldType.FILLER, terminator=terminator), context)

    def add_spacer(self, width: int = 1, left_margin: str = "", right_margin: str = "",
                   terminator: str = LayoutConstants.DEFAULT_LINE_TERMINATOR,
                   context: ContextLike = None) -> int:
        """Queue a line of ``width`` spaces between the margins."""
        context = self._context(context, "add_spacer")
        return self.enqueue(
            TextFieldType.SPACER,
            SpacerField(width, left_margin=left_margin, right_margin=right_margin),
            LineFormatParams(TextFieldType.SPACER, terminator=terminator), context)

    def add_ad_hoc_text(self, text: str, left_margin: str = "", right_margin: str = "",
                        terminator: str = LayoutConstants.DEFAULT_LINE_TERMINATOR,
                        max_line_length: int = -1, auto_wrap: bool = False,
                        context: ContextLike = None) -> int:
        """Queue ``text`` verbatim, optionally wrapped at ``max_line_length``."""
        context = self._context(context, "add_ad_hoc_text")
        return self.enqueue(
            TextFieldType.AD_HOC_TEXT,
            AdHocField(text, left_margin=left_margin, right_margin=right_margin),
            LineFormatParams(TextFieldType.AD_HOC_TEXT, [], terminator, max_line_length,
                             auto_wrap), context)

    def add_blank_lines(self, count: int = 1,
                        terminator: str = LayoutConstants.DEFAULT_LINE_TERMINATOR,
                        context: ContextLike = None) -> int:
        context = self._context(context, "add_blank_lines")
        return self.enqueue(TextFieldType.BLANK_LINE, BlankLines(count, terminator),
                            context=context)

    def add_solid_line(self, unit: str, repeat_count: int, left_margin: str = "",
                       right_margin: str = "",
                       terminator: str = LayoutConstants.DEFAULT_LINE_TERMINATOR,
                       suppress_terminator: bool = False,
                       context: ContextLike = None) -> int:
        context = self._context(context, "add_solid_line")
        line = SolidLine(unit, repeat_count, left_margin, right_margin, terminator,
                         suppress_terminator)
        return self.enqueue(TextFieldType.SOLID_LINE, line, context=context)

    def add_plain_text(self, text: str, left_margin: str = "", right_margin: str = "",
                       terminator: str = LayoutConstants.DEFAULT_LINE_TERMINATOR,
                       suppress_terminator: bool = False,
                       context: ContextLike = None) -> int:
        context = self._context(context, "add_plain_text")
        line = PlainTextLine(text, left_margin, right_margin, terminator, suppress_terminator)
        return self.enqueue(TextFieldType.PLAIN_TEXT_LINE, line, context=context)

    def add_timer_lines(self, start_time: datetime, end_time: datetime,
                        time_format: str = "", label_left_margin: str = "",
                        label_right_margin: str = LayoutConstants.DEFAULT_TIMER_LABEL_RIGHT_MARGIN,
                        context: ContextLike = None) -> int:
        """Queue a start, end and elapsed time report.

        The times are checked when the request is flushed.

        Returns:
            The new queue length.
        """
        context = self._context(context, "add_timer_lines")
        timer = TimerLines(start_time, end_time, time_format=time_format,
                           label_left_margin=label_left_margin,
                           label_right_margin=label_right_margin)
        return self.enqueue(TextFieldType.TIMER_START_STOP, timer, context=context)

    def add_average_time(self, average_time: AverageTimeLine,
                         context: ContextLike = None) -> int:
        """Queue a copy of an average time report.

        Args:
            average_time: The line holding the recorded events. Later events
                added to it do not change the queued copy.

        Returns:
            The new queue length.
        """
        context = self._context(context, "add_average_time")
        if average_time is None:
            raise NilArgumentError("average_time", context)
        if not isinstance(average_time, AverageTimeLine):
            raise ValidationError(
                f"Error: Expected an AverageTimeLine, got '{type(average_time).__name__}'.",
                context)
        average_time.validate(context.extend("average_time"))
        return self.enqueue(TextFieldType.AVERAGE_TIME, average_time, context=context)

    def add_line_1col(self, content: Any, params: Optional[LineFormatParams] = None,
                      context: ContextLike = None) -> int:
        """Queue a one-column line; without ``params`` the standard ones apply at flush."""
        context = self._context(context, "add_line_1col")
        return self.enqueue(TextFieldType.LINE_1_COLUMN, (content,), params, context)

    def add_line_2col(self, content1: Any, content2: Any,
                      params: Optional[LineFormatParams] = None,
                      context: ContextLike = None) -> int:
        """Queue a two-column line; see add_line_1col."""
        context = self._context(context, "add_line_2col")
        return self.enqueue(TextFieldType.LINE_2_COLUMN, (content1, content2), params, context)

    def add_line_columns(self, contents: Sequence[Any],
                         params: Optional[LineFormatParams] = None,
                         context: ContextLike = None) -> int:
        """Queue a line of 1 to 8 columns."""
        context = self._context(context, "add_line_columns")
        if contents is None:
            raise NilArgumentError("contents", context)
        contents = tuple(contents)
        tag = TextFieldType.for_columns(len(contents), context)
        return self.enqueue(tag, contents, params, context)

    # Rendering

    def flush(self, buffer: TextIO, context: ContextLike = None) -> int:
        """Render queued requests in FIFO order into ``buffer``.

        Each request is fully rendered before it is written and removed from
        the queue. If a request fails, it and every request after it stay
        queued and the error propagates. Returns the number of requests
        written.
        """
        context = self._context(context, "flush")
        if buffer is None:
            raise NilArgumentError("buffer", context)
        flushed = 0
        try:
            while self._queue:
                request = self._queue[0]
                text = self._render_request(request, context.extend(f"request[{flushed}]"))
                buffer.write(text)
                self._queue.popleft()
                flushed += 1
        finally:
            logger.debug(f"Flushed {flushed} requests, {len(self._queue)} still queued")
        return flushed

    def build_text(self, context: ContextLike = None) -> str:
        """Flush the queue and return the text as a string."""
        context = self._context(context, "build_text")
        buffer = io.StringIO()
        self.flush(buffer, context)
        return buffer.getvalue()

    def _resolve_params(self, request: FormatterRequest) -> Optional[LineFormatParams]:
        if request.params is not None:
            return request.params
        return self._std_params.get(request.field_type)

    def _render_request(self, request: FormatterRequest, context: ErrorContext) -> str:
        params = self._resolve_params(request)
        payload = request.payload

        if isinstance(payload, TextLine):
            if isinstance(payload, StandardLine) and params is not None and params.policy.wraps:
                return payload.render_wrapped(params.policy, context)
            return payload.render(context)

        if isinstance(payload, FieldSpec):
            text = render_field(payload, context)
            if params is None:
                return compose_line([text])
            return compose_line([text], params.policy, params.terminator)

        if params is None:
            raise MissingStandardParamsError(
                f"Error: The request for '{request.field_type}' has no format parameters "
                f"and no standard parameters are registered for '{request.field_type}'.",
                context)
        if len(params.columns) != len(payload):
            raise ValidationError(
                f"Error: The request has {len(payload)} column values but its format "
                f"parameters define {len(params.columns)} columns.", context)
        texts = []
        for index, (content, column) in enumerate(zip(payload, params.columns)):
            column_context = context.extend(f"column[{index}]")
            texts.append(render_field(_content_field(content, column, column_context),
                                      column_context))
        return compose_line(texts, params.policy, params.terminator)

    # Copy, compare, reset

    def validate(self, context: ContextLike = None) -> None:
        """Check the explicit parameters of queued requests and the standard table.

        Missing standard parameters are not an error here; they are
        reported when the request is flushed.
        """
        context = ErrorContext.coerce(context)
        for index, request in enumerate(self._queue):
            if request.params is not None:
                request.params.validate(context.extend(f"request[{index}]"))
        for tag, params in self._std_params.items():
            params.validate(context.extend(f"std_params[{tag}]"))

    def copy_in(self, other: "FormatterCollection", context: ContextLike = None) -> None:
        """Replace the queue and standard table with deep copies of ``other``'s."""
        context = self._context(context, "copy_in")
        if other is None:
            raise NilArgumentError("other", context)
        if not isinstance(other, FormatterCollection):
            raise ValidationError(
                f"Error: Cannot copy a '{type(other).__name__}' into a FormatterCollection.",
                context)
        other.validate(context.extend("other"))
        self._queue = copy.deepcopy(other._queue)
        self._std_params = copy.deepcopy(other._std_params)

    def copy_out(self, context: ContextLike = None) -> "FormatterCollection":
        context = self._context(context, "copy_out")
        self.validate(context)
        new = FormatterCollection()
        new.copy_in(self, context)
        return new

    def equal(self, other: "FormatterCollection") -> bool:
        """Compare queued requests in order and the standard parameter tables."""
        if not isinstance(other, FormatterCollection) or len(self._queue) != len(other._queue):
            return False
        return (all(_requests_equal(mine, theirs)
                    for mine, theirs in zip(self._queue, other._queue))
                and self._std_params == other._std_params)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FormatterCollection):
            return NotImplemented
        return self.equal(other)

    def reset(self) -> None:
        self.reset_queue()
        self.reset_std_params()


def _requests_equal(mine: FormatterRequest, theirs: FormatterRequest) -> bool:
    if mine.field_type is not theirs.field_type or mine.params != theirs.params:
        return False
    if isinstance(mine.payload, TextLine):
        return mine.payload.equal(theirs.payload)
    return mine.payload == theirs.payload


def _content_field(content: FieldContent, column: FieldFormatParams,
                   context: ErrorContext) -> FieldSpec:
    """Build the field that renders ``content`` with one column's parameters."""
    margins = {"left_margin": column.left_margin, "right_margin": column.right_margin}
    if isinstance(content, NestedContent):
        return content.field_spec
    if isinstance(content, TimestampContent):
        return DateTimeField(content.timestamp,
                             content.date_format or column.date_time_format,
                             column.field_length, column.justify, **margins)
    if isinstance(content, NumberContent):
        return LabelField(content.to_text(context), column.field_length, column.justify,
                          **margins)
    if isinstance(content, TextContent):
        if not content.text:
            return AdHocField(" " * max(column.field_length, 0), **margins)
        return LabelField(content.text, column.field_length, column.justify, **margins)
    raise ValidationError(
        f"Error: Unknown column content type '{type(content).__name__}'.", context)
