"""Column tracking and automatic wrapping for composed lines."""

from __future__ import annotations

import io
from dataclasses import dataclass
from typing import Iterable

from .constants import LayoutConstants
from .errors import ContextLike, ValidationError


@dataclass(frozen=True)
class LineLengthPolicy:
    """Maximum line length and whether to wrap when a field would exceed it.

    Wrapping is disabled when ``auto_wrap`` is false or ``max_line_length``
    is zero or negative.
    """
    max_line_length: int = -1
    auto_wrap: bool = False

    @property
    def wraps(self) -> bool:
        return self.auto_wrap and self.max_line_length > 0

    def validate(self, context: ContextLike = None) -> None:
        if isinstance(self.max_line_length, bool) or not isinstance(self.max_line_length, int):
            raise ValidationError(
                f"Error: 'max_line_length' must be an integer.\n"
                f"max_line_length = '{self.max_line_length!r}'", context)
        if self.max_line_length > LayoutConstants.MAX_FIELD_LENGTH:
            raise ValidationError(
                f"Error: 'max_line_length' is greater than one-million (1,000,000).\n"
                f"max_line_length = '{self.max_line_length}'", context)


NO_WRAP = LineLengthPolicy()


class LineLengthManager:
    """Appends rendered fields to a buffer, breaking lines between fields.

    Fields are never split. A field wider than the maximum line length is
    written whole on a line of its own.
    """

    def __init__(self, policy: LineLengthPolicy = NO_WRAP,
                 terminator: str = LayoutConstants.DEFAULT_LINE_TERMINATOR):
        self.policy = policy
        self.terminator = terminator or LayoutConstants.DEFAULT_LINE_TERMINATOR
        self._buffer = io.StringIO()
        self._column = 0

    @property
    def current_column(self) -> int:
        return self._column

    def append(self, text: str) -> None:
        if not text:
            return
        if (self.policy.wraps and self._column > 0
                and self._column + len(text) > self.policy.max_line_length):
            self._buffer.write(self.terminator)
            self._column = 0
        self._buffer.write(text)
        self._advance(text)

    def end_line(self, suppress_terminator: bool = False) -> None:
        if not suppress_terminator:
            self._buffer.write(self.terminator)
        self._column = 0

    def getvalue(self) -> str:
        return self._buffer.getvalue()

    def _advance(self, text: str) -> None:
        last_break = text.rfind("\n")
        if last_break == -1:
            self._column += len(text)
        else:
            self._column = len(text) - last_break - 1


def compose_line(field_texts: Iterable[str], policy: LineLengthPolicy = NO_WRAP,
                 terminator: str = LayoutConstants.DEFAULT_LINE_TERMINATOR,
                 suppress_terminator: bool = False) -> str:
    """Join rendered field strings into one logical line under ``policy``."""
    manager = LineLengthManager(policy, terminator)
    for text in field_texts:
        manager.append(text)
    manager.end_line(suppress_terminator)
    return manager.getvalue()
