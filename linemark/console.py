"""Console output sized to the terminal using Blessed."""

import sys
from typing import Optional, TextIO

import blessed

from .collection import LineCollection
from .formatter_collection import FormatterCollection
from .line_length import LineLengthPolicy


class ConsoleSink:
    """Writes rendered text to a stream, wrapping to the terminal width.

    Behaves as a text buffer (it has ``write``), so collections and formatter
    collections can render straight into it.
    """

    def __init__(self, terminal: Optional[blessed.Terminal] = None,
                 stream: Optional[TextIO] = None, width: Optional[int] = None):
        self.term = terminal or blessed.Terminal()
        self.stream = stream or sys.stdout
        self._width = width

    @property
    def width(self) -> int:
        """Columns available: an explicit width, else the terminal's width."""
        if self._width is not None:
            return self._width
        return self.term.width or 80

    def line_length_policy(self) -> LineLengthPolicy:
        return LineLengthPolicy(max_line_length=self.width, auto_wrap=True)

    def write(self, text: str) -> int:
        self.stream.write(text)
        return len(text)

    def write_heading(self, text: str) -> None:
        """Write ``text`` in bold when the terminal supports it."""
        self.write(self.term.bold(text) + "\n")

    def show_collection(self, lines: LineCollection) -> int:
        count = lines.render_into(self)
        self.stream.flush()
        return count

    def show_formatter(self, formatter: FormatterCollection) -> int:
        count = formatter.flush(self)
        self.stream.flush()
        return count
