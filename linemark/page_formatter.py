"""Paginate rendered text into fixed-size printed pages.

Rendered text is split into lines, lines longer than the text width are
broken at the text width, and the result is laid out on 66-line pages with
six-line top and bottom margins. Pages after the first carry a centred page
number half an inch from the top.
"""

from typing import List, Optional

from .page_config import DEFAULT_PAGE_CONFIG, PageConfig


class PageFormatter:
    """Lays rendered text out on full pages with margins and page numbers."""

    FULL_PAGE_HEIGHT = 66
    TOP_MARGIN = 6
    BOTTOM_MARGIN = 6
    TEXT_HEIGHT = 54
    PAGE_NUMBER_LINE = 3  # 0-indexed, within the top margin

    def __init__(self, text: str, page_config: Optional[PageConfig] = None,
                 double_spacing: bool = False):
        self.text = text
        self.page_config = page_config or DEFAULT_PAGE_CONFIG
        self.double_spacing = bool(double_spacing)
        self.pages: List[List[str]] = []

    @property
    def text_width(self) -> int:
        return self.page_config.text_width

    @property
    def full_page_width(self) -> int:
        return self.page_config.full_page_width

    def text_lines(self) -> List[str]:
        """Split the text into lines no wider than the text area."""
        lines: List[str] = []
        for line in self.text.replace("\f", "\n").splitlines():
            line = line.expandtabs(8)
            if not line:
                lines.append("")
                continue
            for start in range(0, len(line), self.text_width):
                lines.append(line[start:start + self.text_width])
        return lines

    def format_pages(self) -> List[List[str]]:
        """Build the pages; each is a list of 66 full-width lines.

        Empty text produces no pages.
        """
        text_lines = self.text_lines()
        blank = " " * self.full_page_width
        per_page = self.TEXT_HEIGHT // 2 if self.double_spacing else self.TEXT_HEIGHT

        self.pages = []
        for page_index, start in enumerate(range(0, len(text_lines), per_page)):
            page_num = page_index + 1
            chunk = text_lines[start:start + per_page]
            page: List[str] = []

            for i in range(self.TOP_MARGIN):
                if i == self.PAGE_NUMBER_LINE and page_num > 1:
                    page.append(self._create_page_number_line(page_num))
                else:
                    page.append(blank)

            body = [self._place(line) for line in chunk]
            if self.double_spacing:
                spaced = []
                for line in body:
                    spaced.extend([line, blank])
                body = spaced
            body.extend([blank] * (self.TEXT_HEIGHT - len(body)))
            page.extend(body)

            page.extend([blank] * self.BOTTOM_MARGIN)
            self.pages.append(page)

        return self.pages

    def _place(self, line: str) -> str:
        config = self.page_config
        return (" " * config.left_margin_chars + line.ljust(self.text_width)
                + " " * config.right_margin_chars)

    def _create_page_number_line(self, page_num: int) -> str:
        label = str(page_num)
        padding_left = (self.full_page_width - len(label)) // 2
        padding_right = self.full_page_width - padding_left - len(label)
        return " " * padding_left + label + " " * padding_right

    def get_page_count(self) -> int:
        return len(self.pages)

    def get_page(self, page_num: int) -> List[str]:
        """Return page ``page_num`` (0-indexed), or an empty list if it does not exist."""
        if 0 <= page_num < len(self.pages):
            return self.pages[page_num]
        return []

    def format_for_print(self) -> str:
        """Join all pages into one string with a form feed between pages."""
        output = []
        for i, page in enumerate(self.pages):
            output.extend(page)
            if i < len(self.pages) - 1:
                output.append("\f")
        return "\n".join(output)
