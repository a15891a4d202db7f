"""Draw paginated text into a PDF document with reportlab.

Pages come from PageFormatter: 66 full-width lines each. Lines are drawn in
the built-in Courier font, which uses Windows-1252 encoding; characters
outside it are printed as '?' and reported afterwards.
"""

import io
from typing import List, Optional, Set

from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

from .page_config import DEFAULT_PAGE_CONFIG, PageConfig

PDF_TEXT_ENCODING = "cp1252"
MAX_REPORTED_CHARS = 10


def _describe_char(char: str) -> str:
    code = f"U+{ord(char):04X}"
    if char.isprintable():
        return f"'{char}' ({code})"
    return code


class PDFGenerator:
    """Generate PDF bytes from formatted pages."""

    def __init__(self, page_config: Optional[PageConfig] = None):
        self.page_config = page_config or DEFAULT_PAGE_CONFIG
        self.page_width, self.page_height = letter
        self.left_margin = 0
        # First baseline sits 1/6" below the top edge
        self.starting_y = self.page_height - self.page_config.line_height
        self.font_name = self.page_config.pdf_font_name
        self.font_size = self.page_config.point_size
        self.line_height = self.page_config.line_height
        self.unprintable_chars: Set[str] = set()

    @property
    def has_unprintable(self) -> bool:
        return bool(self.unprintable_chars)

    def generate_pdf(self, pages: List[List[str]], title: Optional[str] = None) -> bytes:
        """Render ``pages`` and return the complete PDF document."""
        self.unprintable_chars = set()

        output = io.BytesIO()
        pdf = canvas.Canvas(output, pagesize=letter)
        if title:
            pdf.setTitle(title)

        for page in pages:
            text = pdf.beginText(self.left_margin, self.starting_y)
            text.setFont(self.font_name, self.font_size, leading=self.line_height)
            for line in page:
                text.textLine(self._make_pdf_safe(line))
            pdf.drawText(text)
            pdf.showPage()

        pdf.save()
        return output.getvalue()

    def _make_pdf_safe(self, text: str) -> str:
        """Replace characters Courier cannot encode with '?' and remember them."""
        safe = text.encode(PDF_TEXT_ENCODING, errors="replace").decode(PDF_TEXT_ENCODING)
        if safe != text:
            self.unprintable_chars.update(
                original for original, printed in zip(text, safe)
                if original != printed)
        return safe

    def get_unprintable_warning(self) -> Optional[str]:
        """Describe the unprintable characters found by the last generate_pdf call."""
        if not self.unprintable_chars:
            return None
        chars = sorted(self.unprintable_chars)
        shown = [_describe_char(char) for char in chars[:MAX_REPORTED_CHARS]]
        if len(chars) > MAX_REPORTED_CHARS:
            shown.append(f"... and {len(chars) - MAX_REPORTED_CHARS} more")
        return (f"Warning: {len(chars)} unique unprintable character(s) "
                f"replaced with '?': {', '.join(shown)}")
