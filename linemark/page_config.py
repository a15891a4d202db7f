"""Printed page geometry for rendered text.

Pages are US Letter at six lines per inch. A 10-pitch (pica) page holds 85
columns with 1" margins; a 12-pitch (elite) page holds 102 columns with 1.25"
margins. Both are drawn in the built-in Courier font, scaled to the pitch.
"""

from dataclasses import dataclass
from typing import Dict, Optional


LETTER_WIDTH_INCHES = 8.5
LETTER_HEIGHT_INCHES = 11.0
POINTS_PER_INCH = 72

LINES_PER_INCH = 6
LINE_HEIGHT_POINTS = POINTS_PER_INCH // LINES_PER_INCH  # 12 points

PICA_MARGIN_INCHES = 1.0
ELITE_MARGIN_INCHES = 1.25


@dataclass(frozen=True)
class PageConfig:
    """Horizontal layout of one printed page.

    Attributes:
        name: Profile name, e.g. "pica"
        pdf_font_name: Font used when drawing the page
        pitch: Characters per inch
        point_size: Font size in points
        text_width: Columns available for text
        left_margin_chars: Left margin in columns
        right_margin_chars: Right margin in columns
        full_page_width: Total page width in columns
    """
    name: str
    pdf_font_name: str
    pitch: int
    point_size: int
    text_width: int
    left_margin_chars: int
    right_margin_chars: int
    full_page_width: int

    @property
    def line_height(self) -> int:
        return LINE_HEIGHT_POINTS

    @classmethod
    def _for_pitch(cls, name: str, pitch: int, margin_inches: float,
                   point_size: int) -> 'PageConfig':
        full_width = int(LETTER_WIDTH_INCHES * pitch)
        margin_chars = int(margin_inches * pitch)
        return cls(
            name=name,
            pdf_font_name="Courier",
            pitch=pitch,
            point_size=point_size,
            text_width=full_width - 2 * margin_chars,
            left_margin_chars=margin_chars,
            right_margin_chars=margin_chars,
            full_page_width=full_width,
        )

    @classmethod
    def create_10_pitch(cls, name: str = "pica") -> 'PageConfig':
        """85 columns, 10 column margins, 65 column text area, 12pt."""
        return cls._for_pitch(name, 10, PICA_MARGIN_INCHES, 12)

    @classmethod
    def create_12_pitch(cls, name: str = "elite") -> 'PageConfig':
        """102 columns, 15 column margins, 72 column text area, 10pt."""
        return cls._for_pitch(name, 12, ELITE_MARGIN_INCHES, 10)


PAGE_CONFIGS: Dict[str, PageConfig] = {
    "pica": PageConfig.create_10_pitch("pica"),
    "elite": PageConfig.create_12_pitch("elite"),
}

DEFAULT_PAGE_CONFIG = PAGE_CONFIGS["pica"]


def get_page_config(name: str) -> Optional[PageConfig]:
    """Look up a page configuration by name; None if unknown."""
    return PAGE_CONFIGS.get(name)
