"""Text measurement for label-driven node sizing.

Node widths depend on how wide their labels render. The layout code only
talks to the ``TextMeasurer`` protocol, so the real font backend
(``audiograph.integrations.qt``) can be swapped for a deterministic
measurer in tests or headless tools.
"""

import re
from typing import List, Optional, Protocol

# Fallback metrics (pixels)
CHAR_WIDTH = 7
DEFAULT_FONT_SIZE = 14
# Average glyph advance as a fraction of the font size for proportional fonts
AVERAGE_CHAR_WIDTH_RATIO = 0.55

_FONT_SIZE_PATTERN = re.compile(r"(?<![\w.])(\d+(?:\.\d+)?)px\b")


class TextMeasurer(Protocol):
    """Anything that can report the rendered pixel width of a string."""

    def measure_width(self, text: str, font_style: Optional[str] = None) -> float:
        """Return the width ``text`` occupies when drawn with ``font_style``.

        Parameters
        ----------
        text : str
            Text to measure
        font_style : str, optional
            CSS font shorthand, e.g. ``'14px Segoe UI, Arial'``. ``None``
            means the backend's default font.

        Returns
        -------
        float
            Width in pixels
        """
        ...


def parse_font_size(font_style: Optional[str], default: float = DEFAULT_FONT_SIZE) -> float:
    """Extract the pixel size from a CSS font shorthand.

    >>> parse_font_size('bold 12px Segoe UI, Arial')
    12.0
    """
    if not font_style:
        return float(default)
    match = _FONT_SIZE_PATTERN.search(font_style)
    if match is None:
        return float(default)
    return float(match.group(1))


def parse_font_families(font_style: Optional[str]) -> List[str]:
    """Return the comma-separated family list that follows the pixel size."""
    if not font_style:
        return []
    match = _FONT_SIZE_PATTERN.search(font_style)
    tail = font_style[match.end():] if match else font_style
    # Line height syntax: "14px/1.2 Arial"
    tail = re.sub(r"^/\S+", "", tail.strip())
    return [f.strip().strip("'\"") for f in tail.split(",") if f.strip()]


class FixedWidthMeasurer:
    """Measures every character as ``char_width`` pixels, ignoring the font.

    Parameters
    ----------
    char_width : float
        Width of one character in pixels (default: 7)
    """

    def __init__(self, char_width: float = CHAR_WIDTH) -> None:
        if char_width < 0:
            raise ValueError(f"char_width must be non-negative, got {char_width}")
        self.char_width = char_width

    def measure_width(self, text: str, font_style: Optional[str] = None) -> float:
        return len(text) * self.char_width

    def __repr__(self) -> str:
        return f"FixedWidthMeasurer(char_width={self.char_width})"


class FontSizeMeasurer:
    """Estimates widths from the font size named in the style string.

    Each character is assumed to be ``width_ratio`` times the font's pixel
    size wide. Good enough for sizing boxes when no font backend is
    available.

    Parameters
    ----------
    width_ratio : float
        Average character advance relative to the font size (default: 0.55)
    default_font_size : float
        Size used when the style names none (default: 14)
    """

    def __init__(
        self,
        width_ratio: float = AVERAGE_CHAR_WIDTH_RATIO,
        default_font_size: float = DEFAULT_FONT_SIZE,
    ) -> None:
        self.width_ratio = width_ratio
        self.default_font_size = default_font_size

    def measure_width(self, text: str, font_style: Optional[str] = None) -> float:
        size = parse_font_size(font_style, self.default_font_size)
        return len(text) * size * self.width_ratio

    def __repr__(self) -> str:
        return (
            f"FontSizeMeasurer(width_ratio={self.width_ratio}, "
            f"default_font_size={self.default_font_size})"
        )
