#!/usr/bin/env python3
"""
ASCII Frame Converter - Auto-fit
================================
Dimension probe and font-size fitting for displays that show the grid.
"""

import math
from typing import Optional, Tuple

from PIL import ImageFont

from ascii_frame.constants import AUTO_FIT_FONT_MAX, AUTO_FIT_FONT_MIN
from ascii_frame.pipeline import ConversionResult

REFERENCE_SIZE = 10


class DimensionProbe:
    """Tracks grid dimensions across frames of one output stream."""

    def __init__(self):
        self.size: Optional[Tuple[int, int]] = None

    def changed(self, result: ConversionResult) -> bool:
        """Record the result's size; True if it differs from the previous one."""
        size = (result.width, result.height)
        changed = size != self.size
        self.size = size
        return changed

    def reset(self) -> None:
        self.size = None


def measure_cell(font_path: Optional[str] = None,
                 reference_size: int = REFERENCE_SIZE) -> Tuple[float, float]:
    """
    Glyph cell size as fractions of the font size.

    The width is the average advance of ten '@' characters.

    Returns:
        Tuple of (width ratio, height ratio)
    """
    if font_path:
        font = ImageFont.truetype(font_path, reference_size)
    else:
        font = ImageFont.load_default(size=reference_size)

    width = font.getlength('@' * 10) / 10
    left, top, right, bottom = font.getbbox('@')
    ascent, descent = font.getmetrics() if hasattr(font, 'getmetrics') else (bottom, 0)
    height = max(bottom - top, ascent + descent)
    return width / reference_size, height / reference_size


def fit_font_size(columns: int, rows: int,
                  container_width: float, container_height: float,
                  char_width_ratio: float, char_height_ratio: float = 1.0,
                  min_size: int = AUTO_FIT_FONT_MIN,
                  max_size: int = AUTO_FIT_FONT_MAX) -> Optional[int]:
    """
    Largest whole font size that fits a grid into a container.

    Args:
        columns: Grid width in characters
        rows: Grid height in characters
        container_width: Available width in pixels
        container_height: Available height in pixels
        char_width_ratio: Glyph width per pixel of font size
        char_height_ratio: Line height per pixel of font size

    Returns:
        Font size clamped to [min_size, max_size], or None when nothing can be fitted
    """
    if columns <= 0 or rows <= 0:
        return None
    if container_width <= 0 or container_height <= 0:
        return None

    for_width = container_width / (columns * char_width_ratio)
    for_height = container_height / (rows * char_height_ratio)
    size = max(min_size, min(max_size, min(for_width, for_height)))
    return int(math.floor(size))
