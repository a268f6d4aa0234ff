#!/usr/bin/env python3
"""
ASCII Frame Converter - Glyph Mapper
====================================
Maps normalized luminance to characters of a density ramp, and orders
arbitrary character sets by their rendered ink coverage.
"""

import logging
from typing import List, Optional, Union

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from ascii_frame.exceptions import EmptyDensityRampError

logger = logging.getLogger(__name__)

FontLike = Union[None, str, ImageFont.FreeTypeFont, ImageFont.ImageFont]

MEASURE_SIZE = 24


# =============================================================================
# MAPPING
# =============================================================================

def prepare_ramp(ramp: str, invert: bool = False) -> str:
    """
    Validate a density ramp and apply inversion.

    Raises:
        EmptyDensityRampError: if ``ramp`` has no characters
    """
    if not ramp:
        raise EmptyDensityRampError()
    return ramp[::-1] if invert else ramp


def map_glyphs(lum: np.ndarray, ramp: str) -> List[str]:
    """
    Pick one character per cell.

    Index is min(n - 1, floor(v * n)) so that v == 1.0 lands on the last glyph.

    Args:
        lum: (H, W) luminance grid in [0, 1]
        ramp: Characters ordered dark to light (already inverted if needed)

    Returns:
        H strings of W characters
    """
    if not ramp:
        raise EmptyDensityRampError()

    n = len(ramp)
    chars = np.array(list(ramp))
    indices = np.floor(lum * n).astype(np.intp)
    np.clip(indices, 0, n - 1, out=indices)
    return [''.join(row) for row in chars[indices]]


# =============================================================================
# RAMP OPTIMIZATION
# =============================================================================

def _load_font(font: FontLike, size: int):
    if font is None:
        return ImageFont.load_default(size=size)
    if isinstance(font, str):
        return ImageFont.truetype(font, size)
    return font


def measure_glyph_brightness(char: str, font: FontLike = None,
                             size: int = MEASURE_SIZE) -> float:
    """
    Render a glyph black on white and measure how much of the cell stays white.

    Args:
        char: Single character
        font: Font path, loaded PIL font, or None for Pillow's default font
        size: Cell size in pixels

    Returns:
        0.0 for a fully inked cell, 1.0 for an empty one
    """
    canvas = Image.new('L', (size, size), 255)
    draw = ImageDraw.Draw(canvas)
    loaded = _load_font(font, size)
    left, _, right, _ = draw.textbbox((0, 0), char, font=loaded)
    draw.text(((size - (right - left)) / 2 - left, 0), char, fill=0, font=loaded)
    return float(np.asarray(canvas, dtype=np.float64).mean() / 255.0)


def optimize_ramp(chars: str, reduce_to: int = 0, font: FontLike = None) -> str:
    """
    Sort characters dark to light by measured brightness.

    Duplicates are dropped. A space, if present, is kept as the trailing
    "empty" glyph.

    Args:
        chars: Arbitrary characters
        reduce_to: If > 0, keep this many glyphs at evenly spaced brightness steps
        font: Font used for measuring

    Returns:
        Ordered density ramp
    """
    unique = list(dict.fromkeys(chars))
    has_space = ' ' in unique
    measured = sorted(
        ((measure_glyph_brightness(c, font), i, c) for i, c in enumerate(unique) if c != ' '),
    )
    ordered = [c for _, _, c in measured]

    if 0 < reduce_to < len(ordered):
        if reduce_to == 1:
            ordered = ordered[:1]
        else:
            last = len(ordered) - 1
            ordered = [ordered[int(np.floor(i * last / (reduce_to - 1) + 0.5))]
                       for i in range(reduce_to)]

    logger.debug("Optimized ramp %r -> %r", chars, ''.join(ordered))
    return ''.join(ordered) + (' ' if has_space else '')
