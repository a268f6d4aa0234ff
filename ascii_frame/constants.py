#!/usr/bin/env python3
"""
ASCII Frame Converter - Constants
=================================
Enums, character sets and fixed palettes shared by the conversion pipeline.
"""

from enum import Enum
from typing import List, Optional, Tuple


# =============================================================================
# ENUMS
# =============================================================================

class ColorMode(Enum):
    """How per-cell colour is produced."""
    MONOCHROME = 'monochrome'     # No per-cell colour
    TRUECOLOR = 'truecolor'       # Sampled RGB as-is
    ANSI256 = 'ansi256'           # Snap to the fixed 256-entry terminal palette
    ADAPTIVE = 'adaptive'         # Snap to a median-cut palette of k colours

    @classmethod
    def parse(cls, value: str) -> Tuple['ColorMode', Optional[int]]:
        """
        Parse a colour mode name.

        Accepts the plain enum values plus the ``adaptive<k>`` spelling
        (``adaptive16``), in which case the colour count is returned too.

        Returns:
            Tuple of (mode, colour count or None)
        """
        if isinstance(value, ColorMode):
            return value, None

        name = value.strip().lower()
        if name.startswith('adaptive') and name != 'adaptive':
            count = name[len('adaptive'):].lstrip('-_(').rstrip(')')
            if not count.isdigit():
                raise ValueError(f"Unknown color mode: {value}")
            return cls.ADAPTIVE, int(count)
        if name in ('ansi', 'ansi-256', 'fixed', 'fixed-palette'):
            return cls.ANSI256, None
        try:
            return cls(name), None
        except ValueError:
            raise ValueError(f"Unknown color mode: {value}") from None

    @property
    def uses_palette(self) -> bool:
        return self in (ColorMode.ANSI256, ColorMode.ADAPTIVE)


# =============================================================================
# CHARACTER SETS
# =============================================================================

class CharacterSet:
    """Predefined density ramps (dark to light)."""

    STANDARD: str = "@%#+=*-:. "
    DETAILED: str = "$@B%8&WM#oahkbdpqwmZO0QLCJUYXzcvunxrjft/\\|()1{}[]?-_+~*<>i!lI;:,\"^`'. "
    BLOCKS: str = "█▓▒░ "
    SIMPLE: str = "#. "
    SINGLE: str = "█"

    @classmethod
    def presets(cls) -> dict:
        return {
            'standard': cls.STANDARD,
            'detailed': cls.DETAILED,
            'blocks': cls.BLOCKS,
            'simple': cls.SIMPLE,
            'single': cls.SINGLE,
        }

    @classmethod
    def get_preset(cls, name: str) -> str:
        """Get character set by name."""
        return cls.presets().get(name.lower(), cls.STANDARD)


# =============================================================================
# NUMERIC CONSTANTS
# =============================================================================

# ITU-R BT.601 luma coefficients
LUMA_WEIGHTS: Tuple[float, float, float] = (0.299, 0.587, 0.114)

HISTOGRAM_BINS = 256

# Median cut samples at most this many pixels
QUANTIZER_SAMPLE_LIMIT = 10000
MIN_ADAPTIVE_COLORS = 2
MAX_ADAPTIVE_COLORS = 256

# Used when a palette cannot be built from any sample
FALLBACK_GRAY: Tuple[int, int, int] = (128, 128, 128)

# Opacity is rounded to this many decimals before runs are compared
OPACITY_DECIMALS = 2

AUTO_FIT_FONT_MIN = 4
AUTO_FIT_FONT_MAX = 48


# =============================================================================
# FIXED TERMINAL PALETTE
# =============================================================================

def _build_ansi_256() -> List[Tuple[int, int, int]]:
    colors = [
        (0, 0, 0), (128, 0, 0), (0, 128, 0), (128, 128, 0),
        (0, 0, 128), (128, 0, 128), (0, 128, 128), (192, 192, 192),
        (128, 128, 128), (255, 0, 0), (0, 255, 0), (255, 255, 0),
        (0, 0, 255), (255, 0, 255), (0, 255, 255), (255, 255, 255),
    ]

    def step(i: int) -> int:
        return i * 40 + 55 if i else 0

    for r in range(6):
        for g in range(6):
            for b in range(6):
                colors.append((step(r), step(g), step(b)))

    for i in range(24):
        v = i * 10 + 8
        colors.append((v, v, v))

    return colors


ANSI_256: List[Tuple[int, int, int]] = _build_ansi_256()
