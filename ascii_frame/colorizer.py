#!/usr/bin/env python3
"""
ASCII Frame Converter - Cell Colorizer
======================================
Computes the final colour and opacity of every cell from its sampled
colour, its normalized luminance and the colour settings.
"""

from dataclasses import dataclass
from typing import NamedTuple, Optional, Sequence, Tuple

import numpy as np

from ascii_frame.config import ConversionSettings
from ascii_frame.constants import ColorMode, LUMA_WEIGHTS
from ascii_frame.quantizer import nearest_colors


class CellStyle(NamedTuple):
    """Render style of one cell."""
    r: int
    g: int
    b: int
    opacity: float


@dataclass(eq=False)
class CellStyles:
    """Per-cell colours and opacities of a whole grid."""
    rgb: np.ndarray             # (H, W, 3) uint8
    opacity: np.ndarray         # (H, W) float32 in [0, 1]

    @property
    def height(self) -> int:
        return self.rgb.shape[0]

    @property
    def width(self) -> int:
        return self.rgb.shape[1]

    def style_at(self, row: int, col: int) -> CellStyle:
        r, g, b = (int(c) for c in self.rgb[row, col])
        return CellStyle(r, g, b, float(self.opacity[row, col]))

    def row(self, row: int) -> Tuple[np.ndarray, np.ndarray]:
        return self.rgb[row], self.opacity[row]

    def __eq__(self, other):
        if not isinstance(other, CellStyles):
            return NotImplemented
        return (np.array_equal(self.rgb, other.rgb)
                and np.array_equal(self.opacity, other.opacity))


def _round(values: np.ndarray) -> np.ndarray:
    return np.floor(values + 0.5)


class CellColorizer:
    """Per-cell colour computation."""

    @staticmethod
    def apply_saturation(rgb: np.ndarray, saturation: float) -> np.ndarray:
        """Move each colour toward (0) or away from (> 1) its own gray level."""
        if saturation == 1:
            return rgb
        gray = (rgb @ np.array(LUMA_WEIGHTS))[..., None]
        return _round(gray + saturation * (rgb - gray))

    @staticmethod
    def apply_brightness_blend(rgb: np.ndarray, lum: np.ndarray, blend: float) -> np.ndarray:
        """
        Darken (blend > 0.5) or brighten (blend < 0.5) colours of dark cells.

        Args:
            rgb: (H, W, 3) float colours
            lum: (H, W) normalized luminance
            blend: 0..1, 0.5 leaves colours unchanged

        Returns:
            Blended colours, rounded
        """
        if blend == 0.5:
            return rgb
        adjusted = (blend - 0.5) * 2
        darkness = 1.0 - lum.astype(np.float64)
        if adjusted >= 0:
            factor = 1.0 - adjusted * darkness
        else:
            factor = 1.0 + abs(adjusted) * darkness
        return _round(rgb * factor[..., None])

    @staticmethod
    def opacities(lum: np.ndarray, settings: ConversionSettings) -> np.ndarray:
        opacity = np.full(lum.shape, settings.base_opacity, dtype=np.float64)
        if settings.brightness_as_opacity:
            brightness = 1.0 - lum if settings.invert else lum
            opacity *= 1.0 - brightness
        return opacity.astype(np.float32)

    @classmethod
    def colorize(cls, rgb: np.ndarray, lum: np.ndarray,
                 settings: ConversionSettings,
                 palette: Optional[Sequence[Tuple[int, int, int]]] = None) -> Optional[CellStyles]:
        """
        Compute every cell's style.

        Args:
            rgb: (H, W, 3) sampled colours
            lum: (H, W) normalized luminance
            settings: Conversion settings
            palette: Palette to snap to, for palette colour modes

        Returns:
            CellStyles, or None for plain monochrome output
        """
        if settings.color_mode == ColorMode.MONOCHROME:
            if not settings.brightness_as_opacity:
                return None
            colors = np.empty(lum.shape + (3,), dtype=np.uint8)
            colors[...] = settings.foreground
            return CellStyles(colors, cls.opacities(lum, settings))

        if palette is not None:
            rgb = nearest_colors(rgb, palette)

        colors = rgb.astype(np.float64)
        colors = cls.apply_saturation(colors, settings.saturation)
        colors = cls.apply_brightness_blend(colors, lum, settings.brightness_blend)
        colors = np.clip(colors, 0, 255).astype(np.uint8)

        return CellStyles(colors, cls.opacities(lum, settings))
