#!/usr/bin/env python3
"""
ASCII Frame Converter - Conversion Pipeline
===========================================
Sampler -> contrast normalizer -> glyph mapper -> (palette) -> colorizer.

Each call is independent; the only state a converter keeps between calls
is its palette cache.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Any, List, Optional, Tuple

from PIL import Image

from ascii_frame.colorizer import CellColorizer, CellStyles
from ascii_frame.config import ConversionSettings
from ascii_frame.constants import ANSI_256, ColorMode
from ascii_frame.contrast import normalize
from ascii_frame.glyphs import map_glyphs, prepare_ramp
from ascii_frame.markup import render_markup
from ascii_frame.quantizer import Palette, PaletteCache
from ascii_frame.sampler import BrightnessSampler, PixelSource

logger = logging.getLogger(__name__)


@dataclass
class ConversionResult:
    """Result of converting one frame."""
    lines: List[str]                                    # H rows of W characters
    width: int = 0
    height: int = 0
    cell_styles: Optional[CellStyles] = None            # None for plain monochrome
    palette: Optional[Palette] = None                   # Palette the colours were snapped to
    duration: float = field(default=0.0, compare=False)  # Seconds spent converting

    @property
    def character_grid(self) -> List[str]:
        return self.lines

    @property
    def text(self) -> str:
        return '\n'.join(self.lines)

    @property
    def size(self) -> Tuple[int, int]:
        return self.width, self.height

    def to_markup(self) -> str:
        return render_markup(self.lines, self.cell_styles)


class AsciiFrameConverter:
    """Converts frames to character grids."""

    def __init__(self, settings: Optional[ConversionSettings] = None,
                 palette_cache: Optional[PaletteCache] = None):
        """Initialize with optional default settings and a shared palette cache."""
        self.settings = settings or ConversionSettings()
        self.palette_cache = palette_cache if palette_cache is not None else PaletteCache()
        self.sampler = BrightnessSampler()

    def invalidate(self) -> None:
        """Drop the cached palette (new image loaded, colour mode changed)."""
        self.palette_cache.invalidate()

    @staticmethod
    def render_markup(result: ConversionResult) -> str:
        """Run-length styled markup of a result."""
        return render_markup(result.lines, result.cell_styles)

    def _palette_for(self, pixels, settings: ConversionSettings) -> Optional[Palette]:
        if settings.color_mode == ColorMode.ANSI256:
            return ANSI_256
        if settings.color_mode == ColorMode.ADAPTIVE:
            return self.palette_cache.get(pixels, settings.adaptive_colors, settings.saturation)
        return None

    def convert(self, source: PixelSource, columns: int,
                settings: Optional[ConversionSettings] = None) -> ConversionResult:
        """
        Convert one frame.

        Args:
            source: Captured frame
            columns: Output width in characters
            settings: Overrides the converter's default settings

        Returns:
            ConversionResult

        Raises:
            EmptyDensityRampError: if the density ramp is empty
        """
        settings = settings or self.settings
        ramp = prepare_ramp(settings.density_ramp, settings.invert)
        started = time.perf_counter()

        frame = self.sampler.sample(source, columns, settings.aspect_ratio, settings.mirror)
        lum = normalize(frame.luminance, settings.contrast_factor, settings.use_histogram_eq)
        lines = map_glyphs(lum, ramp)

        palette = self._palette_for(frame.pixels, settings)
        styles = CellColorizer.colorize(frame.rgb, lum, settings, palette)

        duration = time.perf_counter() - started
        logger.debug("Converted %dx%d source to %dx%d cells in %.1f ms",
                     source.width, source.height, frame.width, frame.height, duration * 1000)

        return ConversionResult(
            lines=lines,
            width=frame.width,
            height=frame.height,
            cell_styles=styles,
            palette=list(palette) if palette is not None else None,
            duration=duration,
        )

    def convert_image(self, image: Image.Image, columns: int,
                      settings: Optional[ConversionSettings] = None) -> ConversionResult:
        """Convert a PIL image."""
        return self.convert(PixelSource.from_image(image), columns, settings)


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================

def convert(source: PixelSource, columns: int,
            settings: Optional[ConversionSettings] = None) -> ConversionResult:
    """Convert one frame with a fresh converter."""
    return AsciiFrameConverter(settings).convert(source, columns)


def image_to_ascii(image: Image.Image, columns: int = 100, **kwargs: Any) -> ConversionResult:
    """
    Convenience function to convert a PIL image.

    Args:
        image: PIL Image
        columns: Output width in characters
        **kwargs: ConversionSettings fields (``color_mode`` may be a string)

    Returns:
        ConversionResult
    """
    settings = ConversionSettings.from_dict(kwargs)
    return AsciiFrameConverter(settings).convert_image(image, columns)
