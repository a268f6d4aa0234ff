#!/usr/bin/env python3
"""
ASCII Frame Converter - Raster Renderer
=======================================
Draws the cells of a ConversionResult straight onto a Pillow image, glyph
by glyph at (col * cell_width, row * cell_height), without building markup.
"""

import logging
import math
from typing import Optional, Tuple, Union

from PIL import Image, ImageDraw, ImageFont

from ascii_frame.config import ConversionSettings
from ascii_frame.markup import iter_row_runs
from ascii_frame.pipeline import ConversionResult

logger = logging.getLogger(__name__)

RGB = Tuple[int, int, int]

DEFAULT_BACKGROUND: RGB = (13, 13, 13)


def _alpha(opacity: float) -> int:
    return max(0, min(255, int(opacity * 255 + 0.5)))


class RasterRenderer:
    """Render character grids to RGBA images."""

    def __init__(self, font_size: int = 10, font_path: Optional[str] = None,
                 aspect_ratio: float = 0.5):
        """
        Args:
            font_size: Glyph cell height in pixels
            font_path: TrueType font file, Pillow's default font if None
            aspect_ratio: Glyph cell width / height
        """
        self.font_size = font_size
        self.aspect_ratio = aspect_ratio
        if font_path:
            self.font = ImageFont.truetype(font_path, font_size)
        else:
            self.font = ImageFont.load_default(size=font_size)

    @property
    def cell_size(self) -> Tuple[float, int]:
        return self.font_size * self.aspect_ratio, self.font_size

    def canvas_size(self, result: ConversionResult, padding: int = 0) -> Tuple[int, int]:
        cell_width, cell_height = self.cell_size
        return (math.ceil(result.width * cell_width) + 2 * padding,
                result.height * cell_height + 2 * padding)

    def render(self, result: ConversionResult,
               settings: Optional[ConversionSettings] = None,
               background: Optional[RGB] = DEFAULT_BACKGROUND,
               padding: int = 0) -> Image.Image:
        """
        Draw every cell of a result.

        Args:
            result: ConversionResult to draw
            settings: Supplies foreground and base opacity for plain monochrome results
            background: Fill colour, or None for a transparent canvas
            padding: Margin around the grid in pixels

        Returns:
            RGBA image
        """
        settings = settings or ConversionSettings()
        fill = (0, 0, 0, 0) if background is None else tuple(background) + (255,)
        image = Image.new('RGBA', self.canvas_size(result, padding), fill)
        draw = ImageDraw.Draw(image, 'RGBA')
        cell_width, cell_height = self.cell_size

        def put(x: int, y: int, char: str, ink) -> None:
            if char != ' ':
                draw.text((padding + x * cell_width, padding + y * cell_height),
                          char, fill=ink, font=self.font)

        if result.cell_styles is None:
            ink = tuple(settings.foreground) + (_alpha(settings.base_opacity),)
            for y, line in enumerate(result.lines):
                for x, char in enumerate(line):
                    put(x, y, char, ink)
            return image

        for y, runs in enumerate(iter_row_runs(result.lines, result.cell_styles)):
            x = 0
            for run in runs:
                r, g, b, opacity = run.style
                ink = (r, g, b, _alpha(opacity))
                for char in run.text:
                    put(x, y, char, ink)
                    x += 1

        return image

    def save_png(self, result: ConversionResult, path: str,
                 settings: Optional[ConversionSettings] = None,
                 background: Union[RGB, None, str] = 'auto',
                 padding: int = 20) -> None:
        """
        Render and save as PNG.

        ``background='auto'`` keeps the canvas transparent when opacity comes
        from brightness, and fills it otherwise.
        """
        settings = settings or ConversionSettings()
        if background == 'auto':
            background = None if settings.brightness_as_opacity else DEFAULT_BACKGROUND
        image = self.render(result, settings, background, padding)
        image.save(path, format='PNG')
        logger.info("Saved %dx%d PNG to %s", image.width, image.height, path)
