#!/usr/bin/env python3
"""
ASCII Frame Converter - Frame Streams
=====================================
Converts successive frames of one stream (animated images, decoded video,
webcam captures) and tracks when the output grid changes size.
"""

import logging
import os
import time
from typing import Iterable, Iterator, List, Literal, Optional, Union

from PIL import Image, ImageSequence

from ascii_frame.autofit import DimensionProbe
from ascii_frame.config import ConversionSettings
from ascii_frame.formatters import AnsiColorFormatter
from ascii_frame.pipeline import AsciiFrameConverter, ConversionResult
from ascii_frame.sampler import PixelSource

logger = logging.getLogger(__name__)

Frame = Union[Image.Image, PixelSource]


def iter_image_frames(image: Image.Image) -> Iterator[Image.Image]:
    """Yield an RGBA copy of every frame of a (possibly animated) image."""
    for frame in ImageSequence.Iterator(image):
        yield frame.convert('RGBA')


class FrameStream:
    """Convert the frames of one output stream."""

    def __init__(self, columns: int,
                 settings: Optional[ConversionSettings] = None,
                 converter: Optional[AsciiFrameConverter] = None):
        """Initialize with output width, settings and an optional converter."""
        self.columns = columns
        self.settings = settings or ConversionSettings()
        self.converter = converter or AsciiFrameConverter(self.settings)
        self.probe = DimensionProbe()
        self.resized = False

    def convert(self, frame: Frame) -> ConversionResult:
        """
        Convert the next frame.

        The palette cache is cleared first since every frame brings new
        content. ``resized`` tells whether the grid size changed.
        """
        source = frame if isinstance(frame, PixelSource) else PixelSource.from_image(frame)
        self.converter.invalidate()
        result = self.converter.convert(source, self.columns, self.settings)
        self.resized = self.probe.changed(result)
        if self.resized:
            logger.debug("Stream grid is now %dx%d", result.width, result.height)
        return result

    def convert_all(self, frames: Iterable[Frame]) -> List[ConversionResult]:
        return [self.convert(frame) for frame in frames]

    def extract_frames(self, path: str) -> List[ConversionResult]:
        """
        Convert every frame of an animated image file.

        Args:
            path: Path to GIF/APNG/WebP file

        Returns:
            List of ConversionResult for each frame
        """
        with Image.open(path) as image:
            return self.convert_all(iter_image_frames(image))


def play_in_terminal(frames: List[ConversionResult],
                     delay: float = 0.1,
                     loops: int = -1,
                     color_mode: Literal['24bit', '256', '16'] = '24bit') -> None:
    """
    Play converted frames in the terminal.

    Args:
        frames: Converted frames
        delay: Delay between frames in seconds
        loops: Number of loops (-1 for infinite)
        color_mode: ANSI color mode
    """
    if not frames:
        return

    rendered = [AnsiColorFormatter.format_result(frame, color_mode=color_mode) for frame in frames]

    loop_count = 0
    try:
        while loops == -1 or loop_count < loops:
            for output in rendered:
                os.system('cls' if os.name == 'nt' else 'clear')
                print(output)
                time.sleep(delay)
            loop_count += 1
    except KeyboardInterrupt:
        print("\nAnimation stopped.")
