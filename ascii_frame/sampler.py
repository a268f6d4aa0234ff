#!/usr/bin/env python3
"""
ASCII Frame Converter - Brightness Sampler
==========================================
Rescales a source pixel buffer into one RGBA sample per output cell and
computes the luminance of every cell.
"""

import logging
import math
from dataclasses import dataclass
from typing import Union

import numpy as np
from PIL import Image, ImageOps

from ascii_frame.constants import LUMA_WEIGHTS
from ascii_frame.exceptions import InvalidPixelBufferError

logger = logging.getLogger(__name__)

BufferLike = Union[bytes, bytearray, memoryview, np.ndarray]

# Stand-in for a zero-area source: one white, fully transparent pixel
_EMPTY_PIXEL = np.array([[[255, 255, 255, 0]]], dtype=np.uint8)


# =============================================================================
# DATA TYPES
# =============================================================================

@dataclass(frozen=True)
class PixelSource:
    """A captured frame: interleaved RGBA samples plus their dimensions."""
    pixels: np.ndarray          # (height, width, 4) uint8, row-major
    width: int
    height: int

    @classmethod
    def from_buffer(cls, buffer: BufferLike, width: int, height: int) -> 'PixelSource':
        """
        Wrap a flat RGBA buffer of length ``4 * width * height``.

        Raises:
            InvalidPixelBufferError: if the length does not match
        """
        if width < 0 or height < 0:
            raise InvalidPixelBufferError(f"Negative dimensions: {width}x{height}")

        if isinstance(buffer, np.ndarray):
            flat = np.ascontiguousarray(buffer, dtype=np.uint8).reshape(-1)
        else:
            flat = np.frombuffer(bytes(buffer), dtype=np.uint8)

        expected = 4 * width * height
        if flat.size != expected:
            raise InvalidPixelBufferError(
                f"Pixel buffer has {flat.size} bytes, expected {expected} for {width}x{height} RGBA"
            )
        return cls(flat.reshape(height, width, 4), width, height)

    @classmethod
    def from_array(cls, array: np.ndarray) -> 'PixelSource':
        """Wrap a (H, W), (H, W, 3) or (H, W, 4) uint8 array."""
        arr = np.asarray(array)
        if arr.ndim == 2:
            arr = np.stack([arr, arr, arr], axis=-1)
        if arr.ndim != 3 or arr.shape[2] not in (3, 4):
            raise InvalidPixelBufferError(f"Unsupported array shape: {arr.shape}")
        arr = arr.astype(np.uint8, copy=False)
        if arr.shape[2] == 3:
            alpha = np.full(arr.shape[:2] + (1,), 255, dtype=np.uint8)
            arr = np.concatenate([arr, alpha], axis=2)
        height, width = arr.shape[:2]
        return cls(np.ascontiguousarray(arr), width, height)

    @classmethod
    def from_image(cls, image: Image.Image) -> 'PixelSource':
        """Capture a PIL image as RGBA."""
        rgba = image if image.mode == 'RGBA' else image.convert('RGBA')
        return cls.from_array(np.array(rgba, dtype=np.uint8))


@dataclass
class SampledFrame:
    """The source rescaled to the character grid."""
    pixels: np.ndarray          # (height, width, 4) uint8, one sample per cell
    luminance: np.ndarray       # (height, width) float32 in [0, 1]

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    @property
    def rgb(self) -> np.ndarray:
        return self.pixels[:, :, :3]


# =============================================================================
# SAMPLING
# =============================================================================

def round_half_up(value: float) -> int:
    """Round .5 away from zero for non-negative values."""
    return int(math.floor(value + 0.5))


def grid_height(source_width: int, source_height: int,
                columns: int, aspect_ratio: float) -> int:
    """
    Number of character rows for a given column count.

    Args:
        source_width: Source width in pixels
        source_height: Source height in pixels
        columns: Output width in characters
        aspect_ratio: Width / height of one glyph cell

    Returns:
        round(columns * source_height / source_width * aspect_ratio), at least 1
    """
    if source_width <= 0 or source_height <= 0:
        return 1
    rows = round_half_up(columns * (source_height / source_width) * aspect_ratio)
    return max(1, rows)


def luminance(pixels: np.ndarray) -> np.ndarray:
    """
    Per-cell luminance (0.299R + 0.587G + 0.114B) / 255.

    Args:
        pixels: (H, W, 3+) uint8 array

    Returns:
        (H, W) float32 array in [0, 1]
    """
    rgb = pixels[..., :3].astype(np.float64)
    lum = rgb @ np.array(LUMA_WEIGHTS, dtype=np.float64) / 255.0
    return np.clip(lum, 0.0, 1.0).astype(np.float32)


class BrightnessSampler:
    """Rescale sources to the output grid."""

    @staticmethod
    def _resample_filter(source_size, target_size) -> Image.Resampling:
        (sw, sh), (tw, th) = source_size, target_size
        if tw <= sw and th <= sh:
            return Image.Resampling.BOX
        return Image.Resampling.BILINEAR

    def sample(self, source: PixelSource, columns: int,
               aspect_ratio: float = 0.5, mirror: bool = False) -> SampledFrame:
        """
        Rescale a source to ``columns`` cells wide.

        Args:
            source: Captured frame
            columns: Output width in characters (clamped to at least 1)
            aspect_ratio: Width / height of one glyph cell
            mirror: Sample with the X axis reversed

        Returns:
            SampledFrame with one RGBA sample and one luminance value per cell
        """
        if source.width <= 0 or source.height <= 0:
            logger.debug("Zero-area source %dx%d, using a 1x1 empty cell",
                         source.width, source.height)
            pixels = _EMPTY_PIXEL.copy()
            return SampledFrame(pixels, luminance(pixels))

        if columns < 1:
            logger.debug("Clamping column count %d to 1", columns)
            columns = 1
        rows = grid_height(source.width, source.height, columns, aspect_ratio)

        # Resizing premultiplies alpha; clear hidden colour so every size agrees
        pixels = source.pixels
        hidden = pixels[..., 3] == 0
        if hidden.any():
            pixels = pixels.copy()
            pixels[hidden, :3] = 0

        image = Image.fromarray(pixels)
        target = (columns, rows)
        if image.size != target:
            image = image.resize(target, self._resample_filter(image.size, target))
        if mirror:
            image = ImageOps.mirror(image)

        pixels = np.array(image, dtype=np.uint8)
        return SampledFrame(pixels, luminance(pixels))

    def sample_image(self, image: Image.Image, columns: int,
                     aspect_ratio: float = 0.5, mirror: bool = False) -> SampledFrame:
        return self.sample(PixelSource.from_image(image), columns, aspect_ratio, mirror)
