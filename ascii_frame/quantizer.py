#!/usr/bin/env python3
"""
ASCII Frame Converter - Color Quantizer
=======================================
Median-cut palette reduction, nearest-colour lookup and the palette cache
shared between conversions of the same source.
"""

import logging
import math
import threading
from typing import List, Optional, Sequence, Tuple

import numpy as np

from ascii_frame.constants import FALLBACK_GRAY, LUMA_WEIGHTS, QUANTIZER_SAMPLE_LIMIT

logger = logging.getLogger(__name__)

RGB = Tuple[int, int, int]
Palette = List[RGB]

# Upper bound on pixel/palette distance pairs held in memory at once
_NEAREST_CHUNK_PAIRS = 1 << 22


# =============================================================================
# MEDIAN CUT
# =============================================================================

def _round(values: np.ndarray) -> np.ndarray:
    return np.floor(values + 0.5)


def _sample_colors(pixels: np.ndarray) -> np.ndarray:
    """Stride-sample at most ~QUANTIZER_SAMPLE_LIMIT RGB triples."""
    flat = np.asarray(pixels, dtype=np.uint8).reshape(-1, 4)
    step = max(1, flat.shape[0] // QUANTIZER_SAMPLE_LIMIT)
    return flat[::step, :3].astype(np.int64)


def _adjust_saturation(rgb: np.ndarray, saturation: float) -> np.ndarray:
    gray = _round(rgb @ np.array(LUMA_WEIGHTS))[:, None]
    adjusted = _round(gray + saturation * (rgb - gray))
    return np.clip(adjusted, 0, 255).astype(np.int64)


def _bucket(rgb: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """Distinct colours in first-seen order with their occurrence counts."""
    keys = (rgb[:, 0] << 16) | (rgb[:, 1] << 8) | rgb[:, 2]
    unique, first_seen, counts = np.unique(keys, return_index=True, return_counts=True)
    order = np.argsort(first_seen, kind='stable')
    unique, counts = unique[order], counts[order]
    colors = np.stack([(unique >> 16) & 0xFF, (unique >> 8) & 0xFF, unique & 0xFF], axis=1)
    return colors, counts


def _split(colors: np.ndarray, weights: np.ndarray, depth: int, out: Palette) -> None:
    if depth == 0 or len(colors) <= 1:
        total = weights.sum()
        if total == 0:
            out.append(FALLBACK_GRAY)
            return
        average = _round((colors * weights[:, None]).sum(axis=0) / total)
        out.append(tuple(int(v) for v in average))
        return

    # argmax keeps the first channel on ties: R, then G, then B
    ranges = colors.max(axis=0) - colors.min(axis=0)
    channel = int(np.argmax(ranges))

    order = np.argsort(colors[:, channel], kind='stable')
    colors, weights = colors[order], weights[order]
    mid = len(colors) // 2
    _split(colors[:mid], weights[:mid], depth - 1, out)
    _split(colors[mid:], weights[mid:], depth - 1, out)


def median_cut(pixels: np.ndarray, num_colors: int, saturation: float = 1.0) -> Palette:
    """
    Build a palette of at most ``num_colors`` entries.

    Args:
        pixels: RGBA samples, (H, W, 4) or flat
        num_colors: Target palette size
        saturation: Pre-adjustment applied to the samples before bucketing

    Returns:
        Distinct RGB tuples; the exact distinct colour set when it is small enough
    """
    rgb = _sample_colors(pixels)
    if rgb.shape[0] == 0:
        logger.debug("No pixels to quantize, using fallback gray")
        return [FALLBACK_GRAY]

    if saturation != 1:
        rgb = _adjust_saturation(rgb, saturation)

    colors, weights = _bucket(rgb)
    if len(colors) <= num_colors:
        logger.debug("%d distinct colors <= %d, returning them directly", len(colors), num_colors)
        return [tuple(int(c) for c in row) for row in colors]

    depth = math.ceil(math.log2(num_colors))
    palette: Palette = []
    _split(colors, weights, depth, palette)

    return list(dict.fromkeys(palette[:num_colors]))


# =============================================================================
# NEAREST COLOUR
# =============================================================================

def _nearest_indices(rgb: np.ndarray, table: np.ndarray) -> np.ndarray:
    flat = np.asarray(rgb, dtype=np.int32).reshape(-1, 3)
    indices = np.empty(flat.shape[0], dtype=np.intp)

    chunk = max(1, _NEAREST_CHUNK_PAIRS // len(table))
    for start in range(0, flat.shape[0], chunk):
        block = flat[start:start + chunk]
        distances = ((block[:, None, :] - table[None, :, :]) ** 2).sum(axis=2)
        indices[start:start + chunk] = distances.argmin(axis=1)
    return indices


def nearest_colors(rgb: np.ndarray, palette: Sequence[RGB]) -> np.ndarray:
    """
    Replace every colour by its nearest palette entry.

    Squared Euclidean distance; ties go to the earliest palette entry.

    Args:
        rgb: (..., 3) colours
        palette: Non-empty sequence of RGB tuples

    Returns:
        uint8 array with the shape of ``rgb``
    """
    table = np.array(palette if len(palette) else [FALLBACK_GRAY], dtype=np.int32)
    indices = _nearest_indices(rgb, table)
    return table[indices].astype(np.uint8).reshape(np.shape(rgb))


def nearest_index(r: int, g: int, b: int, palette: Sequence[RGB]) -> int:
    """Position of the nearest palette entry for a single colour."""
    return int(_nearest_indices(np.array([[r, g, b]]), np.array(palette, dtype=np.int32))[0])


def nearest_color(r: int, g: int, b: int, palette: Sequence[RGB]) -> RGB:
    """Nearest palette entry for a single colour."""
    snapped = nearest_colors(np.array([[r, g, b]]), palette)[0]
    return tuple(int(c) for c in snapped)


# =============================================================================
# PALETTE CACHE
# =============================================================================

class PaletteCache:
    """
    Adaptive palette memo keyed by (colour count, saturation).

    Callers must ``invalidate()`` when the source content changes.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._key: Optional[Tuple[int, float]] = None
        self._palette: Optional[Palette] = None

    @property
    def key(self) -> Optional[Tuple[int, float]]:
        return self._key

    @property
    def palette(self) -> Optional[Palette]:
        return self._palette

    def get(self, pixels: np.ndarray, num_colors: int, saturation: float) -> Palette:
        """Return the cached palette, rebuilding it on a key change."""
        key = (num_colors, saturation)
        with self._lock:
            if self._palette is None or self._key != key:
                logger.debug("Palette cache miss for %s", key)
                self._palette = median_cut(pixels, num_colors, saturation)
                self._key = key
            return self._palette

    def invalidate(self) -> None:
        with self._lock:
            self._key = None
            self._palette = None
