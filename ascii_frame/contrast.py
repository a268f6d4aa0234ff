#!/usr/bin/env python3
"""
ASCII Frame Converter - Contrast Normalizer
===========================================
Histogram equalization and linear contrast on a luminance grid. Both
operate in place on float32 grids with values in [0, 1].
"""

import logging

import numpy as np

from ascii_frame.constants import HISTOGRAM_BINS

logger = logging.getLogger(__name__)


def _bins(lum: np.ndarray) -> np.ndarray:
    return np.clip(np.floor(lum * (HISTOGRAM_BINS - 1)), 0, HISTOGRAM_BINS - 1).astype(np.intp)


def equalize_histogram(lum: np.ndarray) -> np.ndarray:
    """
    Spread luminance values over [0, 1] using their cumulative distribution.

    Each value is remapped to (cdf[bin] - cdf_min) / (N - cdf_min). When every
    sample falls into one bin the grid is returned unchanged.

    Args:
        lum: Luminance grid, modified in place

    Returns:
        The same grid
    """
    total = lum.size
    if total == 0:
        return lum

    bins = _bins(lum)
    histogram = np.bincount(bins.ravel(), minlength=HISTOGRAM_BINS)
    cdf = np.cumsum(histogram)
    cdf_min = int(cdf[np.flatnonzero(cdf)[0]])

    if cdf_min == total:
        logger.debug("Degenerate histogram (single bin), skipping equalization")
        return lum

    lum[...] = (cdf[bins] - cdf_min) / float(total - cdf_min)
    return lum


def apply_contrast(lum: np.ndarray, factor: float) -> np.ndarray:
    """Stretch values around 0.5 by ``factor`` and clamp to [0, 1], in place."""
    if factor == 1:
        return lum
    np.clip((lum - 0.5) * factor + 0.5, 0.0, 1.0, out=lum)
    return lum


def normalize(lum: np.ndarray, contrast_factor: float = 1.0,
              use_histogram_eq: bool = False) -> np.ndarray:
    """
    Apply histogram equalization (first) and linear contrast (second).

    Args:
        lum: Luminance grid, modified in place
        contrast_factor: Linear contrast multiplier, 1 leaves values alone
        use_histogram_eq: Equalize before the contrast stretch

    Returns:
        The same grid
    """
    if contrast_factor == 1 and not use_histogram_eq:
        return lum

    if use_histogram_eq:
        equalize_histogram(lum)
    if contrast_factor != 1:
        apply_contrast(lum, contrast_factor)
    return lum
