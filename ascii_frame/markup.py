#!/usr/bin/env python3
"""
ASCII Frame Converter - Run-Length Markup Renderer
==================================================
Merges adjacent cells of identical style into runs and emits one styled
span per run.
"""

from typing import Iterator, List, NamedTuple, Optional, Sequence

import numpy as np

from ascii_frame.colorizer import CellStyle, CellStyles
from ascii_frame.constants import OPACITY_DECIMALS

_OPACITY_SCALE = 10 ** OPACITY_DECIMALS

_ESCAPES = str.maketrans({
    '&': '&amp;',
    '<': '&lt;',
    '>': '&gt;',
    '"': '&quot;',
    "'": '&#039;',
})


class Run(NamedTuple):
    """A maximal sequence of adjacent same-style cells in one row."""
    style: CellStyle            # Opacity already quantized
    text: str


def escape_markup(text: str) -> str:
    """Escape & < > " ' for embedding in markup."""
    return text.translate(_ESCAPES)


def quantize_opacity(opacity: float) -> int:
    """Opacity in hundredths, the granularity runs are merged at."""
    return int(np.floor(opacity * _OPACITY_SCALE + 0.5))


def color_string(r: int, g: int, b: int, opacity: float = 1.0) -> str:
    """CSS colour for a style: rgb() when opaque, rgba() otherwise."""
    level = quantize_opacity(opacity)
    if level < _OPACITY_SCALE:
        return f"rgba({r},{g},{b},{level / _OPACITY_SCALE:.{OPACITY_DECIMALS}f})"
    return f"rgb({r},{g},{b})"


def iter_runs(line: str, rgb_row: np.ndarray, opacity_row: np.ndarray) -> Iterator[Run]:
    """
    Split one row into runs.

    Args:
        line: The row's characters
        rgb_row: (W, 3) uint8 colours
        opacity_row: (W,) opacities

    Yields:
        Run per maximal group of identical (r, g, b, quantized opacity)
    """
    width = len(line)
    if width == 0:
        return

    rgb = rgb_row[:width].astype(np.int64)
    levels = np.floor(opacity_row[:width].astype(np.float64) * _OPACITY_SCALE + 0.5).astype(np.int64)
    keys = (levels << 24) | (rgb[:, 0] << 16) | (rgb[:, 1] << 8) | rgb[:, 2]

    starts = [0] + (np.flatnonzero(keys[1:] != keys[:-1]) + 1).tolist()
    ends = starts[1:] + [width]
    for start, end in zip(starts, ends):
        r, g, b = (int(c) for c in rgb[start])
        style = CellStyle(r, g, b, int(levels[start]) / _OPACITY_SCALE)
        yield Run(style, line[start:end])


def iter_row_runs(lines: Sequence[str], styles: CellStyles) -> Iterator[List[Run]]:
    """Runs of every row, top to bottom."""
    for y, line in enumerate(lines):
        rgb_row, opacity_row = styles.row(y)
        yield list(iter_runs(line, rgb_row, opacity_row))


def render_markup(lines: Sequence[str], styles: Optional[CellStyles] = None) -> str:
    """
    Render a character grid as run-length styled spans.

    Without styles the plain grid is returned. Either way every row ends
    with a newline.

    Args:
        lines: Character grid rows
        styles: Optional per-cell styles

    Returns:
        Markup string
    """
    if styles is None:
        return ''.join(line + '\n' for line in lines)

    parts: List[str] = []
    for runs in iter_row_runs(lines, styles):
        for run in runs:
            color = color_string(*run.style)
            parts.append(f'<span style="color:{color}">{escape_markup(run.text)}</span>')
        parts.append('\n')
    return ''.join(parts)
