"""
ASCII Frame Converter
=====================
Converts images and video frames to density-mapped character grids, with
optional per-cell colour, palette reduction and run-length markup output.
"""

from ascii_frame.animation import FrameStream, iter_image_frames, play_in_terminal
from ascii_frame.autofit import DimensionProbe, fit_font_size, measure_cell
from ascii_frame.colorizer import CellColorizer, CellStyle, CellStyles
from ascii_frame.config import ConversionSettings
from ascii_frame.constants import ANSI_256, CharacterSet, ColorMode
from ascii_frame.contrast import apply_contrast, equalize_histogram, normalize
from ascii_frame.exceptions import (
    AsciiFrameError,
    EmptyDensityRampError,
    InvalidPixelBufferError,
    InvalidSettingsError,
)
from ascii_frame.executor import CoalescingExecutor, SupersedeToken
from ascii_frame.formatters import (
    AnsiColorFormatter,
    HtmlFormatter,
    MarkdownFormatter,
    TextFormatter,
)
from ascii_frame.glyphs import map_glyphs, measure_glyph_brightness, optimize_ramp, prepare_ramp
from ascii_frame.markup import Run, color_string, escape_markup, iter_runs, render_markup
from ascii_frame.pipeline import AsciiFrameConverter, ConversionResult, convert, image_to_ascii
from ascii_frame.presets import Presets
from ascii_frame.quantizer import PaletteCache, median_cut, nearest_color, nearest_colors, nearest_index
from ascii_frame.raster import RasterRenderer
from ascii_frame.sampler import BrightnessSampler, PixelSource, SampledFrame, grid_height, luminance

__version__ = '0.1.0'

__all__ = [
    # Main classes
    'AsciiFrameConverter',
    'ConversionSettings',
    'ConversionResult',
    'PixelSource',

    # Enums and constants
    'ColorMode',
    'CharacterSet',
    'ANSI_256',

    # Errors
    'AsciiFrameError',
    'EmptyDensityRampError',
    'InvalidPixelBufferError',
    'InvalidSettingsError',

    # Pipeline stages
    'BrightnessSampler',
    'SampledFrame',
    'grid_height',
    'luminance',
    'normalize',
    'equalize_histogram',
    'apply_contrast',
    'prepare_ramp',
    'map_glyphs',
    'measure_glyph_brightness',
    'optimize_ramp',
    'median_cut',
    'nearest_color',
    'nearest_colors',
    'nearest_index',
    'PaletteCache',
    'CellColorizer',
    'CellStyle',
    'CellStyles',
    'Run',
    'iter_runs',
    'color_string',
    'escape_markup',
    'render_markup',

    # Outputs
    'AnsiColorFormatter',
    'HtmlFormatter',
    'MarkdownFormatter',
    'TextFormatter',
    'RasterRenderer',

    # Streams and concurrency
    'CoalescingExecutor',
    'SupersedeToken',
    'FrameStream',
    'iter_image_frames',
    'play_in_terminal',
    'DimensionProbe',
    'fit_font_size',
    'measure_cell',

    # Convenience
    'convert',
    'image_to_ascii',
    'Presets',
]
