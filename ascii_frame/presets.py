#!/usr/bin/env python3
"""
ASCII Frame Converter - Presets
===============================
Named ConversionSettings for common looks.
"""

from typing import List

from ascii_frame.config import ConversionSettings
from ascii_frame.constants import CharacterSet, ColorMode


class Presets:
    """Predefined configuration presets."""

    @staticmethod
    def default() -> ConversionSettings:
        """Truecolor, inverted ramp for dark backgrounds, equalized."""
        return ConversionSettings(
            color_mode=ColorMode.TRUECOLOR,
            invert=True,
            use_histogram_eq=True,
        )

    @staticmethod
    def high_detail() -> ConversionSettings:
        return Presets.default().replace(density_ramp=CharacterSet.DETAILED)

    @staticmethod
    def retro_terminal() -> ConversionSettings:
        """Green phosphor monochrome."""
        return Presets.default().replace(
            density_ramp=CharacterSet.SIMPLE,
            color_mode=ColorMode.MONOCHROME,
            foreground=(0x33, 0xFF, 0x33),
        )

    @staticmethod
    def classic_ascii() -> ConversionSettings:
        return Presets.default().replace(
            color_mode=ColorMode.MONOCHROME,
            foreground=(255, 255, 255),
        )

    @staticmethod
    def print_friendly() -> ConversionSettings:
        """Black glyphs for a white page."""
        return Presets.default().replace(
            color_mode=ColorMode.MONOCHROME,
            invert=False,
            foreground=(0, 0, 0),
        )

    @staticmethod
    def colorful() -> ConversionSettings:
        return Presets.default().replace(saturation=1.5, contrast_factor=1.2)

    @staticmethod
    def limited_palette() -> ConversionSettings:
        return Presets.default().replace(
            color_mode=ColorMode.ADAPTIVE,
            adaptive_colors=16,
            contrast_factor=1.1,
        )

    @staticmethod
    def grayscale() -> ConversionSettings:
        return Presets.default().replace(
            color_mode=ColorMode.ADAPTIVE,
            adaptive_colors=16,
            saturation=0.0,
        )

    @staticmethod
    def blocks() -> ConversionSettings:
        return Presets.default().replace(density_ramp=CharacterSet.BLOCKS)

    @staticmethod
    def blocks_grayscale() -> ConversionSettings:
        return Presets.grayscale().replace(density_ramp=CharacterSet.BLOCKS)

    @staticmethod
    def opacity_color() -> ConversionSettings:
        """Solid blocks whose alpha carries the brightness."""
        return Presets.default().replace(
            density_ramp=CharacterSet.SINGLE,
            brightness_as_opacity=True,
        )

    @staticmethod
    def opacity_grayscale() -> ConversionSettings:
        return Presets.grayscale().replace(
            density_ramp=CharacterSet.SINGLE,
            brightness_as_opacity=True,
        )

    @staticmethod
    def transparent_overlay() -> ConversionSettings:
        return Presets.default().replace(base_opacity=0.6)

    @classmethod
    def names(cls) -> List[str]:
        return [
            'default', 'high-detail', 'retro-terminal', 'classic-ascii',
            'print-friendly', 'colorful', 'limited-palette', 'grayscale',
            'blocks', 'blocks-grayscale', 'opacity-color', 'opacity-grayscale',
            'transparent-overlay',
        ]

    @classmethod
    def get(cls, name: str) -> ConversionSettings:
        """
        Look up a preset by kebab-case or snake_case name.

        Raises:
            KeyError: for unknown names
        """
        key = name.strip().lower().replace('_', '-')
        if key not in cls.names():
            raise KeyError(f"Unknown preset: {name}")
        return getattr(cls, key.replace('-', '_'))()
