#!/usr/bin/env python3
"""
ASCII Frame Converter - Configuration
=====================================
A fully specified, immutable settings object for one conversion.
"""

import dataclasses
import logging
from dataclasses import dataclass
from typing import Any, Mapping, Tuple, Union

from ascii_frame.constants import (
    CharacterSet,
    ColorMode,
    MAX_ADAPTIVE_COLORS,
    MIN_ADAPTIVE_COLORS,
)
from ascii_frame.exceptions import InvalidSettingsError

logger = logging.getLogger(__name__)

RGB = Tuple[int, int, int]


def parse_hex_color(value: Union[str, RGB]) -> RGB:
    """Convert '#rrggbb' (or an RGB tuple) to an RGB tuple."""
    if isinstance(value, str):
        hex_color = value.lstrip('#')
        if len(hex_color) != 6:
            raise InvalidSettingsError(f"Invalid hex color: {value!r}")
        try:
            return tuple(int(hex_color[i:i + 2], 16) for i in (0, 2, 4))
        except ValueError:
            raise InvalidSettingsError(f"Invalid hex color: {value!r}") from None

    rgb = tuple(int(c) for c in value)
    if len(rgb) != 3 or any(c < 0 or c > 255 for c in rgb):
        raise InvalidSettingsError(f"Invalid RGB color: {value!r}")
    return rgb


@dataclass(frozen=True)
class ConversionSettings:
    """Configuration for a single frame conversion."""

    # Glyphs
    density_ramp: str = CharacterSet.STANDARD   # Dark to light
    invert: bool = False                        # Reverse the ramp

    # Contrast
    contrast_factor: float = 1.0                # Linear contrast around 0.5
    use_histogram_eq: bool = False              # Equalize before contrast

    # Colour
    color_mode: ColorMode = ColorMode.MONOCHROME
    adaptive_colors: int = 16                   # k for ColorMode.ADAPTIVE
    saturation: float = 1.0                     # 0 = grayscale, 1 = unchanged
    brightness_blend: float = 0.5               # 0.5 = neutral
    base_opacity: float = 1.0
    brightness_as_opacity: bool = False
    foreground: RGB = (240, 240, 240)           # Monochrome glyph colour

    # Geometry
    aspect_ratio: float = 0.5                   # Glyph cell width / height
    mirror: bool = False                        # Flip horizontally (webcam)

    def __post_init__(self):
        if not isinstance(self.color_mode, ColorMode):
            try:
                mode, count = ColorMode.parse(self.color_mode)
            except ValueError as exc:
                raise InvalidSettingsError(str(exc)) from None
            object.__setattr__(self, 'color_mode', mode)
            if count is not None:
                object.__setattr__(self, 'adaptive_colors', count)

        object.__setattr__(self, 'foreground', parse_hex_color(self.foreground))

        if not MIN_ADAPTIVE_COLORS <= self.adaptive_colors <= MAX_ADAPTIVE_COLORS:
            raise InvalidSettingsError(
                f"adaptive_colors must be in [{MIN_ADAPTIVE_COLORS}, {MAX_ADAPTIVE_COLORS}], "
                f"got {self.adaptive_colors}"
            )
        if self.contrast_factor < 0:
            raise InvalidSettingsError(f"contrast_factor must be >= 0, got {self.contrast_factor}")
        if self.saturation < 0:
            raise InvalidSettingsError(f"saturation must be >= 0, got {self.saturation}")
        if not 0.0 <= self.brightness_blend <= 1.0:
            raise InvalidSettingsError(f"brightness_blend must be in [0, 1], got {self.brightness_blend}")
        if not 0.0 <= self.base_opacity <= 1.0:
            raise InvalidSettingsError(f"base_opacity must be in [0, 1], got {self.base_opacity}")
        if self.aspect_ratio <= 0:
            raise InvalidSettingsError(f"aspect_ratio must be > 0, got {self.aspect_ratio}")

    @property
    def palette_key(self) -> Tuple[int, float]:
        """Cache key of the adaptive palette these settings ask for."""
        return self.adaptive_colors, self.saturation

    @property
    def wants_styles(self) -> bool:
        """Whether a conversion with these settings produces per-cell styles."""
        return self.color_mode != ColorMode.MONOCHROME or self.brightness_as_opacity

    def replace(self, **changes: Any) -> 'ConversionSettings':
        """Return a copy with some fields changed."""
        return dataclasses.replace(self, **changes)

    def with_adaptive_colors(self, count: int) -> 'ConversionSettings':
        return self.replace(color_mode=ColorMode.ADAPTIVE, adaptive_colors=count)

    @classmethod
    def from_dict(cls, values: Mapping[str, Any]) -> 'ConversionSettings':
        """
        Build settings from a plain mapping.

        Args:
            values: Field names to values; ``color_mode`` may be a string such
                as ``"adaptive8"`` and ``foreground`` a ``"#rrggbb"`` string

        Returns:
            ConversionSettings with defaults for every missing field
        """
        known = {f.name for f in dataclasses.fields(cls)}
        unknown = sorted(set(values) - known)
        if unknown:
            raise InvalidSettingsError(f"Unknown settings: {', '.join(unknown)}")

        kwargs = dict(values)
        mode = kwargs.get('color_mode')
        if mode is not None and not isinstance(mode, ColorMode):
            try:
                parsed, count = ColorMode.parse(mode)
            except ValueError as exc:
                raise InvalidSettingsError(str(exc)) from None
            kwargs['color_mode'] = parsed
            if count is not None:
                kwargs['adaptive_colors'] = count

        logger.debug("Settings from mapping: %s", kwargs)
        return cls(**kwargs)
