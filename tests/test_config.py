import pytest

from ascii_frame import CharacterSet, ColorMode, ConversionSettings, InvalidSettingsError, Presets


class TestColorMode:
    @pytest.mark.parametrize('name, expected', [
        ('monochrome', (ColorMode.MONOCHROME, None)),
        ('TrueColor', (ColorMode.TRUECOLOR, None)),
        ('ansi256', (ColorMode.ANSI256, None)),
        ('fixed-palette', (ColorMode.ANSI256, None)),
        ('adaptive', (ColorMode.ADAPTIVE, None)),
        ('adaptive16', (ColorMode.ADAPTIVE, 16)),
        ('adaptive-8', (ColorMode.ADAPTIVE, 8)),
    ])
    def test_parse(self, name, expected):
        assert ColorMode.parse(name) == expected

    def test_unknown(self):
        with pytest.raises(ValueError):
            ColorMode.parse('sepia')

    def test_uses_palette(self):
        assert ColorMode.ADAPTIVE.uses_palette
        assert not ColorMode.TRUECOLOR.uses_palette


class TestConversionSettings:
    def test_defaults(self):
        settings = ConversionSettings()
        assert settings.density_ramp == CharacterSet.STANDARD
        assert settings.color_mode is ColorMode.MONOCHROME
        assert settings.foreground == (240, 240, 240)
        assert not settings.wants_styles

    def test_string_color_mode(self):
        settings = ConversionSettings(color_mode='adaptive8')
        assert settings.color_mode is ColorMode.ADAPTIVE
        assert settings.adaptive_colors == 8
        assert settings.palette_key == (8, 1.0)

    def test_hex_foreground(self):
        assert ConversionSettings(foreground='#33ff00').foreground == (0x33, 0xFF, 0x00)

    @pytest.mark.parametrize('field, value', [
        ('adaptive_colors', 1),
        ('adaptive_colors', 257),
        ('saturation', -0.1),
        ('brightness_blend', 1.5),
        ('base_opacity', 2.0),
        ('aspect_ratio', 0),
        ('contrast_factor', -1),
        ('foreground', '#12345'),
        ('color_mode', 'sepia'),
    ])
    def test_invalid(self, field, value):
        with pytest.raises(InvalidSettingsError):
            ConversionSettings(**{field: value})

    def test_replace_is_a_copy(self):
        settings = ConversionSettings()
        changed = settings.replace(invert=True)
        assert changed.invert and not settings.invert

    def test_with_adaptive_colors(self):
        settings = ConversionSettings().with_adaptive_colors(32)
        assert settings.color_mode is ColorMode.ADAPTIVE
        assert settings.wants_styles

    def test_from_dict(self):
        settings = ConversionSettings.from_dict({'color_mode': 'ansi256', 'mirror': True})
        assert settings.color_mode is ColorMode.ANSI256
        assert settings.mirror

    def test_from_dict_rejects_unknown(self):
        with pytest.raises(InvalidSettingsError):
            ConversionSettings.from_dict({'colour': 'red'})


class TestPresets:
    @pytest.mark.parametrize('name', Presets.names())
    def test_every_preset_builds(self, name):
        assert isinstance(Presets.get(name), ConversionSettings)

    def test_snake_case_lookup(self):
        assert Presets.get('high_detail').density_ramp == CharacterSet.DETAILED

    def test_grayscale(self):
        settings = Presets.get('grayscale')
        assert settings.color_mode is ColorMode.ADAPTIVE
        assert settings.saturation == 0.0

    def test_unknown(self):
        with pytest.raises(KeyError):
            Presets.get('vaporwave')


def test_character_sets():
    assert CharacterSet.get_preset('blocks') == CharacterSet.BLOCKS
    assert CharacterSet.get_preset('nope') == CharacterSet.STANDARD
