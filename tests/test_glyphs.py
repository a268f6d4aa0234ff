import numpy as np
import pytest

from ascii_frame import EmptyDensityRampError, map_glyphs, measure_glyph_brightness, optimize_ramp, prepare_ramp


class TestPrepareRamp:
    def test_empty_ramp_rejected(self):
        with pytest.raises(EmptyDensityRampError):
            prepare_ramp('')

    def test_invert_reverses(self):
        assert prepare_ramp('#. ', invert=True) == ' .#'
        assert prepare_ramp('#. ') == '#. '


class TestMapGlyphs:
    def test_index_selection(self):
        lum = np.array([[0.0, 0.34, 0.99]], dtype=np.float32)
        assert map_glyphs(lum, '#. ') == ['#. ']

    def test_full_brightness_lands_on_last_glyph(self):
        lum = np.ones((2, 3), dtype=np.float32)
        assert map_glyphs(lum, '#. ') == ['   ', '   ']

    def test_single_glyph_ramp(self):
        lum = np.random.default_rng(0).random((3, 4)).astype(np.float32)
        assert map_glyphs(lum, '█') == ['████'] * 3

    def test_shape(self):
        lines = map_glyphs(np.zeros((5, 7), dtype=np.float32), '@%#')
        assert len(lines) == 5
        assert all(line == '@' * 7 for line in lines)


class TestOptimizeRamp:
    def test_space_is_empty(self):
        assert measure_glyph_brightness(' ') == pytest.approx(1.0)

    def test_dense_glyph_is_darker(self):
        assert measure_glyph_brightness('@') < measure_glyph_brightness('.')

    def test_sorted_dark_to_light_with_trailing_space(self):
        assert optimize_ramp(' .@') == '@. '

    def test_duplicates_removed(self):
        assert optimize_ramp('..@@') == '@.'

    def test_reduce(self):
        ramp = optimize_ramp(':@.', reduce_to=2)
        assert len(ramp) == 2
        assert ramp[0] == '@'
        assert ramp[-1] == '.'
