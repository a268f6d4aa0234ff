import numpy as np

from ascii_frame import ANSI_256, PaletteCache, median_cut, nearest_color, nearest_colors
from ascii_frame.constants import FALLBACK_GRAY
from ascii_frame.quantizer import _sample_colors


def rgba(colors):
    """Flat RGBA pixels from a list of RGB tuples."""
    return np.array([list(c) + [255] for c in colors], dtype=np.uint8)


class TestMedianCut:
    def test_few_distinct_colors_returned_exactly(self):
        pixels = rgba([(10, 20, 30), (200, 0, 0), (10, 20, 30), (0, 0, 255)])
        assert median_cut(pixels, 4) == [(10, 20, 30), (200, 0, 0), (0, 0, 255)]

    def test_two_colors_weighted_three_to_one(self):
        pixels = rgba([(255, 0, 0)] * 3 + [(0, 0, 255)])
        assert set(median_cut(pixels, 2)) == {(255, 0, 0), (0, 0, 255)}

    def test_split_on_widest_channel(self):
        pixels = rgba([(0, 0, 0), (10, 0, 0), (200, 0, 0), (255, 0, 0)])
        assert median_cut(pixels, 2) == [(5, 0, 0), (228, 0, 0)]

    def test_channel_tie_prefers_red(self):
        pixels = rgba([(0, 0, 0), (100, 0, 0), (0, 100, 0), (100, 100, 0)])
        assert median_cut(pixels, 2) == [(0, 50, 0), (100, 50, 0)]

    def test_leaf_average_is_weighted(self):
        pixels = rgba([(0, 0, 0)] + [(40, 0, 0)] * 3 + [(250, 0, 0)])
        assert median_cut(pixels, 2) == [(0, 0, 0), (93, 0, 0)]

    def test_never_exceeds_requested_size(self):
        rng = np.random.default_rng(7)
        pixels = rng.integers(0, 256, size=(40, 40, 4), dtype=np.uint8)
        for k in (2, 3, 5, 16):
            palette = median_cut(pixels, k)
            assert 1 <= len(palette) <= k
            assert len(set(palette)) == len(palette)

    def test_saturation_preadjustment(self):
        pixels = rgba([(255, 0, 0), (0, 0, 255)])
        assert median_cut(pixels, 4, saturation=0.0) == [(76, 76, 76), (29, 29, 29)]

    def test_empty_input_falls_back_to_gray(self):
        assert median_cut(np.zeros((0, 4), dtype=np.uint8), 8) == [FALLBACK_GRAY]

    def test_large_uniform_source(self):
        pixels = np.full((200, 150, 4), 77, dtype=np.uint8)
        assert median_cut(pixels, 16) == [(77, 77, 77)]


class TestNearestColor:
    def test_snaps_to_closest(self):
        assert nearest_color(10, 10, 10, [(0, 0, 0), (255, 255, 255)]) == (0, 0, 0)
        assert nearest_color(200, 190, 220, [(0, 0, 0), (255, 255, 255)]) == (255, 255, 255)

    def test_tie_goes_to_first_entry(self):
        assert nearest_color(1, 0, 0, [(0, 0, 0), (2, 0, 0)]) == (0, 0, 0)
        assert nearest_color(1, 0, 0, [(2, 0, 0), (0, 0, 0)]) == (2, 0, 0)

    def test_grid_shape_preserved(self):
        rgb = np.zeros((3, 4, 3), dtype=np.uint8)
        rgb[1, 2] = (250, 10, 10)
        snapped = nearest_colors(rgb, [(0, 0, 0), (255, 0, 0)])
        assert snapped.shape == (3, 4, 3)
        assert snapped.dtype == np.uint8
        assert snapped[1, 2].tolist() == [255, 0, 0]
        assert snapped[0, 0].tolist() == [0, 0, 0]


def test_ansi_256_table():
    assert len(ANSI_256) == 256
    assert ANSI_256[9] == (255, 0, 0)
    assert ANSI_256[16] == (0, 0, 0)
    assert ANSI_256[17] == (0, 0, 95)
    assert ANSI_256[231] == (255, 255, 255)
    assert ANSI_256[232] == (8, 8, 8)
    assert ANSI_256[255] == (238, 238, 238)


class TestPaletteCache:
    red = np.full((4, 4, 4), (255, 0, 0, 255), dtype=np.uint8)
    blue = np.full((4, 4, 4), (0, 0, 255, 255), dtype=np.uint8)

    def test_reuses_palette_for_same_key(self):
        cache = PaletteCache()
        first = cache.get(self.red, 8, 1.0)
        assert cache.get(self.blue, 8, 1.0) is first
        assert first == [(255, 0, 0)]
        assert cache.key == (8, 1.0)

    def test_rebuilds_on_key_change(self):
        cache = PaletteCache()
        cache.get(self.red, 8, 1.0)
        assert cache.get(self.blue, 4, 1.0) == [(0, 0, 255)]

    def test_invalidate(self):
        cache = PaletteCache()
        cache.get(self.red, 8, 1.0)
        cache.invalidate()
        assert cache.palette is None
        assert cache.get(self.blue, 8, 1.0) == [(0, 0, 255)]


class TestSampling:
    def test_stride_skips_between_samples(self):
        pixels = np.zeros((20000, 4), dtype=np.uint8)
        pixels[:, 3] = 255
        pixels[1::2, :3] = (200, 100, 50)
        # step = 20000 // 10000 = 2, so only even-indexed pixels are seen
        assert median_cut(pixels, 4) == [(0, 0, 0)]

    def test_stride_offset_sees_colour(self):
        pixels = np.zeros((20000, 4), dtype=np.uint8)
        pixels[:, 3] = 255
        pixels[::2, :3] = (200, 100, 50)
        assert median_cut(pixels, 4) == [(200, 100, 50)]

    def test_sample_count(self):
        assert _sample_colors(np.zeros((30000, 4), dtype=np.uint8)).shape == (10000, 3)
        assert _sample_colors(np.zeros((29999, 4), dtype=np.uint8)).shape == (15000, 3)
        assert _sample_colors(np.zeros((9999, 4), dtype=np.uint8)).shape == (9999, 3)
