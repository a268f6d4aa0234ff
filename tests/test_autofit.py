from ascii_frame import ConversionResult, DimensionProbe, fit_font_size, measure_cell


def result(width, height):
    return ConversionResult(lines=['x' * width] * height, width=width, height=height)


class TestFitFontSize:
    def test_limited_by_width(self):
        assert fit_font_size(100, 50, 600, 600, 0.6) == 10

    def test_limited_by_height(self):
        assert fit_font_size(10, 60, 1000, 600, 0.6, 1.2) == 8

    def test_clamped(self):
        assert fit_font_size(100, 50, 10, 10, 0.6) == 4
        assert fit_font_size(10, 10, 10000, 10000, 0.6) == 48

    def test_nothing_to_fit(self):
        assert fit_font_size(0, 10, 100, 100, 0.6) is None
        assert fit_font_size(10, 10, 0, 100, 0.6) is None


def test_dimension_probe():
    probe = DimensionProbe()
    assert probe.changed(result(4, 2))
    assert not probe.changed(result(4, 2))
    assert probe.changed(result(5, 2))
    probe.reset()
    assert probe.changed(result(5, 2))


def test_measure_cell():
    width_ratio, height_ratio = measure_cell()
    assert 0 < width_ratio < 2
    assert height_ratio > 0
