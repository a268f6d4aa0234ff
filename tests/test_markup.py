import numpy as np

from ascii_frame import CellStyles, color_string, escape_markup, iter_runs, render_markup


def styles_for(colors, opacities=None):
    rgb = np.array([colors], dtype=np.uint8)
    if opacities is None:
        opacities = [1.0] * len(colors)
    return CellStyles(rgb, np.array([opacities], dtype=np.float32))


def test_escape_markup():
    assert escape_markup('&<>"\'') == '&amp;&lt;&gt;&quot;&#039;'
    assert escape_markup('plain') == 'plain'


def test_color_string():
    assert color_string(1, 2, 3) == 'rgb(1,2,3)'
    assert color_string(1, 2, 3, 0.5) == 'rgba(1,2,3,0.50)'
    assert color_string(1, 2, 3, 0.996) == 'rgb(1,2,3)'
    assert color_string(1, 2, 3, 0.0) == 'rgba(1,2,3,0.00)'


class TestRuns:
    def test_identical_cells_form_one_run(self):
        styles = styles_for([(10, 20, 30)] * 5)
        runs = list(iter_runs('aaaaa', *styles.row(0)))
        assert len(runs) == 1
        assert runs[0].text == 'aaaaa'

    def test_style_change_splits(self):
        styles = styles_for([(255, 0, 0), (255, 0, 0), (0, 0, 255)])
        runs = list(iter_runs('abc', *styles.row(0)))
        assert [run.text for run in runs] == ['ab', 'c']
        assert runs[1].style[:3] == (0, 0, 255)

    def test_opacity_merged_at_two_decimals(self):
        styles = styles_for([(9, 9, 9)] * 2, [0.501, 0.499])
        runs = list(iter_runs('xy', *styles.row(0)))
        assert len(runs) == 1
        assert runs[0].style.opacity == 0.5

    def test_runs_reassemble_row(self):
        colors = [(0, 0, 0), (0, 0, 0), (1, 1, 1), (0, 0, 0)]
        runs = list(iter_runs('wxyz', *styles_for(colors).row(0)))
        assert ''.join(run.text for run in runs) == 'wxyz'
        assert len(runs) == 3


class TestRenderMarkup:
    def test_single_span(self):
        styles = styles_for([(10, 20, 30)] * 5)
        assert render_markup(['aaaaa'], styles) == '<span style="color:rgb(10,20,30)">aaaaa</span>\n'

    def test_text_escaped_inside_spans(self):
        styles = styles_for([(0, 0, 0)] * 2, [0.25, 0.25])
        assert render_markup(['<&'], styles) == '<span style="color:rgba(0,0,0,0.25)">&lt;&amp;</span>\n'

    def test_plain_rows(self):
        assert render_markup(['ab', 'cd']) == 'ab\ncd\n'
