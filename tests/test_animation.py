from PIL import Image

from ascii_frame import ColorMode, ConversionSettings, FrameStream, iter_image_frames, play_in_terminal
from ascii_frame import animation


def write_gif(path, colors, size=(8, 8)):
    frames = [Image.new('RGB', size, color) for color in colors]
    frames[0].save(path, save_all=True, append_images=frames[1:], duration=100, loop=0)
    return path


def test_palette_rebuilt_every_frame():
    settings = ConversionSettings(color_mode=ColorMode.ADAPTIVE, adaptive_colors=4)
    stream = FrameStream(8, settings)
    palettes = [stream.convert(Image.new('RGB', (16, 16), color)).palette
                for color in ('red', 'blue', 'red')]
    assert palettes == [[(255, 0, 0)], [(0, 0, 255)], [(255, 0, 0)]]


def test_resized_tracks_grid_changes():
    stream = FrameStream(8)
    flags = []
    for size in ((16, 16), (16, 16), (32, 16)):
        stream.convert(Image.new('RGB', size))
        flags.append(stream.resized)
    assert flags == [True, False, True]


def test_iter_image_frames(tmp_path):
    path = write_gif(tmp_path / 'anim.gif', ['red', 'blue'])
    with Image.open(path) as image:
        frames = list(iter_image_frames(image))
    assert len(frames) == 2
    assert all(frame.mode == 'RGBA' for frame in frames)


def test_extract_frames(tmp_path):
    path = write_gif(tmp_path / 'anim.gif', ['white', 'black', 'white'])
    results = FrameStream(4, ConversionSettings(density_ramp='#. ')).extract_frames(str(path))
    assert [r.lines[0] for r in results] == ['    ', '####', '    ']


def test_play_in_terminal(monkeypatch, capsys):
    monkeypatch.setattr(animation.os, 'system', lambda command: 0)
    monkeypatch.setattr(animation.time, 'sleep', lambda seconds: None)
    frames = FrameStream(4, ConversionSettings(density_ramp='@')).convert_all(
        [Image.new('RGB', (8, 8))] * 2
    )
    play_in_terminal(frames, loops=1)
    assert capsys.readouterr().out.count('@@@@') == 4
