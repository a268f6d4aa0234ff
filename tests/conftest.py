import numpy as np
import pytest
from PIL import Image

from ascii_frame import PixelSource


@pytest.fixture
def solid_source():
    """Factory for single-colour sources."""
    def make(width, height, color=(0, 0, 0)):
        array = np.empty((height, width, 3), dtype=np.uint8)
        array[...] = color
        return PixelSource.from_array(array)
    return make


@pytest.fixture
def split_source():
    """Factory for sources whose left half is one colour and right half another."""
    def make(width, height, left, right):
        array = np.empty((height, width, 3), dtype=np.uint8)
        array[:, :width // 2] = left
        array[:, width // 2:] = right
        return PixelSource.from_array(array)
    return make


@pytest.fixture
def noise_image():
    rng = np.random.default_rng(1234)
    return Image.fromarray(rng.integers(0, 256, size=(48, 64, 3), dtype=np.uint8))
