"""Pytest configuration and fixtures."""

import numpy as np
import pytest
from PIL import Image


class SequenceRng:
    """Generator stand-in that replays a fixed list of values."""

    def __init__(self, values):
        self.values = list(values)
        self.calls = 0

    def next(self) -> int:
        value = self.values[self.calls % len(self.values)]
        self.calls += 1
        return value


@pytest.fixture
def black_white_samples():
    """Two black and two white opaque samples."""
    return np.array(
        [
            [0, 0, 0, 255],
            [0, 0, 0, 255],
            [255, 255, 255, 255],
            [255, 255, 255, 255],
        ],
        dtype=np.uint8,
    )


@pytest.fixture
def four_color_image(tmp_path):
    """Path to a 20x20 PNG with four flat quadrants."""
    image = np.zeros((20, 20, 4), dtype=np.uint8)
    image[:10, :10] = [255, 0, 0, 255]
    image[:10, 10:] = [0, 255, 0, 255]
    image[10:, :10] = [0, 0, 255, 255]
    image[10:, 10:] = [255, 255, 0, 255]

    path = tmp_path / "quadrants.png"
    Image.fromarray(image).save(path)
    return path


@pytest.fixture
def sequence_rng():
    """Factory for generators that replay fixed values."""
    return SequenceRng
