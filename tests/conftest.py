"""Shared test fixtures."""

import numpy as np
import pytest

from imageData import Image


def _mask_image(grid):
    grid = np.asarray(grid, dtype=np.float64)
    return Image.from_array(np.repeat(grid[:, :, None], 3, axis=2))


@pytest.fixture
def make_mask():
    """Build a mask Image from a 0/1 grid (rows are y)."""
    return _mask_image


@pytest.fixture
def random_image():
    def _random_image(width, height, seed=0):
        rng = np.random.default_rng(seed)
        return Image.from_array(rng.uniform(0.05, 0.95, size=(height, width, 3)))
    return _random_image


@pytest.fixture
def framed_mask():
    """A 6x5 mask with a zero frame and an irregular interior."""
    return _mask_image([
        [0, 0, 0, 0, 0, 0],
        [0, 1, 1, 0, 1, 0],
        [0, 1, 1, 1, 1, 0],
        [0, 0, 1, 1, 0, 0],
        [0, 0, 0, 0, 0, 0],
    ])
