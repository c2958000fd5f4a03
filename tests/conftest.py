import numpy as np
import pytest


def solid(width, height, color):
    img = np.zeros((height, width, 3), dtype=np.uint8)
    img[:, :] = color
    return img


@pytest.fixture
def white():
    return solid(2, 2, (255, 255, 255))


@pytest.fixture
def black():
    return solid(2, 2, (0, 0, 0))


@pytest.fixture
def horizontal_ramp():
    """64x64 gray ramp, column x has value 4 * x."""
    row = (np.arange(64) * 4).astype(np.uint8)
    gray = np.tile(row, (64, 1))
    return np.dstack([gray, gray, gray])


@pytest.fixture
def vertical_ramp(horizontal_ramp):
    return np.ascontiguousarray(horizontal_ramp.transpose(1, 0, 2))


@pytest.fixture
def noise():
    rng = np.random.default_rng(0)
    return rng.integers(0, 256, size=(24, 32, 3), dtype=np.uint8)


@pytest.fixture
def other_noise():
    rng = np.random.default_rng(1)
    return rng.integers(0, 256, size=(24, 32, 3), dtype=np.uint8)
