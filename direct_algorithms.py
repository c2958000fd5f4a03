"""
Direct (pixel-aligned) comparison algorithms.
Images are brought to the same size and compared pixel by pixel.
"""

import logging
import math
from typing import Tuple

import numpy as np

from algorithm_base import Algorithm, extract_pair
from image_utils import grayscale, luminance_array

logger = logging.getLogger(__name__)


class EuclideanColorDistance(Algorithm):
    """
    Mean Euclidean distance between RGB values of aligned pixels.

    Each channel difference is scaled to [0, 1] and the per-pixel norm is
    divided by sqrt(3), so the score is in [0.0, 1.0]:
    0.0 = identical, 1.0 = every pixel at maximal distance.
    """

    name = "Euclidean Color Distance"

    def compare(self, image1, image2) -> float:
        pair = extract_pair(image1, image2)
        diff = (pair.first - pair.second) / 255.0
        total = np.sqrt(np.sum(diff * diff, axis=1)).sum()
        return float(total / (len(pair.first) * math.sqrt(3)))


class PixelMatching(Algorithm):
    """
    Fraction of aligned pixels that do not match within a tolerance.

    A pixel of image1 matches when each of its channels lies strictly
    within +/- (tolerance * 256) of the same channel in image2.
    Score = 1 - matches / pixels, in [0.0, 1.0].
    """

    name = "Pixel Matching"

    def __init__(self, tolerance: float = 0.05):
        """
        Initialize pixel matching.

        Args:
            tolerance: Allowed channel deviation as a fraction of 256.
                       Values outside [0.0, 1.0] are clamped.
        """
        self.tolerance = tolerance

    @property
    def tolerance(self) -> float:
        return self._tolerance

    @tolerance.setter
    def tolerance(self, value: float) -> None:
        self._tolerance = min(max(float(value), 0.0), 1.0)

    def compare(self, image1, image2) -> float:
        pair = extract_pair(image1, image2)
        delta = self.tolerance * 256
        within = (pair.second - delta < pair.first) & (pair.first < pair.second + delta)
        matches = int(np.count_nonzero(np.all(within, axis=1)))
        logger.debug("%d pixels match of a total of %d pixels", matches, len(pair.first))
        return 1.0 - matches / len(pair.first)


def window_offset(box_percentage: float, width: int, height: int) -> int:
    """Radius of the IMED neighbourhood window in grid cells."""
    return int(math.ceil(box_percentage * min(width, height)))


def gaussian_window_sums(diff: np.ndarray, sigma: float, offset: int) -> Tuple[float, float]:
    """
    Windowed IMED accumulation over a 2-D grid of intensity differences.

    For every cell i and every neighbour j inside the (2*offset+1)^2 box
    around i that lies on the grid, accumulates
    w(i, j) * diff[i] * diff[j] and w(i, j), where
    w = exp(-|i - j|^2 / (2 * sigma^2)) with grid (x, y) distance.

    Args:
        diff: (height, width) array of normalized gray differences
        sigma: Gaussian width
        offset: Window radius

    Returns:
        (weighted sum, gaussian norm)
    """
    h, w = diff.shape
    total = 0.0
    gauss_norm = 0.0
    for dy in range(-offset, offset + 1):
        if abs(dy) >= h:
            continue
        for dx in range(-offset, offset + 1):
            if abs(dx) >= w:
                continue
            weight = math.exp(-(dx * dx + dy * dy) / (2.0 * sigma * sigma))
            # cells i whose neighbour i + (dx, dy) stays on the grid
            src = diff[max(0, -dy):h - max(0, dy), max(0, -dx):w - max(0, dx)]
            dst = diff[max(0, dy):h - max(0, -dy), max(0, dx):w - max(0, -dx)]
            total += weight * float(np.sum(src * dst))
            gauss_norm += weight * src.size
    return total, gauss_norm


class IMED(Algorithm):
    """
    IMage Euclidean Distance with a bounded Gaussian window.

    Images are aligned and grayscaled. Differences between pixel
    intensities are cross-weighted with their neighbours by a Gaussian of
    the grid distance, which reduces the effect of small perturbations.
    The result is normalized by the total Gaussian mass actually used.

    Note: large box_percentage values make the window, and the run time,
    grow quadratically.
    """

    name = "IMage Euclidean Distance"

    def __init__(self, sigma: float = 1.0, box_percentage: float = 0.005):
        """
        Initialize IMED.

        Args:
            sigma: Width parameter of the Gaussian function
            box_percentage: Window radius as a fraction of the smaller
                            image dimension
        """
        if sigma <= 0:
            raise ValueError(f"sigma must be positive: {sigma}")
        if box_percentage < 0:
            raise ValueError(f"box_percentage must not be negative: {box_percentage}")
        self.sigma = sigma
        self.box_percentage = box_percentage

    def compare(self, image1, image2) -> float:
        pair = extract_pair(grayscale(image1), grayscale(image2))
        gray1 = luminance_array(pair.first)
        gray2 = luminance_array(pair.second)
        diff = ((gray1 - gray2) / 255.0).reshape(pair.height, pair.width)

        offset = window_offset(self.box_percentage, pair.width, pair.height)
        logger.debug("IMED window %dx%d (sigma=%s)", 2 * offset + 1, 2 * offset + 1, self.sigma)
        total, gauss_norm = gaussian_window_sums(diff, self.sigma, offset)
        return total / gauss_norm
