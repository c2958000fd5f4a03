"""
Histogram based image comparison.
Images are reduced to normalized per-channel color histograms, so images
of any size and aspect ratio can be compared.
"""

from dataclasses import dataclass

import numpy as np

from algorithm_base import Algorithm, image_pixels
from image_utils import as_rgb, image_size
from pixel_extractor import EmptyImageError

BIN_COUNT = 256


@dataclass(frozen=True)
class RGBHistogram:
    """Normalized red, green and blue frequency tables (BIN_COUNT bins each)."""

    red: np.ndarray
    green: np.ndarray
    blue: np.ndarray

    def channels(self):
        return self.red, self.green, self.blue


def build_histogram(pixels: np.ndarray, area: int) -> RGBHistogram:
    """
    Count channel values, each pixel adding 1 / area to its bins.

    Args:
        pixels: (n, 3) RGB pixel array
        area: Image width * height

    Returns:
        RGBHistogram whose channels each sum to 1.0 when n == area
    """
    pixels = np.asarray(pixels, dtype=np.int64)
    if area <= 0 or len(pixels) == 0:
        raise EmptyImageError()
    red, green, blue = (
        np.bincount(pixels[:, c], minlength=BIN_COUNT).astype(np.float64) / area
        for c in range(3)
    )
    return RGBHistogram(red, green, blue)


def image_histogram(image) -> RGBHistogram:
    img = as_rgb(image)
    w, h = image_size(img)
    return build_histogram(image_pixels(img), w * h)


def chi_square_distance(hist1: np.ndarray, hist2: np.ndarray) -> float:
    """0.5 * sum((c1 - c2)^2 / (c1 + c2)) over bins where c1 + c2 != 0."""
    total = hist1 + hist2
    used = total != 0
    diff = hist1[used] - hist2[used]
    return float(0.5 * np.sum(diff * diff / total[used]))


def intersection(hist1: np.ndarray, hist2: np.ndarray) -> float:
    """Overlap of two normalized histograms, sum(min(c1, c2))."""
    return float(np.minimum(hist1, hist2).sum())


class ChiSquareDistanceHistogram(Algorithm):
    """
    Chi-square distance between RGB histograms, averaged over channels.

    Score is 0.0 for identical color distributions and 1.0 for disjoint ones.
    """

    name = "Chi Square Distance Histogram"

    def compare(self, image1, image2) -> float:
        hist1 = image_histogram(image1)
        hist2 = image_histogram(image2)
        total = sum(chi_square_distance(c1, c2)
                    for c1, c2 in zip(hist1.channels(), hist2.channels()))
        return total / 3


class IntersectionHistogram(Algorithm):
    """
    Histogram intersection of RGB distributions.

    Score = 1 - average channel overlap: 0.0 for identical distributions,
    1.0 when no bin is shared.
    """

    name = "Intersection Histogram"

    def compare(self, image1, image2) -> float:
        hist1 = image_histogram(image1)
        hist2 = image_histogram(image2)
        overlap = sum(intersection(c1, c2)
                      for c1, c2 in zip(hist1.channels(), hist2.channels()))
        return 1.0 - overlap / 3
