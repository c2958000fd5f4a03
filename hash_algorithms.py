"""
Hash based image comparison.
Each image is reduced to a small binary fingerprint (average, median or
perceptual hash) and fingerprints are compared by Hamming distance.
"""

import logging
from abc import abstractmethod

import cv2
import numpy as np

from algorithm_base import Algorithm, grayscale_thumbnail, image_pixels
from image_utils import luminance_array

logger = logging.getLogger(__name__)

AVERAGE_HASH_SIZE = (8, 8)   # (width, height)
MEDIAN_HASH_SIZE = (8, 9)
PHASH_SIZE = 32
PHASH_LOW_FREQ = 8


def bits_to_hex(bits) -> str:
    """
    Pack a bit sequence into a fixed-width hex string.

    The first bit is the most significant one. The result is zero-padded
    to ceil(len(bits) / 4) characters.
    """
    h = 0
    for b in bits:
        h = (h << 1) | int(b)
    width = (len(bits) + 3) // 4
    return format(h, f"0{width}x")


def hamming_distance(hash1: str, hash2: str) -> float:
    """
    Squared, normalized character distance between two hash strings.

    Positions past the shorter hash count as differences. The count is
    divided by the length of hash1 and squared.

    Args:
        hash1: First hash
        hash2: Second hash

    Returns:
        (differences / len(hash1)) ** 2
    """
    if not hash1:
        raise ValueError("hash1 must not be empty")
    dist = abs(len(hash1) - len(hash2))
    dist += sum(1 for a, b in zip(hash1, hash2) if a != b)
    return (dist / len(hash1)) ** 2


def _gray_samples(image, width: int, height: int) -> np.ndarray:
    thumb = grayscale_thumbnail(image, width, height)
    return luminance_array(image_pixels(thumb))


def average_hash(image) -> str:
    """64-bit average hash: 8x8 gray samples compared with their mean."""
    samples = _gray_samples(image, *AVERAGE_HASH_SIZE)
    mean = samples.sum() / len(samples)
    return bits_to_hex(samples > mean)


def median_hash(image) -> str:
    """72-bit median hash: 8 wide x 9 high gray samples compared with their median."""
    samples = _gray_samples(image, *MEDIAN_HASH_SIZE)
    ordered = np.sort(samples)
    mid = (len(ordered) - 1) // 2
    median = (ordered[mid] + ordered[mid + 1]) / 2
    return bits_to_hex(samples > median)


def dct_2d(matrix: np.ndarray) -> np.ndarray:
    """
    Orthonormal type-II 2-D discrete cosine transform.

    Applied along every row, then along every column:
    X[k] = sqrt(2/N) * sum_n x[n] * cos(pi * k * (n + 0.5) / N),
    with X[0] additionally scaled by 1/sqrt(2).
    """
    return cv2.dct(np.asarray(matrix, dtype=np.float64))


def perceptual_hash(image) -> str:
    """
    64-bit perceptual hash.

    The 32x32 grayscale thumbnail is transformed with a 2-D DCT and the
    top-left 8x8 low frequency block is thresholded against the average of
    its coefficients, leaving out the DC term and the last coefficient.
    """
    gray = _gray_samples(image, PHASH_SIZE, PHASH_SIZE).reshape(PHASH_SIZE, PHASH_SIZE)
    low = dct_2d(gray)[:PHASH_LOW_FREQ, :PHASH_LOW_FREQ].flatten()

    n = len(low) - 1
    average = low[1:n].sum() / n
    return bits_to_hex(low > average)


class HashAlgorithm(Algorithm):
    """
    Compares two images through their hashes.

    Score = hamming_distance(hash(image1), hash(image2)), in [0.0, 1.0]
    where 0.0 means identical fingerprints.
    """

    @abstractmethod
    def compute_hash(self, image) -> str:
        """Hex fingerprint of one image."""
        pass

    def compare(self, image1, image2) -> float:
        hash1 = self.compute_hash(image1)
        hash2 = self.compute_hash(image2)
        logger.debug("%s: %s vs %s", self.name, hash1, hash2)
        return hamming_distance(hash1, hash2)


class AverageHash(HashAlgorithm):
    """Average hash comparison."""

    name = "Average Hash"

    def compute_hash(self, image) -> str:
        return average_hash(image)


class MedianHash(HashAlgorithm):
    """Median hash comparison."""

    name = "Median Hash"

    def compute_hash(self, image) -> str:
        return median_hash(image)


class PerceptualHash(HashAlgorithm):
    """
    Perceptual (DCT) hash comparison.

    Works with images of any dimension and aspect ratio; robust to
    scaling and small edits.
    """

    name = "Perceptual Hash"

    def compute_hash(self, image) -> str:
        return perceptual_hash(image)
