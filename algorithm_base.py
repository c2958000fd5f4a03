"""
Base class for image comparison algorithms.
Shared preprocessing steps live here as free functions.
"""

import logging
from abc import ABC, abstractmethod
from typing import NamedTuple, Tuple

import numpy as np

from image_utils import as_rgb, grayscale, image_size, resize, rgb_bytes
from pixel_extractor import pixel_array

logger = logging.getLogger(__name__)


class PixelPair(NamedTuple):
    """Aligned pixel arrays of two images of the same width and height."""

    first: np.ndarray
    second: np.ndarray
    width: int
    height: int


class Algorithm(ABC):
    """
    Abstract base class for computing a difference score between two images.

    Subclasses implement compare() and must not keep per-call state on the
    instance, so one object can be reused for any number of image pairs.
    """

    name = "Algorithm"

    @abstractmethod
    def compare(self, image1, image2) -> float:
        """
        Compute the difference score between two images.

        Args:
            image1: First image (RGB numpy array or PIL image)
            image2: Second image (RGB numpy array or PIL image)

        Returns:
            Score where 0.0 means identical; the upper bound depends on
            the algorithm
        """
        pass

    def __str__(self) -> str:
        return self.name


def image_pixels(image: np.ndarray) -> np.ndarray:
    """Extract the (n, 3) pixel array of an image in row-major order."""
    w, h = image_size(image)
    return pixel_array(rgb_bytes(image), w, h)


def normalize_sizes(image1, image2) -> Tuple[np.ndarray, np.ndarray]:
    """
    Bring two images to the same width and height.

    The image with the larger area is resized down to the other one's
    dimensions. With equal areas the second image follows the first.
    """
    img1, img2 = as_rgb(image1), as_rgb(image2)
    w1, h1 = image_size(img1)
    w2, h2 = image_size(img2)
    if (w1, h1) == (w2, h2):
        return img1, img2

    logger.debug("images differ by size: %dx%d != %dx%d", w1, h1, w2, h2)
    if w1 * h1 < w2 * h2:
        img2 = resize(img2, w1, h1)
    elif w1 * h1 > w2 * h2:
        img1 = resize(img1, w2, h2)
    else:
        img2 = resize(img2, w1, h1)
    return img1, img2


def extract_pair(image1, image2) -> PixelPair:
    """Normalize sizes and extract aligned pixel arrays for direct comparison."""
    img1, img2 = normalize_sizes(image1, image2)
    w, h = image_size(img1)
    return PixelPair(image_pixels(img1), image_pixels(img2), w, h)


def grayscale_thumbnail(image, width: int, height: int) -> np.ndarray:
    """Grayscale an image and resize it to width x height."""
    return resize(grayscale(image), width, height)
