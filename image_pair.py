"""
ImagePair: binds two images to a comparison algorithm.
"""

import inspect
from typing import Dict, Optional, Type

from algorithm_base import Algorithm
from direct_algorithms import IMED, EuclideanColorDistance, PixelMatching
from hash_algorithms import AverageHash, MedianHash, PerceptualHash
from histogram_algorithms import ChiSquareDistanceHistogram, IntersectionHistogram

ALGORITHMS: Dict[str, Type[Algorithm]] = {
    "euclidean": EuclideanColorDistance,
    "pixel_matching": PixelMatching,
    "imed": IMED,
    "average_hash": AverageHash,
    "median_hash": MedianHash,
    "perceptual_hash": PerceptualHash,
    "chi_square": ChiSquareDistanceHistogram,
    "intersection": IntersectionHistogram,
}


def create_algorithm(key: str, **options) -> Algorithm:
    """
    Build an algorithm from its key in ALGORITHMS.

    Options the algorithm's constructor does not accept are ignored, so a
    single set of settings can be passed to every algorithm.
    """
    try:
        cls = ALGORITHMS[key]
    except KeyError:
        raise ValueError(f"Unknown algorithm: {key} (choose from {', '.join(ALGORITHMS)})")
    accepted = inspect.signature(cls.__init__).parameters
    kwargs = {k: v for k, v in options.items() if k in accepted and v is not None}
    return cls(**kwargs)


class ImagePair:
    """
    Two images and the algorithm used to compare them.

    The images are only read; the algorithm can be replaced at any time
    before compare() is called.
    """

    def __init__(self, image1, image2, algorithm: Optional[Algorithm] = None):
        """
        Args:
            image1: First image (RGB numpy array or PIL image)
            image2: Second image
            algorithm: Comparison algorithm (default PixelMatching())
        """
        self._image1 = image1
        self._image2 = image2
        self._algorithm = algorithm if algorithm is not None else PixelMatching()

    @property
    def image1(self):
        return self._image1

    @property
    def image2(self):
        return self._image2

    @property
    def algorithm(self) -> Algorithm:
        return self._algorithm

    def set_algorithm(self, algorithm: Algorithm) -> None:
        self._algorithm = algorithm

    def compare(self) -> float:
        """Forward to the selected algorithm."""
        return self._algorithm.compare(self._image1, self._image2)
