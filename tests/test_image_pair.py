"""
Tests for the ImagePair facade and algorithm table.
"""

import pytest
from PIL import Image

from algorithm_base import Algorithm
from direct_algorithms import IMED, EuclideanColorDistance, PixelMatching
from hash_algorithms import PerceptualHash
from image_pair import ALGORITHMS, ImagePair, create_algorithm


class TestImagePair:
    """ImagePair facade."""

    def test_default_algorithm(self, white, black):
        pair = ImagePair(white, black)
        assert isinstance(pair.algorithm, PixelMatching)
        assert pair.compare() == 1.0

    def test_set_algorithm(self, white, black):
        pair = ImagePair(white, black)
        pair.set_algorithm(EuclideanColorDistance())
        assert pair.compare() == pytest.approx(1.0)

    def test_images_are_not_modified(self, noise, other_noise):
        before = noise.copy()
        ImagePair(noise, other_noise[:12, :16], IMED()).compare()
        assert (noise == before).all()

    def test_image_accessors(self, white, black):
        pair = ImagePair(white, black)
        assert pair.image1 is white
        assert pair.image2 is black

    def test_pil_images(self):
        img1 = Image.new("RGB", (8, 8), color="blue")
        img2 = Image.new("RGB", (8, 8), color="blue")
        assert ImagePair(img1, img2, PerceptualHash()).compare() == 0.0

    @pytest.mark.parametrize("key", list(ALGORITHMS))
    def test_every_algorithm_identical_is_zero(self, key, noise):
        pair = ImagePair(noise, noise.copy(), create_algorithm(key))
        assert pair.compare() == pytest.approx(0.0, abs=1e-9)


class TestCreateAlgorithm:
    """Algorithm lookup by key."""

    def test_names(self):
        names = {str(create_algorithm(key)) for key in ALGORITHMS}
        assert "Perceptual Hash" in names
        assert "IMage Euclidean Distance" in names
        assert len(names) == len(ALGORITHMS)

    def test_options_are_filtered(self):
        algo = create_algorithm("pixel_matching", tolerance=0.2, sigma=3.0)
        assert algo.tolerance == 0.2
        imed = create_algorithm("imed", tolerance=0.2, sigma=3.0, box_percentage=0.01)
        assert imed.sigma == 3.0 and imed.box_percentage == 0.01
        assert isinstance(create_algorithm("euclidean", tolerance=0.2), Algorithm)

    def test_unknown(self):
        with pytest.raises(ValueError, match="Unknown algorithm"):
            create_algorithm("ssim")
