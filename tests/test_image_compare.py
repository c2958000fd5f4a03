"""
Tests for the command line front end.
"""

import csv

import cv2
import numpy as np
import pytest

from image_compare import main
from image_pair import ALGORITHMS


@pytest.fixture
def image_files(tmp_path):
    white = np.full((4, 4, 3), 255, dtype=np.uint8)
    black = np.zeros((4, 4, 3), dtype=np.uint8)
    a, b = tmp_path / "white.png", tmp_path / "black.png"
    cv2.imwrite(str(a), white)
    cv2.imwrite(str(b), black)
    return str(a), str(b)


class TestMain:
    """Command line runs."""

    def test_single_algorithm(self, image_files, capsys):
        assert main([*image_files, "--algorithm", "euclidean"]) == 0
        assert capsys.readouterr().out.strip() == "Euclidean Color Distance: 1.000000"

    def test_default_is_pixel_matching(self, image_files, capsys):
        assert main(list(image_files)) == 0
        assert "Pixel Matching: 1.000000" in capsys.readouterr().out

    def test_all_with_csv(self, image_files, tmp_path, capsys):
        out = tmp_path / "scores.csv"
        assert main([*image_files, "--all", "--csv", str(out)]) == 0
        with out.open(encoding="utf-8") as f:
            rows = list(csv.reader(f))
        assert rows[0] == ["algorithm", "score"]
        assert len(rows) == len(ALGORITHMS) + 1

    def test_missing_file(self, tmp_path, image_files):
        assert main([image_files[0], str(tmp_path / "nope.png")]) == 1
