from __future__ import annotations

import argparse
import csv
import logging
import sys
import time
from pathlib import Path
from typing import List, Optional, Tuple

from image_pair import ALGORITHMS, ImagePair, create_algorithm
from image_utils import image_size, load_image

logger = logging.getLogger(__name__)


def write_scores_csv(csv_path: Path, rows: List[Tuple[str, float]]):
    with csv_path.open("w", newline="", encoding="utf-8") as f:
        w = csv.writer(f)
        w.writerow(["algorithm", "score"])
        for name, score in rows:
            w.writerow([name, f"{score:.6f}"])


def run_comparisons(image1_path: str, image2_path: str, keys: List[str], **options) -> List[Tuple[str, float]]:
    img1 = load_image(image1_path)
    img2 = load_image(image2_path)
    logger.info("Image1: %s (%dx%d)", image1_path, *image_size(img1))
    logger.info("Image2: %s (%dx%d)", image2_path, *image_size(img2))

    pair = ImagePair(img1, img2)
    rows = []
    for key in keys:
        pair.set_algorithm(create_algorithm(key, **options))
        t0 = time.time()
        score = pair.compare()
        logger.debug("%s took %.3fs", pair.algorithm, time.time() - t0)
        rows.append((str(pair.algorithm), score))
    return rows


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Compute a difference score between two images (0.0 = identical).")

    parser.add_argument("image1", help="First image file")
    parser.add_argument("image2", help="Second image file")

    parser.add_argument("--algorithm", default="pixel_matching", choices=list(ALGORITHMS),
                        help="Comparison algorithm. Default pixel_matching")
    parser.add_argument("--all", action="store_true", help="Run every algorithm (--algorithm is ignored)")

    parser.add_argument("--tolerance", type=float, default=0.05,
                        help="pixel_matching: allowed channel deviation as a fraction of 256, clamped to 0.0-1.0. Default 0.05")
    parser.add_argument("--sigma", type=float, default=1.0,
                        help="imed: width of the Gaussian weighting. Default 1.0")
    parser.add_argument("--box_percentage", type=float, default=0.005,
                        help="imed: window radius as a fraction of the smaller image dimension. Large values are slow. Default 0.005")

    parser.add_argument("--csv", default="", help="Write algorithm,score rows to this CSV file")
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(format="%(module)s:%(lineno)s: %(levelname)s: %(message)s",
                        level=logging.DEBUG if args.verbose else logging.INFO)

    keys = list(ALGORITHMS) if args.all else [args.algorithm]
    try:
        rows = run_comparisons(
            args.image1,
            args.image2,
            keys,
            tolerance=args.tolerance,
            sigma=args.sigma,
            box_percentage=args.box_percentage,
        )
    except (FileNotFoundError, ValueError) as e:
        logger.error("%s", e)
        return 1

    for name, score in rows:
        print(f"{name}: {score:.6f}")

    if args.csv:
        csv_path = Path(args.csv)
        write_scores_csv(csv_path, rows)
        print(f"Scores CSV written: {csv_path}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
