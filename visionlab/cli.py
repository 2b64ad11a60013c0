"""Detect straight lines in images and save the intermediate visualisations."""

from __future__ import annotations

import argparse
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

import numpy as np
from PIL import Image
from scipy import ndimage

from .hough import PolarLine, draw_circles, draw_lines, filter_strong_lines, find_local_extremums
from .hough_space import build_hough

__all__ = ["sobel_strength", "normalize", "blur_hough", "detect_lines", "main"]

_SOBEL_X = np.array([[-1, 0, 1], [-2, 0, 2], [-1, 0, 1]], dtype=np.float32)
_SOBEL_Y = _SOBEL_X.T.copy()
_BLUR_X = 5


def sobel_strength(gray: np.ndarray) -> np.ndarray:
    """Gradient length sqrt(dx**2 + dy**2) of a single-channel image, as float32."""
    pixels = np.asarray(gray)
    if pixels.ndim != 2:
        raise ValueError(f"expected a single-channel image, got shape {pixels.shape}")
    values = pixels.astype(np.float32)
    dx = ndimage.correlate(values, _SOBEL_X, mode="mirror")
    dy = ndimage.correlate(values, _SOBEL_Y, mode="mirror")
    return np.sqrt(dx * dx + dy * dy).astype(np.float32)


def _scale(values: np.ndarray, maximum: float) -> np.ndarray:
    if maximum <= 0:
        raise ValueError("the Hough space holds no votes")
    return (values.astype(np.float32) * np.float32(255.0) / np.float32(maximum)).astype(
        np.float32
    )


def normalize(hough: np.ndarray) -> np.ndarray:
    """Scale values so that the largest one becomes 255."""
    values = np.asarray(hough)
    maximum = max(0.0, float(values.max())) if values.size else 0.0
    return _scale(values, maximum)


def blur_hough(hough: np.ndarray) -> np.ndarray:
    """Box-blur a Hough space: 5 wide along theta and proportionally tall along r."""
    values = np.asarray(hough)
    if values.ndim != 2 or values.shape[1] == 0:
        raise ValueError(f"expected a non-empty 2-D Hough space, got shape {values.shape}")
    rows, cols = values.shape
    blur_y = _BLUR_X * rows // cols
    if blur_y % 2 == 0:
        blur_y += 1
    blur_y = max(blur_y, _BLUR_X)
    return ndimage.uniform_filter(
        values.astype(np.float32), size=(blur_y, _BLUR_X), mode="mirror"
    ).astype(np.float32)


@dataclass
class _Analysis:
    strength: np.ndarray
    hough: np.ndarray
    blurred: np.ndarray
    lines: list[PolarLine]


def _analyse(gray: np.ndarray, threshold_from_winner: float) -> _Analysis:
    strength = sobel_strength(gray)
    hough = build_hough(strength)
    blurred = blur_hough(hough)
    lines = filter_strong_lines(find_local_extremums(blurred), threshold_from_winner)
    return _Analysis(strength, hough, blurred, lines)


def detect_lines(gray: np.ndarray, threshold_from_winner: float = 0.5) -> list[PolarLine]:
    """Find the strongest straight lines of an 8-bit grayscale image."""
    return _analyse(gray, threshold_from_winner).lines


def _to_uint8(values: np.ndarray) -> np.ndarray:
    return np.clip(np.rint(values), 0, 255).astype(np.uint8)


def _save_gray(path: Path, values: np.ndarray) -> None:
    Image.fromarray(_to_uint8(values)).save(path)


def _save_bgr(path: Path, values: np.ndarray) -> None:
    Image.fromarray(np.ascontiguousarray(_to_uint8(values)[..., ::-1])).save(path)


def _process(
    path: Path,
    out_dir: Path,
    threshold: float,
    radius: int,
    rng: np.random.Generator,
) -> None:
    print(f"Processing image {path.name}...")
    with Image.open(path) as image:
        rgb = np.asarray(image.convert("RGB"))
        gray = np.asarray(image.convert("L"))
    stem = path.stem
    Image.fromarray(rgb).save(out_dir / f"{stem}_0.png")

    analysis = _analyse(gray, threshold)
    _save_gray(out_dir / f"{stem}_1_sobel_strength.png", analysis.strength)

    maximum = max(0.0, float(analysis.hough.max()))
    scaled = _scale(analysis.blurred, maximum)
    _save_gray(out_dir / f"{stem}_3_hough_blurred.png", scaled)
    _save_gray(out_dir / f"{stem}_2_hough_normalized.png", scaled)

    print(f"Found {len(analysis.lines)} extremums:")
    for number, line in enumerate(analysis.lines, start=1):
        print(f"  Line #{number} theta={line.theta:g} r={line.r:g} votes={line.votes:g}")

    _save_bgr(
        out_dir / f"{stem}_4_hough_circles.png",
        draw_circles(scaled, analysis.lines, radius),
    )
    _save_bgr(out_dir / f"{stem}_5_lines.png", draw_lines(gray, analysis.lines, rng))


def main(argv: Sequence[str] | None = None) -> int:
    """Run line detection on the given images; return the exit status."""
    parser = argparse.ArgumentParser(
        prog="visionlab", description="Detect straight lines with the Hough transform."
    )
    parser.add_argument("images", nargs="+", type=Path, help="images to process")
    parser.add_argument(
        "-o", "--output-dir", type=Path, default=Path("resultsData"),
        help="directory for the result images",
    )
    parser.add_argument(
        "--threshold", type=float, default=0.5,
        help="keep lines with at least this share of the winner's votes",
    )
    parser.add_argument("--radius", type=int, default=5, help="circle radius in Hough space")
    parser.add_argument("--seed", type=int, default=None, help="seed for line colours")
    args = parser.parse_args(argv)

    rng = np.random.default_rng(args.seed)
    try:
        args.output_dir.mkdir(parents=True, exist_ok=True)
        for path in args.images:
            _process(path, args.output_dir, args.threshold, args.radius, rng)
    except (OSError, ValueError) as error:
        print(f"Exception! {error}")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())