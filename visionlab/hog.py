"""Histograms of oriented gradients with eight direction bins."""

from __future__ import annotations

import math
from collections.abc import Sequence

import numpy as np
from scipy import ndimage

__all__ = [
    "NBINS",
    "build_hog_from_gradients",
    "build_hog",
    "total_strength",
    "format_hog",
    "distance",
]

NBINS = 8
_MIN_STRENGTH = 10.0

_SOBEL_X = np.array([[-1, 0, 1], [-2, 0, 2], [-1, 0, 1]], dtype=np.float64)
_SOBEL_Y = _SOBEL_X.T.copy()


def build_hog_from_gradients(grad_x: np.ndarray, grad_y: np.ndarray) -> np.ndarray:
    """Build an orientation histogram from per-pixel x and y derivatives.

    Each gradient votes with its length for the bin of its direction;
    gradients shorter than 10 are ignored as compression noise.
    """
    gx = np.asarray(grad_x)
    gy = np.asarray(grad_y)
    if gx.ndim != 2 or gy.ndim != 2:
        raise ValueError("gradients must be single-channel images")
    if gx.shape != gy.shape:
        raise ValueError(f"gradient shapes differ: {gx.shape} and {gy.shape}")
    dx = gx.astype(np.float32)
    dy = gy.astype(np.float32)
    strength = np.sqrt(dx * dx + dy * dy)
    theta = np.arctan2(dy, dx)
    bins = ((math.pi + theta.astype(np.float64)) / (2 * math.pi) * NBINS).astype(np.intp)
    bins[bins == NBINS] = 0
    mask = strength >= _MIN_STRENGTH
    return np.bincount(
        bins[mask], weights=strength[mask].astype(np.float64), minlength=NBINS
    ).astype(np.float64)


def _gray(image: np.ndarray) -> np.ndarray:
    pixels = np.asarray(image)
    if pixels.ndim != 3 or pixels.shape[2] != 3 or pixels.dtype != np.uint8:
        raise ValueError("expected an 8-bit H x W x 3 BGR image")
    b, g, r = (pixels[..., channel].astype(np.float64) for channel in range(3))
    return np.clip(np.rint(0.299 * r + 0.587 * g + 0.114 * b), 0, 255).astype(np.float32)


def build_hog(image: np.ndarray) -> np.ndarray:
    """Build the orientation histogram of an 8-bit BGR image."""
    gray = _gray(image)
    grad_x = ndimage.correlate(gray, _SOBEL_X.astype(np.float32), mode="mirror")
    grad_y = ndimage.correlate(gray, _SOBEL_Y.astype(np.float32), mode="mirror")
    return build_hog_from_gradients(grad_x, grad_y)


def _check(hog: Sequence[float]) -> np.ndarray:
    values = np.asarray(hog, dtype=np.float64)
    if values.shape != (NBINS,):
        raise ValueError(f"histogram must have {NBINS} bins, got shape {values.shape}")
    return values


def total_strength(hog: Sequence[float]) -> float:
    """Sum of all votes in the histogram."""
    return float(_check(hog).sum())


def _percentages(hog: Sequence[float]) -> list[int]:
    values = _check(hog)
    total = float(values.sum())
    if total == 0:
        raise ValueError("histogram has no votes")
    return [int(value / total * 100) for value in values]


def format_hog(hog: Sequence[float]) -> str:
    """Render the histogram as bin-centre angles with truncated percentages."""
    parts = "".join(
        f"{index * 45 + 22.5:g}={percent}%, "
        for index, percent in enumerate(_percentages(hog))
    )
    return f"HoG[{parts}]"


def distance(a: Sequence[float], b: Sequence[float]) -> float:
    """Euclidean distance between the percentage profiles of two histograms."""
    first = _percentages(a)
    second = _percentages(b)
    return math.sqrt(sum((pa - pb) ** 2 for pa, pb in zip(first, second)))