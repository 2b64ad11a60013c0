"""Hough accumulators for straight lines in (r, theta) parameter space."""

from __future__ import annotations

import math

import numpy as np

__all__ = ["to_radians", "estimate_r", "build_hough_simple", "build_hough"]

_MAX_THETA = 360


def to_radians(degrees: float) -> float:
    """Convert degrees to radians."""
    return degrees * math.pi / 180.0


def estimate_r(x0, y0, theta_radians: float):
    """Signed distance parameter r of the line at angle theta through (x0, y0)."""
    return x0 * math.cos(theta_radians) + y0 * math.sin(theta_radians)


def _strength(strength: np.ndarray) -> np.ndarray:
    values = np.asarray(strength)
    if values.ndim != 2:
        raise ValueError(f"expected a single-channel image, got shape {values.shape}")
    return values.astype(np.float32)


def _coordinates(values: np.ndarray) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    ys, xs = np.indices(values.shape)
    return (
        xs.ravel().astype(np.float64),
        ys.ravel().astype(np.float64),
        values.ravel().astype(np.float64),
    )


def build_hough_simple(strength: np.ndarray) -> np.ndarray:
    """Accumulate each pixel's strength for every line through it.

    Theta runs over 0..179 degrees, r is the truncated absolute distance.
    The result has int(sqrt(w*w + h*h)) rows and 360 columns.
    """
    values = _strength(strength)
    if (values < 0).any():
        raise ValueError("gradient strengths must be non-negative")
    height, width = values.shape
    max_r = int(math.sqrt(width * width + height * height))
    accumulator = np.zeros((max_r, _MAX_THETA), dtype=np.float64)
    xs, ys, weights = _coordinates(values)
    if xs.size == 0:
        return accumulator.astype(np.float32)
    for theta in range(_MAX_THETA // 2):
        radians = float(np.float32(theta * math.pi / 180))
        r = np.abs(estimate_r(xs, ys, radians)).astype(np.float32)
        rows = r.astype(np.intp)
        if int(rows.max()) >= max_r:
            raise ValueError(f"vote for r={int(rows.max())} falls outside the accumulator")
        accumulator[:, theta] += np.bincount(rows, weights=weights, minlength=max_r)
    return accumulator.astype(np.float32)


def _round_half_away(values: np.ndarray) -> np.ndarray:
    return np.copysign(np.floor(np.abs(values) + 0.5), values).astype(np.intp)


def build_hough(strength: np.ndarray) -> np.ndarray:
    """Accumulate votes with interpolation between neighbouring angles.

    For every pair of adjacent angles the rows between the two rounded r
    values receive the pixel's strength, split linearly between the two
    columns. Pairs where either r is outside [0, w + h) cast no vote.
    """
    values = _strength(strength)
    height, width = values.shape
    max_r = width + height
    accumulator = np.zeros((max_r, _MAX_THETA), dtype=np.float64)
    xs, ys, weights = _coordinates(values)
    if xs.size == 0:
        return accumulator.astype(np.float32)

    radii = [
        _round_half_away(estimate_r(xs, ys, to_radians(theta)))
        for theta in range(_MAX_THETA)
    ]
    for theta0 in range(_MAX_THETA - 1):
        theta1 = theta0 + 1
        r0, r1 = radii[theta0], radii[theta1]
        valid = (r0 >= 0) & (r0 < max_r) & (r1 >= 0) & (r1 < max_r)
        low = np.minimum(r0, r1)[valid]
        length = (np.maximum(r0, r1) - np.minimum(r0, r1))[valid]
        weight = weights[valid]
        keep = length > 0
        low, length, weight = low[keep], length[keep], weight[keep]
        if length.size == 0:
            continue
        pixel = np.repeat(np.arange(length.size), length)
        starts = np.cumsum(length) - length
        step = np.arange(pixel.size) - np.repeat(starts, length)
        rows = low[pixel] + step
        koef = 1.0 - step * (1.0 / length[pixel])
        vote = weight[pixel]
        accumulator[:, theta0] += np.bincount(rows, weights=vote * koef, minlength=max_r)
        accumulator[:, theta1] += np.bincount(
            rows, weights=vote * (1.0 - koef), minlength=max_r
        )
    return accumulator.astype(np.float32)