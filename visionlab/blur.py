"""Gaussian blur with a square kernel of given radius."""

from __future__ import annotations

import math

import numpy as np
from scipy import ndimage

__all__ = ["gaussian_weight", "gaussian_blur"]


def gaussian_weight(x: int, y: int, sigma: float) -> float:
    """Value of the 2-D Gaussian with deviation ``sigma`` at offset (x, y)."""
    return math.exp(-(x * x + y * y) / (2 * sigma * sigma)) / (
        2 * math.pi * sigma * sigma
    )


def _kernel(sigma: float, radius: int) -> np.ndarray:
    offsets = range(-radius, radius + 1)
    return np.array(
        [[gaussian_weight(dy, dx, sigma) for dx in offsets] for dy in offsets],
        dtype=np.float32,
    ).astype(np.float64)


def gaussian_blur(image: np.ndarray, sigma: float, radius: int) -> np.ndarray:
    """Blur an 8-bit image (H x W or H x W x C) with a Gaussian kernel.

    Each pixel becomes the weighted mean of its neighbours within ``radius``;
    neighbours outside the image are left out and the weights renormalised.
    """
    if sigma <= 0:
        raise ValueError(f"sigma must be positive, got {sigma}")
    if radius < 0:
        raise ValueError(f"radius must be non-negative, got {radius}")
    pixels = np.asarray(image)
    if pixels.ndim not in (2, 3):
        raise ValueError(f"expected a 2-D or 3-D image, got shape {pixels.shape}")

    kernel = _kernel(sigma, radius)
    norm = ndimage.correlate(
        np.ones(pixels.shape[:2]), kernel, mode="constant", cval=0.0
    )
    source = pixels.astype(np.float64)
    if pixels.ndim == 2:
        blurred = ndimage.correlate(source, kernel, mode="constant", cval=0.0) / norm
    else:
        blurred = np.stack(
            [
                ndimage.correlate(source[..., ch], kernel, mode="constant", cval=0.0)
                / norm
                for ch in range(pixels.shape[2])
            ],
            axis=-1,
        )
    return np.clip(np.rint(blurred), 0, 255).astype(np.uint8)