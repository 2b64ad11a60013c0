"""Grayscale conversion and the Sobel operator on float images."""

from __future__ import annotations

import numpy as np

__all__ = ["bgr_to_gray", "sobel_dxy", "dxy_to_dx", "dxy_to_dy", "gradient_length"]


def bgr_to_gray(image: np.ndarray) -> np.ndarray:
    """Convert an H x W x 3 BGR image to float32 luminance (0.0 black, 255.0 white)."""
    pixels = np.asarray(image)
    if pixels.ndim != 3 or pixels.shape[2] != 3:
        raise ValueError(f"expected an H x W x 3 BGR image, got shape {pixels.shape}")
    blue, green, red = (pixels[..., channel].astype(np.float64) for channel in range(3))
    return (0.299 * red + 0.587 * green + 0.114 * blue).astype(np.float32)


def sobel_dxy(gray: np.ndarray) -> np.ndarray:
    """Apply the 3 x 3 Sobel operator to a single-channel image.

    Returns an H x W x 2 float32 array holding the x and y derivatives.
    Border pixels, where the 3 x 3 window does not fit, are left at zero.
    """
    source = np.asarray(gray)
    if source.ndim != 2:
        raise ValueError(f"expected a single-channel image, got shape {source.shape}")
    g = source.astype(np.float64)
    height, width = g.shape
    result = np.zeros((height, width, 2), dtype=np.float32)
    if height < 3 or width < 3:
        return result

    right = g[:-2, 2:] + 2 * g[1:-1, 2:] + g[2:, 2:]
    left = g[:-2, :-2] + 2 * g[1:-1, :-2] + g[2:, :-2]
    bottom = g[2:, :-2] + 2 * g[2:, 1:-1] + g[2:, 2:]
    top = g[:-2, :-2] + 2 * g[:-2, 1:-1] + g[:-2, 2:]

    result[1:-1, 1:-1, 0] = right - left
    result[1:-1, 1:-1, 1] = bottom - top
    return result


def _check_dxy(dxy: np.ndarray) -> np.ndarray:
    values = np.asarray(dxy)
    if values.ndim != 3 or values.shape[2] != 2:
        raise ValueError(f"expected an H x W x 2 derivative image, got shape {values.shape}")
    return values.astype(np.float32)


def dxy_to_dx(dxy: np.ndarray) -> np.ndarray:
    """Absolute value of the x derivative in every pixel."""
    return np.abs(_check_dxy(dxy)[..., 0])


def dxy_to_dy(dxy: np.ndarray) -> np.ndarray:
    """Absolute value of the y derivative in every pixel."""
    return np.abs(_check_dxy(dxy)[..., 1])


def gradient_length(dxy: np.ndarray) -> np.ndarray:
    """Length of the gradient vector, sqrt(dx**2 + dy**2), in every pixel."""
    dx = dxy_to_dx(dxy).astype(np.float64)
    dy = dxy_to_dy(dxy).astype(np.float64)
    return np.sqrt(dx * dx + dy * dy).astype(np.float32)