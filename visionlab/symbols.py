"""Split an image of text into symbol crops and classify them by their HoG."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

import numpy as np
from scipy import ndimage

from .hog import build_hog, distance

__all__ = [
    "adaptive_threshold",
    "bounding_boxes",
    "split_symbols",
    "classify_symbol",
    "read_text",
]

_BLOCK_SIZE = 51
_OFFSET = 10.0
_MAX_VALUE = 255
_EIGHT_CONNECTED = np.ones((3, 3), dtype=bool)

Box = tuple[int, int, int, int]


def _to_gray(image: np.ndarray) -> np.ndarray:
    pixels = np.asarray(image)
    if pixels.ndim != 3 or pixels.shape[2] != 3 or pixels.dtype != np.uint8:
        raise ValueError("expected an 8-bit H x W x 3 BGR image")
    b, g, r = (pixels[..., channel].astype(np.float64) for channel in range(3))
    return np.clip(np.rint(0.299 * r + 0.587 * g + 0.114 * b), 0, 255).astype(np.uint8)


def adaptive_threshold(
    gray: np.ndarray, block_size: int = _BLOCK_SIZE, offset: float = _OFFSET
) -> np.ndarray:
    """Inverse binary thresholding against the local mean.

    A pixel becomes 255 when it is at most the rounded mean of its
    ``block_size`` x ``block_size`` neighbourhood minus ``offset``, and 0
    otherwise. Neighbourhoods past the border repeat the edge pixels.
    """
    pixels = np.asarray(gray)
    if pixels.ndim != 2:
        raise ValueError(f"expected a single-channel image, got shape {pixels.shape}")
    if block_size < 3 or block_size % 2 == 0:
        raise ValueError(f"block_size must be odd and at least 3, got {block_size}")
    values = pixels.astype(np.float64)
    mean = np.rint(ndimage.uniform_filter(values, size=block_size, mode="nearest"))
    threshold = mean - np.floor(offset)
    return np.where(values <= threshold, _MAX_VALUE, 0).astype(np.uint8)


def bounding_boxes(binary: np.ndarray) -> list[Box]:
    """Return (x, y, width, height) of each outermost foreground shape.

    Foreground pixels are the non-zero ones, joined in 8 directions; shapes
    lying inside holes of other shapes are not reported separately. Boxes
    come in the raster order of each shape's first pixel.
    """
    mask = np.asarray(binary)
    if mask.ndim != 2:
        raise ValueError(f"expected a single-channel image, got shape {mask.shape}")
    filled = ndimage.binary_fill_holes(mask != 0)
    labels, _ = ndimage.label(filled, structure=_EIGHT_CONNECTED)
    return [
        (
            region[1].start,
            region[0].start,
            region[1].stop - region[1].start,
            region[0].stop - region[0].start,
        )
        for region in ndimage.find_objects(labels)
        if region is not None
    ]


def split_symbols(image: np.ndarray) -> list[np.ndarray]:
    """Cut an 8-bit BGR image of dark text on a light background into
    one crop per symbol."""
    pixels = np.asarray(image)
    if pixels.size == 0:
        raise ValueError("image is empty")
    binary = adaptive_threshold(_to_gray(pixels))
    return [
        pixels[y : y + height, x : x + width].copy()
        for x, y, width, height in bounding_boxes(binary)
    ]


def _nearest(hog: np.ndarray, references: Iterable[tuple[str, np.ndarray]]) -> str:
    best_letter: str | None = None
    best_distance = float("inf")
    for letter, reference in references:
        current = distance(hog, reference)
        if current < best_distance:
            best_distance = current
            best_letter = letter
    if best_letter is None:
        raise ValueError("no reference symbols given")
    return best_letter


def classify_symbol(symbol: np.ndarray, references: Mapping[str, np.ndarray]) -> str:
    """Return the key of the reference image whose HoG is closest to the symbol's.

    On a tie the reference that comes first wins.
    """
    if not references:
        raise ValueError("no reference symbols given")
    hog = build_hog(symbol)
    return _nearest(hog, ((letter, build_hog(img)) for letter, img in references.items()))


def read_text(image: np.ndarray, references: Mapping[str, np.ndarray]) -> str:
    """Split the image into symbols and classify each against the references."""
    if not references:
        raise ValueError("no reference symbols given")
    reference_hogs = [(letter, build_hog(img)) for letter, img in references.items()]
    return "".join(
        _nearest(build_hog(symbol), reference_hogs) for symbol in split_symbols(image)
    )