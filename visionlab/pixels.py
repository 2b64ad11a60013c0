"""Per-pixel operations on 8-bit BGR images: recolouring, compositing, keying."""

from __future__ import annotations

import numpy as np

__all__ = [
    "make_black_pixels_blue",
    "invert_colors",
    "replace_black_with_background",
    "paste_on_large_background",
    "draw_many_times",
    "resize_nearest",
    "upscale_onto",
    "fill_black_with_noise",
    "green_screen",
    "subtract_background",
]

_BLUE = np.array([255, 0, 0], dtype=np.uint8)
_UPSCALE_SIZE = 591
_MAX_COPIES = 100


def _bgr(image: np.ndarray, name: str = "image") -> np.ndarray:
    """Return a uint8 copy of a H x W x 3 image, or raise ValueError."""
    pixels = np.asarray(image)
    if pixels.ndim != 3 or pixels.shape[2] != 3:
        raise ValueError(f"{name} must be an H x W x 3 image, got shape {pixels.shape}")
    return pixels.astype(np.uint8, copy=True)


def _black_mask(image: np.ndarray) -> np.ndarray:
    return np.all(image == 0, axis=-1)


def _close_mask(a: np.ndarray, b: np.ndarray, tolerance: int) -> np.ndarray:
    diff = np.abs(a.astype(np.int16) - b.astype(np.int16))
    return np.all(diff < tolerance, axis=-1)


def _rng(rng: np.random.Generator | None) -> np.random.Generator:
    return np.random.default_rng() if rng is None else rng


def make_black_pixels_blue(image: np.ndarray) -> np.ndarray:
    """Return a copy with every pure black pixel turned pure blue."""
    result = _bgr(image)
    result[_black_mask(result)] = _BLUE
    return result


def invert_colors(image: np.ndarray) -> np.ndarray:
    """Return a copy with every channel value x replaced by 255 - x."""
    return 255 - _bgr(image)


def replace_black_with_background(
    obj: np.ndarray, background: np.ndarray
) -> np.ndarray:
    """Replace black pixels of ``obj`` with the same pixels of ``background``."""
    result = _bgr(obj, "obj")
    back = _bgr(background, "background")
    if result.shape != back.shape:
        raise ValueError(
            f"object {result.shape} and background {back.shape} differ in size"
        )
    mask = _black_mask(result)
    result[mask] = back[mask]
    return result


def _paste(target: np.ndarray, obj: np.ndarray, top: int, left: int) -> None:
    rows, cols = obj.shape[:2]
    region = target[top : top + rows, left : left + cols]
    mask = ~_black_mask(obj)
    region[mask] = obj[mask]


def paste_on_large_background(
    obj: np.ndarray, large_background: np.ndarray
) -> np.ndarray:
    """Draw the non-black pixels of ``obj`` in the centre of a larger background."""
    source = _bgr(obj, "obj")
    result = _bgr(large_background, "large_background")
    if not (source.shape[0] < result.shape[0] and source.shape[1] < result.shape[1]):
        raise ValueError("background must be larger than the object in both directions")
    top = result.shape[0] // 2 - source.shape[0] // 2
    left = result.shape[1] // 2 - source.shape[1] // 2
    _paste(result, source, top, left)
    return result


def draw_many_times(
    obj: np.ndarray,
    background: np.ndarray,
    rng: np.random.Generator | None = None,
) -> np.ndarray:
    """Draw ``obj`` a random number of times (0 to 99) at random places."""
    source = _bgr(obj, "obj")
    result = _bgr(background, "background")
    free_rows = result.shape[0] - source.shape[0]
    free_cols = result.shape[1] - source.shape[1]
    if free_rows <= 0 or free_cols <= 0:
        raise ValueError("background must be larger than the object in both directions")
    generator = _rng(rng)
    for _ in range(int(generator.integers(_MAX_COPIES))):
        top = int(generator.integers(free_rows))
        left = int(generator.integers(free_cols))
        _paste(result, source, top, left)
    return result


def resize_nearest(image: np.ndarray, rows: int, cols: int) -> np.ndarray:
    """Resize an image to ``rows`` x ``cols`` by nearest-neighbour sampling."""
    if rows <= 0 or cols <= 0:
        raise ValueError(f"target size must be positive, got {rows}x{cols}")
    source = np.asarray(image)
    if source.ndim < 2 or source.shape[0] == 0 or source.shape[1] == 0:
        raise ValueError(f"cannot resize an image of shape {source.shape}")
    ys = (np.arange(rows) / rows * source.shape[0]).astype(np.intp)
    xs = (np.arange(cols) / cols * source.shape[1]).astype(np.intp)
    return source[ys[:, None], xs[None, :]].copy()


def upscale_onto(obj: np.ndarray, background: np.ndarray) -> np.ndarray:
    """Enlarge ``obj`` to 591 x 591 and draw its non-black pixels onto the
    background, starting at the top row and centred horizontally."""
    source = _bgr(obj, "obj")
    result = _bgr(background, "background")
    if result.shape[0] < _UPSCALE_SIZE or result.shape[1] < _UPSCALE_SIZE:
        raise ValueError(
            f"background must be at least {_UPSCALE_SIZE}x{_UPSCALE_SIZE}, "
            f"got {result.shape[0]}x{result.shape[1]}"
        )
    large = resize_nearest(source, _UPSCALE_SIZE, _UPSCALE_SIZE)
    left = result.shape[1] // 2 - _UPSCALE_SIZE // 2
    _paste(result, large, 0, left)
    return result


def fill_black_with_noise(
    image: np.ndarray, rng: np.random.Generator | None = None
) -> np.ndarray:
    """Enlarge to 591 x 591 and give every black pixel a random colour."""
    result = resize_nearest(_bgr(image), _UPSCALE_SIZE, _UPSCALE_SIZE)
    noise = _rng(rng).integers(0, 256, size=result.shape, dtype=np.uint8)
    mask = _black_mask(result)
    result[mask] = noise[mask]
    return result


def green_screen(
    frame: np.ndarray,
    color: tuple[int, int, int] | np.ndarray,
    background: np.ndarray,
    tolerance: int = 50,
) -> np.ndarray:
    """Replace frame pixels within ``tolerance`` of ``color`` in every channel
    by the matching background pixels."""
    result = _bgr(frame, "frame")
    back = _bgr(background, "background")
    if back.shape != result.shape:
        raise ValueError(
            f"frame {result.shape} and background {back.shape} differ in size"
        )
    key = np.asarray(color, dtype=np.int16).reshape(3)
    mask = _close_mask(result, key, tolerance)
    result[mask] = back[mask]
    return result


def subtract_background(
    frame: np.ndarray,
    reference: np.ndarray,
    replacement: np.ndarray,
    tolerance: int = 30,
) -> np.ndarray:
    """Replace frame pixels that look like the reference background pixel
    (within ``tolerance`` in every channel) by the replacement pixels."""
    result = _bgr(frame, "frame")
    ref = _bgr(reference, "reference")
    repl = _bgr(replacement, "replacement")
    if not (ref.shape == result.shape == repl.shape):
        raise ValueError("frame, reference and replacement must be the same size")
    mask = _close_mask(ref, result, tolerance)
    result[mask] = repl[mask]
    return result