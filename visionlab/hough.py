"""Line detection in Hough space: local maxima, filtering and visualisation."""

from __future__ import annotations

import math
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass

import numpy as np

from .hough_space import to_radians

__all__ = [
    "PolarLine",
    "find_local_extremums",
    "filter_strong_lines",
    "draw_circles",
    "draw_lines",
]

_MAX_THETA = 360
_RED = (0.0, 0.0, 255.0)


@dataclass
class PolarLine:
    """A line ``x*cos(theta) + y*sin(theta) = r`` (theta in degrees) with its votes."""

    theta: float
    r: float
    votes: float = 0.0

    def intersect(self, other: PolarLine) -> tuple[int, int]:
        """Return the integer (x, y) where two lines cross, or (0, 0) if parallel.

        Coordinates are truncated towards zero.
        """
        a1 = math.cos(to_radians(self.theta))
        a2 = math.cos(to_radians(other.theta))
        b1 = math.sin(to_radians(self.theta))
        b2 = math.sin(to_radians(other.theta))
        c1 = self.r
        c2 = other.r
        determinant = a1 * b2 - a2 * b1
        if determinant == 0:
            return 0, 0
        x = (c1 * b2 - c2 * b1) / determinant
        y = (a1 * c2 - a2 * c1) / determinant
        return int(x), int(y)


def _hough(hough: np.ndarray) -> np.ndarray:
    values = np.asarray(hough)
    if values.ndim != 2:
        raise ValueError(f"expected a single-channel Hough space, got shape {values.shape}")
    if values.shape[1] != _MAX_THETA:
        raise ValueError(
            f"Hough space must have {_MAX_THETA} columns, got {values.shape[1]}"
        )
    return values.astype(np.float32)


def find_local_extremums(hough: np.ndarray, wrap: bool = True) -> list[PolarLine]:
    """List the strict local maxima of a Hough space over 3 x 3 neighbourhoods.

    The first and last rows are never reported. With ``wrap`` the theta axis
    is treated as circular; without it the first and last columns are skipped.
    Lines are ordered by theta, then by r.
    """
    values = _hough(hough)
    rows = values.shape[0]
    if rows < 3:
        return []
    center = values[1:-1, :]
    mask = np.ones(center.shape, dtype=bool)
    for dr in (-1, 0, 1):
        for dtheta in (-1, 0, 1):
            if dr == 0 and dtheta == 0:
                continue
            shifted = np.roll(values, -dtheta, axis=1)[1 + dr : rows - 1 + dr]
            mask &= ~(shifted >= center)
    if not wrap:
        mask[:, 0] = False
        mask[:, -1] = False
    thetas, rs = np.nonzero(mask.T)
    return [
        PolarLine(float(theta), float(r + 1), float(values[r + 1, theta]))
        for theta, r in zip(thetas.tolist(), rs.tolist())
    ]


def filter_strong_lines(
    lines: Sequence[PolarLine], threshold_from_winner: float
) -> list[PolarLine]:
    """Keep the lines with at least ``threshold_from_winner`` times the best votes."""
    if not lines:
        raise ValueError("no lines to filter")
    strongest = max(line.votes for line in lines)
    return [line for line in lines if strongest * threshold_from_winner <= line.votes]


def _put(image: np.ndarray, x: int, y: int, color) -> None:
    if 0 <= y < image.shape[0] and 0 <= x < image.shape[1]:
        image[y, x] = color


def _circle_points(cx: int, cy: int, radius: int) -> Iterator[tuple[int, int]]:
    if radius <= 0:
        yield cx, cy
        return
    x, y = radius, 0
    error = 1 - radius
    while x >= y:
        for px, py in (
            (x, y), (y, x), (-y, x), (-x, y),
            (-x, -y), (-y, -x), (y, -x), (x, -y),
        ):
            yield cx + px, cy + py
        y += 1
        if error < 0:
            error += 2 * y + 1
        else:
            x -= 1
            error += 2 * (y - x) + 1


def draw_circles(
    hough: np.ndarray, lines: Iterable[PolarLine], radius: int
) -> np.ndarray:
    """Return a float32 BGR copy of the Hough space with a red circle per line."""
    values = np.asarray(hough)
    if values.ndim != 2:
        raise ValueError(f"expected a single-channel Hough space, got shape {values.shape}")
    result = np.repeat(values.astype(np.float32)[..., None], 3, axis=2)
    for line in lines:
        for x, y in _circle_points(int(line.theta), int(line.r), radius):
            _put(result, x, y, _RED)
    return result


def _clip(
    x0: float, y0: float, x1: float, y1: float, width: int, height: int
) -> tuple[int, int, int, int] | None:
    dx, dy = x1 - x0, y1 - y0
    t0, t1 = 0.0, 1.0
    for p, q in (
        (-dx, x0),
        (dx, width - 1 - x0),
        (-dy, y0),
        (dy, height - 1 - y0),
    ):
        if p == 0:
            if q < 0:
                return None
            continue
        t = q / p
        if p < 0:
            t0 = max(t0, t)
        else:
            t1 = min(t1, t)
        if t0 > t1:
            return None
    return (
        round(x0 + t0 * dx),
        round(y0 + t0 * dy),
        round(x0 + t1 * dx),
        round(y0 + t1 * dy),
    )


def _bresenham(x0: int, y0: int, x1: int, y1: int) -> Iterator[tuple[int, int]]:
    dx = abs(x1 - x0)
    dy = -abs(y1 - y0)
    sx = 1 if x0 < x1 else -1
    sy = 1 if y0 < y1 else -1
    error = dx + dy
    while True:
        yield x0, y0
        if x0 == x1 and y0 == y1:
            return
        doubled = 2 * error
        if doubled >= dy:
            error += dy
            x0 += sx
        if doubled <= dx:
            error += dx
            y0 += sy


def _endpoints(line: PolarLine, width: int, height: int) -> tuple[tuple[int, int], tuple[int, int]]:
    left = PolarLine(0, 0)
    bottom = PolarLine(90, height)
    right = PolarLine(0, width)
    top = PolarLine(90, 0)
    theta = line.theta
    point_a = point_b = (0, 0)
    if 45 <= theta <= 135 or 180 <= theta <= 270:
        point_a, point_b = line.intersect(left), line.intersect(right)
    if 270 < theta <= 360 or 0 <= theta < 45 or 135 <= theta <= 180:
        point_a, point_b = line.intersect(top), line.intersect(bottom)
    return point_a, point_b


def draw_lines(
    gray: np.ndarray,
    lines: Iterable[PolarLine],
    rng: np.random.Generator | None = None,
) -> np.ndarray:
    """Return a BGR copy of an 8-bit grayscale image with each line drawn
    across it in a random colour."""
    pixels = np.asarray(gray)
    if pixels.ndim != 2 or pixels.dtype != np.uint8:
        raise ValueError("expected an 8-bit single-channel image")
    generator = np.random.default_rng() if rng is None else rng
    result = np.repeat(pixels[..., None], 3, axis=2)
    height, width = pixels.shape
    for line in lines:
        (ax, ay), (bx, by) = _endpoints(line, width, height)
        color = generator.integers(0, 256, size=3).astype(np.uint8)
        clipped = _clip(ax, ay, bx, by, width, height)
        if clipped is None:
            continue
        for x, y in _bresenham(*clipped):
            _put(result, x, y, color)
    return result