"""Straight lines ``a*x + b*y + c = 0``: sampling, fitting and robust fitting."""

from __future__ import annotations

import itertools
import math
from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np

__all__ = [
    "Line",
    "fit_line_two_points",
    "fit_line_points",
    "fit_line_ransac",
    "generate_random_points",
]

Point = tuple[float, float]


@dataclass(frozen=True)
class Line:
    """The set of points (x, y) with ``a*x + b*y + c == 0``."""

    a: float
    b: float
    c: float

    def __str__(self) -> str:
        return f"{self.a:g}*x + {self.b:g}*y + {self.c:g} = 0"

    def _norm(self) -> float:
        norm = self.a * self.a + self.b * self.b
        if norm == 0:
            raise ValueError("a and b cannot both be zero")
        return norm

    def distance_sq(self, point: Sequence[float]) -> float:
        """Squared Euclidean distance from ``point`` to the line."""
        x, y = point
        value = self.a * x + self.b * y + self.c
        return value * value / self._norm()

    def y_at(self, x: float) -> float:
        """Return the y of the point of the line above ``x``."""
        if self.b == 0:
            raise ValueError("vertical lines have no single y for a given x")
        return -(self.a * x + self.c) / self.b

    def generate_points(
        self, n: int, from_x: float, to_x: float, sigma: float
    ) -> list[Point]:
        """Sample ``n`` points with x uniform in [from_x, to_x) and y normally
        scattered around the line. The sequence is fixed by ``n``."""
        if n < 0:
            raise ValueError(f"n must be non-negative, got {n}")
        rng = np.random.default_rng(n)
        points = []
        for _ in range(n):
            x = float(rng.uniform(from_x, to_x))
            y = float(rng.normal(self.y_at(x), sigma))
            points.append((x, y))
        return points


def _as_points(points: Sequence[Sequence[float]]) -> np.ndarray:
    array = np.asarray(points, dtype=np.float64)
    if array.size == 0:
        return array.reshape(0, 2)
    if array.ndim != 2 or array.shape[1] != 2:
        raise ValueError(f"expected a sequence of (x, y) points, got shape {array.shape}")
    return array


def _squared_distances(line: Line, points: np.ndarray) -> np.ndarray:
    values = line.a * points[:, 0] + line.b * points[:, 1] + line.c
    return values * values / (line.a * line.a + line.b * line.b)


def fit_line_two_points(a: Sequence[float], b: Sequence[float]) -> Line:
    """Return the line through two points with different x coordinates."""
    ax, ay = (float(v) for v in a)
    bx, by = (float(v) for v in b)
    if ax == bx:
        raise ValueError("points share an x coordinate; vertical lines are not supported")
    return Line(by - ay, -bx + ax, -ax * by + ay * bx)


def fit_line_points(points: Sequence[Sequence[float]]) -> Line:
    """Among lines through two of the points, return the one with the least
    sum of squared distances to all points."""
    array = _as_points(points)
    if len(array) < 2:
        raise ValueError("at least two points are needed to fit a line")
    best: Line | None = None
    best_cost = math.inf
    for i, j in itertools.combinations(range(len(array)), 2):
        if array[i, 0] == array[j, 0]:
            continue
        line = fit_line_two_points(array[i], array[j])
        cost = float(_squared_distances(line, array).sum())
        if cost < best_cost:
            best_cost = cost
            best = line
    if best is None:
        raise ValueError("all points share an x coordinate")
    return best


def fit_line_ransac(
    points: Sequence[Sequence[float]],
    iterations: int = 100,
    radius: float = 10.0,
    rng: np.random.Generator | None = None,
) -> Line:
    """Fit a line to points that include outliers.

    Each iteration draws two random points with different x, builds the line
    through them and counts the points whose squared distance to it is at
    most ``radius``; the line with the most votes wins.
    """
    array = _as_points(points)
    if len(array) < 2:
        raise ValueError("at least two points are needed to fit a line")
    if np.unique(array[:, 0]).size < 2:
        raise ValueError("all points share an x coordinate")
    if iterations < 0:
        raise ValueError(f"iterations must be non-negative, got {iterations}")

    best = next(
        fit_line_two_points(array[i], array[j])
        for i, j in itertools.combinations(range(len(array)), 2)
        if array[i, 0] != array[j, 0]
    )
    best_votes = 0
    generator = np.random.default_rng() if rng is None else rng
    for _ in range(iterations):
        while True:
            first, second = generator.integers(len(array), size=2)
            if array[first, 0] != array[second, 0]:
                break
        line = fit_line_two_points(array[first], array[second])
        votes = int(np.count_nonzero(_squared_distances(line, array) <= radius))
        if votes > best_votes:
            best_votes = votes
            best = line
    return best


def generate_random_points(
    n: int, from_x: float, to_x: float, from_y: float, to_y: float
) -> list[Point]:
    """Sample ``n`` points uniformly in a rectangle; the sequence is fixed by ``n``."""
    if n < 0:
        raise ValueError(f"n must be non-negative, got {n}")
    rng = np.random.default_rng(n)
    points = []
    for _ in range(n):
        x = float(rng.uniform(from_x, to_x))
        y = float(rng.uniform(from_y, to_y))
        points.append((x, y))
    return points