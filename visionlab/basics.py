"""Small arithmetic helpers: sums, Fibonacci numbers and equation solvers."""

from __future__ import annotations

import math
import sys
from collections.abc import Iterable

__all__ = [
    "add",
    "fibonacci_recursive",
    "fibonacci_fast",
    "solve_linear",
    "solve_square",
    "sum_until_zero",
]


def add(a: int, b: int) -> int:
    """Return the sum of two integers."""
    return a + b


def _check_index(n: int) -> None:
    if n < 0:
        raise ValueError(f"Fibonacci index must be non-negative, got {n}")


def fibonacci_recursive(n: int) -> int:
    """Return the n-th Fibonacci number using the naive recursive definition."""
    _check_index(n)
    if n < 2:
        return n
    return fibonacci_recursive(n - 1) + fibonacci_recursive(n - 2)


def fibonacci_fast(n: int) -> int:
    """Return the n-th Fibonacci number in linear time and constant memory."""
    _check_index(n)
    previous, current = 0, 1
    for _ in range(n):
        previous, current = current, previous + current
    return previous


def solve_linear(a: float, b: float) -> float:
    """Solve ``a*x + b = 0``.

    Returns the largest finite float when there is no solution and its
    negation when every x is a solution.
    """
    if a == 0:
        return -sys.float_info.max if b == 0 else sys.float_info.max
    return -b / a


def solve_square(a: float, b: float, c: float) -> list[float]:
    """Return the real roots of ``a*x**2 + b*x + c = 0``.

    With ``a == 0`` the equation is treated as linear and its single root is
    returned. A degenerate linear equation (``b == 0``) raises ZeroDivisionError.
    """
    if a == 0:
        return [-c / b]
    discriminant = b * b - 4 * a * c
    if discriminant == 0:
        return [-b / (2 * a)]
    if discriminant > 0:
        root = math.sqrt(discriminant)
        return [(-b - root) / (2 * a), (-b + root) / (2 * a)]
    return []


def sum_until_zero(numbers: Iterable[int]) -> int:
    """Sum the numbers up to, but not including, the first zero."""
    total = 0
    for number in numbers:
        if number == 0:
            break
        total += number
    return total