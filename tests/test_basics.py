import sys

import pytest

from visionlab.basics import (
    add,
    fibonacci_fast,
    fibonacci_recursive,
    solve_linear,
    solve_square,
    sum_until_zero,
)


@pytest.mark.parametrize(
    ("n", "expected"),
    [(0, 0), (1, 1), (2, 1), (3, 2), (4, 3), (10, 55)],
)
def test_fibonacci_recursive(n, expected):
    assert fibonacci_recursive(n) == expected


@pytest.mark.parametrize("n", range(0, 20))
def test_fibonacci_fast_agrees_with_recursive(n):
    assert fibonacci_fast(n) == fibonacci_recursive(n)


def test_fibonacci_fast_100_satisfies_recurrence():
    assert fibonacci_fast(100) == fibonacci_fast(99) + fibonacci_fast(98)
    assert fibonacci_fast(100) > 0


@pytest.mark.parametrize("func", [fibonacci_fast, fibonacci_recursive])
def test_fibonacci_negative_index_rejected(func):
    with pytest.raises(ValueError):
        func(-1)


@pytest.mark.parametrize(
    ("a", "b", "expected"),
    [(2.0, -4.0, 2.0), (2.0, 4.0, -2.0), (2.5, -5.0, 2.0), (4.0, 6.0, -1.5)],
)
def test_solve_linear(a, b, expected):
    assert solve_linear(a, b) == expected


def test_solve_linear_no_solution():
    assert solve_linear(0.0, 4.0) == sys.float_info.max


def test_solve_linear_infinitely_many():
    assert solve_linear(0.0, 0.0) == -sys.float_info.max


def test_solve_square_linear_case():
    xs = solve_square(0.0, 4.0, -6.0)
    assert len(xs) == 1
    assert xs[0] == 1.5


def test_solve_square_two_roots_ascending():
    xs = solve_square(1.0, -3.0, 2.0)
    assert xs == [1.0, 2.0]


def test_solve_square_double_root():
    assert solve_square(1.0, -2.0, 1.0) == [1.0]


def test_solve_square_no_real_roots():
    assert solve_square(1.0, 0.0, 1.0) == []


def test_add():
    assert add(10, 5) == 15
    assert add(-3, 3) == 0


def test_sum_until_zero_stops_at_zero():
    assert sum_until_zero([1, 2, 3, 0, 100]) == 6


def test_sum_until_zero_without_zero_sums_all():
    assert sum_until_zero(iter([4, 5])) == 9


def test_sum_until_zero_leading_zero():
    assert sum_until_zero([0, 7]) == 0