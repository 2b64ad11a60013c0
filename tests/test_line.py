import numpy as np
import pytest

from visionlab.line import (
    Line,
    fit_line_points,
    fit_line_ransac,
    fit_line_two_points,
    generate_random_points,
)


def test_str_format():
    assert str(Line(0.5, -1, 5)) == "0.5*x + -1*y + 5 = 0"


def test_y_at_intercept():
    assert Line(0.5, -1, 5).y_at(0) == 5.0


def test_y_at_vertical_raises():
    with pytest.raises(ValueError):
        Line(1, 0, 3).y_at(2)


def test_distance_sq_on_and_off_line():
    horizontal = Line(0, 1, 0)
    assert horizontal.distance_sq((7, 0)) == 0
    assert horizontal.distance_sq((7, 2)) == pytest.approx(2**2)


def test_distance_sq_degenerate_raises():
    with pytest.raises(ValueError):
        Line(0, 0, 1).distance_sq((1, 1))


def test_generate_points_count_range_and_repeatable():
    line = Line(0.5, -1, 5)
    points = line.generate_points(10, 0.0, 20.0, 0.5)
    assert len(points) == 10
    assert all(0.0 <= x < 20.0 for x, _ in points)
    assert points == line.generate_points(10, 0.0, 20.0, 0.5)


def test_generate_points_without_noise_lie_on_line():
    line = Line(0.5, -1, 5)
    for x, y in line.generate_points(8, 0.0, 20.0, 0.0):
        assert y == pytest.approx(line.y_at(x))


def test_generate_points_negative_raises():
    with pytest.raises(ValueError):
        Line(0.5, -1, 5).generate_points(-1, 0.0, 1.0, 0.1)


def test_fit_two_points_passes_through_both():
    a, b = (1.0, 2.0), (4.0, -3.0)
    line = fit_line_two_points(a, b)
    assert line.distance_sq(a) == pytest.approx(0)
    assert line.distance_sq(b) == pytest.approx(0)


def test_fit_two_points_vertical_raises():
    with pytest.raises(ValueError):
        fit_line_two_points((2.0, 1.0), (2.0, 5.0))


def test_fit_points_collinear():
    truth = Line(0.5, -1, 5)
    points = [(x, truth.y_at(x)) for x in (0.0, 3.0, 7.0, 11.0)]
    line = fit_line_points(points)
    assert all(line.distance_sq(p) == pytest.approx(0, abs=1e-9) for p in points)


def test_fit_points_noisy_passes_through_two_points():
    truth = Line(0.5, -1, 5)
    points = truth.generate_points(10, 0.0, 20.0, 0.5)
    line = fit_line_points(points)
    on_line = [p for p in points if line.distance_sq(p) < 1e-6]
    assert len(on_line) >= 2
    assert abs(-line.a / line.b - 0.5) < 0.25


def test_fit_points_errors():
    with pytest.raises(ValueError):
        fit_line_points([(1.0, 1.0)])
    with pytest.raises(ValueError):
        fit_line_points([(1.0, 1.0), (1.0, 2.0), (1.0, 3.0)])


def test_ransac_ignores_outliers():
    truth = Line(0.5, -1, 5)
    inliers = [(float(x), truth.y_at(x)) for x in range(20)]
    outliers = [(x + 0.5, 100.0) for x in range(0, 10, 2)]
    line = fit_line_ransac(
        outliers + inliers, iterations=200, radius=10.0, rng=np.random.default_rng(0)
    )
    assert all(line.distance_sq(p) < 1e-9 for p in inliers)


def test_ransac_without_iterations_uses_first_pair():
    points = [(0.0, 1.0), (2.0, 5.0), (3.0, -4.0)]
    line = fit_line_ransac(points, iterations=0)
    assert line == fit_line_two_points(points[0], points[1])


def test_ransac_errors():
    with pytest.raises(ValueError):
        fit_line_ransac([(1.0, 1.0)])
    with pytest.raises(ValueError):
        fit_line_ransac([(1.0, 1.0), (1.0, 5.0)])


def test_generate_random_points_bounds_and_repeatable():
    points = generate_random_points(100, 0.0, 20.0, 3.0, 4.0)
    assert len(points) == 100
    assert all(0.0 <= x < 20.0 and 3.0 <= y < 4.0 for x, y in points)
    assert points == generate_random_points(100, 0.0, 20.0, 3.0, 4.0)