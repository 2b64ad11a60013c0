import numpy as np
import pytest

from visionlab.sobel import (
    bgr_to_gray,
    dxy_to_dx,
    dxy_to_dy,
    gradient_length,
    sobel_dxy,
)


def test_gray_of_white_and_black():
    image = np.zeros((2, 3, 3), dtype=np.uint8)
    image[0] = 255
    gray = bgr_to_gray(image)
    assert gray.shape == (2, 3)
    assert gray.dtype == np.float32
    np.testing.assert_allclose(gray[0], 255.0, rtol=1e-5)
    np.testing.assert_array_equal(gray[1], 0.0)


def test_gray_weights_order_channels():
    blue = np.array([[[255, 0, 0]]], dtype=np.uint8)
    green = np.array([[[0, 255, 0]]], dtype=np.uint8)
    red = np.array([[[0, 0, 255]]], dtype=np.uint8)
    b, g, r = (float(bgr_to_gray(img)[0, 0]) for img in (blue, green, red))
    assert g > r > b > 0


def test_gray_rejects_single_channel():
    with pytest.raises(ValueError):
        bgr_to_gray(np.zeros((4, 4), dtype=np.uint8))


def test_sobel_constant_image_is_flat():
    dxy = sobel_dxy(np.full((5, 6), 42.0, dtype=np.float32))
    assert dxy.shape == (5, 6, 2)
    assert not dxy.any()


def test_sobel_horizontal_ramp():
    gray = np.tile(np.arange(7, dtype=np.float32), (5, 1))
    dxy = sobel_dxy(gray)
    np.testing.assert_array_equal(dxy[1:-1, 1:-1, 0], 8.0)
    assert not dxy[..., 1].any()
    assert not dxy[0].any() and not dxy[-1].any()
    assert not dxy[:, 0].any() and not dxy[:, -1].any()


def test_sobel_transpose_swaps_axes():
    rng = np.random.default_rng(3)
    gray = rng.uniform(0, 255, size=(6, 9)).astype(np.float32)
    dxy = sobel_dxy(gray)
    dxy_t = sobel_dxy(gray.T)
    np.testing.assert_allclose(dxy_t[..., 1], dxy[..., 0].T, atol=1e-3)
    np.testing.assert_allclose(dxy_t[..., 0], dxy[..., 1].T, atol=1e-3)


def test_sobel_is_linear():
    rng = np.random.default_rng(5)
    gray = rng.uniform(0, 100, size=(5, 5)).astype(np.float32)
    np.testing.assert_allclose(sobel_dxy(gray * 2), sobel_dxy(gray) * 2, rtol=1e-5, atol=1e-4)


def test_sobel_step_edge_is_local():
    gray = np.zeros((5, 8), dtype=np.float32)
    gray[:, 4:] = 10.0
    dx = sobel_dxy(gray)[..., 0]
    nonzero_cols = sorted(set(np.nonzero(dx)[1].tolist()))
    assert nonzero_cols == [3, 4]
    assert (dx >= 0).all()


def test_sobel_tiny_image_is_zero():
    dxy = sobel_dxy(np.ones((2, 2), dtype=np.float32))
    assert dxy.shape == (2, 2, 2)
    assert not dxy.any()


def test_sobel_rejects_colour_image():
    with pytest.raises(ValueError):
        sobel_dxy(np.zeros((3, 3, 3), dtype=np.float32))


def test_dx_dy_are_absolute_and_sign_invariant():
    rng = np.random.default_rng(11)
    dxy = rng.normal(size=(4, 4, 2)).astype(np.float32)
    np.testing.assert_array_equal(dxy_to_dx(dxy), np.abs(dxy[..., 0]))
    np.testing.assert_array_equal(dxy_to_dy(dxy), np.abs(dxy[..., 1]))
    np.testing.assert_array_equal(dxy_to_dx(-dxy), dxy_to_dx(dxy))


def test_component_extraction_rejects_wrong_shape():
    with pytest.raises(ValueError):
        dxy_to_dx(np.zeros((3, 3), dtype=np.float32))
    with pytest.raises(ValueError):
        dxy_to_dy(np.zeros((3, 3, 3), dtype=np.float32))


def test_gradient_length_three_four_five():
    dxy = np.zeros((2, 2, 2), dtype=np.float32)
    dxy[..., 0] = 3.0
    dxy[..., 1] = -4.0
    np.testing.assert_allclose(gradient_length(dxy), 5.0)


def test_gradient_length_bounds():
    rng = np.random.default_rng(7)
    dxy = rng.normal(scale=50, size=(5, 5, 2)).astype(np.float32)
    length = gradient_length(dxy)
    assert (length + 1e-4 >= dxy_to_dx(dxy)).all()
    assert (length + 1e-4 >= dxy_to_dy(dxy)).all()
    assert (length <= dxy_to_dx(dxy) + dxy_to_dy(dxy) + 1e-4).all()