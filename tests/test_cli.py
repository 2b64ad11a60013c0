import numpy as np
import pytest
from PIL import Image

from visionlab.cli import blur_hough, detect_lines, main, normalize, sobel_strength


def _noise(size=24, seed=3):
    return np.random.default_rng(seed).integers(0, 256, size=(size, size), dtype=np.uint8)


def test_sobel_strength_constant_is_zero():
    result = sobel_strength(np.full((6, 8), 77, dtype=np.uint8))
    assert result.dtype == np.float32
    assert result.shape == (6, 8)
    assert not result.any()


def test_sobel_strength_vertical_edge():
    gray = np.zeros((6, 10), dtype=np.uint8)
    gray[:, 5:] = 255
    result = sobel_strength(gray)
    assert not result[:, 0].any()
    assert not result[:, 9].any()
    assert (result[:, 4] > 0).all()
    np.testing.assert_array_equal(result[:, 4], result[:, 5])


def test_sobel_strength_rejects_color():
    with pytest.raises(ValueError):
        sobel_strength(np.zeros((4, 4, 3), dtype=np.uint8))


def test_normalize_maximum_is_255():
    values = np.array([[0.0, 10.0], [40.0, 20.0]], dtype=np.float32)
    result = normalize(values)
    assert result.max() == pytest.approx(255.0)
    assert result[0, 0] == 0


def test_normalize_empty_votes_raises():
    with pytest.raises(ValueError):
        normalize(np.zeros((3, 360), dtype=np.float32))


def test_blur_keeps_constant():
    values = np.full((40, 360), 3.0, dtype=np.float32)
    result = blur_hough(values)
    assert result.shape == values.shape
    np.testing.assert_allclose(result, 3.0, rtol=1e-6)


def test_blur_spreads_spike_over_five_by_five():
    values = np.zeros((20, 360), dtype=np.float32)
    values[10, 100] = 1.0
    result = blur_hough(values)
    assert result[10, 100] == pytest.approx(1 / 25)
    assert result[12, 102] == pytest.approx(result[10, 100])
    assert result[13, 100] == 0


def test_detect_lines_threshold_invariants():
    gray = _noise()
    strong = detect_lines(gray, 0.5)
    everything = detect_lines(gray, 0.0)
    assert strong
    best = max(line.votes for line in everything)
    assert all(line.votes >= 0.5 * best for line in strong)
    assert all(line in everything for line in strong)


def test_detect_lines_flat_image_raises():
    with pytest.raises(ValueError):
        detect_lines(np.full((16, 16), 128, dtype=np.uint8))


def test_main_writes_results(tmp_path, capsys):
    source = tmp_path / "noise.png"
    Image.fromarray(_noise()).convert("RGB").save(source)
    out = tmp_path / "out"
    assert main([str(source), "--output-dir", str(out), "--seed", "1"]) == 0
    for suffix in (
        "_0", "_1_sobel_strength", "_2_hough_normalized",
        "_3_hough_blurred", "_4_hough_circles", "_5_lines",
    ):
        assert (out / f"noise{suffix}.png").exists()
    with Image.open(out / "noise_5_lines.png") as image:
        assert image.size == (24, 24)
    captured = capsys.readouterr().out
    assert "Processing image noise.png..." in captured
    assert "Found " in captured


def test_main_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "missing.png"), "-o", str(tmp_path)]) == 1
    assert "Exception!" in capsys.readouterr().out


def test_main_flat_image_fails(tmp_path, capsys):
    source = tmp_path / "flat.png"
    Image.new("RGB", (16, 16), (90, 90, 90)).save(source)
    assert main([str(source), "-o", str(tmp_path / "out")]) == 1
    assert "Exception!" in capsys.readouterr().out