# visionlab

Classic image-processing building blocks on NumPy arrays, plus a few small
algorithmic helpers.

Conventions used throughout:

- colour images are `uint8` arrays of shape `height x width x 3` in BGR
  channel order;
- `visionlab.sobel.bgr_to_gray` and the gradient functions produce `float32`
  arrays;
- functions that draw on or threshold a grayscale image (`draw_lines`,
  `detect_lines`, `adaptive_threshold`) take a single-channel array,
  `draw_lines` an 8-bit one.

Functions return new arrays and leave their inputs unchanged. Invalid input
(wrong shapes, empty histograms, out-of-range elements) raises `ValueError`
or `IndexError`.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Modules

| Module | Contents |
| --- | --- |
| `visionlab.basics` | `add`, `fibonacci_recursive`, `fibonacci_fast`, `solve_linear`, `solve_square`, `sum_until_zero` |
| `visionlab.grid` | `Board` (mark cells, `render`), `Outcome`, `format_grid` |
| `visionlab.disjoint_set` | `DisjointSet` with union by rank and set sizes |
| `visionlab.pixels` | Recolouring, inversion, compositing on backgrounds, nearest-neighbour resize, green screen, background subtraction |
| `visionlab.blur` | `gaussian_weight`, `gaussian_blur` |
| `visionlab.sobel` | `bgr_to_gray`, `sobel_dxy`, `dxy_to_dx`, `dxy_to_dy`, `gradient_length` |
| `visionlab.hough_space` | `build_hough_simple`, `build_hough` (with interpolation between adjacent angles), `to_radians`, `estimate_r` |
| `visionlab.hough` | `PolarLine`, `find_local_extremums`, `filter_strong_lines`, `draw_circles`, `draw_lines` |
| `visionlab.hog` | `build_hog`, `build_hog_from_gradients`, `total_strength`, `format_hog`, `distance` (8 direction bins) |
| `visionlab.symbols` | `adaptive_threshold`, `bounding_boxes`, `split_symbols`, `classify_symbol`, `read_text` |
| `visionlab.line` | `Line` (`y_at`, `distance_sq`, `generate_points`), `fit_line_two_points`, `fit_line_points`, `fit_line_ransac`, `generate_random_points` |
| `visionlab.cli` | `sobel_strength`, `normalize`, `blur_hough`, `detect_lines` and the `visionlab` command |

## Examples

Equations:

```python
from visionlab.basics import fibonacci_fast, solve_linear, solve_square

fibonacci_fast(10)            # 55
solve_linear(2.0, -4.0)       # 2.0
solve_linear(0.0, 4.0)        # sys.float_info.max: no solution
solve_square(0.0, 4.0, -6.0)  # [1.5]
```

Disjoint sets:

```python
from visionlab.disjoint_set import DisjointSet

sets = DisjointSet(5)
sets.union_sets(1, 2)
sets.union_sets(1, 3)
sets.get_set(3)        # 1
sets.count_sets()      # 3
sets.get_set_size(1)   # 3
```

The marking board reports `Outcome.ROW` or `Outcome.COLUMN` once a whole row
or column holds ones:

```python
from visionlab.grid import Board, Outcome

board = Board(2, 2)
board.mark(0, 0)   # Outcome.CONTINUE
board.mark(0, 1)   # Outcome.ROW
print(board.render())
```

Gradients and histograms:

```python
from visionlab.sobel import bgr_to_gray, sobel_dxy, gradient_length
from visionlab.hog import build_hog, distance, format_hog

gray = bgr_to_gray(image)                  # float32 luminance
strength = gradient_length(sobel_dxy(gray))

hog = build_hog(image)                     # image: uint8 BGR
print(format_hog(hog))                     # HoG[22.5=..%, 67.5=..%, ...]
distance(hog, build_hog(other_image))
```

Line detection on a grayscale image:

```python
from visionlab.cli import detect_lines

for line in detect_lines(gray_uint8, threshold_from_winner=0.5):
    print(line.theta, line.r, line.votes)
```

Reading symbols against reference images (any mapping from a label to an
8-bit BGR image):

```python
from visionlab.symbols import read_text

read_text(text_image, {"a": image_of_a, "b": image_of_b})
```

Fitting a line to points:

```python
from visionlab.line import Line, fit_line_points, fit_line_ransac

line = Line(0.5, -1, 5)
points = line.generate_points(10, 0.0, 20.0, 0.5)   # same points for the same n
best = fit_line_points(points)
robust = fit_line_ransac(points, iterations=100, radius=10.0)
```

Functions that use randomness (`draw_many_times`, `fill_black_with_noise`,
`draw_lines`, `fit_line_ransac`) take an optional `numpy.random.Generator`
so results can be reproduced.

## Command line

The `visionlab` command runs the Hough line detector on one or more image
files, prints the lines it finds and saves intermediate pictures:

```
visionlab photo.jpg other.png -o resultsData --threshold 0.5 --radius 5 --seed 1
visionlab --help
```

Options:

- `-o`, `--output-dir`: directory for the result images (default `resultsData`);
- `--threshold`: keep lines with at least this share of the strongest line's
  votes (default `0.5`);
- `--radius`: radius of the circles marking maxima in Hough space (default `5`);
- `--seed`: seed for the random line colours.

For an input `name.jpg` it writes `name_0.png` (the input),
`name_1_sobel_strength.png`, `name_2_hough_normalized.png`,
`name_3_hough_blurred.png`, `name_4_hough_circles.png` and `name_5_lines.png`.
The exit status is 0 on success and 1 if a file cannot be read or written.

## What it does not do

- Apart from the `visionlab` command, nothing reads or writes image files:
  all functions work on arrays you load yourself.
- There is no camera or video input and no display window; the keying
  functions in `visionlab.pixels` work on individual frames you pass in.
- There is no generator of reference letter images; `classify_symbol` and
  `read_text` need reference images supplied by the caller.