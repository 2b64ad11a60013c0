"""Image-processing building blocks on NumPy arrays: pixel operations, blur,
Sobel gradients, Hough line detection, gradient histograms, symbol splitting,
line fitting, and a few small algorithmic helpers."""

__version__ = "0.1.0"