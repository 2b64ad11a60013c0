[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "visionlab"
version = "0.1.0"
description = "Classic image-processing building blocks on NumPy arrays: Sobel gradients, Gaussian blur, Hough line detection, gradient histograms, symbol splitting and line fitting."
requires-python = ">=3.10"
keywords = [
    "computer vision",
    "image processing",
    "sobel",
    "gaussian blur",
    "hough transform",
    "histogram of oriented gradients",
    "line fitting",
    "ransac",
    "disjoint set",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Education",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Image Processing",
    "Topic :: Education",
]
dependencies = [
    "numpy",
    "scipy",
    "pillow",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
visionlab = "visionlab.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["visionlab"]

[tool.hatch.build.targets.sdist]
include = [
    "visionlab",
    "tests",
    "pyproject.toml",
]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
