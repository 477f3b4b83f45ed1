[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "fieldpoly"
version = "0.1.0"
description = "Prime-field arithmetic, FFT evaluation domains and multilinear polynomials in pure Python"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "finite field",
    "fft",
    "ntt",
    "polynomial",
    "multilinear extension",
    "evaluation domain",
    "lagrange",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["fieldpoly"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
