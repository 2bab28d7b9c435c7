[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gridframe"
version = "0.1.0"
description = "Column-oriented data frames with filtering, interpolation, CSV/JSON Lines export and time-series forecasting."
requires-python = ">=3.10"
dependencies = []
keywords = [
    "dataframe",
    "series",
    "interpolation",
    "forecasting",
    "holt-winters",
    "exponential-smoothing",
    "csv",
    "jsonl",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Information Analysis",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["gridframe"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
