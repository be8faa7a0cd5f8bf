[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "graphplot"
version = "0.1.0"
description = "Interactive function plotter with pan, zoom and crosshair, plus an expression evaluation benchmark"
requires-python = ">=3.10"
keywords = ["plot", "graph", "expression", "parser", "pygame", "benchmark"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: X11 Applications",
    "Intended Audience :: Education",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Visualization",
    "Topic :: Scientific/Engineering :: Mathematics",
]
dependencies = [
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
graphplot = "graphplot.app:main"
graphplot-benchmark = "graphplot.benchmark:main"

[tool.hatch.build.targets.wheel]
packages = ["graphplot"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
