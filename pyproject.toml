[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "jellycube"
version = "0.1.0"
description = "Mass-spring soft-body simulation of a jelly cube steered by a rigid control cube"
requires-python = ">=3.10"
keywords = ["physics", "simulation", "mass-spring", "soft-body", "runge-kutta", "bezier"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Physics",
]
dependencies = [
    "numpy",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["jellycube"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
