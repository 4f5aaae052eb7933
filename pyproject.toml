[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ofmesh"
version = "0.1.0"
description = "Unstructured mesh data structures, cell quality measures and small numerical helpers"
requires-python = ">=3.10"
dependencies = ["numpy"]
keywords = ["mesh", "finite element", "mesh quality", "mesh smoothing", "quadrature", "level set"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["ofmesh"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
