[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "exptran"
version = "0.1.0"
description = "Face tensor model, landmark marking and camera geometry for facial expression transfer"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = ["face", "expression transfer", "tensor", "svd", "multilinear model"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Image Processing",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["exptran"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
