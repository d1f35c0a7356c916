[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ltephy"
version = "0.1.0"
description = "LTE downlink physical layer building blocks: slot geometry, PSS search, convolutional and turbo coding, and rate matching"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "lte",
    "phy",
    "turbo code",
    "viterbi",
    "convolutional code",
    "rate matching",
    "synchronization",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Telecommunications Industry",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Communications",
    "Topic :: Scientific/Engineering",
]

[project.optional-dependencies]
test = [
    "pytest",
    "hypothesis",
]

[tool.hatch.build.targets.wheel]
packages = ["ltephy"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.mypy]
python_version = "3.10"
