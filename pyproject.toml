[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "graphnet"
version = "0.1.0"
description = "A small feed-forward neural network built on a directed graph of nodes and weighted connections"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "neural network",
    "graph",
    "backpropagation",
    "gradient descent",
    "machine learning",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Artificial Intelligence",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["graphnet"]

[tool.pytest.ini_options]
addopts = "-ra"
