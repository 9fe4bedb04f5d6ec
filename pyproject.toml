[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "meshrel"
version = "0.1.0"
description = "Sparse one-to-many and many-to-many relations for mesh topology, with EnSight geometry output"
requires-python = ">=3.10"
dependencies = []
keywords = ["mesh", "topology", "sparse", "relation", "finite elements", "ensight", "graph"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
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
packages = ["meshrel"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
