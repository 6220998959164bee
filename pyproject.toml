[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "robotrack"
version = "0.1.0"
description = "Turn-based console simulator of four robots crossing a square track with obstacles"
requires-python = ">=3.10"
dependencies = []
keywords = ["robot", "simulation", "teaching", "grid", "algorithms"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Education",
    "Topic :: Games/Entertainment :: Simulation",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
robotrack = "robotrack.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["robotrack"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
