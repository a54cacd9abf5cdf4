[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tlib2d"
version = "0.1.0"
description = "Small 2D game toolkit: A* grid pathfinding, RNG, bounded resources, state stacks, draw-command batching and a Pong demo"
requires-python = ">=3.10"
dependencies = [
    "pygame",
    "pillow",
]
keywords = ["game", "2d", "pathfinding", "astar", "sprite-batching", "pong"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Games/Entertainment",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
tlib2d-pong = "tlib2d.pong:main"

[tool.hatch.build.targets.wheel]
packages = ["tlib2d"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
