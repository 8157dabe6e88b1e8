[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "galactic-battle"
version = "1.0.0"
description = "A two-player, turn-based space battleship game for the terminal"
requires-python = ">=3.10"
dependencies = []
keywords = ["battleship", "game", "terminal", "board game", "two-player"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Board Games",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
galactic-battle = "galactic_battle.game:main"

[tool.hatch.build.targets.wheel]
packages = ["galactic_battle"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
