[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "picbattle"
version = "1.0.0"
description = "A terminal rock-paper-scissors battle game with fighters, passives, AI opponents and a gauntlet mode"
requires-python = ">=3.10"
dependencies = []
keywords = ["game", "rock-paper-scissors", "terminal", "turn-based", "ai"]
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
    "Topic :: Games/Entertainment :: Turn Based Strategy",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
picbattle = "picbattle.menu:main"

[tool.hatch.build.targets.wheel]
packages = ["picbattle"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
