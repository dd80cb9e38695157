[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "wordclock"
version = "0.1.0"
description = "LED matrix word clock toolkit: colour helpers, NTP time keeping with summer time, UDP logging, Base64 and Pong, Snake and Tetris games"
requires-python = ">=3.10"
dependencies = []
keywords = ["wordclock", "led-matrix", "ntp", "tetris", "snake", "pong", "games"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment",
    "Topic :: System :: Networking :: Time Synchronization",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["wordclock"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
