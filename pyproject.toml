[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cubecast"
version = "0.1.0"
description = "A small grid-based ray-casting renderer with a minimal window and image toolkit"
requires-python = ">=3.10"
keywords = ["raycasting", "raycaster", "game", "xpm", "pygame", "dda"]
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
    "Topic :: Games/Entertainment :: First Person Shooters",
    "Topic :: Multimedia :: Graphics",
]
dependencies = [
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
cubecast = "cubecast.app:main"

[tool.hatch.build.targets.wheel]
packages = ["cubecast"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
