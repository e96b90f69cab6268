[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pointerkeys"
version = "1.3.5"
description = "Modal, keyboard-driven pointer control: configuration, key matching, movement and hint, grid and normal modes over a pluggable display backend."
requires-python = ">=3.10"
dependencies = []
keywords = [
    "keyboard",
    "mouse",
    "pointer",
    "hints",
    "accessibility",
    "modal",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Adaptive Technologies",
    "Topic :: Desktop Environment :: Window Managers :: Applets",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["pointerkeys"]

[tool.hatch.build.targets.sdist]
include = ["pointerkeys", "tests", "README.md"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
