[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "hyprlite"
version = "0.1.0"
description = "Configuration parsing, window bookkeeping and a control client for a tiling compositor"
requires-python = ">=3.10"
keywords = ["window-manager", "tiling", "compositor", "configuration", "wayland"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Desktop Environment :: Window Managers",
]
dependencies = []

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
hyprctl = "hyprlite.hyprctl:main"

[tool.hatch.build.targets.wheel]
packages = ["hyprlite"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
