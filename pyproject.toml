[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cubismrig"
version = "0.1.0"
description = "Parameters, drawables, blink, breath and look effects, and view matrices for Cubism-style 2D models"
requires-python = ">=3.10"
dependencies = []
keywords = ["cubism", "2d", "animation", "rigging", "matrix", "blink", "breath"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["cubismrig"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
