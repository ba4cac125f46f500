[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mustcc"
version = "0.1.0"
description = "Front-end stages of a compiler for the Must language: diagnostics, syntax trees and module-tree construction with import resolution"
requires-python = ">=3.10"
dependencies = []
keywords = ["compiler", "must", "ast", "name-resolution", "diagnostics"]
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
    "Topic :: Software Development :: Compilers",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["mustcc"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
