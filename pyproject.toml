[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "packtools"
version = "0.1.0"
description = "Grouped command-line flag sets, a terminal spinner, filesystem helpers and template utilities for pack tooling"
requires-python = ">=3.10"
dependencies = []
keywords = ["flags", "cli", "spinner", "templates", "filesystem"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["packtools"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
