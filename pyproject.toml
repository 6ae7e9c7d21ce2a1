[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "termsurvey"
version = "0.1.0"
description = "Terminal prompts (confirm, input, password, multiline, editor, multi-select) and helpers for storing their answers."
requires-python = ">=3.10"
keywords = ["prompt", "terminal", "cli", "interactive", "survey", "questions"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: User Interfaces",
]
dependencies = [
    "jinja2",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["termsurvey"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
