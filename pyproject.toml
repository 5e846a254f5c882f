[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "textfield"
version = "1.0.0"
description = "Cursor, selection and undo logic for single- and multi-line text fields"
requires-python = ">=3.10"
dependencies = []
keywords = ["text", "editor", "widget", "undo", "cursor", "selection"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Software Development :: User Interfaces",
    "Topic :: Software Development :: Widget Sets",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["textfield"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
