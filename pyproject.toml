[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "oijson"
version = "0.1.0"
description = "Lazy, validating JSON reader that scans documents in place without building a tree"
requires-python = ">=3.10"
dependencies = []
keywords = ["json", "parser", "lazy", "validator", "scanner"]
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
    "Topic :: File Formats :: JSON",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
oijson-print = "oijson.printer:main"

[tool.hatch.build.targets.wheel]
packages = ["oijson"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
strict = true
