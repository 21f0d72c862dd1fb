[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "edgeappsvc"
version = "0.1.0"
description = "Application service building blocks: custom configuration, event pipeline functions and service start-up."
requires-python = ">=3.10"
dependencies = []
keywords = ["edge", "iot", "pipeline", "events", "xml", "application-service"]
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
    "Topic :: Software Development :: Libraries :: Application Frameworks",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["edgeappsvc"]

[tool.hatch.build.targets.sdist]
include = ["edgeappsvc", "tests", "README.md", "pyproject.toml"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
