[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "abundantis"
version = "0.1.0"
description = "Building blocks for environment variable management: configuration, errors, path and resolution caches, dependency graphs and events"
requires-python = ">=3.10"
dependencies = []
keywords = ["env", "dotenv", "configuration", "environment", "cache", "events"]
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
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest", "pytest-asyncio"]

[tool.hatch.build.targets.wheel]
packages = ["abundantis"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
