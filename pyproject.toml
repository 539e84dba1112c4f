[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ducklingdb"
version = "0.1.0"
description = "A small page-oriented storage engine: disk manager, buffer pool, slotted pages and heap files"
requires-python = ">=3.10"
dependencies = []
keywords = ["database", "storage engine", "buffer pool", "slotted page", "heap file"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Database :: Database Engines/Servers",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
ducklingdb = "ducklingdb.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["ducklingdb"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
