[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "neoedit"
version = "0.1.0"
description = "Non-destructive audio edit records: hashed edit graphs, git-like version history and diffs"
requires-python = ">=3.10"
dependencies = []
keywords = ["audio", "editing", "non-destructive", "stems", "version-history", "blake3"]
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
    "Topic :: Multimedia :: Sound/Audio :: Editors",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["neoedit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
