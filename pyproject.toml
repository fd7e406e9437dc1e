[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "minihell"
version = "0.1.0"
description = "Building blocks of a small shell: environment lists, builtins, redirections and command execution"
requires-python = ">=3.10"
dependencies = []
keywords = ["shell", "builtins", "pipeline", "redirection", "environment", "heredoc"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Shells",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["minihell"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
