[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cascarishell"
version = "0.1.0"
description = "Line parsing, variable expansion and built-in commands for a small POSIX-style shell"
requires-python = ">=3.10"
dependencies = []
keywords = ["shell", "lexer", "tokenizer", "pipes", "redirection", "builtins"]
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
packages = ["cascarishell"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
