[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mimishell"
version = "0.1.0"
description = "A small interactive command shell with pipes, redirections, quoting and variable expansion"
requires-python = ">=3.10"
dependencies = []
keywords = ["shell", "command-line", "interpreter", "pipes", "redirection"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: System Shells",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
mimishell = "mimishell.shell:main"

[tool.hatch.build.targets.wheel]
packages = ["mimishell"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
