[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "lazysh"
version = "0.1.0"
description = "Generate lazy-loading wrappers for slow shell init commands"
requires-python = ">=3.10"
dependencies = []
keywords = ["shell", "bash", "zsh", "fish", "startup", "lazy-loading"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
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
lazysh = "lazysh.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["lazysh"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
