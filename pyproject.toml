[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cronat"
version = "0.1.0"
description = "Manage cron and at jobs with a local task log kept in sync with the system"
requires-python = ">=3.10"
dependencies = []
keywords = ["cron", "crontab", "at", "atq", "scheduler", "jobs"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Systems Administration",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
cronat = "cronat.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["cronat"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
