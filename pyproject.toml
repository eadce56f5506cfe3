[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "syswrap"
version = "0.1.0"
description = "Tracking wrappers for files, memory blocks, mappings and child processes on POSIX systems"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "process",
    "waitpid",
    "zombie",
    "process-pool",
    "memory-pool",
    "garbage-collection",
    "leak-detection",
    "mmap",
    "monitoring",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Monitoring",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
syswrap-monitor = "syswrap.monitor:main"

[tool.hatch.build.targets.wheel]
packages = ["syswrap"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
