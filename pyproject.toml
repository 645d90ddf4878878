[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "syncprims"
version = "0.1.0"
description = "Thread synchronisation primitives: atomic integers, spin locks, mutexes, condition variables, reader-writer locks, channels, shared handles and lazy cells"
requires-python = ">=3.10"
dependencies = []
keywords = ["threading", "concurrency", "mutex", "spinlock", "channel", "condvar", "rwlock", "atomic", "once"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["syncprims"]

[tool.pytest.ini_options]
addopts = "-ra"
