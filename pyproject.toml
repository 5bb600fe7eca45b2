[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "hebrasync"
version = "0.1.0"
description = "FIFO semaphores, Hoare monitors and small multithreading demonstrations"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "concurrency",
    "threads",
    "semaphore",
    "monitor",
    "hoare",
    "producer-consumer",
    "fifo",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Topic :: Education",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
hebrasync-basics = "hebrasync.basics:main"
hebrasync-integral = "hebrasync.integral:main"
hebrasync-counters = "hebrasync.counters:main"
hebrasync-prodcons = "hebrasync.prodcons:main"

[tool.hatch.build.targets.wheel]
packages = ["hebrasync"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
