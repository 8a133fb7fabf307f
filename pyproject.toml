[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sectorfs"
version = "0.1.0"
description = "A small in-memory sector-based file system with block devices, MBR partition scanning and simple PC device models"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "filesystem",
    "block-device",
    "inode",
    "partition-table",
    "mbr",
    "teaching",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Education",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Filesystems",
    "Topic :: Education",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
sectorfs-insult = "sectorfs.insult:main"

[tool.hatch.build.targets.wheel]
packages = ["sectorfs"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
