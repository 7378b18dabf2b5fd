[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "retrovfs"
version = "0.1.0"
description = "Virtual file system layer with file, memory and transcoding streams plus byte-order helpers"
requires-python = ">=3.10"
dependencies = []
keywords = ["vfs", "filesystem", "streams", "endianness", "memory-stream", "crc32"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Filesystems",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["retrovfs"]

[tool.pytest.ini_options]
addopts = "-ra"
