[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mpptools"
version = "0.1.0"
description = "Frame formats, test-pattern generation, raw image I/O and checksum helpers for raw video frames"
requires-python = ">=3.10"
dependencies = []
keywords = ["video", "yuv", "rgb", "frame", "raw", "checksum", "test-pattern"]
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
    "Topic :: Multimedia :: Video",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["mpptools"]

[tool.pytest.ini_options]
addopts = "-ra"
