[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "bpodio"
version = "0.1.0"
description = "Little-endian serial messaging, relay framing, AD5592R I/O chip control and SAM3X timer clock selection in pure Python"
requires-python = ">=3.10"
dependencies = []
keywords = ["serial", "protocol", "framing", "ad5592r", "spi", "timer", "embedded"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Software Development :: Embedded Systems",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["bpodio"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
