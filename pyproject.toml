[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "flameshot"
version = "0.1.0"
description = "Screenshot tool core: command-line parsing, capture requests, screen lookup, shortcuts and settings logic"
requires-python = ">=3.10"
dependencies = []
keywords = ["screenshot", "screen capture", "command line", "settings"]
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
    "Topic :: Multimedia :: Graphics :: Capture :: Screen Capture",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["flameshot"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
