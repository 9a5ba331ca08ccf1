[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "fonttables"
version = "0.1.0"
description = "Read and write OpenType font tables and variation data structures"
requires-python = ">=3.10"
keywords = ["opentype", "fonts", "truetype", "variable fonts", "gvar", "iup"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Text Processing :: Fonts",
]
dependencies = []

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["fonttables"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
