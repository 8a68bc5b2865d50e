[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "termbars"
version = "0.1.0"
description = "Decorators, size units, moving averages and width synchronisation for terminal progress bars"
requires-python = ">=3.10"
keywords = ["progress", "progress-bar", "terminal", "decorators", "eta", "speed", "units"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Terminals",
    "Topic :: Software Development :: Libraries :: Python Modules",
]
dependencies = [
    "wcwidth",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["termbars"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
