[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sysyback"
version = "0.1.0"
description = "Compiler back-end building blocks: three-address IR, control flow graphs, liveness analysis, dead code removal and ARM immediate helpers"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "compiler",
    "backend",
    "arm",
    "liveness",
    "control-flow-graph",
    "three-address-code",
    "enum",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Compilers",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["sysyback"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
