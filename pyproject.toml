[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "flownodes"
version = "0.1.0"
description = "A headless dataflow node-graph framework: models, ports, connections, scenes and data propagation."
requires-python = ">=3.10"
dependencies = []
keywords = ["dataflow", "node graph", "node editor", "visual programming", "flow"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Software Development :: Libraries :: Application Frameworks",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["flownodes"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
