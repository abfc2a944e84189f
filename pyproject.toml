[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cxkit"
version = "0.1.0"
description = "Containers, a variant value type, a timer, a thread pool and an event tracer"
requires-python = ">=3.10"
dependencies = []
keywords = ["containers", "hashmap", "queue", "ring buffer", "variant", "timer", "thread pool", "tracing"]
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
    "Topic :: Software Development :: Libraries",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["cxkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
