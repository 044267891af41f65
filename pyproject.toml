[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "minialloc"
version = "0.1.0"
description = "A first-fit memory allocator over a fixed-size simulated heap, with a benchmark and a correctness checker"
requires-python = ">=3.10"
dependencies = []
keywords = ["allocator", "malloc", "heap", "memory", "first-fit"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
minialloc-grind = "minialloc.grind:main"
minialloc-memtest = "minialloc.memtest:main"

[tool.hatch.build.targets.wheel]
packages = ["minialloc"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
strict = true
