[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cdcchunk"
version = "0.1.0"
description = "Content-defined chunking algorithms (UltraCDC, FastCDC, FNV-1a, Rabin-Karp), rolling hashes and small helpers for deduplication"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "chunking",
    "content-defined-chunking",
    "cdc",
    "deduplication",
    "fastcdc",
    "ultracdc",
    "rabin-karp",
    "rolling-hash",
    "gear-hash",
    "buzhash",
]
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
    "Topic :: System :: Archiving",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = [
    "pytest",
    "hypothesis",
]

[tool.hatch.build.targets.wheel]
packages = ["cdcchunk"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
