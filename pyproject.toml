[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "muchsalsa"
version = "0.1.0"
description = "Building blocks for hybrid nanopore/illumina read assembly: BLAST file access, sequence indexing, id registries and thread-pool helpers"
requires-python = ">=3.10"
dependencies = []
keywords = ["bioinformatics", "assembly", "nanopore", "illumina", "blast", "fasta", "fastq"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Bio-Informatics",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["muchsalsa"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
