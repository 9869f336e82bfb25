[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cavegeno"
version = "0.1.0"
description = "Genotype enumeration, ignored-region resolution and FASTA index helpers for tumour/normal variant calling"
requires-python = ">=3.10"
dependencies = []
keywords = ["genomics", "genotype", "variant-calling", "fasta", "fai", "bed", "copy-number"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Bio-Informatics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["cavegeno"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
