[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "linopt"
version = "0.4.0"
description = "Simulation of bosonic Fock states propagating through linear-optical unitary networks."
requires-python = ">=3.10"
dependencies = [
    "numpy",
    "scipy",
]
keywords = [
    "linear optics",
    "quantum optics",
    "boson sampling",
    "permanent",
    "fock state",
    "unitary matrix",
    "interferometer",
    "clements decomposition",
]
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
    "Topic :: Scientific/Engineering :: Physics",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
linopt-benchmark = "linopt.benchmark:main"

[tool.hatch.build.targets.wheel]
packages = ["linopt"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
ignore_missing_imports = true
