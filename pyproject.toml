[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "saddlepoint"
version = "0.1.0"
description = "Assemble and solve block saddle point systems with a Schur complement factorisation"
requires-python = ">=3.10"
keywords = [
    "saddle point",
    "schur complement",
    "poisson",
    "stokes",
    "sparse",
    "linear algebra",
    "petsc binary",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Mathematics",
]
dependencies = [
    "numpy",
    "scipy",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
saddlepoint = "saddlepoint.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["saddlepoint"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
ignore_missing_imports = true
