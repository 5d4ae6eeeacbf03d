[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "poissonfd"
version = "0.1.0"
description = "Finite-difference solvers for the Poisson equation on the unit interval and unit square"
requires-python = ">=3.10"
keywords = [
    "poisson",
    "finite-differences",
    "jacobi",
    "gauss-seidel",
    "cholesky",
    "sparse",
    "domain-decomposition",
    "numerical-analysis",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
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
poissonfd = "poissonfd.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["poissonfd"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
