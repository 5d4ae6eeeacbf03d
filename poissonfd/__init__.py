"""Finite-difference solvers for the Poisson equation in one and two dimensions:
dense, banded and sparse direct solves, Jacobi and Gauss-Seidel iterations,
and Jacobi over a simulated domain decomposition."""

__version__ = "0.1.0"

__all__ = [
    "banded1d",
    "banded2d",
    "cli",
    "decomposition1d",
    "decomposition2d",
    "display",
    "distributed2d",
    "linalg",
    "problem1d",
    "problem2d",
    "results",
    "sparse2d",
]