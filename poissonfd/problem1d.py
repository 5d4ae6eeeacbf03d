"""One-dimensional Poisson problem ``-u'' = f`` on [0, 1] with ``u(0) = u(1) = 0``.

The grid has ``n + 1`` points spaced by ``h = 1 / n``; boundary values are
held at zero.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

TOLERANCE = 1e-10


@dataclass(frozen=True)
class JacobiResult:
    """Solution of an iterative solve and the number of sweeps it took."""

    u: np.ndarray
    iterations: int


def _check_n(n, minimum=1) -> int:
    if n < minimum:
        raise ValueError(f"n must be at least {minimum}, got {n}")
    return int(n)


def _grid(n) -> np.ndarray:
    return np.arange(n + 1) * (1.0 / n)


def _check_source(f, n) -> np.ndarray:
    values = np.asarray(f, dtype=float)
    if values.shape != (n + 1,):
        raise ValueError(f"source must have {n + 1} values, got shape {values.shape}")
    return values


def constant_source(n) -> np.ndarray:
    """Source ``f = 1`` on the grid."""
    n = _check_n(n)
    return np.ones(n + 1)


def constant_exact(x) -> float:
    """Exact solution for the constant source: ``x (1 - x) / 2``."""
    return 0.5 * x * (1 - x)


def sine_source(n) -> np.ndarray:
    """Source ``f = pi^2 sin(pi x)`` on the grid."""
    n = _check_n(n)
    return math.pi**2 * np.sin(math.pi * _grid(n))


def sine_exact(x) -> float:
    """Exact solution for the sine source: ``sin(pi x)``."""
    return math.sin(math.pi * x)


def exact_solution(function, n) -> np.ndarray:
    """Evaluate ``function`` at every grid point."""
    n = _check_n(n)
    return np.array([function(x) for x in _grid(n)], dtype=float)


def build_matrix(n) -> np.ndarray:
    """Dense tridiagonal matrix of the interior unknowns, scaled by ``1 / h^2``."""
    n = _check_n(n, minimum=3)
    size = n - 1
    h_squared = 1.0 / n**2
    alpha = 2.0 / h_squared
    beta = -1.0 / h_squared
    off = np.full(size - 1, beta)
    return np.diag(np.full(size, alpha)) + np.diag(off, 1) + np.diag(off, -1)


def solve_gauss(matrix, f) -> np.ndarray:
    """Solve the interior system by Gauss-Jordan elimination without pivoting.

    ``f`` holds the source on the whole grid; the returned solution has the
    same length with zero boundary values. ``matrix`` is not modified.
    """
    work = np.array(matrix, dtype=float)
    size = work.shape[0]
    if work.shape != (size, size):
        raise ValueError("matrix must be square")
    rhs = np.array(f, dtype=float)
    if rhs.shape != (size + 2,):
        raise ValueError(f"source must have {size + 2} values, got shape {rhs.shape}")
    rhs = rhs[1:-1].copy()

    for j in range(size):
        factors = work[:, j] / work[j, j]
        factors[j] = 0.0
        work -= np.outer(factors, work[j])
        rhs -= factors * rhs[j]

    interior = np.zeros(size)
    for i in reversed(range(size)):
        interior[i] = (rhs[i] - work[i, i + 1 :] @ interior[i + 1 :]) / work[i, i]

    u = np.zeros(size + 2)
    u[1:-1] = interior
    return u


def _relative_change(current: np.ndarray, previous: np.ndarray) -> float:
    numerator = float(np.max(np.abs(current[1:] - previous[1:])))
    denominator = float(np.max(np.abs(previous[1:])))
    if denominator == 0.0:
        return math.inf if numerator > 0.0 else math.nan
    return numerator / denominator


def solve_jacobi(f, n) -> JacobiResult:
    """Jacobi iteration from zero until the relative sup-norm change is at most 1e-10.

    A change that cannot be measured (zero over zero) also stops the iteration.
    """
    n = _check_n(n)
    f = _check_source(f, n)
    h_squared = 1.0 / n**2
    previous = np.zeros(n + 1)
    current = np.zeros(n + 1)
    iterations = 0
    change = math.inf
    while change > TOLERANCE:
        current[1:-1] = 0.5 * (previous[:-2] + previous[2:] + h_squared * f[1:-1])
        change = _relative_change(current, previous)
        previous, current = current, previous
        iterations += 1
    return JacobiResult(previous.copy(), iterations)


def solve_gauss_seidel(f, n, iterations) -> np.ndarray:
    """Run a fixed number of Gauss-Seidel sweeps from zero."""
    n = _check_n(n)
    f = _check_source(f, n)
    if iterations < 0:
        raise ValueError(f"iterations must be non-negative, got {iterations}")
    h_squared = 1.0 / n**2
    previous = np.zeros(n + 1)
    current = np.zeros(n + 1)
    for _ in range(iterations):
        for i in range(1, n):
            current[i] = 0.5 * (current[i - 1] + previous[i + 1] + h_squared * f[i])
        previous, current = current, previous
    return previous.copy()