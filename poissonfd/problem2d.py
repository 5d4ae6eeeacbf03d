"""Two-dimensional Poisson problem ``-Δu = f`` on the unit square with zero boundary values.

The grid has ``(n + 1) x (n + 1)`` points spaced by ``h = 1 / n``. Grid
values are stored flattened with the point ``(i, j)`` (``i`` along x, ``j``
along y) at index ``j * (n + 1) + i``. Interior unknowns are numbered the same
way on the ``(n - 1) x (n - 1)`` interior grid.
"""

from __future__ import annotations

import math

import numpy as np

from poissonfd.linalg import extract_interior, insert_interior
from poissonfd.problem1d import TOLERANCE, JacobiResult

# Which neighbours (below, left, right, above) an interior unknown has,
# for each kind returned by ``boundary_kind``.
_NEIGHBOURS = {
    0: (True, True, True, True),
    -1: (True, False, True, True),
    -2: (True, True, True, False),
    -3: (True, True, False, True),
    -4: (False, True, True, True),
    1: (False, False, True, True),
    2: (True, False, True, False),
    3: (True, True, False, False),
    4: (False, True, False, True),
}


def _check_n(n, minimum=1) -> int:
    if n < minimum:
        raise ValueError(f"n must be at least {minimum}, got {n}")
    return int(n)


def _check_grid(values, nb_pt: int, name: str) -> np.ndarray:
    array = np.asarray(values, dtype=float)
    if array.shape != (nb_pt * nb_pt,):
        raise ValueError(f"{name} must have {nb_pt * nb_pt} values, got shape {array.shape}")
    return array


def source(n) -> np.ndarray:
    """Source ``f = sin(2 pi x) sin(2 pi y)`` on the flattened grid."""
    n = _check_n(n)
    h = 1.0 / n
    line = np.sin(2 * math.pi * np.arange(n + 1) * h)
    return np.outer(line, line).ravel()


def exact(x, y) -> float:
    """Exact solution ``sin(2 pi x) sin(2 pi y) / (8 pi^2)``."""
    return 1.0 / (8 * math.pi**2) * math.sin(2 * math.pi * x) * math.sin(2 * math.pi * y)


def exact_solution(function, n) -> np.ndarray:
    """Evaluate ``function(x, y)`` at every grid point, flattened."""
    n = _check_n(n)
    h = 1.0 / n
    points = range(n + 1)
    return np.array(
        [[function(i * h, j * h) for i in points] for j in points], dtype=float
    ).ravel()


def boundary_kind(x, y, n) -> int:
    """Classify the interior unknown at ``(x, y)`` of the ``(n - 1)``-wide interior grid.

    Returns 0 inside, -1 left edge, -2 top edge, -3 right edge, -4 bottom
    edge, and 1, 2, 3, 4 for the bottom-left, top-left, top-right and
    bottom-right corners.
    """
    last = n - 2
    if x == 0:
        if y == 0:
            return 1
        if y == last:
            return 2
        return -1
    if y == 0:
        return 4 if x == last else -4
    if x == last:
        return 3 if y == last else -3
    if y == last:
        return -2
    return 0


def _column_entries(column: int, n: int) -> list[tuple[int, float]]:
    """Rows and values of the non-zero entries of one matrix column, rows ascending."""
    width = n - 1
    h_squared = 1.0 / n**2
    alpha = 4.0 / h_squared
    beta = -1.0 / h_squared
    below, left, right, above = _NEIGHBOURS[boundary_kind(column % width, column // width, n)]
    entries = []
    if below:
        entries.append((column - width, beta))
    if left:
        entries.append((column - 1, beta))
    entries.append((column, alpha))
    if right:
        entries.append((column + 1, beta))
    if above:
        entries.append((column + width, beta))
    return entries


def build_matrix(n) -> np.ndarray:
    """Dense five-point Laplacian of the interior unknowns, scaled by ``1 / h^2``."""
    n = _check_n(n, minimum=3)
    size = (n - 1) ** 2
    matrix = np.zeros((size, size))
    for column in range(size):
        for row, value in _column_entries(column, n):
            matrix[row, column] = value
    return matrix


def _gauss_jordan(matrix, rhs) -> np.ndarray:
    work = np.array(matrix, dtype=float)
    rhs = np.array(rhs, dtype=float)
    size = rhs.shape[0]
    for j in range(size):
        factors = work[:, j] / work[j, j]
        factors[j] = 0.0
        work -= np.outer(factors, work[j])
        rhs -= factors * rhs[j]

    solution = np.zeros(size)
    for i in reversed(range(size)):
        solution[i] = (rhs[i] - work[i, i + 1 :] @ solution[i + 1 :]) / work[i, i]
    return solution


def solve_gauss(matrix, f, n) -> np.ndarray:
    """Solve the interior system by Gauss-Jordan elimination without pivoting.

    ``f`` is the flattened source on the whole grid; the flattened solution
    with zero boundary values is returned. ``matrix`` is not modified.
    """
    n = _check_n(n, minimum=3)
    nb_pt = n + 1
    size = (n - 1) ** 2
    matrix = np.asarray(matrix, dtype=float)
    if matrix.shape != (size, size):
        raise ValueError(f"matrix must be {size} x {size}, got shape {matrix.shape}")
    f = _check_grid(f, nb_pt, "source")
    interior = _gauss_jordan(matrix, extract_interior(f, nb_pt))
    return insert_interior(interior, np.zeros(nb_pt * nb_pt), nb_pt)


def _relative_change(current: np.ndarray, previous: np.ndarray) -> float:
    numerator = float(np.max(np.abs(current - previous)))
    denominator = float(np.max(np.abs(previous)))
    if denominator == 0.0:
        return math.inf if numerator > 0.0 else math.nan
    return numerator / denominator


def solve_jacobi(f, n) -> JacobiResult:
    """Jacobi iteration from zero until the relative sup-norm change is at most 1e-10.

    A change that cannot be measured (zero over zero) also stops the iteration.
    The solution is returned flattened.
    """
    n = _check_n(n)
    nb_pt = n + 1
    f = _check_grid(f, nb_pt, "source").reshape(nb_pt, nb_pt)
    h_squared = 1.0 / n**2
    previous = np.zeros((nb_pt, nb_pt))
    current = np.zeros((nb_pt, nb_pt))
    iterations = 0
    change = math.inf
    while change > TOLERANCE:
        current[1:-1, 1:-1] = 0.25 * (
            previous[1:-1, :-2]
            + previous[:-2, 1:-1]
            + previous[1:-1, 2:]
            + previous[2:, 1:-1]
            + h_squared * f[1:-1, 1:-1]
        )
        change = _relative_change(current, previous)
        previous, current = current, previous
        iterations += 1
    return JacobiResult(previous.ravel().copy(), iterations)