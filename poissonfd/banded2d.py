"""Cholesky solve of the 2D Poisson system stored by bands.

The five-point matrix of the ``(n - 1)^2`` interior unknowns has a lower
bandwidth of ``n - 1``. Its Cholesky factor ``L`` therefore has ``n``
non-zero bands below and on the diagonal. Band ``d`` holds the entries
``L[j + d, j]`` for ``j`` in ``0 .. size - d - 1``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from poissonfd.linalg import extract_interior, insert_interior


@dataclass
class BandMatrix:
    """Lower band matrix of size ``(n - 1)^2`` with ``n`` stored bands."""

    n: int
    diags: list

    def __post_init__(self) -> None:
        if self.n < 2:
            raise ValueError(f"n must be at least 2, got {self.n}")
        self.diags = [np.asarray(band, dtype=float) for band in self.diags]
        if len(self.diags) != self.n:
            raise ValueError(f"expected {self.n} bands, got {len(self.diags)}")
        for d, band in enumerate(self.diags):
            expected = (self.size - d,)
            if band.shape != expected:
                raise ValueError(
                    f"band {d} must have {expected[0]} values, got shape {band.shape}"
                )

    @property
    def size(self) -> int:
        """Number of rows and columns."""
        return (self.n - 1) ** 2

    def to_dense(self) -> np.ndarray:
        """Full square matrix."""
        matrix = np.zeros((self.size, self.size))
        for d, band in enumerate(self.diags):
            if band.size:
                matrix += np.diag(band, -d)
        return matrix

    def to_dense_transposed(self) -> np.ndarray:
        """Full square matrix of the transpose."""
        return self.to_dense().T.copy()

    def describe(self) -> str:
        """Compact text form: the size followed by every band on its own line."""
        lines = [f"N = {self.n}\n"]
        for d, band in enumerate(self.diags):
            values = "".join(f"{value:10.6f} " for value in band)
            lines.append(f"diag[{d}] = {values}\n")
        return "".join(lines)

    def render(self) -> str:
        """Full matrix, one row per line, followed by an empty line."""
        rows = (
            "".join(f"{value:10.6f} " for value in row) + "\n" for row in self.to_dense()
        )
        return "".join(rows) + "\n"


def _check_n(n) -> int:
    if n < 2:
        raise ValueError(f"n must be at least 2, got {n}")
    return int(n)


def band_value(i, j, n) -> float:
    """Entry ``A[i, j]`` of the lower triangle of the five-point matrix.

    Entries above the diagonal are reported as zero.
    """
    n = _check_n(n)
    h_squared = 1.0 / n**2
    if i == j:
        return 4.0 / h_squared
    if i == j + 1 and j % (n - 1) != n - 2:
        return -1.0 / h_squared
    if i == j + n - 1:
        return -1.0 / h_squared
    return 0.0


def cholesky_factor(n) -> BandMatrix:
    """Banded Cholesky factor of the five-point matrix for ``n`` intervals."""
    n = _check_n(n)
    size = (n - 1) ** 2
    h_squared = 1.0 / n**2
    alpha = 4.0 / h_squared
    diags = [np.zeros(size - d) for d in range(n)]

    for j in range(size):
        for d in range(min(n, size - j)):
            i = d + j
            first = max(0, j - n + d + 1)
            if d == 0:
                value = alpha - sum(diags[i - k][k] ** 2 for k in range(first, i))
                diags[0][j] = math.sqrt(value)
            else:
                value = band_value(i, j, n) - sum(
                    diags[i - k][k] * diags[j - k][k] for k in range(first, j)
                )
                diags[d][j] = value / diags[0][j]
    return BandMatrix(n, diags)


def _check_length(values, factor: BandMatrix, name: str) -> np.ndarray:
    array = np.asarray(values, dtype=float)
    if array.shape != (factor.size,):
        raise ValueError(f"{name} must have {factor.size} values, got shape {array.shape}")
    return array


def forward_substitution(factor: BandMatrix, f) -> np.ndarray:
    """Solve ``L y = f``."""
    f = _check_length(f, factor, "f")
    n = factor.n
    y = np.zeros(factor.size)
    for i, value in enumerate(f):
        total = value - sum(
            factor.diags[i - k][k] * y[k] for k in range(max(0, i - n + 1), i)
        )
        y[i] = total / factor.diags[0][i]
    return y


def backward_substitution(factor: BandMatrix, y) -> np.ndarray:
    """Solve ``L^T u = y``."""
    y = _check_length(y, factor, "y")
    n = factor.n
    size = factor.size
    u = np.zeros(size)
    for i in reversed(range(size)):
        total = y[i] - sum(
            factor.diags[k - i][i] * u[k] for k in range(i + 1, min(i + n, size))
        )
        u[i] = total / factor.diags[0][i]
    return u


def solve_cholesky(f, n) -> np.ndarray:
    """Solve the Poisson system for a flattened source on the whole grid.

    Returns the flattened ``(n + 1)^2`` grid values with zero boundary.
    """
    factor = cholesky_factor(n)
    nb_pt = factor.n + 1
    source = np.asarray(f, dtype=float)
    if source.shape != (nb_pt * nb_pt,):
        raise ValueError(f"source must have {nb_pt * nb_pt} values, got shape {source.shape}")
    y = forward_substitution(factor, extract_interior(source, nb_pt))
    interior = backward_substitution(factor, y)
    return insert_interior(interior, np.zeros(nb_pt * nb_pt), nb_pt)