"""Cholesky solve of the 1D Poisson system stored as two bands.

The matrix of the interior unknowns is tridiagonal and symmetric. Its
Cholesky factor ``L`` is lower bidiagonal, so only its diagonal (``n - 1``
values) and its sub-diagonal (``n - 2`` values) are kept.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np


@dataclass
class TwoBandMatrix:
    """Lower bidiagonal matrix of size ``n - 1``."""

    n: int
    diag: np.ndarray
    sub_diag: np.ndarray

    def __post_init__(self) -> None:
        self.diag = np.asarray(self.diag, dtype=float)
        self.sub_diag = np.asarray(self.sub_diag, dtype=float)
        size = self.n - 1
        if size < 1:
            raise ValueError(f"n must be at least 2, got {self.n}")
        if self.diag.shape != (size,):
            raise ValueError(f"diag must have {size} values, got shape {self.diag.shape}")
        if self.sub_diag.shape != (size - 1,):
            raise ValueError(
                f"sub_diag must have {size - 1} values, got shape {self.sub_diag.shape}"
            )

    @property
    def size(self) -> int:
        """Number of rows and columns."""
        return self.n - 1

    def to_dense(self) -> np.ndarray:
        """Full square matrix."""
        return np.diag(self.diag) + np.diag(self.sub_diag, -1)

    def to_dense_transposed(self) -> np.ndarray:
        """Full square matrix of the transpose."""
        return np.diag(self.diag) + np.diag(self.sub_diag, 1)

    def describe(self) -> str:
        """Compact text form: the size followed by both bands."""
        diag = "".join(f"{value:10.6f} " for value in self.diag)
        sub = "".join(f"{value:10.6f} " for value in self.sub_diag)
        return f"N = {self.n}\ndiag      ={diag}\nsub_diag  ={sub}\n"

    def render(self) -> str:
        """Full matrix, one row per line, followed by an empty line."""
        rows = (
            "".join(f"{value:10.6f} " for value in row) + "\n" for row in self.to_dense()
        )
        return "".join(rows) + "\n"


def cholesky_factor(n) -> TwoBandMatrix:
    """Cholesky factor of the tridiagonal matrix ``(2, -1) / h^2`` with ``h = 1 / n``."""
    if n < 2:
        raise ValueError(f"n must be at least 2, got {n}")
    n = int(n)
    size = n - 1
    h_squared = 1.0 / n**2
    alpha = 2.0 / h_squared
    beta = -1.0 / h_squared

    diag = []
    sub_diag = []
    previous_sub = 0.0
    for _ in range(size):
        current = np.sqrt(alpha - previous_sub**2)
        diag.append(current)
        previous_sub = beta / current
        sub_diag.append(previous_sub)
    return TwoBandMatrix(n, np.array(diag), np.array(sub_diag[: size - 1]))


def _check_length(values, factor: TwoBandMatrix, name: str) -> np.ndarray:
    array = np.asarray(values, dtype=float)
    if array.shape != (factor.size,):
        raise ValueError(f"{name} must have {factor.size} values, got shape {array.shape}")
    return array


def forward_substitution(factor: TwoBandMatrix, f) -> np.ndarray:
    """Solve ``L y = f``."""
    f = _check_length(f, factor, "f")
    result = []
    previous = 0.0
    couplings = np.concatenate(([0.0], factor.sub_diag))
    for value, diagonal, coupling in zip(f, factor.diag, couplings):
        previous = (value - coupling * previous) / diagonal
        result.append(previous)
    return np.array(result)


def backward_substitution(factor: TwoBandMatrix, y) -> np.ndarray:
    """Solve ``L^T u = y``."""
    y = _check_length(y, factor, "y")
    result = []
    following = 0.0
    couplings = np.concatenate((factor.sub_diag, [0.0]))
    for value, diagonal, coupling in zip(y[::-1], factor.diag[::-1], couplings[::-1]):
        following = (value - coupling * following) / diagonal
        result.append(following)
    return np.array(result[::-1])


def solve_cholesky(f, n) -> np.ndarray:
    """Solve the Poisson system for a source given on the whole grid.

    Returns the ``n + 1`` grid values, with zero at both ends.
    """
    factor = cholesky_factor(n)
    source = np.asarray(f, dtype=float)
    if source.shape != (factor.n + 1,):
        raise ValueError(f"source must have {factor.n + 1} values, got shape {source.shape}")
    y = forward_substitution(factor, source[1:-1])
    u = np.zeros(factor.n + 1)
    u[1:-1] = backward_substitution(factor, y)
    return u