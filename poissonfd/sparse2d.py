"""Sparse direct solve of the 2D Poisson system.

The five-point matrix is assembled in compressed sparse column form, with
rows ascending in every column, and solved by a sparse factorisation.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from scipy.sparse import csc_matrix
from scipy.sparse.linalg import spsolve

from poissonfd.linalg import extract_interior, insert_interior
from poissonfd.problem2d import _column_entries


@dataclass(frozen=True)
class CscMatrix:
    """Square matrix in compressed sparse column form."""

    size: int
    offsets: np.ndarray
    rows: np.ndarray
    values: np.ndarray

    @property
    def nnz(self) -> int:
        """Number of stored entries."""
        return int(self.values.shape[0])

    def to_scipy(self) -> csc_matrix:
        """The same matrix as a SciPy CSC matrix."""
        return csc_matrix((self.values, self.rows, self.offsets), shape=(self.size, self.size))


def _check_n(n) -> int:
    if n < 3:
        raise ValueError(f"n must be at least 3, got {n}")
    return int(n)


def nonzero_count(n) -> int:
    """Number of non-zero entries of the five-point matrix for ``n`` intervals."""
    n = _check_n(n)
    return (n - 3) * (5 * n + 1) + 12


def build_sparse_matrix(n) -> CscMatrix:
    """Assemble the five-point Laplacian of the interior unknowns, scaled by ``1 / h^2``."""
    n = _check_n(n)
    size = (n - 1) ** 2
    offsets = [0]
    rows: list[int] = []
    values: list[float] = []
    for column in range(size):
        entries = _column_entries(column, n)
        rows.extend(row for row, _ in entries)
        values.extend(value for _, value in entries)
        offsets.append(offsets[-1] + len(entries))
    return CscMatrix(
        size,
        np.array(offsets, dtype=np.int64),
        np.array(rows, dtype=np.int64),
        np.array(values, dtype=float),
    )


def solve(matrix: CscMatrix, f, n) -> np.ndarray:
    """Solve the interior system for a flattened source on the whole grid.

    Returns the flattened solution with zero boundary values.
    """
    n = _check_n(n)
    nb_pt = n + 1
    if matrix.size != (n - 1) ** 2:
        raise ValueError(f"matrix must be {(n - 1) ** 2} wide, got {matrix.size}")
    f = np.asarray(f, dtype=float)
    if f.shape != (nb_pt * nb_pt,):
        raise ValueError(f"source must have {nb_pt * nb_pt} values, got shape {f.shape}")
    interior = np.atleast_1d(spsolve(matrix.to_scipy(), extract_interior(f, nb_pt)))
    return insert_interior(interior, np.zeros(nb_pt * nb_pt), nb_pt)