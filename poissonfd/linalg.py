"""Dense vector and matrix helpers shared by the finite-difference solvers."""

from __future__ import annotations

import numpy as np


def _pair(u, v) -> tuple[np.ndarray, np.ndarray]:
    first = np.asarray(u, dtype=float)
    second = np.asarray(v, dtype=float)
    if first.shape != second.shape:
        raise ValueError(f"shape mismatch: {first.shape} and {second.shape}")
    return first, second


def sum_matrices(alpha, a, beta, b) -> np.ndarray:
    """Return ``alpha * a + beta * b``."""
    first, second = _pair(a, b)
    return alpha * first + beta * second


def multiply_matrices(alpha, a, b) -> np.ndarray:
    """Return ``alpha * (a @ b)``."""
    first = np.asarray(a, dtype=float)
    second = np.asarray(b, dtype=float)
    if first.ndim != 2 or second.ndim != 2 or first.shape[1] != second.shape[0]:
        raise ValueError(f"cannot multiply shapes {first.shape} and {second.shape}")
    product = first @ second
    return product if alpha == 1 else alpha * product


def squared_norm_l2_diff(u, v) -> float:
    """Squared Euclidean norm of ``u - v``."""
    first, second = _pair(u, v)
    diff = first - second
    return float(np.sum(diff * diff))


def norm_l2_diff(u, v) -> float:
    """Euclidean norm of ``u - v``."""
    return float(np.sqrt(squared_norm_l2_diff(u, v)))


def norm_inf_diff(u, v) -> float:
    """Largest absolute entry of ``u - v`` (zero for empty vectors)."""
    first, second = _pair(u, v)
    if first.size == 0:
        return 0.0
    return float(np.max(np.abs(first - second)))


def squared_norm_l2(u) -> float:
    """Squared Euclidean norm of ``u``."""
    vector = np.asarray(u, dtype=float)
    return float(np.sum(vector * vector))


def norm_l2(u) -> float:
    """Euclidean norm of ``u``."""
    return float(np.sqrt(squared_norm_l2(u)))


def norm_inf(u) -> float:
    """Largest entry of ``u``, never below zero.

    Entries are compared by value, not by magnitude, so a vector with only
    negative entries gives zero.
    """
    vector = np.asarray(u, dtype=float)
    if vector.size == 0:
        return 0.0
    return float(max(0.0, np.max(vector)))


def extract_interior(a, n) -> np.ndarray:
    """Return the interior of a flattened ``n`` x ``n`` grid, row by row."""
    grid = np.asarray(a, dtype=float).reshape(n, n)
    return grid[1:-1, 1:-1].flatten()


def insert_interior(interior, a, n) -> np.ndarray:
    """Return a copy of the flattened grid ``a`` with its interior replaced."""
    result = np.array(a, dtype=float)
    grid = result.reshape(n, n)
    inner = max(n - 2, 0)
    grid[1:-1, 1:-1] = np.asarray(interior, dtype=float).reshape(inner, inner)
    return result