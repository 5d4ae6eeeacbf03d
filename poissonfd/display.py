"""Text rendering of vectors and matrices."""

from __future__ import annotations

import numpy as np


def _field(value, integral: bool) -> str:
    return f"{int(value)} " if integral else f"{float(value):10.6f} "


def _is_integral(array: np.ndarray) -> bool:
    return np.issubdtype(array.dtype, np.integer) or np.issubdtype(array.dtype, np.bool_)


def format_vector(vector) -> str:
    """Render a vector on one line, ending with a newline."""
    values = np.asarray(vector)
    integral = _is_integral(values)
    return "".join(_field(value, integral) for value in values.ravel()) + "\n"


def format_matrix(matrix) -> str:
    """Render a matrix one row per line.

    Integer matrices use ``%d`` fields, others ``%10.6f`` fields; every field
    is followed by a space.
    """
    values = np.asarray(matrix)
    if values.ndim != 2:
        raise ValueError(f"expected a two-dimensional matrix, got {values.ndim} dimensions")
    integral = _is_integral(values)
    return "".join(
        "".join(_field(value, integral) for value in row) + "\n" for row in values
    )