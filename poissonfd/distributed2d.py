"""Jacobi solve of the 2D Poisson problem over a Cartesian block decomposition.

Every block keeps its points with a ring of halo cells. Before each sweep
the halos are refreshed from the neighbouring blocks. With ``overlap`` the
points that need no halo are updated first, then the halos are refreshed and
the block edges updated, which gives the same result.
"""

from __future__ import annotations

import math

import numpy as np

from poissonfd.decomposition2d import Block, build_grid, exchange_halos, gather
from poissonfd.problem1d import TOLERANCE, JacobiResult


def local_source(block: Block, n) -> np.ndarray:
    """Source ``sin(2 pi x) sin(2 pi y)`` on the owned points, with zero halos.

    The array is indexed ``[j, i]`` with the halo ring included.
    """
    if n < 1:
        raise ValueError(f"n must be at least 1, got {n}")
    h = 1.0 / n
    along_i = np.sin(2 * math.pi * np.arange(block.i_start, block.i_end + 1) * h)
    along_j = np.sin(2 * math.pi * np.arange(block.j_start, block.j_end + 1) * h)
    values = np.zeros(block.shape)
    values[1:-1, 1:-1] = np.outer(along_j, along_i)
    return values


def _update(new, old, f, h_squared, j_first, j_stop, i_first, i_stop) -> None:
    if j_first >= j_stop or i_first >= i_stop:
        return
    rows = slice(j_first, j_stop)
    cols = slice(i_first, i_stop)
    new[rows, cols] = 0.25 * (
        old[rows, i_first - 1 : i_stop - 1]
        + old[j_first - 1 : j_stop - 1, cols]
        + old[rows, i_first + 1 : i_stop + 1]
        + old[j_first + 1 : j_stop + 1, cols]
        + h_squared * f[rows, cols]
    )


def _update_edges(block: Block, nb_pt: int, new, old, f, h_squared) -> None:
    size_i, size_j = block.size_i, block.size_j
    first_free_i = block.i_start != 0
    last_free_i = block.i_end != nb_pt - 1
    first_free_j = block.j_start != 0
    last_free_j = block.j_end != nb_pt - 1

    if first_free_j:
        _update(new, old, f, h_squared, 1, 2, 2, size_i)
    if last_free_j:
        _update(new, old, f, h_squared, size_j, size_j + 1, 2, size_i)
    if first_free_i:
        _update(new, old, f, h_squared, 2, size_j, 1, 2)
    if last_free_i:
        _update(new, old, f, h_squared, 2, size_j, size_i, size_i + 1)

    corners = (
        (first_free_i and first_free_j, 1, 1),
        (last_free_i and first_free_j, size_i, 1),
        (last_free_i and last_free_j, size_i, size_j),
        (first_free_i and last_free_j, 1, size_j),
    )
    for active, i, j in corners:
        if active:
            _update(new, old, f, h_squared, j, j + 1, i, i + 1)


def _relative_change(currents, previous) -> float:
    numerator = max(
        float(np.max(np.abs(new[1:-1, 1:-1] - old[1:-1, 1:-1])))
        for new, old in zip(currents, previous)
    )
    denominator = max(float(np.max(np.abs(old[1:-1, 1:-1]))) for old in previous)
    if denominator == 0.0:
        return math.inf if numerator > 0.0 else math.nan
    return numerator / denominator


def solve_jacobi_distributed(n, nb_procs, overlap=False) -> JacobiResult:
    """Jacobi iteration over ``nb_procs`` blocks until the relative change is at most 1e-10.

    Returns the gathered, flattened solution on the ``(n + 1)^2`` grid.
    """
    if n < 1:
        raise ValueError(f"n must be at least 1, got {n}")
    n = int(n)
    nb_pt = n + 1
    grid = build_grid(nb_procs, nb_pt)
    blocks = list(grid)
    sources = [local_source(block, n) for block in blocks]
    h_squared = 1.0 / n**2

    previous = [np.zeros(block.shape) for block in blocks]
    current = [np.zeros(block.shape) for block in blocks]
    iterations = 0
    change = math.inf
    while change > TOLERANCE:
        if overlap:
            for block, f, old, new in zip(blocks, sources, previous, current):
                _update(new, old, f, h_squared, 2, block.size_j, 2, block.size_i)
            exchange_halos(grid, previous)
            for block, f, old, new in zip(blocks, sources, previous, current):
                _update_edges(block, nb_pt, new, old, f, h_squared)
        else:
            exchange_halos(grid, previous)
            for block, f, old, new in zip(blocks, sources, previous, current):
                i_first, j_first, i_stop, j_stop = block.loop_bounds(nb_pt)
                _update(new, old, f, h_squared, j_first, j_stop, i_first, i_stop)
        change = _relative_change(current, previous)
        previous, current = current, previous
        iterations += 1

    return JacobiResult(gather(grid, previous, nb_pt), iterations)