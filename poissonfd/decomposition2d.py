"""Cartesian decomposition of the 2D grid into blocks with halo cells.

The ``nb_pt x nb_pt`` grid is split over a ``dims[0] x dims[1]`` process
grid. The first dimension follows ``i`` (x) and the second follows ``j`` (y).
Ranks are numbered row-major on the process grid:
``rank = coords[0] * dims[1] + coords[1]``.

A block stores its points in an array of shape ``(size_j + 2, size_i + 2)``
indexed ``[j, i]``. The outer ring holds halo cells, and local index 1 is the
first owned point along each axis.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class Block:
    """Ranges of grid points owned by one process, with its neighbours' ranks."""

    rank: int
    coords: tuple[int, int]
    i_start: int
    i_end: int
    j_start: int
    j_end: int
    left: int | None
    top: int | None
    right: int | None
    bottom: int | None

    @property
    def size_i(self) -> int:
        """Number of owned points along x."""
        return self.i_end - self.i_start + 1

    @property
    def size_j(self) -> int:
        """Number of owned points along y."""
        return self.j_end - self.j_start + 1

    @property
    def shape(self) -> tuple[int, int]:
        """Shape of the local array, halos included, indexed ``[j, i]``."""
        return self.size_j + 2, self.size_i + 2

    @property
    def neighbours(self) -> tuple[int | None, int | None, int | None, int | None]:
        """Neighbour ranks in the order left, top, right, bottom."""
        return self.left, self.top, self.right, self.bottom

    @property
    def free_edges(self) -> int:
        """Number of sides with a neighbour."""
        return sum(neighbour is not None for neighbour in self.neighbours)

    def loop_bounds(self, nb_pt) -> tuple[int, int, int, int]:
        """Local half-open ranges updated by a sweep.

        Returns ``(i_first, j_first, i_stop, j_stop)``; points on the global
        boundary are skipped.
        """
        i_first, j_first = 1, 1
        i_stop, j_stop = self.size_i + 1, self.size_j + 1
        if self.i_start == 0:
            i_first += 1
        if self.j_start == 0:
            j_first += 1
        if self.i_end == nb_pt - 1:
            i_stop -= 1
        if self.j_end == nb_pt - 1:
            j_stop -= 1
        return i_first, j_first, i_stop, j_stop


@dataclass(frozen=True)
class CartesianGrid:
    """Process grid dimensions and the blocks in rank order."""

    dims: tuple[int, int]
    blocks: tuple[Block, ...]

    def __len__(self) -> int:
        return len(self.blocks)

    def __iter__(self):
        return iter(self.blocks)

    def block_at(self, coords) -> Block:
        """Block at the given process-grid coordinates."""
        first, second = coords
        if not (0 <= first < self.dims[0] and 0 <= second < self.dims[1]):
            raise IndexError(f"coordinates {tuple(coords)} outside process grid {self.dims}")
        return self.blocks[first * self.dims[1] + second]


def dims_create(nb_procs) -> tuple[int, int]:
    """Most balanced two-factor split of ``nb_procs``, largest factor first."""
    if nb_procs < 1:
        raise ValueError(f"nb_procs must be at least 1, got {nb_procs}")
    nb_procs = int(nb_procs)
    smaller = next(
        d for d in range(math.isqrt(nb_procs), 0, -1) if nb_procs % d == 0
    )
    return nb_procs // smaller, smaller


def _bounds(coord: int, nb_pt: int, parts: int) -> tuple[int, int]:
    return coord * nb_pt // parts, (coord + 1) * nb_pt // parts - 1


def build_grid(nb_procs, nb_pt) -> CartesianGrid:
    """Split an ``nb_pt x nb_pt`` grid over ``nb_procs`` processes."""
    dims = dims_create(nb_procs)
    if max(dims) > nb_pt:
        raise ValueError(f"cannot split {nb_pt} points per side over a {dims} process grid")

    def rank_of(first: int, second: int) -> int | None:
        if 0 <= first < dims[0] and 0 <= second < dims[1]:
            return first * dims[1] + second
        return None

    blocks = []
    for rank in range(dims[0] * dims[1]):
        first, second = divmod(rank, dims[1])
        i_start, i_end = _bounds(first, nb_pt, dims[0])
        j_start, j_end = _bounds(second, nb_pt, dims[1])
        blocks.append(
            Block(
                rank=rank,
                coords=(first, second),
                i_start=i_start,
                i_end=i_end,
                j_start=j_start,
                j_end=j_end,
                left=rank_of(first - 1, second),
                top=rank_of(first, second + 1),
                right=rank_of(first + 1, second),
                bottom=rank_of(first, second - 1),
            )
        )
    return CartesianGrid(dims, tuple(blocks))


def _check_fields(grid: CartesianGrid, fields) -> list[np.ndarray]:
    fields = list(fields)
    if len(fields) != len(grid.blocks):
        raise ValueError(f"expected {len(grid.blocks)} fields, got {len(fields)}")
    for block, field in zip(grid.blocks, fields):
        if np.shape(field) != block.shape:
            raise ValueError(
                f"field of rank {block.rank} must have shape {block.shape}, "
                f"got {np.shape(field)}"
            )
    return fields


def exchange_halos(grid: CartesianGrid, fields) -> None:
    """Fill every halo facing a neighbour with that neighbour's owned edge, in place.

    Halos on the global boundary and the halo corners are left untouched.
    """
    fields = _check_fields(grid, fields)
    for block, field in zip(grid.blocks, fields):
        if block.bottom is not None:
            field[0, 1:-1] = fields[block.bottom][-2, 1:-1]
        if block.top is not None:
            field[-1, 1:-1] = fields[block.top][1, 1:-1]
        if block.right is not None:
            field[1:-1, -1] = fields[block.right][1:-1, 1]
        if block.left is not None:
            field[1:-1, 0] = fields[block.left][1:-1, -2]


def gather(grid: CartesianGrid, fields, nb_pt) -> np.ndarray:
    """Assemble the owned points of every block into the flattened global grid.

    The point ``(i, j)`` lands at index ``j * nb_pt + i``.
    """
    fields = _check_fields(grid, fields)
    result = np.zeros((nb_pt, nb_pt))
    for block, field in zip(grid.blocks, fields):
        if block.i_end >= nb_pt or block.j_end >= nb_pt:
            raise ValueError(f"block of rank {block.rank} lies outside a grid of {nb_pt} points")
        result[block.j_start : block.j_end + 1, block.i_start : block.i_end + 1] = np.asarray(
            field, dtype=float
        )[1:-1, 1:-1]
    return result.ravel()