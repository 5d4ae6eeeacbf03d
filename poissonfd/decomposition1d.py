"""Jacobi solve of the 1D Poisson problem on a grid split into subdomains.

Each subdomain owns a contiguous range of grid points and stores them with
one halo cell on each side. Halos are refreshed from the neighbouring
subdomains before every sweep, and the stopping test uses the largest change
and the largest value over all subdomains.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from poissonfd.problem1d import TOLERANCE, JacobiResult


@dataclass(frozen=True)
class Subdomain1D:
    """Range ``start..end`` (inclusive) of grid points owned by one part."""

    rank: int
    start: int
    end: int
    left: int | None
    right: int | None

    @property
    def size(self) -> int:
        """Number of owned grid points."""
        return self.end - self.start + 1

    @property
    def free_edges(self) -> int:
        """Number of sides with a neighbour."""
        return sum(neighbour is not None for neighbour in (self.left, self.right))

    def loop_bounds(self, nb_pt) -> tuple[int, int]:
        """Local half-open range of points updated by a sweep.

        Local index 0 is the left halo; the global boundary points are skipped.
        """
        first = 1
        stop = self.size + 1
        if self.start == 0:
            first += 1
        if self.end == nb_pt - 1:
            stop -= 1
        return first, stop


def _check_parts(nb_pt, nb_parts) -> None:
    if nb_parts < 1:
        raise ValueError(f"nb_parts must be at least 1, got {nb_parts}")
    if nb_parts > nb_pt:
        raise ValueError(f"cannot split {nb_pt} points into {nb_parts} parts")


def _bounds(rank: int, nb_pt: int, nb_parts: int) -> tuple[int, int]:
    start = rank * nb_pt // nb_parts
    end = (rank + 1) * nb_pt // nb_parts - 1
    return start, end


def partition(nb_pt, nb_parts) -> list[Subdomain1D]:
    """Split ``nb_pt`` grid points into ``nb_parts`` contiguous subdomains."""
    _check_parts(nb_pt, nb_parts)
    subdomains = []
    for rank in range(nb_parts):
        start, end = _bounds(rank, nb_pt, nb_parts)
        left = rank - 1 if rank > 0 else None
        right = rank + 1 if rank < nb_parts - 1 else None
        subdomains.append(Subdomain1D(rank, start, end, left, right))
    return subdomains


def gather_layout(nb_pt, nb_parts) -> tuple[list[int], list[int]]:
    """Displacements and counts used to gather the parts into one vector."""
    _check_parts(nb_pt, nb_parts)
    displacements = []
    counts = []
    for rank in range(nb_parts):
        start, end = _bounds(rank, nb_pt, nb_parts)
        displacements.append(start)
        counts.append(end - start + 1)
    return displacements, counts


def local_source(subdomain: Subdomain1D, n) -> np.ndarray:
    """Sine source ``pi^2 sin(pi x)`` on the owned points, with zero halos."""
    if n < 1:
        raise ValueError(f"n must be at least 1, got {n}")
    values = np.zeros(subdomain.size + 2)
    x = np.arange(subdomain.start, subdomain.end + 1) * (1.0 / n)
    values[1:-1] = math.pi**2 * np.sin(math.pi * x)
    return values


def _exchange(subdomains: list[Subdomain1D], fields: list[np.ndarray]) -> None:
    owned_left = [field[1] for field in fields]
    owned_right = [field[-2] for field in fields]
    for subdomain, field in zip(subdomains, fields):
        if subdomain.left is not None:
            field[0] = owned_right[subdomain.left]
        if subdomain.right is not None:
            field[-1] = owned_left[subdomain.right]


def _relative_change(currents: list[np.ndarray], previous: list[np.ndarray]) -> float:
    numerator = max(
        float(np.max(np.abs(new[1:-1] - old[1:-1]))) for new, old in zip(currents, previous)
    )
    denominator = max(float(np.max(np.abs(old[1:-1]))) for old in previous)
    if denominator == 0.0:
        return math.inf if numerator > 0.0 else math.nan
    return numerator / denominator


def solve_jacobi_distributed(n, nb_parts) -> JacobiResult:
    """Jacobi iteration on ``nb_parts`` subdomains for the sine source.

    Stops when the relative sup-norm change is at most 1e-10 and returns the
    gathered solution on the ``n + 1`` grid points.
    """
    if n < 1:
        raise ValueError(f"n must be at least 1, got {n}")
    nb_pt = int(n) + 1
    subdomains = partition(nb_pt, nb_parts)
    sources = [local_source(subdomain, n) for subdomain in subdomains]
    bounds = [subdomain.loop_bounds(nb_pt) for subdomain in subdomains]
    h_squared = 1.0 / n**2

    previous = [np.zeros(subdomain.size + 2) for subdomain in subdomains]
    current = [np.zeros(subdomain.size + 2) for subdomain in subdomains]
    iterations = 0
    change = math.inf
    while change > TOLERANCE:
        _exchange(subdomains, previous)
        for (first, stop), f, old, new in zip(bounds, sources, previous, current):
            new[first:stop] = 0.5 * (
                old[first - 1 : stop - 1] + old[first + 1 : stop + 1] + h_squared * f[first:stop]
            )
        change = _relative_change(current, previous)
        previous, current = current, previous
        iterations += 1

    u = np.zeros(nb_pt)
    for subdomain, field in zip(subdomains, previous):
        u[subdomain.start : subdomain.end + 1] = field[1:-1]
    return JacobiResult(u, iterations)