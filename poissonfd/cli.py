"""Command line driver: solve a Poisson problem and append timing results to a table."""

from __future__ import annotations

import argparse
import sys
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

import numpy as np

from poissonfd import banded1d, banded2d, problem1d, problem2d, sparse2d
from poissonfd.display import format_matrix
from poissonfd.linalg import norm_inf_diff, norm_l2_diff
from poissonfd.results import append_results

DEFAULT_N = 10
DEFAULT_OUTPUT = "./Textes/resultats.txt"
HEADER = "version nb_cpu N nb_iteration erreur_infty temps"
_BANNER = "-" * 60

# Size used to show the banded storage when no size is given.
_ILLUSTRATION_N = {1: 7, 2: 4}


@dataclass(frozen=True)
class RunReport:
    """Outcome of one solve: the solution, its error against the exact one and the time taken."""

    dimension: int
    version: int
    n: int
    u: np.ndarray
    error_inf: float
    error_l2: float
    elapsed: float
    iterations: int = -1
    nb_cpu: int = -1
    header: str = HEADER

    def as_row(self) -> list[float]:
        """Values written to the results table, in header order."""
        return [
            float(self.version),
            float(self.nb_cpu),
            float(self.n),
            float(self.iterations),
            self.error_inf,
            self.elapsed,
        ]


@dataclass(frozen=True)
class _Method:
    label: str
    run: Callable[[int], tuple[np.ndarray, int]]
    banded: bool = False
    header: str = HEADER


def _gauss_1d(n: int) -> tuple[np.ndarray, int]:
    f = problem1d.sine_source(n)
    matrix = problem1d.build_matrix(n)
    return problem1d.solve_gauss(matrix, f), -1


def _cholesky_1d(n: int) -> tuple[np.ndarray, int]:
    return banded1d.solve_cholesky(problem1d.sine_source(n), n), -1


def _jacobi_2d(n: int) -> tuple[np.ndarray, int]:
    result = problem2d.solve_jacobi(problem2d.source(n), n)
    return result.u, result.iterations


def _cholesky_2d(n: int) -> tuple[np.ndarray, int]:
    return banded2d.solve_cholesky(problem2d.source(n), n), -1


def _sparse_2d(n: int) -> tuple[np.ndarray, int]:
    f = problem2d.source(n)
    matrix = sparse2d.build_sparse_matrix(n)
    return sparse2d.solve(matrix, f, n), -1


_METHODS: dict[tuple[int, int], _Method] = {
    (1, 0): _Method("direct method, dense Gauss elimination", _gauss_1d),
    (1, 4): _Method(
        "direct method, banded Cholesky",
        _cholesky_1d,
        banded=True,
        header="version nb_cpu N nb_iterations erreur_infty temps",
    ),
    (2, 1): _Method("iterative method, Jacobi", _jacobi_2d),
    (2, 5): _Method("direct method, banded Cholesky", _cholesky_2d, banded=True),
    (2, 6): _Method("direct method, sparse factorisation", _sparse_2d),
}


def _method(dimension, version) -> _Method:
    try:
        return _METHODS[(int(dimension), int(version))]
    except KeyError:
        available = ", ".join(f"{d}D/{v}" for d, v in sorted(_METHODS))
        raise ValueError(
            f"no version {version} for dimension {dimension} (available: {available})"
        ) from None


def _exact(dimension: int, n: int) -> np.ndarray:
    if dimension == 1:
        return problem1d.exact_solution(problem1d.sine_exact, n)
    return problem2d.exact_solution(problem2d.exact, n)


def solve_problem(dimension, version, n) -> RunReport:
    """Solve the sine-source problem with the given method and measure its error and time."""
    method = _method(dimension, version)
    dimension = int(dimension)
    n = int(n)
    if n < 1:
        raise ValueError(f"n must be at least 1, got {n}")
    exact = _exact(dimension, n)
    start = time.perf_counter()
    u, iterations = method.run(n)
    elapsed = time.perf_counter() - start
    return RunReport(
        dimension=dimension,
        version=int(version),
        n=n,
        u=u,
        error_inf=norm_inf_diff(u, exact),
        error_l2=norm_l2_diff(u, exact),
        elapsed=elapsed,
        iterations=iterations,
        header=method.header,
    )


def _illustration(dimension: int) -> str:
    n = _ILLUSTRATION_N[dimension]
    if dimension == 1:
        factor = banded1d.cholesky_factor(n)
    else:
        factor = banded2d.cholesky_factor(n)
    return (
        "\n-------------------------\n"
        f"Banded storage of the Cholesky factor (small example, N = {n}):\n"
        "\nBanded structure:\n"
        f"{factor.describe()}"
        "\nCorresponding full matrix:\n"
        f"{format_matrix(factor.to_dense())}"
        "-------------------------\n"
    )


def _summary(report: RunReport) -> str:
    lines = [f"N = {report.n}"]
    if report.dimension == 2:
        nb_pt = report.n + 1
        lines.append(f"nb_pt * nb_pt = {nb_pt * nb_pt}")
    if report.iterations >= 0:
        lines.append(f"nb_iteration = {report.iterations}")
    if report.dimension == 1 and report.header != HEADER:
        lines.append(f"error_l2 = {report.error_l2:f}")
    lines.append(f"error_inf = {report.error_inf:f}")
    lines.append(f"time = {report.elapsed:f} sec")
    return "\n".join(lines)


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="poissonfd",
        description="Solve -Δu = f with zero boundary values on the unit interval or square.",
    )
    parser.add_argument("dimension", type=int, choices=(1, 2), help="problem dimension")
    parser.add_argument(
        "version",
        type=int,
        help="method: 1D 0 (Gauss), 4 (banded Cholesky); 2D 1 (Jacobi), 5 (banded Cholesky), 6 (sparse)",
    )
    parser.add_argument("n", type=int, nargs="?", help="number of intervals per side")
    parser.add_argument(
        "--output", default=DEFAULT_OUTPUT, help="results table to append to"
    )
    return parser


def main(argv=None) -> int:
    """Run one solve from the command line and append its results to the table."""
    args = _parser().parse_args(argv)
    try:
        method = _method(args.dimension, args.version)
    except ValueError as error:
        print(f"error: {error}", file=sys.stderr)
        return 2

    print(_BANNER)
    print(f"Sequential run of version {args.version} ({args.dimension}D, {method.label})")

    n = args.n
    if method.banded and not n:
        print(_illustration(args.dimension))
        return 0
    if n is None:
        n = DEFAULT_N

    try:
        report = solve_problem(args.dimension, args.version, n)
    except ValueError as error:
        print(f"error: {error}", file=sys.stderr)
        return 1

    print(_summary(report))

    output = Path(args.output)
    try:
        output.parent.mkdir(parents=True, exist_ok=True)
        append_results(report.as_row(), report.header, output)
    except OSError as error:
        print(f"error: cannot write {output}: {error}", file=sys.stderr)

    print("Run finished")
    print(_BANNER)
    return 0