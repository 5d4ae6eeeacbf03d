# poissonfd

Finite-difference solvers for the Poisson problem `-Δu = f` with zero
boundary values, on the unit interval `[0, 1]` and on the unit square
`[0, 1] × [0, 1]`. The grid has `n` intervals per direction, so `n + 1`
points per direction, spaced by `h = 1 / n`.

Problems with known exact solutions are built in:

- 1D: `f(x) = π² sin(πx)` with `u(x) = sin(πx)` (`problem1d.sine_source`,
  `problem1d.sine_exact`), and `f = 1` with `u(x) = x(1 - x) / 2`
  (`problem1d.constant_source`, `problem1d.constant_exact`);
- 2D: `f(x, y) = sin(2πx) sin(2πy)` with
  `u(x, y) = sin(2πx) sin(2πy) / (8π²)` (`problem2d.source`, `problem2d.exact`).

2D grid values are flattened with the point `(i, j)` (`i` along x, `j` along
y) at index `j * (n + 1) + i`.

## Modules

| Module | Contents |
| --- | --- |
| `poissonfd.problem1d` | `build_matrix`, `solve_gauss` (dense Gauss-Jordan), `solve_jacobi`, `solve_gauss_seidel` (fixed number of sweeps), `JacobiResult` |
| `poissonfd.banded1d` | `TwoBandMatrix`, `cholesky_factor`, `forward_substitution`, `backward_substitution`, `solve_cholesky` |
| `poissonfd.decomposition1d` | `Subdomain1D`, `partition`, `gather_layout`, `local_source`, `solve_jacobi_distributed` |
| `poissonfd.problem2d` | `boundary_kind`, `build_matrix`, `solve_gauss`, `solve_jacobi` |
| `poissonfd.banded2d` | `BandMatrix` (`n` stored bands), `band_value`, `cholesky_factor`, substitutions, `solve_cholesky` |
| `poissonfd.sparse2d` | `CscMatrix`, `nonzero_count`, `build_sparse_matrix`, `solve` (SciPy `spsolve`) |
| `poissonfd.decomposition2d` | `Block`, `CartesianGrid`, `dims_create`, `build_grid`, `exchange_halos`, `gather` |
| `poissonfd.distributed2d` | `local_source`, `solve_jacobi_distributed(n, nb_procs, overlap=False)` |
| `poissonfd.linalg` | matrix sum and product, L2 and infinity norms, `extract_interior`, `insert_interior` |
| `poissonfd.display` | `format_matrix`, `format_vector` |
| `poissonfd.results` | `append_doubles`, `read_doubles`, `convert_data_to_text`, `append_results` |

The Jacobi solvers start from zero and stop once the relative infinity-norm
change between two iterates is `1e-10` or below (or cannot be measured, zero
over zero). They return a `JacobiResult` holding the solution `u` and the
number of `iterations`.

`results.append_results` appends one line to a text table: if the file is
empty it first writes the space-separated names of the header, each field
right-aligned on 20 characters, values with eight decimals.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Command line

```
poissonfd DIMENSION VERSION [N] [--output PATH]
```

Available methods:

| Dimension | Version | Method |
| --- | --- | --- |
| 1 | 0 | dense Gauss elimination |
| 1 | 4 | banded Cholesky |
| 2 | 1 | Jacobi |
| 2 | 5 | banded Cholesky |
| 2 | 6 | sparse factorisation |

The command solves the sine-source problem, prints `N`, the maximum error
against the exact solution and the time taken (plus the number of grid points
in 2D, the iteration count for Jacobi and the L2 error for 1D version 4), then
appends `version nb_cpu N nb_iteration erreur_infty temps` to the results
table, `./Textes/resultats.txt` unless `--output` is given. `N` defaults to
10. For the banded Cholesky versions, leaving `N` out (or giving 0) instead
prints the banded storage of a small Cholesky factor next to its full matrix.

```
poissonfd 2 6 100
poissonfd 1 4
poissonfd --help
```

## Library use

```python
from poissonfd import problem1d, linalg

n = 50
f = problem1d.sine_source(n)
result = problem1d.solve_jacobi(f, n)
exact = problem1d.exact_solution(problem1d.sine_exact, n)
print(result.iterations, linalg.norm_inf_diff(result.u, exact))
```

```python
from poissonfd import banded2d, problem2d, linalg

n = 40
u = banded2d.solve_cholesky(problem2d.source(n), n)
exact = problem2d.exact_solution(problem2d.exact, n)
print(linalg.norm_inf_diff(u, exact))
```

```python
from poissonfd import distributed2d

result = distributed2d.solve_jacobi_distributed(20, 4, overlap=True)
print(result.iterations)
```

## What it does not do

The decomposed solvers (`decomposition1d`, `decomposition2d`,
`distributed2d`) run every subdomain in one Python process: halo exchange and
gathering are array copies, not messages between processes or threads, so
they give no speed-up. The command line offers only the methods in the table
above; the 1D Jacobi, Gauss-Seidel and decomposed solvers are reached from
Python only.