import numpy as np
import pytest

from poissonfd import problem2d
from poissonfd.decomposition2d import build_grid, gather
from poissonfd.distributed2d import local_source, solve_jacobi_distributed


@pytest.mark.parametrize("nb_procs", [1, 2, 4, 6])
def test_local_sources_gather_to_global_source(nb_procs):
    n = 10
    grid = build_grid(nb_procs, n + 1)
    fields = [local_source(block, n) for block in grid]
    np.testing.assert_allclose(gather(grid, fields, n + 1), problem2d.source(n), atol=1e-15)


def test_local_source_halos_are_zero():
    n = 8
    grid = build_grid(4, n + 1)
    for block in grid:
        field = local_source(block, n)
        assert field.shape == block.shape
        assert np.all(field[0] == 0.0) and np.all(field[-1] == 0.0)
        assert np.all(field[:, 0] == 0.0) and np.all(field[:, -1] == 0.0)


def test_local_source_rejects_bad_n():
    block = build_grid(1, 5).blocks[0]
    with pytest.raises(ValueError):
        local_source(block, 0)


def _sequential(n):
    return problem2d.solve_jacobi(problem2d.source(n), n)


def test_single_block_matches_sequential():
    n = 8
    expected = _sequential(n)
    result = solve_jacobi_distributed(n, 1)
    assert result.iterations == expected.iterations
    np.testing.assert_allclose(result.u, expected.u, rtol=1e-12, atol=1e-15)


@pytest.mark.parametrize("nb_procs", [2, 4, 6])
def test_blocks_match_sequential(nb_procs):
    n = 8
    expected = _sequential(n)
    result = solve_jacobi_distributed(n, nb_procs)
    assert result.iterations == expected.iterations
    np.testing.assert_allclose(result.u, expected.u, rtol=1e-12, atol=1e-15)


@pytest.mark.parametrize("nb_procs", [1, 3, 4, 9])
def test_overlap_gives_same_result(nb_procs):
    n = 9
    plain = solve_jacobi_distributed(n, nb_procs, overlap=False)
    overlapped = solve_jacobi_distributed(n, nb_procs, overlap=True)
    assert overlapped.iterations == plain.iterations
    np.testing.assert_allclose(overlapped.u, plain.u, rtol=1e-12, atol=1e-15)


def test_solution_boundary_zero_and_close_to_exact():
    n = 12
    result = solve_jacobi_distributed(n, 4, overlap=True)
    u = result.u.reshape(n + 1, n + 1)
    assert np.all(u[0] == 0.0) and np.all(u[-1] == 0.0)
    assert np.all(u[:, 0] == 0.0) and np.all(u[:, -1] == 0.0)
    exact = problem2d.exact_solution(problem2d.exact, n)
    assert np.max(np.abs(result.u - exact)) < 2e-3


def test_errors():
    with pytest.raises(ValueError):
        solve_jacobi_distributed(0, 1)
    with pytest.raises(ValueError):
        solve_jacobi_distributed(4, 0)
    with pytest.raises(ValueError):
        solve_jacobi_distributed(2, 7)