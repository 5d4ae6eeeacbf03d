import numpy as np
import pytest

from poissonfd import problem2d, sparse2d


@pytest.mark.parametrize("n", [3, 4, 5, 9])
def test_nonzero_count_matches_dense_matrix(n):
    assert sparse2d.nonzero_count(n) == np.count_nonzero(problem2d.build_matrix(n))


@pytest.mark.parametrize("n", [3, 4, 7])
def test_sparse_matrix_equals_dense_matrix(n):
    matrix = sparse2d.build_sparse_matrix(n)
    assert matrix.size == (n - 1) ** 2
    assert matrix.nnz == sparse2d.nonzero_count(n)
    assert np.allclose(matrix.to_scipy().toarray(), problem2d.build_matrix(n))


def test_csc_structure():
    matrix = sparse2d.build_sparse_matrix(5)
    assert matrix.offsets[0] == 0
    assert matrix.offsets[-1] == matrix.nnz
    assert len(matrix.offsets) == matrix.size + 1
    for start, stop in zip(matrix.offsets[:-1], matrix.offsets[1:]):
        column_rows = matrix.rows[start:stop]
        assert np.all(np.diff(column_rows) > 0)
        assert 3 <= stop - start <= 5


def test_solve_matches_gauss():
    n = 7
    f = problem2d.source(n)
    u = sparse2d.solve(sparse2d.build_sparse_matrix(n), f, n)
    expected = problem2d.solve_gauss(problem2d.build_matrix(n), f, n)
    assert np.allclose(u, expected)


def test_solve_approximates_exact_solution():
    n = 16
    u = sparse2d.solve(sparse2d.build_sparse_matrix(n), problem2d.source(n), n)
    exact = problem2d.exact_solution(problem2d.exact, n)
    assert np.max(np.abs(u - exact)) < 5e-4
    grid = u.reshape(n + 1, n + 1)
    assert np.all(grid[0] == 0.0) and np.all(grid[-1] == 0.0)


def test_solve_rejects_mismatched_sizes():
    matrix = sparse2d.build_sparse_matrix(4)
    with pytest.raises(ValueError):
        sparse2d.solve(matrix, problem2d.source(5), 5)
    with pytest.raises(ValueError):
        sparse2d.solve(matrix, np.zeros(3), 4)


def test_small_grids_rejected():
    with pytest.raises(ValueError):
        sparse2d.build_sparse_matrix(2)
    with pytest.raises(ValueError):
        sparse2d.nonzero_count(1)