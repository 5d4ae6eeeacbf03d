import math

import numpy as np
import pytest

from poissonfd.problem1d import (
    JacobiResult,
    build_matrix,
    constant_exact,
    constant_source,
    exact_solution,
    sine_exact,
    sine_source,
    solve_gauss,
    solve_gauss_seidel,
    solve_jacobi,
)


def test_constant_exact_at_midpoint():
    assert constant_exact(0.5) == pytest.approx(0.125)


def test_exact_solutions_vanish_on_boundary():
    for function in (constant_exact, sine_exact):
        u = exact_solution(function, 10)
        assert len(u) == 11
        assert u[0] == pytest.approx(0.0)
        assert u[-1] == pytest.approx(0.0, abs=1e-15)


def test_sine_source_matches_exact_scaled():
    n = 12
    assert np.allclose(sine_source(n), math.pi**2 * exact_solution(sine_exact, n))


def test_constant_source_is_ones():
    assert np.array_equal(constant_source(6), np.ones(7))


def test_build_matrix_structure():
    n = 6
    matrix = build_matrix(n)
    assert matrix.shape == (n - 1, n - 1)
    assert np.array_equal(matrix, matrix.T)
    assert np.allclose(np.diag(matrix), 2 * n**2)
    assert np.allclose(np.diag(matrix, 1), -(n**2))
    assert np.count_nonzero(np.triu(matrix, 2)) == 0


def test_build_matrix_rejects_tiny_grid():
    with pytest.raises(ValueError):
        build_matrix(2)


def test_gauss_is_exact_for_quadratic_solution():
    n = 9
    u = solve_gauss(build_matrix(n), constant_source(n))
    assert np.allclose(u, exact_solution(constant_exact, n), atol=1e-12)


def test_gauss_does_not_modify_matrix():
    n = 5
    matrix = build_matrix(n)
    original = matrix.copy()
    solve_gauss(matrix, sine_source(n))
    assert np.array_equal(matrix, original)


def test_gauss_error_decreases_with_refinement():
    errors = []
    for n in (10, 20):
        u = solve_gauss(build_matrix(n), sine_source(n))
        errors.append(np.max(np.abs(u - exact_solution(sine_exact, n))))
    assert errors[1] < errors[0]


def test_gauss_rejects_wrong_source_length():
    with pytest.raises(ValueError):
        solve_gauss(build_matrix(5), np.ones(5))


def test_jacobi_converges_to_direct_solution():
    n = 10
    f = sine_source(n)
    result = solve_jacobi(f, n)
    assert isinstance(result, JacobiResult)
    assert result.iterations > 1
    direct = solve_gauss(build_matrix(n), f)
    assert np.allclose(result.u, direct, atol=1e-7)
    assert result.u[0] == 0.0 and result.u[-1] == 0.0


def test_jacobi_with_zero_source_stops_immediately():
    n = 8
    result = solve_jacobi(np.zeros(n + 1), n)
    assert result.iterations == 1
    assert np.array_equal(result.u, np.zeros(n + 1))


def test_gauss_seidel_approaches_direct_solution():
    n = 8
    f = constant_source(n)
    u = solve_gauss_seidel(f, n, 500)
    assert np.allclose(u, exact_solution(constant_exact, n), atol=1e-10)


def test_gauss_seidel_zero_sweeps_gives_start_vector():
    n = 6
    assert np.array_equal(solve_gauss_seidel(sine_source(n), n, 0), np.zeros(n + 1))


def test_gauss_seidel_rejects_negative_sweeps():
    with pytest.raises(ValueError):
        solve_gauss_seidel(sine_source(4), 4, -1)


def test_sources_reject_non_positive_n():
    with pytest.raises(ValueError):
        sine_source(0)