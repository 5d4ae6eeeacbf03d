import numpy as np
import pytest

from poissonfd.decomposition1d import (
    Subdomain1D,
    gather_layout,
    local_source,
    partition,
    solve_jacobi_distributed,
)
from poissonfd.problem1d import sine_source, solve_jacobi


@pytest.mark.parametrize("nb_pt, nb_parts", [(11, 1), (11, 4), (11, 11), (101, 7)])
def test_partition_covers_grid_contiguously(nb_pt, nb_parts):
    parts = partition(nb_pt, nb_parts)
    assert len(parts) == nb_parts
    assert parts[0].start == 0
    assert parts[-1].end == nb_pt - 1
    for before, after in zip(parts, parts[1:]):
        assert after.start == before.end + 1
    assert sum(part.size for part in parts) == nb_pt


def test_partition_sizes_are_balanced():
    sizes = [part.size for part in partition(101, 7)]
    assert max(sizes) - min(sizes) <= 1


def test_partition_neighbours():
    parts = partition(11, 3)
    assert parts[0].left is None
    assert parts[-1].right is None
    assert [part.rank for part in parts] == [0, 1, 2]
    assert parts[1].left == 0 and parts[1].right == 2
    assert [part.free_edges for part in parts] == [1, 2, 1]


def test_gather_layout_matches_partition():
    displacements, counts = gather_layout(23, 5)
    parts = partition(23, 5)
    assert displacements == [part.start for part in parts]
    assert counts == [part.size for part in parts]


def test_loop_bounds_single_part_skip_both_boundaries():
    (part,) = partition(11, 1)
    assert part.loop_bounds(11) == (2, 11)


def test_loop_bounds_inner_part_cover_all_owned_points():
    parts = partition(20, 4)
    middle = parts[1]
    assert middle.loop_bounds(20) == (1, middle.size + 1)


def test_loop_bounds_edge_parts():
    parts = partition(20, 4)
    assert parts[0].loop_bounds(20) == (2, parts[0].size + 1)
    assert parts[-1].loop_bounds(20) == (1, parts[-1].size)


def test_local_source_matches_global_source():
    n = 12
    full = sine_source(n)
    for part in partition(n + 1, 4):
        values = local_source(part, n)
        assert values.shape == (part.size + 2,)
        assert values[0] == 0.0 and values[-1] == 0.0
        np.testing.assert_allclose(values[1:-1], full[part.start : part.end + 1])


@pytest.mark.parametrize("nb_parts", [1, 2, 4])
def test_distributed_matches_sequential(nb_parts):
    n = 10
    expected = solve_jacobi(sine_source(n), n)
    result = solve_jacobi_distributed(n, nb_parts)
    assert result.iterations == expected.iterations
    np.testing.assert_allclose(result.u, expected.u, rtol=1e-12, atol=1e-14)


def test_distributed_solution_close_to_exact():
    n = 10
    result = solve_jacobi_distributed(n, 3)
    x = np.arange(n + 1) / n
    assert result.u[0] == 0.0 and result.u[-1] == 0.0
    assert np.max(np.abs(result.u - np.sin(np.pi * x))) < 0.02


def test_partition_rejects_zero_parts():
    with pytest.raises(ValueError):
        partition(11, 0)


def test_partition_rejects_too_many_parts():
    with pytest.raises(ValueError):
        partition(5, 6)


def test_gather_layout_rejects_too_many_parts():
    with pytest.raises(ValueError):
        gather_layout(3, 4)


def test_solve_rejects_bad_n():
    with pytest.raises(ValueError):
        solve_jacobi_distributed(0, 1)


def test_subdomain_size():
    part = Subdomain1D(rank=0, start=3, end=7, left=None, right=1)
    assert part.size == 5
    assert part.free_edges == 1