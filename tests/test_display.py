import numpy as np
import pytest

from poissonfd.display import format_matrix, format_vector


def test_vector_float_format():
    assert format_vector([1.5]) == "  1.500000 \n"


def test_vector_int_format():
    assert format_vector(np.array([1, 2, 3])) == "1 2 3 \n"


def test_matrix_int_format():
    assert format_matrix(np.array([[1, 2], [3, 4]])) == "1 2 \n3 4 \n"


def test_matrix_has_one_line_per_row():
    matrix = np.linspace(0.0, 1.0, 12).reshape(3, 4)
    lines = format_matrix(matrix).splitlines()
    assert len(lines) == 3


def test_float_fields_are_fixed_width():
    matrix = np.array([[0.25, -3.5, 100.0], [1e-3, 2.0, 3.0]])
    for line in format_matrix(matrix).splitlines():
        assert len(line) == 3 * 11
        parsed = [float(token) for token in line.split()]
        assert len(parsed) == 3


def test_matrix_values_round_trip_to_six_decimals():
    matrix = np.array([[0.123456, -2.5], [7.0, 0.5]])
    parsed = [
        [float(token) for token in line.split()]
        for line in format_matrix(matrix).splitlines()
    ]
    assert np.allclose(parsed, matrix, atol=1e-6)


def test_vector_ends_with_newline_and_round_trips():
    vector = np.array([0.5, -1.25, 3.0])
    text = format_vector(vector)
    assert text.endswith("\n")
    assert np.allclose([float(t) for t in text.split()], vector)


def test_matrix_rejects_vector():
    with pytest.raises(ValueError):
        format_matrix([1.0, 2.0])