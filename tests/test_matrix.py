"""Tests for the Matrix value type: lifecycle, resize, access, arithmetic."""
import copy

import numpy as np
import pytest

from densemat import (
    Matrix, ErrorKind, MatrixArgumentError, MatrixIndexError,
    MatrixMathError, MatrixStateError,
)


def _values(m):
    return [[m[i, j] for j in range(m.cols)] for i in range(m.rows)]


def _random(rows, cols, seed=0):
    rng = np.random.default_rng(seed)
    return Matrix.from_values(rows, cols, rng.uniform(-10, 10, rows * cols))


# ============================================================
# Construction
# ============================================================

@pytest.mark.parametrize("rows,cols", [(1, 1), (2, 3), (5, 1), (4, 4)])
def test_construct_zero_filled(rows, cols):
    m = Matrix(rows, cols)
    assert m.rows == rows
    assert m.cols == cols
    assert m.shape == (rows, cols)
    assert all(v == 0.0 for row in _values(m) for v in row)


def test_default_is_3x3():
    m = Matrix()
    assert m.shape == (3, 3)
    assert m == Matrix(3, 3)


@pytest.mark.parametrize("rows,cols", [(0, 3), (3, 0), (-1, 2), (0, 0)])
def test_construct_bad_size(rows, cols):
    with pytest.raises(MatrixArgumentError) as exc:
        Matrix(rows, cols)
    assert exc.value.kind is ErrorKind.INCORRECT_SIZE
    assert isinstance(exc.value, ValueError)


def test_construct_non_integer_size():
    with pytest.raises(TypeError):
        Matrix(2.5, 3)


def test_identity():
    m = Matrix.identity(3)
    assert _values(m) == [[1, 0, 0], [0, 1, 0], [0, 0, 1]]


def test_from_values_row_major():
    m = Matrix.from_values(2, 3, [1, 2, 3, 4, 5, 6])
    assert _values(m) == [[1, 2, 3], [4, 5, 6]]


def test_set_values_wrong_count_leaves_matrix():
    m = Matrix.from_values(2, 2, [1, 2, 3, 4])
    with pytest.raises(MatrixMathError) as exc:
        m.set_values([1, 2, 3])
    assert exc.value.kind is ErrorKind.DIFFERENT_DIMENSIONS
    assert _values(m) == [[1, 2], [3, 4]]


@pytest.mark.parametrize("values", ["1234", b"1234", bytearray(b"1234")])
def test_set_values_rejects_text(values):
    m = Matrix.from_values(2, 2, [9, 8, 7, 6])
    with pytest.raises(TypeError):
        m.set_values(values)
    assert _values(m) == [[9, 8], [7, 6]]


# ============================================================
# Copy, move, release
# ============================================================

def test_copy_is_independent():
    a = Matrix.from_values(2, 2, [1, 2, 3, 4])
    for b in (a.copy(), copy.copy(a), copy.deepcopy(a)):
        assert b == a
        b[0, 0] = 100.0
        assert a[0, 0] == 1.0


def test_move_empties_source():
    a = Matrix.from_values(2, 2, [1, 2, 3, 4])
    b = a.move()
    assert _values(b) == [[1, 2], [3, 4]]
    assert a.is_empty
    assert a.shape == (0, 0)
    assert not b.is_empty


def test_empty_matrix_is_checked():
    a = Matrix(2, 2)
    a.move()
    with pytest.raises(MatrixStateError) as exc:
        a.determinant()
    assert exc.value.kind is ErrorKind.EMPTY_MATRIX
    with pytest.raises(MatrixStateError):
        a[0, 0]
    with pytest.raises(MatrixStateError):
        a + Matrix(2, 2)
    with pytest.raises(MatrixStateError):
        Matrix(2, 2) + a
    assert repr(a) == "Matrix(empty)"


def test_release_twice_is_safe():
    m = Matrix(3, 3)
    m.release()
    m.release()
    assert m.is_empty
    assert m.rows == 0 and m.cols == 0


def test_assign_copies():
    a = Matrix(3, 3)
    b = Matrix.from_values(2, 1, [7, 8])
    assert a.assign(b) is a
    assert a.shape == (2, 1)
    assert a == b
    a[0, 0] = 0.0
    assert b[0, 0] == 7.0


def test_move_assign_transfers():
    a = Matrix(3, 3)
    b = Matrix.from_values(2, 1, [7, 8])
    a.move_assign(b)
    assert _values(a) == [[7], [8]]
    assert b.is_empty


def test_self_assignment_is_noop():
    a = Matrix.from_values(2, 2, [1, 2, 3, 4])
    a.assign(a)
    a.move_assign(a)
    assert not a.is_empty
    assert _values(a) == [[1, 2], [3, 4]]


def test_assign_from_empty_leaves_target():
    a = Matrix.from_values(1, 2, [1, 2])
    b = Matrix(2, 2)
    b.release()
    with pytest.raises(MatrixStateError):
        a.assign(b)
    with pytest.raises(MatrixStateError):
        a.move_assign(b)
    assert _values(a) == [[1, 2]]


# ============================================================
# Resize
# ============================================================

def test_resize_grow_zero_fills():
    m = Matrix.from_values(2, 2, [1, 2, 3, 4])
    m.resize(3, 3)
    assert m.shape == (3, 3)
    assert _values(m) == [[1, 2, 0], [3, 4, 0], [0, 0, 0]]


def test_resize_shrink_keeps_top_left():
    m = Matrix.from_values(3, 3, range(1, 10))
    m.resize(2, 2)
    assert _values(m) == [[1, 2], [4, 5]]


def test_resize_mixed():
    m = Matrix.from_values(2, 3, [1, 2, 3, 4, 5, 6])
    m.resize(3, 2)
    assert _values(m) == [[1, 2], [4, 5], [0, 0]]


def test_row_and_col_setters():
    m = Matrix.from_values(2, 2, [1, 2, 3, 4])
    m.rows = 3
    assert m.shape == (3, 2)
    m.cols = 1
    assert _values(m) == [[1], [3], [0]]
    m.set_rows(1)
    m.set_cols(2)
    assert _values(m) == [[1, 0]]


def test_resize_bad_sizes_leave_matrix():
    m = Matrix.from_values(2, 2, [1, 2, 3, 4])
    with pytest.raises(MatrixArgumentError) as exc:
        m.resize(0, 0)
    assert exc.value.kind is ErrorKind.INVALID_ROW_SIZE
    with pytest.raises(MatrixArgumentError) as exc:
        m.resize(2, -1)
    assert exc.value.kind is ErrorKind.INVALID_COL_SIZE
    with pytest.raises(MatrixArgumentError) as exc:
        m.cols = 0
    assert exc.value.kind is ErrorKind.INVALID_COL_SIZE
    assert _values(m) == [[1, 2], [3, 4]]


# ============================================================
# Equality and indexing
# ============================================================

def test_equality_tolerance():
    a = Matrix.from_values(2, 2, [1, 2, 3, 4])
    b = a.copy()
    b[1, 1] = 4.0 + 5e-8
    assert a == b
    b[1, 1] = 4.0 + 1e-6
    assert a != b
    assert a.equals(b, tol=1e-5)


def test_equality_different_sizes():
    assert Matrix(2, 3) != Matrix(3, 2)
    assert not Matrix(2, 3).sizes_equal(Matrix(3, 2))
    assert Matrix(2, 3).sizes_equal(Matrix(2, 3))


def test_equality_other_types():
    assert Matrix(1, 1) != 0
    assert (Matrix(1, 1) == "m") is False


def test_unhashable():
    with pytest.raises(TypeError):
        hash(Matrix(2, 2))


def test_element_access_and_mutation():
    m = Matrix(2, 3)
    m[1, 2] = 3.5
    m.set_value(0, 1, -2)
    assert m[1, 2] == 3.5
    assert m.get_value(0, 1) == -2.0
    assert isinstance(m[0, 0], float)


@pytest.mark.parametrize("i,j", [(5, 0), (0, 3), (3, 3), (-1, 0), (0, -1)])
def test_index_out_of_range(i, j):
    m = Matrix(3, 3)
    with pytest.raises(MatrixIndexError) as exc:
        m[i, j]
    assert exc.value.kind is ErrorKind.INDEX_OUT_OF_RANGE
    assert isinstance(exc.value, IndexError)
    with pytest.raises(IndexError):
        m[i, j] = 1.0


def test_bad_index_keys():
    m = Matrix(2, 2)
    with pytest.raises(TypeError):
        m[0]
    with pytest.raises(TypeError):
        m[0, 0, 0]
    with pytest.raises(TypeError):
        m[0.5, 0]


# ============================================================
# Arithmetic
# ============================================================

def test_sum_and_sub_in_place():
    a = Matrix.from_values(2, 2, [1, 2, 3, 4])
    b = Matrix.from_values(2, 2, [10, 20, 30, 40])
    a.sum_matrix(b)
    assert _values(a) == [[11, 22], [33, 44]]
    a.sub_matrix(b)
    assert _values(a) == [[1, 2], [3, 4]]


def test_sum_different_dimensions_leaves_operand():
    a = Matrix.from_values(2, 2, [1, 2, 3, 4])
    with pytest.raises(MatrixMathError) as exc:
        a += Matrix(3, 3)
    assert exc.value.kind is ErrorKind.DIFFERENT_DIMENSIONS
    assert isinstance(exc.value, ArithmeticError)
    with pytest.raises(MatrixMathError):
        a - Matrix(2, 3)
    assert _values(a) == [[1, 2], [3, 4]]


def test_mul_number():
    a = Matrix.from_values(1, 3, [1, -2, 3])
    a.mul_number(2)
    assert _values(a) == [[2, -4, 6]]
    assert _values(a * 0.5) == [[1, -2, 3]]
    assert _values(3 * a) == [[6, -12, 18]]
    assert _values(a * np.float64(2)) == [[4, -8, 12]]
    assert _values(-a) == [[-2, 4, -6]]
    a *= 0
    assert _values(a) == [[0, 0, 0]]


def test_mul_matrix():
    a = Matrix.from_values(2, 2, [1, 2, 3, 4])
    b = Matrix.from_values(2, 2, [5, 6, 7, 8])
    expected = Matrix.from_values(2, 2, [19, 22, 43, 50])
    assert a * b == expected
    assert a @ b == expected
    a *= b
    assert a == expected


def test_mul_matrix_changes_shape():
    a = Matrix.from_values(2, 3, [1, 2, 3, 4, 5, 6])
    b = Matrix.from_values(3, 1, [1, 0, -1])
    a @= b
    assert _values(a) == [[-2], [-2]]


def test_mul_dimension_mismatch_leaves_operand():
    a = Matrix(2, 3)
    b = Matrix(4, 2)
    with pytest.raises(MatrixMathError) as exc:
        a * b
    assert exc.value.kind is ErrorKind.DIMENSION_MISMATCH
    with pytest.raises(MatrixMathError):
        a *= b
    assert a.shape == (2, 3)


def test_out_of_place_operators_do_not_mutate():
    a = Matrix.from_values(2, 2, [1, 2, 3, 4])
    b = Matrix.from_values(2, 2, [5, 6, 7, 8])
    c = a + b
    d = a - b
    e = a * 2
    assert _values(a) == [[1, 2], [3, 4]]
    assert _values(c) == [[6, 8], [10, 12]]
    assert _values(d) == [[-4, -4], [-4, -4]]
    assert _values(e) == [[2, 4], [6, 8]]


def test_compound_operators_return_self():
    a = Matrix.from_values(2, 2, [1, 2, 3, 4])
    b = Matrix.identity(2)
    ref = a
    a += b
    a -= b
    a *= b
    a *= 1.0
    assert a is ref


def test_unsupported_operands():
    a = Matrix(2, 2)
    with pytest.raises(TypeError):
        a + 1
    with pytest.raises(TypeError):
        a * "x"
    with pytest.raises(TypeError):
        a @ 2


@pytest.mark.parametrize("method", [
    "sizes_equal", "equals", "sum_matrix", "sub_matrix", "mul_matrix",
    "assign", "move_assign",
])
def test_named_methods_reject_non_matrix(method):
    a = Matrix.from_values(1, 2, [1, 2])
    with pytest.raises(TypeError, match="Matrix operand expected"):
        getattr(a, method)(3)
    assert _values(a) == [[1, 2]]


def test_add_commutes_and_sub_inverts():
    a = _random(3, 4, seed=1)
    b = _random(3, 4, seed=2)
    assert a + b == b + a
    assert a + b - b == a


def test_sum_with_itself():
    a = Matrix.from_values(1, 2, [1, 2])
    a += a
    assert _values(a) == [[2, 4]]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
