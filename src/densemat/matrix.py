"""
Densemat Matrix: dense, resizable float64 matrix value type.

Each Matrix exclusively owns one C-contiguous numpy float64 array of shape
(rows, cols). A Matrix is either populated (owns a store) or empty (its
store was released or moved out). Empty matrices report 0 x 0 and every
operation on them raises MatrixStateError, except release(), which is
always safe to call again.

Linear algebra (determinant, complements, inverse) uses cofactor expansion
from densemat.linalg, which is O(n!) and meant for small matrices only.

Usage:
    from densemat import Matrix
    A = Matrix.from_values(2, 2, [1, 2, 3, 4])
    A.determinant()          # -2.0
    A.inverse_matrix()       # [[-2, 1], [1.5, -0.5]]
    (A * A.inverse_matrix()) == Matrix.identity(2)
"""

import logging
import numbers
import operator

import numpy as np

from densemat import linalg
from densemat.errors import ErrorKind, raise_error

logger = logging.getLogger(__name__)

# Max per-element absolute difference for two matrices to compare equal.
# Also the singularity threshold for determinants.
ACCURACY = 1e-7

DEFAULT_SIZE = 3


def _allocate(rows, cols):
    """Zero-filled store, or IncorrectSize for non-positive dimensions."""
    if rows <= 0 or cols <= 0:
        raise_error(ErrorKind.INCORRECT_SIZE, f"{rows}x{cols}")
    return np.zeros((rows, cols), dtype=np.float64)


def _operand(other):
    """Store of another Matrix operand; TypeError for anything else."""
    if not isinstance(other, Matrix):
        raise TypeError(
            f"Matrix operand expected, got {type(other).__name__}")
    return other._require()


class Matrix:
    """
    Dense matrix of float64 values.

    Parameters
    ----------
    rows : int
        Number of rows (> 0). Default 3.
    cols : int
        Number of columns (> 0). Default 3.

    Examples
    --------
    >>> m = Matrix(2, 3)
    >>> m.shape
    (2, 3)
    >>> m[1, 2] = 5.0
    >>> m.resize(3, 3)
    >>> m[1, 2], m[2, 2]
    (5.0, 0.0)
    """

    # Mutable with tolerance-based equality.
    __hash__ = None

    # Keep numpy scalars from broadcasting over a Matrix: `np.float64(2) * m`
    # must reach Matrix.__rmul__.
    __array_ufunc__ = None

    def __init__(self, rows=DEFAULT_SIZE, cols=DEFAULT_SIZE):
        self._data = _allocate(operator.index(rows), operator.index(cols))

    @classmethod
    def _wrap(cls, data):
        """Adopt an existing float64 array as the store (no copy)."""
        obj = cls.__new__(cls)
        obj._data = data
        return obj

    @classmethod
    def identity(cls, n):
        """n x n identity matrix."""
        m = cls(n, n)
        np.fill_diagonal(m._data, 1.0)
        return m

    @classmethod
    def from_values(cls, rows, cols, values):
        """Build a rows x cols matrix and fill it row-major from ``values``."""
        m = cls(rows, cols)
        m.set_values(values)
        return m

    # ============================================================
    # State and lifecycle
    # ============================================================

    def _require(self):
        if self._data is None:
            raise_error(ErrorKind.EMPTY_MATRIX)
        return self._data

    @property
    def is_empty(self):
        """True once the store has been released or moved out."""
        return self._data is None

    @property
    def rows(self):
        return 0 if self._data is None else self._data.shape[0]

    @rows.setter
    def rows(self, value):
        self.set_rows(value)

    @property
    def cols(self):
        return 0 if self._data is None else self._data.shape[1]

    @cols.setter
    def cols(self, value):
        self.set_cols(value)

    @property
    def shape(self):
        return (self.rows, self.cols)

    @property
    def nbytes(self):
        """Size of the store in bytes."""
        return int(self._require().nbytes)

    def count_nonzero(self):
        return int(np.count_nonzero(self._require()))

    def copy(self):
        """Deep copy with its own store."""
        return type(self)._wrap(self._require().copy())

    def __copy__(self):
        return self.copy()

    def __deepcopy__(self, memo):
        return self.copy()

    def move(self):
        """
        Transfer the store into a new Matrix without copying.

        This matrix becomes empty.

        Returns
        -------
        Matrix
            New owner of the store.
        """
        data = self._require()
        self._data = None
        return type(self)._wrap(data)

    def release(self):
        """Drop the store. Safe to call on an already empty matrix."""
        self._data = None

    def assign(self, other):
        """
        Copy-assign: replace this store with a deep copy of ``other``.

        A no-op when ``other`` is this very object.
        """
        if other is self:
            return self
        data = _operand(other).copy()
        self.release()
        self._data = data
        return self

    def move_assign(self, other):
        """
        Move-assign: take ``other``'s store and leave ``other`` empty.

        A no-op when ``other`` is this very object.
        """
        if other is self:
            return self
        data = _operand(other)
        self.release()
        self._data = data
        other._data = None
        return self

    # ============================================================
    # Resize
    # ============================================================

    def resize(self, rows, cols):
        """
        Change the size, keeping the overlapping top-left block.

        New cells are zero; cells outside the new size are discarded.

        Parameters
        ----------
        rows, cols : int
            New dimensions, both > 0.

        Raises
        ------
        MatrixArgumentError
            InvalidRowSize / InvalidColSize for non-positive dimensions.
        """
        self._require()
        rows = operator.index(rows)
        cols = operator.index(cols)
        if rows <= 0:
            raise_error(ErrorKind.INVALID_ROW_SIZE, str(rows))
        if cols <= 0:
            raise_error(ErrorKind.INVALID_COL_SIZE, str(cols))
        self._set_new_size(rows, cols)

    def set_rows(self, rows):
        """Resize the row count, keeping the column count."""
        self.resize(rows, self.cols)

    def set_cols(self, cols):
        """Resize the column count, keeping the row count."""
        self.resize(self.rows, cols)

    def _set_new_size(self, rows, cols):
        old = self._data
        new = _allocate(rows, cols)
        r = min(old.shape[0], rows)
        c = min(old.shape[1], cols)
        new[:r, :c] = old[:r, :c]
        logger.debug("resize %dx%d -> %dx%d", old.shape[0], old.shape[1],
                     rows, cols)
        self._data = new

    # ============================================================
    # Equality and element access
    # ============================================================

    def sizes_equal(self, other):
        """True when both matrices have the same rows and cols."""
        return self._require().shape == _operand(other).shape

    def equals(self, other, tol=ACCURACY):
        """
        Compare element-wise within ``tol`` (absolute).

        Matrices of different sizes are never equal.
        """
        a = self._require()
        b = _operand(other)
        if a.shape != b.shape:
            return False
        return bool(np.all(np.abs(a - b) <= tol))

    def __eq__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.equals(other)

    def _check_index(self, i, j):
        data = self._require()
        i = operator.index(i)
        j = operator.index(j)
        rows, cols = data.shape
        if not (0 <= i < rows and 0 <= j < cols):
            raise_error(ErrorKind.INDEX_OUT_OF_RANGE,
                        f"({i}, {j}) in {rows}x{cols}")
        return data, i, j

    @staticmethod
    def _split_key(key):
        if not isinstance(key, tuple) or len(key) != 2:
            raise TypeError(
                f"Matrix indices must be a (row, col) pair, got {key!r}")
        return key

    def get_value(self, i, j):
        data, i, j = self._check_index(i, j)
        return float(data[i, j])

    def set_value(self, i, j, value):
        data, i, j = self._check_index(i, j)
        data[i, j] = float(value)

    def __getitem__(self, key):
        return self.get_value(*self._split_key(key))

    def __setitem__(self, key, value):
        self.set_value(*self._split_key(key), value)

    def set_values(self, values):
        """
        Fill the matrix row-major from an iterable of rows * cols numbers.

        Raises
        ------
        MatrixMathError
            DifferentDimensions if the count does not match; the matrix is
            left unchanged.
        TypeError
            For str/bytes input, which would otherwise load digit by digit.
        """
        data = self._require()
        if isinstance(values, (str, bytes, bytearray)):
            raise TypeError(
                f"set_values() needs numbers, got {type(values).__name__}")
        flat = np.fromiter(values, dtype=np.float64)
        if flat.size != data.size:
            raise_error(ErrorKind.DIFFERENT_DIMENSIONS,
                        f"{flat.size} values for {data.shape[0]}x{data.shape[1]}")
        data[...] = flat.reshape(data.shape)

    # ============================================================
    # Arithmetic (in place)
    # ============================================================

    def _elementwise(self, other, ufunc):
        """Validate sizes, then apply ``ufunc(self, other)`` into self."""
        data = self._require()
        if not self.sizes_equal(other):
            raise_error(ErrorKind.DIFFERENT_DIMENSIONS,
                        f"{self.rows}x{self.cols} vs {other.rows}x{other.cols}")
        ufunc(data, other._data, out=data)

    def sum_matrix(self, other):
        self._elementwise(other, np.add)

    def sub_matrix(self, other):
        self._elementwise(other, np.subtract)

    def mul_number(self, num):
        data = self._require()
        data *= float(num)

    def mul_matrix(self, other):
        """
        Replace self with self x other.

        Raises
        ------
        MatrixMathError
            DimensionMismatch when self.cols != other.rows.
        """
        a = self._require()
        b = _operand(other)
        if a.shape[1] != b.shape[0]:
            raise_error(ErrorKind.DIMENSION_MISMATCH,
                        f"{a.shape[0]}x{a.shape[1]} * {b.shape[0]}x{b.shape[1]}")
        result = a @ b
        logger.debug("mul_matrix %dx%d -> %dx%d", a.shape[0], a.shape[1],
                     result.shape[0], result.shape[1])
        self._data = result

    # ============================================================
    # Operators
    # ============================================================

    def _calculate(self, other, method):
        """Copy self, apply an in-place ``method`` to the copy, return it."""
        result = self.copy()
        method(result, other)
        return result

    def __add__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        return self._calculate(other, Matrix.sum_matrix)

    def __sub__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        return self._calculate(other, Matrix.sub_matrix)

    def __mul__(self, other):
        if isinstance(other, Matrix):
            return self._calculate(other, Matrix.mul_matrix)
        if isinstance(other, numbers.Real):
            return self._calculate(other, Matrix.mul_number)
        return NotImplemented

    def __rmul__(self, other):
        if isinstance(other, numbers.Real):
            return self._calculate(other, Matrix.mul_number)
        return NotImplemented

    def __matmul__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        return self._calculate(other, Matrix.mul_matrix)

    def __neg__(self):
        return self * -1.0

    def __iadd__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        self.sum_matrix(other)
        return self

    def __isub__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        self.sub_matrix(other)
        return self

    def __imul__(self, other):
        if isinstance(other, Matrix):
            self.mul_matrix(other)
        elif isinstance(other, numbers.Real):
            self.mul_number(other)
        else:
            return NotImplemented
        return self

    def __imatmul__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        self.mul_matrix(other)
        return self

    # ============================================================
    # Linear algebra
    # ============================================================

    def transpose(self):
        """New cols x rows matrix with result[j, i] = self[i, j]."""
        return type(self)._wrap(self._require().T.copy())

    def minor(self, row, col):
        """
        Submatrix with ``row`` and ``col`` removed.

        Raises
        ------
        MatrixIndexError
            If row or col is outside the matrix.
        MatrixArgumentError
            IncorrectSize if the matrix has a single row or column.
        """
        data, row, col = self._check_index(row, col)
        if data.shape[0] < 2 or data.shape[1] < 2:
            raise_error(ErrorKind.INCORRECT_SIZE,
                        f"minor of {data.shape[0]}x{data.shape[1]}")
        return type(self)._wrap(linalg.minor_array(data, row, col))

    def _require_square(self):
        data = self._require()
        if data.shape[0] != data.shape[1]:
            raise_error(ErrorKind.NOT_SQUARE,
                        f"{data.shape[0]}x{data.shape[1]}")
        return data

    def determinant(self):
        """
        Determinant by cofactor expansion along the first row.

        Runs in O(n!) time with no pivoting; intended for small matrices.

        Returns
        -------
        float

        Raises
        ------
        MatrixMathError
            NotSquare for rectangular matrices.
        """
        data = self._require_square()
        linalg.warn_if_expensive(data.shape[0], "determinant")
        return linalg.cofactor_determinant(data)

    def calc_complements(self):
        """
        Cofactor (algebraic complement) matrix.

        Raises
        ------
        MatrixMathError
            NotSquare, or TooSmallForComplement for a 1 x 1 matrix.
        """
        data = self._require_square()
        n = data.shape[0]
        if n < 2:
            raise_error(ErrorKind.TOO_SMALL_FOR_COMPLEMENT)
        linalg.warn_if_expensive(n, "calc_complements")
        return type(self)._wrap(linalg.cofactor_array(data))

    def inverse_matrix(self):
        """
        Inverse via the adjugate: transpose(complements) / det.

        The determinant and cofactor matrix are recomputed on every call.

        Raises
        ------
        MatrixMathError
            NotSquare, or SingularMatrix when |det| < ACCURACY.
        """
        det = self.determinant()
        if abs(det) < ACCURACY:
            raise_error(ErrorKind.SINGULAR_MATRIX, f"det={det:.3g}")
        if self.rows == 1:
            return type(self)._wrap(np.array([[1.0 / det]], dtype=np.float64))
        result = self.calc_complements().transpose()
        result.mul_number(1.0 / det)
        return result

    def __repr__(self):
        if self._data is None:
            return "Matrix(empty)"
        return (f"Matrix(rows={self.rows}, cols={self.cols}, "
                f"values={self._data.tolist()})")
