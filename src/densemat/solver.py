"""
Densemat Solver: linear systems through the adjugate inverse.

Solves A x = b as x = inverse(A) * b, where the inverse comes from the
cofactor matrix. Same O(n!) cost as Matrix.inverse_matrix; intended for
small systems. The right-hand side is normalized and checked before the
inverse is computed.

Usage:
    from densemat import Matrix, solve
    A = Matrix.from_values(2, 2, [2, 1, 1, 3])
    x = solve(A, [5, 7])       # 2 x 1 Matrix: [[1.6], [1.8]]
"""

import logging

import numpy as np

from densemat.errors import ErrorKind, raise_error
from densemat.matrix import Matrix

logger = logging.getLogger(__name__)


def _as_rhs(b):
    """Matrix view of b: (n,) becomes n x 1, (n, k) stays n x k."""
    if isinstance(b, Matrix):
        return b
    arr = np.asarray(b, dtype=np.float64)
    if arr.ndim == 1:
        arr = arr.reshape(-1, 1)
    elif arr.ndim != 2:
        raise_error(ErrorKind.DIMENSION_MISMATCH,
                    f"b must be 1-D or 2-D, got {arr.ndim}-D")
    return Matrix.from_values(arr.shape[0], arr.shape[1], arr.ravel())


def solve(A, b):
    """
    Solve A x = b.

    Parameters
    ----------
    A : Matrix
        Square, non-singular coefficient matrix.
    b : Matrix, numpy.ndarray or sequence of float
        Right-hand side: n numbers (one column) or an n x k array/Matrix.

    Returns
    -------
    Matrix
        Solution of shape n x k.

    Raises
    ------
    MatrixMathError
        DimensionMismatch if b does not have n rows (checked first);
        NotSquare / SingularMatrix for A.
    """
    if A.is_empty:
        raise_error(ErrorKind.EMPTY_MATRIX)
    B = _as_rhs(b)
    if B.rows != A.rows:
        raise_error(ErrorKind.DIMENSION_MISMATCH,
                    f"A is {A.rows}x{A.cols}, b has {B.rows} rows")
    inverse = A.inverse_matrix()
    logger.debug("solve %dx%d system, %d right-hand side(s)",
                 A.rows, A.cols, B.cols)
    return inverse * B
