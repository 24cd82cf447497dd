"""
Densemat - Dense Matrix Engine
==============================

Resizable float64 matrices with exact-algorithm linear algebra.

Quick start:
    import densemat
    from densemat import Matrix

    A = Matrix.from_values(2, 2, [1, 2, 3, 4])
    B = Matrix.from_values(2, 2, [5, 6, 7, 8])

    A * B                  # [[19, 22], [43, 50]]
    A.determinant()        # -2.0
    A.inverse_matrix()     # [[-2, 1], [1.5, -0.5]]

    # Structure report and small linear systems
    report = densemat.inspect_matrix(A)
    x = densemat.solve(A, [5, 11])

Determinant, complements and inverse use cofactor expansion (O(n!)), so
they are meant for small matrices.

License: MIT
"""

__version__ = "0.1.0"

from densemat.errors import (
    ErrorKind, MatrixError, MatrixMathError, MatrixArgumentError,
    MatrixIndexError, MatrixStateError, error_message,
)
from densemat.matrix import Matrix, ACCURACY
from densemat.detector import inspect_matrix
from densemat.solver import solve

__all__ = [
    "Matrix", "ACCURACY", "inspect_matrix", "solve",
    "ErrorKind", "MatrixError", "MatrixMathError", "MatrixArgumentError",
    "MatrixIndexError", "MatrixStateError", "error_message",
]
