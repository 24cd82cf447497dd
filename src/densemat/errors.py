"""
Densemat Errors: symbolic failure kinds and their exceptions.

Every precondition in the package is reported through an ErrorKind. The
kind selects both the canonical message and the exception class, so callers
can tell bad logical input (sizes, indices) from bad numeric operands
(dimension clashes, singular matrices):

  - MatrixMathError      -> also an ArithmeticError
  - MatrixArgumentError  -> also a ValueError
  - MatrixIndexError     -> also an IndexError
  - MatrixStateError     -> also a RuntimeError (released matrix)

Usage:
    from densemat.errors import ErrorKind, raise_error
    raise_error(ErrorKind.NOT_SQUARE)
"""

from enum import Enum


class ErrorKind(Enum):
    """Symbolic failure kinds raised by matrix operations."""

    DIFFERENT_DIMENSIONS = 0
    DIMENSION_MISMATCH = 1
    NOT_SQUARE = 2
    SINGULAR_MATRIX = 3
    TOO_SMALL_FOR_COMPLEMENT = 4
    INDEX_OUT_OF_RANGE = 5
    INCORRECT_SIZE = 6
    INVALID_ROW_SIZE = 7
    INVALID_COL_SIZE = 8
    EMPTY_MATRIX = 9


ERROR_MESSAGES = {
    ErrorKind.DIFFERENT_DIMENSIONS: "Different matrix sizes.",
    ErrorKind.DIMENSION_MISMATCH: (
        "The number of columns of the first matrix is not equal to the "
        "number of rows of the second matrix."),
    ErrorKind.NOT_SQUARE: "The matrix is not square.",
    ErrorKind.SINGULAR_MATRIX: "The matrix determinant is 0.",
    ErrorKind.TOO_SMALL_FOR_COMPLEMENT: (
        "The matrix size for a compute algebraic complement matrix should "
        "be at least 2."),
    ErrorKind.INDEX_OUT_OF_RANGE: "Index outside the matrix.",
    ErrorKind.INCORRECT_SIZE: "The matrix size is incorrect.",
    ErrorKind.INVALID_ROW_SIZE: "The new row size is incorrect.",
    ErrorKind.INVALID_COL_SIZE: "The new column size is incorrect.",
    ErrorKind.EMPTY_MATRIX: "The matrix has been released.",
}


def error_message(kind):
    """Canonical message for an ErrorKind ("Unknown error" otherwise)."""
    return ERROR_MESSAGES.get(kind, "Unknown error")


class MatrixError(Exception):
    """
    Base class for all matrix failures.

    Parameters
    ----------
    kind : ErrorKind
        Symbolic failure kind.
    detail : str, optional
        Extra context appended to the canonical message.
    """

    def __init__(self, kind, detail=None):
        self.kind = kind
        self.detail = detail
        message = error_message(kind)
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class MatrixMathError(MatrixError, ArithmeticError):
    """Operands are numerically incompatible."""


class MatrixArgumentError(MatrixError, ValueError):
    """A size or other argument is invalid."""


class MatrixIndexError(MatrixArgumentError, IndexError):
    """Element index outside the matrix."""


class MatrixStateError(MatrixError, RuntimeError):
    """Operation on a released (moved-from) matrix."""


_ERROR_CLASSES = {
    ErrorKind.DIFFERENT_DIMENSIONS: MatrixMathError,
    ErrorKind.DIMENSION_MISMATCH: MatrixMathError,
    ErrorKind.NOT_SQUARE: MatrixMathError,
    ErrorKind.SINGULAR_MATRIX: MatrixMathError,
    ErrorKind.TOO_SMALL_FOR_COMPLEMENT: MatrixMathError,
    ErrorKind.INDEX_OUT_OF_RANGE: MatrixIndexError,
    ErrorKind.INCORRECT_SIZE: MatrixArgumentError,
    ErrorKind.INVALID_ROW_SIZE: MatrixArgumentError,
    ErrorKind.INVALID_COL_SIZE: MatrixArgumentError,
    ErrorKind.EMPTY_MATRIX: MatrixStateError,
}


def error_for(kind, detail=None):
    """Build (without raising) the exception matching ``kind``."""
    cls = _ERROR_CLASSES.get(kind, MatrixError)
    return cls(kind, detail)


def raise_error(kind, detail=None):
    """Raise the exception matching ``kind``."""
    raise error_for(kind, detail)
