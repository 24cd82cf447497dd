"""
Densemat Linalg: cofactor-expansion kernels on raw float64 arrays.

These functions take and return 2-D numpy arrays and perform no validation;
the Matrix methods check sizes and squareness before calling in.

The determinant is the classic Laplace expansion along row 0. It visits
n! leaf minors, so it is only practical for small matrices (n <= 7).
No pivoting or elimination is used anywhere in this module.
"""

import logging

import numpy as np

logger = logging.getLogger(__name__)

# Above this size the factorial cost gets a warning.
EXPANSION_WARN_SIZE = 7


def minor_array(a, row, col):
    """
    Copy of ``a`` with one row and one column removed.

    Parameters
    ----------
    a : numpy.ndarray
        2-D source array.
    row, col : int
        Row and column to delete.

    Returns
    -------
    numpy.ndarray
        Array of shape (rows-1, cols-1), remaining elements in order.
    """
    keep_rows = np.arange(a.shape[0]) != row
    keep_cols = np.arange(a.shape[1]) != col
    return np.ascontiguousarray(a[keep_rows][:, keep_cols])


def cofactor_determinant(a):
    """
    Determinant of a square array by recursive cofactor expansion.

    det(a) = sum_j (-1)^j * a[0, j] * det(minor(a, 0, j))

    Parameters
    ----------
    a : numpy.ndarray
        Square 2-D array, at least 1 x 1.

    Returns
    -------
    float
    """
    n = a.shape[0]
    if n == 1:
        return float(a[0, 0])

    det = 0.0
    sign = 1.0
    for j in range(n):
        det += sign * a[0, j] * cofactor_determinant(minor_array(a, 0, j))
        sign = -sign
    return float(det)


def cofactor_array(a):
    """
    Matrix of algebraic complements: out[i, j] = (-1)^(i+j) * det(minor(i, j)).

    Parameters
    ----------
    a : numpy.ndarray
        Square 2-D array, at least 2 x 2.

    Returns
    -------
    numpy.ndarray
        Array with the same shape as ``a``.
    """
    n = a.shape[0]
    out = np.zeros((n, n), dtype=np.float64)
    for i in range(n):
        for j in range(n):
            sign = 1.0 if (i + j) % 2 == 0 else -1.0
            out[i, j] = sign * cofactor_determinant(minor_array(a, i, j))
    return out


def expansion_terms(n):
    """Number of 1x1 leaves visited when expanding an n x n determinant."""
    terms = 1
    for k in range(2, n + 1):
        terms *= k
    return terms


def warn_if_expensive(n, what):
    """Log a warning when an n x n cofactor expansion is costly."""
    if n > EXPANSION_WARN_SIZE:
        logger.warning("%s(): cofactor expansion of %dx%d matrix visits "
                       "%d minors (O(n!))", what, n, n, expansion_terms(n))
