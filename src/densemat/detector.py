"""
Densemat Detector: structure report for a Matrix.

Summarizes a matrix and estimates whether cofactor-expansion algorithms
(determinant, complements, inverse) are practical for it:
  - Shape, density, non-zero count, memory
  - Number of leaf minors the expansion would visit (n!)
  - Invertibility, only when the expansion is cheap (n <= EXPANSION_WARN_SIZE)

Usage:
    from densemat import Matrix, inspect_matrix
    report = inspect_matrix(Matrix.identity(4))
    print(report)
"""

from densemat import linalg
from densemat.errors import ErrorKind, raise_error
from densemat.matrix import ACCURACY


def inspect_matrix(m):
    """
    Analyze matrix structure and cofactor-expansion cost.

    Parameters
    ----------
    m : Matrix
        The matrix to analyze (must not be empty).

    Returns
    -------
    dict
        Structure report with shape, density, nnz, cost and invertibility.
        ``invertible`` is None unless the matrix is square and small enough
        for the determinant to be computed quickly.
    """
    if m.is_empty:
        raise_error(ErrorKind.EMPTY_MATRIX)
    rows, cols = m.shape
    nnz = m.count_nonzero()
    total = rows * cols
    is_square = (rows == cols)

    report = {
        "shape": (rows, cols),
        "nnz": nnz,
        "density": round(nnz / total, 6),
        "is_square": is_square,
        "ram_bytes": m.nbytes,
        "expansion_terms": linalg.expansion_terms(rows) if is_square else None,
        "expansion_feasible": is_square and rows <= linalg.EXPANSION_WARN_SIZE,
        "invertible": None,
    }

    if report["expansion_feasible"]:
        report["invertible"] = abs(m.determinant()) >= ACCURACY

    return report
