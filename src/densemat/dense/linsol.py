"""Decomposition-backed linear solvers.

These functions wrap the LAPACK routines exposed by :mod:`numpy.linalg`. A failed
decomposition is reported through the return value instead of an exception; whether
the result can be trusted is decided by the caller.
"""

import logging

import numpy as np

from densemat.data import RowMatrix, check_same_precision, check_shape
from densemat.errors import DimensionMismatchError

_logger = logging.getLogger(__name__)


def _check_square(a: RowMatrix) -> None:
    if a.num_rows != a.num_cols:
        raise DimensionMismatchError(
            f"matrix must be square, got {a.num_rows}x{a.num_cols}"
        )


def invert(a: RowMatrix, out: RowMatrix) -> bool:
    """Write the inverse of the square matrix `a` into `out`.

    Returns
    -------
    bool
        ``False`` if the LU decomposition of `a` failed. `out` is left unchanged in
        that case.
    """
    check_same_precision(a, out)
    _check_square(a)
    check_shape(out, a.num_rows, a.num_cols)

    try:
        result = np.linalg.inv(a.as2d())
    except np.linalg.LinAlgError as exc:
        _logger.debug("inversion of %dx%d failed: %s", a.num_rows, a.num_cols, exc)
        return False

    out.as2d()[...] = result
    return True


def solve(a: RowMatrix, b: RowMatrix, x: RowMatrix) -> bool:
    """Solve ``a @ x = b`` for `x`.

    Square systems are solved by LU decomposition. If `a` has more rows than
    columns, `x` is the least-squares solution.

    Returns
    -------
    bool
        ``False`` if the decomposition failed. `x` is left unchanged in that case.
    """
    check_same_precision(a, b, x)

    if a.num_rows != b.num_rows:
        raise DimensionMismatchError(
            f"right-hand side must have {a.num_rows} rows, got {b.num_rows}"
        )

    check_shape(x, a.num_cols, b.num_cols)

    try:
        if a.num_rows == a.num_cols:
            result = np.linalg.solve(a.as2d(), b.as2d())
        else:
            result = np.linalg.lstsq(a.as2d(), b.as2d(), rcond=None)[0]
    except np.linalg.LinAlgError as exc:
        _logger.debug("solving a %dx%d system failed: %s", a.num_rows, a.num_cols, exc)
        return False

    x.as2d()[...] = result
    return True


def pinv(a: RowMatrix, out: RowMatrix) -> None:
    """Write the Moore-Penrose pseudo-inverse of `a` into `out`."""
    check_same_precision(a, out)
    check_shape(out, a.num_cols, a.num_rows)
    out.as2d()[...] = np.linalg.pinv(a.as2d())


def det(a: RowMatrix) -> float:
    """Return the determinant computed from an LU decomposition.

    The value is returned as computed, and may be NaN or infinite.
    """
    _check_square(a)

    with np.errstate(invalid="ignore", over="ignore"):
        result = np.linalg.det(a.as2d())

    return a.precision.tofloat(result)
