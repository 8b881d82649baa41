"""Predicates describing the contents or the structure of a matrix."""

import numpy as np

from densemat.data import RowMatrix, check_same_precision
from densemat.errors import InvalidArgumentError


def has_uncountable(a: RowMatrix) -> bool:
    """Return ``True`` if any element is NaN or infinite."""
    return not bool(np.all(np.isfinite(a.data)))


def is_identical(a: RowMatrix, b: RowMatrix, tol: float) -> bool:
    """Return ``True`` if `a` and `b` have the same shape and agree within `tol`.

    Two NaNs are considered identical, and infinities must match exactly, including
    their sign.

    Raises
    ------
    InvalidArgumentError
        If `tol` is negative.
    """
    check_same_precision(a, b)

    if tol < 0:
        raise InvalidArgumentError("tolerance must be non-negative")

    if a.shape != b.shape:
        return False

    x, y = a.data, b.data
    xnan, ynan = np.isnan(x), np.isnan(y)

    if np.any(xnan != ynan):
        return False

    xinf, yinf = np.isinf(x), np.isinf(y)

    if np.any(xinf != yinf) or np.any(x[xinf] != y[yinf]):
        return False

    finite = ~(xnan | xinf)
    return bool(np.all(np.abs(x[finite] - y[finite]) <= tol))


def is_square(a: RowMatrix) -> bool:
    return a.num_rows == a.num_cols


def is_symmetric(a: RowMatrix, tol: float = 0.0) -> bool:
    """Return ``True`` if `a` is square and ``|a[i, j] - a[j, i]| <= tol`` holds for
    every element."""
    if not is_square(a):
        return False

    x = a.as2d()
    return bool(np.all(np.abs(x - x.T) <= tol))


def is_vector(a: RowMatrix) -> bool:
    """Return ``True`` if `a` has exactly one row or exactly one column."""
    return a.num_rows == 1 or a.num_cols == 1
