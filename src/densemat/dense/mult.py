"""Matrix-matrix and vector-vector multiplication."""

import logging

import numpy as np

from densemat.config import getcontext
from densemat.data import RowMatrix, check_same_precision, check_shape
from densemat.dense import mult_product
from densemat.errors import DimensionMismatchError, InvalidArgumentError

_logger = logging.getLogger(__name__)


def mult(a: RowMatrix, b: RowMatrix, c: RowMatrix) -> None:
    """Compute ``c = a @ b``.

    Raises
    ------
    DimensionMismatchError
        If the inner dimensions differ or `c` does not have the shape of the product.
    """
    check_same_precision(a, b, c)

    if a.num_cols != b.num_rows:
        raise DimensionMismatchError(
            f"cannot multiply {a.num_rows}x{a.num_cols} by {b.num_rows}x{b.num_cols}"
        )

    check_shape(c, a.num_rows, b.num_cols)
    np.matmul(a.as2d(), b.as2d(), out=c.as2d())


def mult_trans_a(a: RowMatrix, b: RowMatrix, c: RowMatrix) -> None:
    """Compute ``c = a.T @ b``."""
    check_same_precision(a, b, c)

    if a.num_rows != b.num_rows:
        raise DimensionMismatchError(
            f"cannot multiply the transpose of {a.num_rows}x{a.num_cols} by "
            f"{b.num_rows}x{b.num_cols}"
        )

    check_shape(c, a.num_cols, b.num_cols)
    np.matmul(a.as2d().T, b.as2d(), out=c.as2d())


def mult_trans_b(a: RowMatrix, b: RowMatrix, c: RowMatrix) -> None:
    """Compute ``c = a @ b.T``."""
    check_same_precision(a, b, c)

    if a.num_cols != b.num_cols:
        raise DimensionMismatchError(
            f"cannot multiply {a.num_rows}x{a.num_cols} by the transpose of "
            f"{b.num_rows}x{b.num_cols}"
        )

    check_shape(c, a.num_rows, b.num_rows)
    np.matmul(a.as2d(), b.as2d().T, out=c.as2d())


def mult_inner(a: RowMatrix, c: RowMatrix) -> None:
    """Compute ``c = a.T @ a`` with a kernel that exploits the symmetry.

    Matrices with at least ``getcontext().mult_inner_switch`` columns are handled by
    :func:`~densemat.dense.mult_product.inner_small`, narrower ones by
    :func:`~densemat.dense.mult_product.inner_reorder`.
    """
    if a.num_cols >= getcontext().mult_inner_switch:
        _logger.debug("inner product of %dx%d: small kernel", a.num_rows, a.num_cols)
        mult_product.inner_small(a, c)
    else:
        _logger.debug("inner product of %dx%d: reorder kernel", a.num_rows, a.num_cols)
        mult_product.inner_reorder(a, c)


def mult_outer(a: RowMatrix, c: RowMatrix) -> None:
    """Compute ``c = a @ a.T`` with a kernel that exploits the symmetry."""
    mult_product.outer(a, c)


def kron(a: RowMatrix, b: RowMatrix, c: RowMatrix) -> None:
    """Compute the Kronecker product of `a` and `b`."""
    check_same_precision(a, b, c)
    check_shape(c, a.num_rows * b.num_rows, a.num_cols * b.num_cols)
    c.as2d()[...] = np.kron(a.as2d(), b.as2d())


def inner_prod(x: RowMatrix, y: RowMatrix) -> float:
    """Return the dot product of two vectors of equal length.

    Each operand may be a row or a column vector.

    Raises
    ------
    InvalidArgumentError
        If one of the operands is not a vector.
    DimensionMismatchError
        If the vectors differ in length.
    """
    check_same_precision(x, y)

    if not (x.num_rows == 1 or x.num_cols == 1):
        raise InvalidArgumentError("first operand is not a vector")

    if not (y.num_rows == 1 or y.num_cols == 1):
        raise InvalidArgumentError("second operand is not a vector")

    if x.get_num_elements() != y.get_num_elements():
        raise DimensionMismatchError(
            f"vectors differ in length: {x.get_num_elements()} and "
            f"{y.get_num_elements()}"
        )

    return x.precision.tofloat(x.data @ y.data)
