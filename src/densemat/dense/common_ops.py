"""Element-wise, structural, and reduction operations on row-major matrices.

Functions write into a caller-provided output whenever the result is a matrix. The
output must already have the required shape; nothing is resized implicitly.
"""

import numpy as np

from densemat.config import getcontext
from densemat.data import RowMatrix, check_same_precision, check_shape
from densemat.errors import DimensionMismatchError, IndexOutOfRangeError
from densemat.precision import Precision


def _check_same_shape(a: RowMatrix, b: RowMatrix) -> None:
    if a.shape != b.shape:
        raise DimensionMismatchError(
            f"shapes differ: {a.num_rows}x{a.num_cols} and {b.num_rows}x{b.num_cols}"
        )


def identity(
    n: int, m: int | None = None, *, precision: type[Precision] | None = None
) -> RowMatrix:
    """Return a matrix with ones on the diagonal and zeros elsewhere."""
    if m is None:
        m = n

    result = RowMatrix(n, m, precision=precision)
    result.data[: min(n, m) * m : m + 1] = result.precision.ONE
    return result


def diag(values, *, precision: type[Precision] | None = None) -> RowMatrix:
    """Return a square matrix with `values` on the diagonal."""
    values = np.asarray(values).ravel()

    if precision is None:
        if values.dtype.kind == "f":
            precision = Precision.fromdtype(values.dtype)
        else:
            precision = getcontext().precision

    n = len(values)
    result = RowMatrix(n, n, precision=precision)
    result.data[:: n + 1] = values
    return result


def transpose(a: RowMatrix, out: RowMatrix) -> None:
    check_same_precision(a, out)
    check_shape(out, a.num_cols, a.num_rows)
    out.as2d()[...] = a.as2d().T


def add(a: RowMatrix, b: RowMatrix, c: RowMatrix) -> None:
    """Compute ``c = a + b``."""
    check_same_precision(a, b, c)
    _check_same_shape(a, b)
    _check_same_shape(a, c)
    np.add(a.data, b.data, out=c.data)


def add_equals(a: RowMatrix, b: RowMatrix, beta: float = 1.0) -> None:
    """Compute ``a = a + beta * b`` in place."""
    check_same_precision(a, b)
    _check_same_shape(a, b)

    if beta == 1.0:
        a.data[:] += b.data
    else:
        a.data[:] += a.precision.fromfloat(beta) * b.data


def add_scalar(a: RowMatrix, value: float, c: RowMatrix) -> None:
    """Compute ``c = a + value`` element-wise."""
    check_same_precision(a, c)
    _check_same_shape(a, c)
    np.add(a.data, a.precision.fromfloat(value), out=c.data)


def subtract(a: RowMatrix, b: RowMatrix, c: RowMatrix) -> None:
    """Compute ``c = a - b``."""
    check_same_precision(a, b, c)
    _check_same_shape(a, b)
    _check_same_shape(a, c)
    np.subtract(a.data, b.data, out=c.data)


def subtract_scalar(a: RowMatrix, value: float, c: RowMatrix) -> None:
    """Compute ``c = a - value`` element-wise."""
    check_same_precision(a, c)
    _check_same_shape(a, c)
    np.subtract(a.data, a.precision.fromfloat(value), out=c.data)


def scale(alpha: float, a: RowMatrix) -> None:
    a.data[:] *= a.precision.fromfloat(alpha)


def divide(a: RowMatrix, value: float) -> None:
    with np.errstate(divide="ignore", invalid="ignore"):
        a.data[:] /= a.precision.fromfloat(value)


def change_sign(a: RowMatrix) -> None:
    np.negative(a.data, out=a.data)


def element_mult(a: RowMatrix, b: RowMatrix, c: RowMatrix) -> None:
    check_same_precision(a, b, c)
    _check_same_shape(a, b)
    _check_same_shape(a, c)
    np.multiply(a.data, b.data, out=c.data)


def element_div(a: RowMatrix, b: RowMatrix, c: RowMatrix) -> None:
    check_same_precision(a, b, c)
    _check_same_shape(a, b)
    _check_same_shape(a, c)

    with np.errstate(divide="ignore", invalid="ignore"):
        np.divide(a.data, b.data, out=c.data)


def element_power(a: RowMatrix, b: RowMatrix | float, c: RowMatrix) -> None:
    """Compute ``c[i, j] = a[i, j] ** b[i, j]``, or ``a[i, j] ** b`` if `b` is a
    scalar."""
    if isinstance(b, RowMatrix):
        check_same_precision(a, b, c)
        _check_same_shape(a, b)
        exponent = b.data
    else:
        check_same_precision(a, c)
        exponent = a.precision.fromfloat(b)

    _check_same_shape(a, c)

    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        np.power(a.data, exponent, out=c.data)


def element_exp(a: RowMatrix, c: RowMatrix) -> None:
    check_same_precision(a, c)
    _check_same_shape(a, c)

    with np.errstate(over="ignore"):
        np.exp(a.data, out=c.data)


def element_log(a: RowMatrix, c: RowMatrix) -> None:
    check_same_precision(a, c)
    _check_same_shape(a, c)

    with np.errstate(divide="ignore", invalid="ignore"):
        np.log(a.data, out=c.data)


def element_max_abs(a: RowMatrix) -> float:
    if a.get_num_elements() == 0:
        return 0.0

    return a.precision.tofloat(np.max(np.abs(a.data)))


def element_sum(a: RowMatrix) -> float:
    return a.precision.tofloat(np.sum(a.data))


def trace(a: RowMatrix) -> float:
    """Return the sum of the diagonal elements.

    Non-square matrices contribute the elements ``(i, i)`` for ``i < min(n, m)``.
    """
    n = min(a.num_rows, a.num_cols)
    return a.precision.tofloat(np.sum(a.data[: n * a.num_cols : a.num_cols + 1]))


def extract(
    src: RowMatrix,
    y0: int,
    y1: int,
    x0: int,
    x1: int,
    dst: RowMatrix,
    dst_y0: int = 0,
    dst_x0: int = 0,
) -> None:
    """Copy ``src[y0:y1, x0:x1]`` into `dst` starting at (`dst_y0`, `dst_x0`).

    Raises
    ------
    IndexOutOfRangeError
        If a bound is inverted or lies outside `src`.
    DimensionMismatchError
        If the region does not fit into `dst`.
    """
    check_same_precision(src, dst)

    if not (0 <= y0 <= y1 <= src.num_rows):
        raise IndexOutOfRangeError(
            f"rows {y0}:{y1} are not a range inside {src.num_rows} rows"
        )

    if not (0 <= x0 <= x1 <= src.num_cols):
        raise IndexOutOfRangeError(
            f"columns {x0}:{x1} are not a range inside {src.num_cols} columns"
        )

    h, w = y1 - y0, x1 - x0

    if not (0 <= dst_y0 <= dst.num_rows - h and 0 <= dst_x0 <= dst.num_cols - w):
        raise DimensionMismatchError(
            f"a {h}x{w} block does not fit into a {dst.num_rows}x{dst.num_cols} "
            f"matrix at ({dst_y0}, {dst_x0})"
        )

    dst.as2d()[dst_y0 : dst_y0 + h, dst_x0 : dst_x0 + w] = src.as2d()[y0:y1, x0:x1]


def insert(src: RowMatrix, dst: RowMatrix, dst_y0: int, dst_x0: int) -> None:
    """Copy the whole of `src` into `dst` at (`dst_y0`, `dst_x0`)."""
    extract(src, 0, src.num_rows, 0, src.num_cols, dst, dst_y0, dst_x0)


def extract_diag(src: RowMatrix, dst: RowMatrix) -> None:
    """Copy the diagonal of `src` into the vector `dst`."""
    check_same_precision(src, dst)
    n = min(src.num_rows, src.num_cols)

    if not (dst.num_rows == 1 or dst.num_cols == 1) or dst.get_num_elements() != n:
        raise DimensionMismatchError(f"output must be a vector with {n} elements")

    dst.data[:] = src.data[: n * src.num_cols : src.num_cols + 1]


def subvector(
    a: RowMatrix,
    row_start: int,
    col_start: int,
    length: int,
    row: bool,
    offset: int,
    v: RowMatrix,
) -> None:
    """Copy `length` consecutive elements of a row (if `row` is ``True``) or a column
    of `a`, beginning at (`row_start`, `col_start`), into `v` starting at `offset`."""
    check_same_precision(a, v)

    if offset < 0 or offset + length > v.get_num_elements():
        raise DimensionMismatchError(
            f"{length} elements do not fit into a vector of "
            f"{v.get_num_elements()} at {offset}"
        )

    if row:
        if not (0 <= row_start < a.num_rows and 0 <= col_start <= a.num_cols - length):
            raise IndexOutOfRangeError("row segment outside the matrix")

        segment = a.as2d()[row_start, col_start : col_start + length]
    else:
        if not (0 <= col_start < a.num_cols and 0 <= row_start <= a.num_rows - length):
            raise IndexOutOfRangeError("column segment outside the matrix")

        segment = a.as2d()[row_start : row_start + length, col_start]

    v.data[offset : offset + length] = segment
