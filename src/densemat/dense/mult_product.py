"""Specialized kernels for the symmetric products ``a @ a.T`` and ``a.T @ a``.

Both products are symmetric, so only one triangle has to be computed. The kernels
differ in the order in which they touch memory. All of them require the output to be
allocated with the correct square shape beforehand.
"""

from densemat.data import RowMatrix, check_same_precision, check_shape


def outer(a: RowMatrix, c: RowMatrix) -> None:
    """Compute ``c = a @ a.T`` as a sum of outer products of the columns of `a`.

    Each column contributes a symmetric rank-1 update; only its upper triangle is
    accumulated and the lower triangle is mirrored once at the end.

    Parameters
    ----------
    a : RowMatrix
        Matrix of shape ``(n, m)``. Not modified.
    c : RowMatrix
        Output of shape ``(n, n)``.
    """
    check_same_precision(a, c)
    n, m = a.shape
    check_shape(c, n, n)
    adata, cdata = a.data, c.data
    cdata[:] = c.precision.ZERO

    for k in range(m):
        col = adata[k::m]

        for i in range(n):
            start = i * n + i
            cdata[start : (i + 1) * n] += col[i] * col[i:]

    _mirror_upper(c)


def inner_small(a: RowMatrix, c: RowMatrix) -> None:
    """Compute ``c = a.T @ a`` with one dot product per upper-triangular element.

    Element ``(i, j)`` with ``i <= j`` is the dot product of columns `i` and `j` of
    `a`, and it is written to ``(j, i)`` as well.

    Parameters
    ----------
    a : RowMatrix
        Matrix of shape ``(n, m)``. Not modified.
    c : RowMatrix
        Output of shape ``(m, m)``.
    """
    check_same_precision(a, c)
    m = a.num_cols
    check_shape(c, m, m)
    adata, cdata = a.data, c.data

    for i in range(m):
        coli = adata[i::m]

        for j in range(i, m):
            cdata[i * m + j] = cdata[j * m + i] = coli @ adata[j::m]


def inner_reorder(a: RowMatrix, c: RowMatrix) -> None:
    """Compute ``c = a.T @ a`` iterating over the rows of `a` in the inner loop.

    Row `i` of the upper triangle of `c` is accumulated row by row of `a`, so that
    memory is read contiguously, and then copied into column `i`.

    Parameters
    ----------
    a : RowMatrix
        Matrix of shape ``(n, m)``. Not modified.
    c : RowMatrix
        Output of shape ``(m, m)``.

    See Also
    --------
    inner_reorder_upper
    """
    _inner_reorder(a, c)
    _mirror_upper(c)


def inner_reorder_upper(a: RowMatrix, c: RowMatrix) -> None:
    """Compute the upper triangle of ``c = a.T @ a``.

    The result is identical to :func:`inner_reorder` for ``j >= i`` only. Elements
    below the diagonal of `c` are left untouched and must not be read.

    Parameters
    ----------
    a : RowMatrix
        Matrix of shape ``(n, m)``. Not modified.
    c : RowMatrix
        Output of shape ``(m, m)``.
    """
    _inner_reorder(a, c)


def _inner_reorder(a: RowMatrix, c: RowMatrix) -> None:
    check_same_precision(a, c)
    n, m = a.shape
    check_shape(c, m, m)
    adata, cdata = a.data, c.data

    for i in range(m):
        row = cdata[i * m + i : (i + 1) * m]

        if n == 0:
            row[:] = c.precision.ZERO
            continue

        row[:] = adata[i] * adata[i:m]

        for k in range(1, n):
            offset = k * m
            row += adata[offset + i] * adata[offset + i : offset + m]


def _mirror_upper(c: RowMatrix) -> None:
    m = c.num_cols
    cdata = c.data

    for i in range(m):
        cdata[i * m + i + m :: m] = cdata[i * m + i + 1 : (i + 1) * m]
