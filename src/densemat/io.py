"""
####################################
Persistence (:mod:`densemat.io`)
####################################

.. currentmodule:: densemat.io

Reading and writing single matrices.

.. autosummary::
    :toctree: generated/

    load_bin
    load_csv
    save_bin
    save_csv

Notes
-----
The binary format is NumPy's ``.npy`` format. The CSV format starts with a header
line ``"<rows> <cols> real"`` followed by one line per row with the elements
separated by spaces.
"""

import os

import numpy as np

from densemat.data import RowMatrix
from densemat.errors import DimensionMismatchError, InvalidArgumentError
from densemat.precision import Float32, Precision

type PathLike = str | os.PathLike[str]


def save_bin(a: RowMatrix, path: PathLike) -> None:
    """Save `a` to `path` in NumPy's binary format."""
    with open(path, "wb") as f:
        np.save(f, a.toarray(), allow_pickle=False)


def load_bin(path: PathLike, *, precision: type[Precision] | None = None) -> RowMatrix:
    """Load a matrix saved by :func:`save_bin`.

    The elements are converted to `precision` if it differs from the stored type. If
    `precision` is omitted, the stored type is kept.
    """
    with open(path, "rb") as f:
        array = np.load(f, allow_pickle=False)

    return RowMatrix.fromarray(array, precision=precision)


def save_csv(a: RowMatrix, path: PathLike) -> None:
    """Save `a` to `path` as text."""
    fmt = "%.9g" if a.precision is Float32 else "%.17g"

    with open(path, "w") as f:
        f.write(f"{a.num_rows} {a.num_cols} real\n")

        for row in a.as2d():
            f.write(" ".join(fmt % x for x in row))
            f.write("\n")


def load_csv(path: PathLike, *, precision: type[Precision] | None = None) -> RowMatrix:
    """Load a matrix saved by :func:`save_csv`.

    Raises
    ------
    InvalidArgumentError
        If the header is malformed or the matrix is not real.
    DimensionMismatchError
        If the number of rows or columns disagrees with the header.
    """
    with open(path) as f:
        header = f.readline().split()

        if len(header) != 3 or not (header[0].isdigit() and header[1].isdigit()):
            raise InvalidArgumentError(f"malformed header in {path}")

        if header[2] != "real":
            raise InvalidArgumentError(f"unsupported element type {header[2]!r}")

        num_rows, num_cols = int(header[0]), int(header[1])
        rows = [line.split() for line in f if line.strip()]

    if len(rows) != num_rows or any(len(x) != num_cols for x in rows):
        raise DimensionMismatchError(
            f"{path} does not contain a {num_rows}x{num_cols} matrix"
        )

    result = RowMatrix(num_rows, num_cols, precision=precision)
    result.data[:] = [float(x) for row in rows for x in row]
    return result
