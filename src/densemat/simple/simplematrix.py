from typing import Self

import numpy.typing as npt

from densemat.data import RowMatrix
from densemat.dense import common_ops
from densemat.precision import Precision
from densemat.simple.simplebase import SimpleBase


class SimpleMatrix[P: Precision](SimpleBase[P]):
    """Dense matrix with a precision-independent interface.

    Parameters
    ----------
    num_rows : int
    num_cols : int
    precision : type[Precision], optional
        Backend of the matrix. The precision of the current context is used if
        omitted.

    Examples
    --------
    >>> from densemat import Float32, SimpleMatrix
    >>> a = SimpleMatrix.fromarray([[1.0, 2.0], [3.0, 4.0]], precision=Float32)
    >>> a.bits()
    32
    >>> b = a.mult_inner()
    >>> b.get(0, 1)
    14.0
    """

    __slots__ = ()

    @classmethod
    def diag(cls, values: npt.ArrayLike, *, precision: type[P] | None = None) -> Self:
        """Return a square matrix with `values` on the diagonal."""
        return cls.wrap(common_ops.diag(values, precision=precision))

    @classmethod
    def fromarray(
        cls, a: npt.ArrayLike, /, *, precision: type[P] | None = None
    ) -> Self:
        """Copy a one- or two-dimensional array into a new matrix.

        A one-dimensional array becomes a column vector.
        """
        return cls.wrap(RowMatrix.fromarray(a, precision=precision))

    @classmethod
    def identity(
        cls,
        num_rows: int,
        num_cols: int | None = None,
        *,
        precision: type[P] | None = None,
    ) -> Self:
        """Return a matrix with ones on the diagonal and zeros elsewhere."""
        return cls.wrap(common_ops.identity(num_rows, num_cols, precision=precision))

    def _create_matrix(self, num_rows: int, num_cols: int) -> Self:
        return type(self)(num_rows, num_cols, precision=self.precision)
