import logging
from collections.abc import Iterator
from typing import Any, Self

import numpy as np
import numpy.typing as npt

from densemat.config import getcontext
from densemat.errors import (
    DimensionMismatchError,
    IndexOutOfRangeError,
    InvalidArgumentError,
    UnknownPrecisionError,
)
from densemat.precision import Precision

_logger = logging.getLogger(__name__)


class MatrixIterator[P: Precision](Iterator[tuple[int, int, Any]]):
    """Iterator over the elements of a rectangular region of a matrix.

    The region is given by inclusive bounds. Each step yields ``(row, col, value)``.
    Calling :meth:`reset` restarts the traversal from ``(min_row, min_col)``.

    Parameters
    ----------
    a : RowMatrix
    row_major : bool
        If ``True``, the region is traversed row by row, otherwise column by column.
    min_row, min_col, max_row, max_col : int
        Inclusive bounds of the region.
    """

    __slots__ = (
        "_matrix",
        "_row_major",
        "_min_row",
        "_min_col",
        "_height",
        "_width",
        "_index",
        "_row",
        "_col",
    )
    _matrix: "RowMatrix[P]"
    _row_major: bool
    _index: int

    def __init__(
        self,
        a: "RowMatrix[P]",
        /,
        row_major: bool,
        min_row: int,
        min_col: int,
        max_row: int,
        max_col: int,
    ):
        if not (0 <= min_row <= max_row < a.num_rows):
            raise IndexOutOfRangeError(
                f"rows {min_row}..{max_row} outside a matrix with {a.num_rows} rows"
            )

        if not (0 <= min_col <= max_col < a.num_cols):
            raise IndexOutOfRangeError(
                f"columns {min_col}..{max_col} outside a matrix with "
                f"{a.num_cols} columns"
            )

        self._matrix = a
        self._row_major = row_major
        self._min_row = min_row
        self._min_col = min_col
        self._height = max_row - min_row + 1
        self._width = max_col - min_col + 1
        self.reset()

    @property
    def col(self) -> int:
        """Column of the element returned last."""
        return self._col

    @property
    def index(self) -> int:
        """Position of the element returned last in the traversal order."""
        return self._index - 1

    @property
    def row(self) -> int:
        """Row of the element returned last."""
        return self._row

    def reset(self) -> None:
        self._index = 0
        self._row = -1
        self._col = -1

    def set(self, value: float) -> None:
        """Overwrite the element returned last."""
        if self._index == 0:
            raise RuntimeError("no element has been returned yet")

        self._matrix.unsafe_set(self._row, self._col, value)

    def __iter__(self) -> Self:
        return self

    def __len__(self) -> int:
        return self._height * self._width - self._index

    def __next__(self) -> tuple[int, int, Any]:
        if self._index >= self._height * self._width:
            raise StopIteration

        if self._row_major:
            i, j = divmod(self._index, self._width)
        else:
            j, i = divmod(self._index, self._height)

        self._index += 1
        self._row = self._min_row + i
        self._col = self._min_col + j
        return (self._row, self._col, self._matrix.unsafe_get(self._row, self._col))


class RowMatrix[P: Precision]:
    """Dense matrix stored as one contiguous row-major array.

    Element ``(row, col)`` is located at ``data[row * num_cols + col]``. The
    underlying buffer can be larger than the matrix after :meth:`reshape` shrinks it;
    :attr:`data` always covers exactly ``num_rows * num_cols`` elements.

    Parameters
    ----------
    num_rows : int
    num_cols : int
    precision : type[Precision], optional
        Backend of the elements. The precision of the current context is used if
        omitted.
    """

    __slots__ = ("_buffer", "_num_rows", "_num_cols", "_precision")
    _buffer: npt.NDArray
    _num_rows: int
    _num_cols: int
    _precision: type[P]

    def __init__(
        self, num_rows: int, num_cols: int, *, precision: type[P] | None = None
    ):
        if precision is None:
            precision = getcontext().precision  # type: ignore

        if not (isinstance(precision, type) and issubclass(precision, Precision)):
            raise UnknownPrecisionError(f"{precision!r} is not a precision backend")

        if num_rows < 0 or num_cols < 0:
            raise InvalidArgumentError("matrix dimensions must be non-negative")

        self._precision = precision  # type: ignore
        self._num_rows = num_rows
        self._num_cols = num_cols
        self._buffer = precision.zeros(num_rows * num_cols)

    @classmethod
    def fromarray(
        cls, a: npt.ArrayLike, /, *, precision: type[Precision] | None = None
    ) -> Self:
        """Copy a one- or two-dimensional array into a new matrix.

        A one-dimensional array becomes a column vector. If `precision` is omitted,
        it is derived from the dtype of float arrays and taken from the current
        context otherwise.
        """
        tmp = np.asarray(a)

        if precision is None:
            if tmp.dtype.kind == "f":
                precision = Precision.fromdtype(tmp.dtype)
            else:
                precision = getcontext().precision

        match tmp.ndim:
            case 1:
                tmp = tmp.reshape(-1, 1)

            case 2:
                pass

            case _:
                raise InvalidArgumentError(
                    f"expected a 1D or 2D array, got {tmp.ndim} dimensions"
                )

        result = cls(tmp.shape[0], tmp.shape[1], precision=precision)  # type: ignore
        result._buffer[:] = tmp.ravel()
        return result

    @property
    def capacity(self) -> int:
        """Number of elements the buffer can hold without reallocation."""
        return len(self._buffer)

    @property
    def data(self) -> npt.NDArray:
        """View of the elements in row-major order."""
        return self._buffer[: self._num_rows * self._num_cols]

    @property
    def num_cols(self) -> int:
        return self._num_cols

    @property
    def num_rows(self) -> int:
        return self._num_rows

    @property
    def precision(self) -> type[P]:
        return self._precision

    @property
    def shape(self) -> tuple[int, int]:
        return (self._num_rows, self._num_cols)

    def as2d(self) -> npt.NDArray:
        """Return a two-dimensional view sharing memory with the matrix."""
        return self.data.reshape(self._num_rows, self._num_cols)

    def copy(self) -> Self:
        """Return a copy whose buffer is exactly as large as the matrix."""
        result = self.__class__(
            self._num_rows, self._num_cols, precision=self._precision
        )
        result._buffer[:] = self.data
        return result

    def fill(self, value: float) -> None:
        self.data[:] = self._precision.fromfloat(value)

    def get(self, row: int, col: int) -> Any:
        """Return the element at (`row`, `col`).

        Raises
        ------
        IndexOutOfRangeError
            If the element lies outside the matrix.
        """
        self._check_bounds(row, col)
        return self._buffer[row * self._num_cols + col]

    def get_flat(self, index: int) -> Any:
        """Return the element at `index` of the row-major buffer without checking
        it against the extents of the matrix."""
        return self._buffer[index]

    def get_index(self, row: int, col: int) -> int:
        return row * self._num_cols + col

    def get_num_elements(self) -> int:
        return self._num_rows * self._num_cols

    def is_in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self._num_rows and 0 <= col < self._num_cols

    def iterator(
        self, row_major: bool, min_row: int, min_col: int, max_row: int, max_col: int
    ) -> MatrixIterator[P]:
        """Return an iterator over the inclusive region ``[min_row, max_row] x
        [min_col, max_col]``."""
        return MatrixIterator(self, row_major, min_row, min_col, max_row, max_col)

    def reshape(
        self, num_rows: int, num_cols: int, preserve_data: bool = False
    ) -> None:
        """Change the extents of the matrix.

        The buffer is reused when it is large enough, in which case the elements
        keep their row-major positions. Otherwise a zero-filled buffer of exactly
        ``num_rows * num_cols`` elements replaces it, and the old elements are copied
        to its beginning if `preserve_data` is ``True``.
        """
        if num_rows < 0 or num_cols < 0:
            raise InvalidArgumentError("matrix dimensions must be non-negative")

        size = num_rows * num_cols

        if size > len(self._buffer):
            _logger.debug("reallocating buffer from %d to %d", len(self._buffer), size)
            buffer = self._precision.zeros(size)

            if preserve_data:
                n = self.get_num_elements()
                buffer[:n] = self._buffer[:n]

            self._buffer = buffer

        self._num_rows = num_rows
        self._num_cols = num_cols

    def set(self, row: int, col: int, value: float) -> None:
        """Assign `value` to the element at (`row`, `col`).

        Raises
        ------
        IndexOutOfRangeError
            If the element lies outside the matrix.
        """
        self._check_bounds(row, col)
        self._buffer[row * self._num_cols + col] = value

    def set_flat(self, index: int, value: float) -> None:
        self._buffer[index] = value

    def set_to(self, other: "RowMatrix[P]") -> None:
        """Copy the shape and the elements of `other`."""
        if other._precision is not self._precision:
            raise TypeError("operands are stored in different precisions")

        self.reshape(other._num_rows, other._num_cols)
        self.data[:] = other.data

    def toarray(self) -> npt.NDArray:
        """Return a two-dimensional copy of the matrix."""
        return self.as2d().copy()

    def unsafe_get(self, row: int, col: int) -> Any:
        return self._buffer[row * self._num_cols + col]

    def unsafe_set(self, row: int, col: int, value: float) -> None:
        self._buffer[row * self._num_cols + col] = value

    def zero(self) -> None:
        self.data[:] = self._precision.ZERO

    def _check_bounds(self, row: int, col: int) -> None:
        if not (0 <= row < self._num_rows and 0 <= col < self._num_cols):
            raise IndexOutOfRangeError(
                f"({row}, {col}) is outside a {self._num_rows}x{self._num_cols} matrix"
            )

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}({self._num_rows}, {self._num_cols}, "
            f"precision={self._precision.__name__})"
        )


def check_same_precision(*args: RowMatrix) -> type[Precision]:
    """Return the common precision of `args`.

    Raises
    ------
    TypeError
        If two of the matrices are stored in different precisions.
    """
    precision = args[0].precision

    for x in args[1:]:
        if x.precision is not precision:
            raise TypeError(
                f"mixed precision operands: {precision.__name__} and "
                f"{x.precision.__name__}"
            )

    return precision


def check_shape(
    a: RowMatrix, num_rows: int, num_cols: int, name: str = "output"
) -> None:
    """Raise :class:`DimensionMismatchError` unless `a` is `num_rows` x `num_cols`."""
    if a.num_rows != num_rows or a.num_cols != num_cols:
        raise DimensionMismatchError(
            f"{name} must be {num_rows}x{num_cols}, got {a.num_rows}x{a.num_cols}"
        )
