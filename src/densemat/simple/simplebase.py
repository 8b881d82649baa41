import enum
import logging
import numbers
import sys
from abc import ABC, abstractmethod
from typing import IO, Final, Self

import numpy as np
import numpy.typing as npt

from densemat import io
from densemat.config import getcontext
from densemat.data import MatrixIterator, RowMatrix, check_same_precision
from densemat.dense import common_ops, features, linsol, mult, norm_ops
from densemat.errors import InvalidArgumentError, SingularMatrixError
from densemat.precision import Precision
from densemat.simple.evd import SimpleEVD
from densemat.simple.svd import SimpleSVD

_logger = logging.getLogger(__name__)


class _End(enum.Enum):
    END = enum.auto()

    def __repr__(self):
        return "END"


END: Final = _End.END
"""Sentinel for a range bound that extends to the last row or column."""


class SimpleBase[P: Precision](ABC):
    """Abstract base class for matrices with a precision-independent interface.

    The instance wraps exactly one :class:`~densemat.data.RowMatrix`, stored in
    either single or double precision, and every operation is carried out in that
    precision. Scalars passed in are converted to the precision of the matrix;
    scalars returned are always Python floats.

    Operations that produce a new matrix obtain it from :meth:`_create_matrix`, so
    a subclass that overrides it keeps its own type through chains of operations.

    Parameters
    ----------
    num_rows : int
    num_cols : int
    precision : type[Precision], optional
        Backend of the matrix. The precision of the current context is used if
        omitted.

    Notes
    -----
    Operands of binary operations must be stored in the same precision; otherwise
    :class:`TypeError` is raised.
    """

    __slots__ = ("_mat",)
    __array_ufunc__ = None
    _mat: RowMatrix[P]

    def __init__(
        self, num_rows: int, num_cols: int, *, precision: type[P] | None = None
    ):
        self._mat = RowMatrix(num_rows, num_cols, precision=precision)

    @classmethod
    def wrap(cls, mat: RowMatrix[P], /) -> Self:
        """Return a matrix that takes ownership of `mat` without copying it."""
        if not isinstance(mat, RowMatrix):
            raise TypeError

        result = cls.__new__(cls)
        result._mat = mat
        return result

    @classmethod
    def load_binary(
        cls, path: io.PathLike, *, precision: type[Precision] | None = None
    ) -> Self:
        """Load a matrix saved by :meth:`save_to_file_binary`."""
        return cls.wrap(io.load_bin(path, precision=precision))

    @classmethod
    def load_csv(
        cls, path: io.PathLike, *, precision: type[Precision] | None = None
    ) -> Self:
        """Load a matrix saved by :meth:`save_to_file_csv`."""
        return cls.wrap(io.load_csv(path, precision=precision))

    @property
    def num_cols(self) -> int:
        return self._mat.num_cols

    @property
    def num_rows(self) -> int:
        return self._mat.num_rows

    @property
    def precision(self) -> type[P]:
        """Backend of the wrapped matrix."""
        return self._mat.precision

    @property
    def shape(self) -> tuple[int, int]:
        return self._mat.shape

    @property
    def T(self) -> Self:
        """Shorthand for :meth:`transpose`."""
        return self.transpose()

    @abstractmethod
    def _create_matrix(self, num_rows: int, num_cols: int) -> Self:
        """Return a new zero matrix of the given shape in the precision of `self`.

        Subclasses override this to fix the type of the matrices returned by every
        derived operation.
        """
        raise NotImplementedError

    def bits(self) -> int:
        """Width of the elements in bits, either 32 or 64."""
        return self.precision.bits

    def combine(self, insert_row: int | _End, insert_col: int | _End, b: Self) -> Self:
        """Return a copy of `self` with `b` written at (`insert_row`, `insert_col`).

        The result is grown and zero-padded if `b` extends beyond `self`. Passing
        :data:`END` places `b` directly after the last row or column.
        """
        other = self._operand(b)

        if insert_row is END:
            insert_row = self.num_rows

        if insert_col is END:
            insert_col = self.num_cols

        max_row = insert_row + other.num_rows
        max_col = insert_col + other.num_cols

        if max_row > self.num_rows or max_col > self.num_cols:
            num_rows = max(max_row, self.num_rows)
            num_cols = max(max_col, self.num_cols)
            _logger.debug("combine grows %s to %s", self.shape, (num_rows, num_cols))
            result = self._create_matrix(num_rows, num_cols)
            common_ops.insert(self._mat, result._mat, 0, 0)
        else:
            result = self.copy()

        common_ops.insert(other, result._mat, insert_row, insert_col)
        return result

    def condition_p2(self) -> float:
        """Return the condition number with respect to the 2-norm.

        A value near one indicates a well-conditioned matrix.
        """
        return norm_ops.condition_p2(self._mat)

    def copy(self) -> Self:
        """Return a matrix identical to `self` that shares no memory with it."""
        result = self._create_matrix(self.num_rows, self.num_cols)
        result._mat.set_to(self._mat)
        return result

    def determinant(self) -> float:
        """Return the determinant.

        If the decomposition yields NaN or infinity, the matrix is most likely
        singular and ``0.0`` is returned instead.
        """
        result = linsol.det(self._mat)

        if self.precision.isuncountable(result):
            _logger.debug("determinant is %r, returning 0", result)
            return 0.0

        return result

    def divide(self, value: float) -> Self:
        """Return the matrix with each element divided by `value`."""
        result = self.copy()
        common_ops.divide(result._mat, value)
        return result

    def dot(self, v: Self) -> float:
        """Return the inner product of two vectors.

        Raises
        ------
        InvalidArgumentError
            If `self` or `v` is not a vector.
        """
        other = self._operand(v)

        if not self.is_vector():
            raise InvalidArgumentError("'self' matrix is not a vector")

        if not features.is_vector(other):
            raise InvalidArgumentError("'v' matrix is not a vector")

        return mult.inner_prod(self._mat, other)

    def eig(self) -> SimpleEVD[Self]:
        """Return the eigenvalue decomposition of the square matrix."""
        return SimpleEVD(self)

    def element_div(self, b: Self) -> Self:
        """Return the element-wise quotient ``self[i, j] / b[i, j]``."""
        other = self._operand(b)
        result = self._create_matrix(self.num_rows, self.num_cols)
        common_ops.element_div(self._mat, other, result._mat)
        return result

    def element_exp(self) -> Self:
        result = self._create_matrix(self.num_rows, self.num_cols)
        common_ops.element_exp(self._mat, result._mat)
        return result

    def element_log(self) -> Self:
        result = self._create_matrix(self.num_rows, self.num_cols)
        common_ops.element_log(self._mat, result._mat)
        return result

    def element_max_abs(self) -> float:
        """Return the largest absolute value of the elements, which is the infinite
        p-norm of the matrix seen as a vector."""
        return common_ops.element_max_abs(self._mat)

    def element_mult(self, b: Self) -> Self:
        """Return the element-wise product ``self[i, j] * b[i, j]``."""
        other = self._operand(b)
        result = self._create_matrix(self.num_rows, self.num_cols)
        common_ops.element_mult(self._mat, other, result._mat)
        return result

    def element_power(self, b: Self | float) -> Self:
        """Return ``self[i, j] ** b[i, j]``, or ``self[i, j] ** b`` for a scalar."""
        exponent = b if isinstance(b, numbers.Real) else self._operand(b)
        result = self._create_matrix(self.num_rows, self.num_cols)
        common_ops.element_power(self._mat, exponent, result._mat)
        return result

    def element_sum(self) -> float:
        return common_ops.element_sum(self._mat)

    def extract_diag(self) -> Self:
        """Return the diagonal as a column vector."""
        n = min(self.num_rows, self.num_cols)
        result = self._create_matrix(n, 1)
        common_ops.extract_diag(self._mat, result._mat)
        return result

    def extract_matrix(
        self, y0: int | _End, y1: int | _End, x0: int | _End, x1: int | _End
    ) -> Self:
        """Return the submatrix of rows ``y0:y1`` and columns ``x0:x1``.

        Any bound given as :data:`END` is replaced by the number of rows or columns.

        Examples
        --------
        >>> from densemat import END, SimpleMatrix
        >>> a = SimpleMatrix.fromarray([[1.0, 2.0, 3.0], [4.0, 5.0, 6.0]])
        >>> a.extract_matrix(1, END, 1, END).toarray()
        array([[5., 6.]])
        """
        y0 = self.num_rows if y0 is END else y0
        y1 = self.num_rows if y1 is END else y1
        x0 = self.num_cols if x0 is END else x0
        x1 = self.num_cols if x1 is END else x1

        if y1 < y0 or x1 < x0:
            raise InvalidArgumentError(
                f"inverted range rows {y0}:{y1}, columns {x0}:{x1}"
            )

        result = self._create_matrix(y1 - y0, x1 - x0)
        common_ops.extract(self._mat, y0, y1, x0, x1, result._mat)
        return result

    def extract_vector(self, extract_row: bool, element: int) -> Self:
        """Return row `element` as a row vector if `extract_row` is ``True``, and
        column `element` as a column vector otherwise."""
        if extract_row:
            length = self.num_cols
            result = self._create_matrix(1, length)
            common_ops.subvector(self._mat, element, 0, length, True, 0, result._mat)
        else:
            length = self.num_rows
            result = self._create_matrix(length, 1)
            common_ops.subvector(self._mat, 0, element, length, False, 0, result._mat)

        return result

    def fill(self, value: float) -> None:
        """Set every element to `value`."""
        self._mat.fill(value)

    def get(self, row: int, col: int) -> float:
        """Return the element at (`row`, `col`), checking the bounds."""
        return self.precision.tofloat(self._mat.get(row, col))

    def get_flat(self, index: int) -> float:
        """Return the element at position `index` of the row-major buffer."""
        return self.precision.tofloat(self._mat.get_flat(index))

    def get_index(self, row: int, col: int) -> int:
        return self._mat.get_index(row, col)

    def get_matrix(self) -> RowMatrix[P]:
        """Return the wrapped matrix itself, not a copy."""
        return self._mat

    def get_num_elements(self) -> int:
        return self._mat.get_num_elements()

    def has_uncountable(self) -> bool:
        """Return ``True`` if any element is NaN or infinite."""
        return features.has_uncountable(self._mat)

    def insert_into_this(self, insert_row: int, insert_col: int, b: Self) -> None:
        """Copy `b` into `self` with its upper left corner at (`insert_row`,
        `insert_col`).

        Raises
        ------
        DimensionMismatchError
            If `b` does not fit.
        """
        common_ops.insert(self._operand(b), self._mat, insert_row, insert_col)

    def invert(self) -> Self:
        """Return the inverse of the matrix.

        Raises
        ------
        SingularMatrixError
            If the decomposition fails, or if it succeeds but the inverse contains
            NaN or infinity. The matrix can still be nearly singular if no error is
            raised.
        """
        result = self._create_matrix(self.num_rows, self.num_cols)

        if not linsol.invert(self._mat, result._mat):
            raise SingularMatrixError("matrix is singular", "decomposition")

        if features.has_uncountable(result._mat):
            _logger.debug("inverse of %s has uncountable elements", self.shape)
            raise SingularMatrixError("solution has uncountable numbers", "uncountable")

        return result

    def is_identical(self, a: Self, tol: float) -> bool:
        """Return ``True`` if `a` has the same shape and its elements are within `tol`
        of those of `self`."""
        return features.is_identical(self._mat, self._operand(a), tol)

    def is_in_bounds(self, row: int, col: int) -> bool:
        return self._mat.is_in_bounds(row, col)

    def is_vector(self) -> bool:
        """Return ``True`` if the matrix has exactly one row or one column."""
        return features.is_vector(self._mat)

    def iterator(
        self, row_major: bool, min_row: int, min_col: int, max_row: int, max_col: int
    ) -> MatrixIterator[P]:
        """Return an iterator over the inclusive region ``[min_row, max_row] x
        [min_col, max_col]``, by rows if `row_major` is ``True`` and by columns
        otherwise."""
        return self._mat.iterator(row_major, min_row, min_col, max_row, max_col)

    def kron(self, b: Self) -> Self:
        """Return the Kronecker product of `self` and `b`."""
        other = self._operand(b)
        result = self._create_matrix(
            self.num_rows * other.num_rows, self.num_cols * other.num_cols
        )
        mult.kron(self._mat, other, result._mat)
        return result

    def minus(self, b: Self | float) -> Self:
        """Return ``self - b`` for a matrix or a scalar `b`."""
        result = self._create_matrix(self.num_rows, self.num_cols)

        if isinstance(b, numbers.Real):
            common_ops.subtract_scalar(self._mat, b, result._mat)
        else:
            common_ops.subtract(self._mat, self._operand(b), result._mat)

        return result

    def mult(self, b: Self) -> Self:
        """Return the matrix product ``self @ b``."""
        other = self._operand(b)
        result = self._create_matrix(self.num_rows, other.num_cols)
        mult.mult(self._mat, other, result._mat)
        return result

    def mult_inner(self) -> Self:
        """Return ``self.T @ self`` computed by a symmetric-product kernel."""
        result = self._create_matrix(self.num_cols, self.num_cols)
        mult.mult_inner(self._mat, result._mat)
        return result

    def mult_outer(self) -> Self:
        """Return ``self @ self.T`` computed by a symmetric-product kernel."""
        result = self._create_matrix(self.num_rows, self.num_rows)
        mult.mult_outer(self._mat, result._mat)
        return result

    def negative(self) -> Self:
        result = self.copy()
        common_ops.change_sign(result._mat)
        return result

    def norm_f(self) -> float:
        """Return the Frobenius norm."""
        return norm_ops.norm_f(self._mat)

    def plus(self, b: Self | float) -> Self:
        """Return ``self + b`` for a matrix or a scalar `b`."""
        if isinstance(b, numbers.Real):
            result = self._create_matrix(self.num_rows, self.num_cols)
            common_ops.add_scalar(self._mat, b, result._mat)
            return result

        other = self._operand(b)
        result = self.copy()
        common_ops.add_equals(result._mat, other)
        return result

    def plus_scaled(self, beta: float, b: Self) -> Self:
        """Return ``self + beta * b``."""
        other = self._operand(b)
        result = self.copy()
        common_ops.add_equals(result._mat, other, beta)
        return result

    def print(self, file: IO[str] | None = None) -> None:
        """Write the matrix to `file`, or to the standard output if omitted."""
        print(self.__str__(), file=sys.stdout if file is None else file)

    def pseudo_inverse(self) -> Self:
        """Return the Moore-Penrose pseudo-inverse.

        Unlike :meth:`invert`, the result is not checked for NaN or infinity, since
        the pseudo-inverse is defined for rank-deficient matrices.
        """
        result = self._create_matrix(self.num_cols, self.num_rows)
        linsol.pinv(self._mat, result._mat)
        return result

    def reshape(self, num_rows: int, num_cols: int) -> None:
        """Change the shape in place.

        If the new shape has no more elements than the buffer can hold, the data is
        kept; otherwise it is replaced by zeros.
        """
        self._mat.reshape(num_rows, num_cols, False)

    def save_to_file_binary(self, path: io.PathLike) -> None:
        io.save_bin(self._mat, path)

    def save_to_file_csv(self, path: io.PathLike) -> None:
        io.save_csv(self._mat, path)

    def scale(self, value: float) -> Self:
        """Return the matrix with each element multiplied by `value`."""
        result = self.copy()
        common_ops.scale(value, result._mat)
        return result

    def set(self, row: int, col: int, value: float) -> None:
        """Assign `value` to the element at (`row`, `col`), checking the bounds."""
        self._mat.set(row, col, value)

    def set_column(self, col: int, offset: int, *values: float) -> None:
        """Write `values` into column `col` starting at row `offset`."""
        for i, x in enumerate(values):
            self._mat.set(offset + i, col, x)

    def set_flat(self, index: int, value: float) -> None:
        self._mat.set_flat(index, value)

    def set_row(self, row: int, offset: int, *values: float) -> None:
        """Write `values` into row `row` starting at column `offset`."""
        for i, x in enumerate(values):
            self._mat.set(row, offset + i, x)

    def set_to(self, a: Self) -> None:
        """Copy the shape and the elements of `a` into `self`."""
        self._mat.set_to(self._operand(a))

    def solve(self, b: Self) -> Self:
        """Return `x` that solves ``self @ x = b``.

        Raises
        ------
        SingularMatrixError
            If the decomposition fails, or if the solution contains NaN or infinity.
        """
        other = self._operand(b)
        result = self._create_matrix(self.num_cols, other.num_cols)

        if not linsol.solve(self._mat, other, result._mat):
            raise SingularMatrixError("matrix is singular", "decomposition")

        if features.has_uncountable(result._mat):
            _logger.debug("solution of %s system has uncountable elements", self.shape)
            raise SingularMatrixError(
                "solution contains uncountable numbers", "uncountable"
            )

        return result

    def svd(self, compact: bool = False) -> SimpleSVD[Self]:
        """Return the singular value decomposition, in compact form if `compact` is
        ``True``."""
        return SimpleSVD(self, compact)

    def toarray(self) -> npt.NDArray:
        """Return a two-dimensional NumPy copy of the matrix."""
        return self._mat.toarray()

    def trace(self) -> float:
        return common_ops.trace(self._mat)

    def transpose(self) -> Self:
        result = self._create_matrix(self.num_cols, self.num_rows)
        common_ops.transpose(self._mat, result._mat)
        return result

    def zero(self) -> None:
        self._mat.zero()

    def _from_array(self, a: npt.ArrayLike) -> Self:
        tmp = np.asarray(a)

        if tmp.ndim == 1:
            tmp = tmp.reshape(-1, 1)

        result = self._create_matrix(*tmp.shape)
        result._mat.as2d()[...] = tmp
        return result

    def _operand(self, other: "SimpleBase") -> RowMatrix[P]:
        if not isinstance(other, SimpleBase):
            raise TypeError(f"expected a matrix, got {type(other).__name__}")

        check_same_precision(self._mat, other._mat)
        return other._mat

    def __eq__(self, other) -> bool:
        if not isinstance(other, SimpleBase):
            return NotImplemented

        if other.precision is not self.precision or other.shape != self.shape:
            return False

        return bool(np.array_equal(self._mat.data, other._mat.data))

    __hash__ = None  # type: ignore

    def __getitem__(self, key: tuple[int, int]) -> float:
        return self.get(*key)

    def __setitem__(self, key: tuple[int, int], value: float) -> None:
        self.set(*key, value)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}({self.num_rows}, {self.num_cols}, "
            f"precision={self.precision.__name__})"
        )

    def __str__(self) -> str:
        header = (
            f"Type = {type(self).__name__}, {self.precision.__name__}, "
            f"numRows = {self.num_rows}, numCols = {self.num_cols}"
        )
        body = np.array2string(
            self._mat.as2d(),
            precision=getcontext().print_precision,
            suppress_small=False,
        )
        return f"{header}\n{body}"

    def __add__(self, rhs: Self | float) -> Self:
        if not isinstance(rhs, (SimpleBase, numbers.Real)):
            return NotImplemented

        return self.plus(rhs)

    def __sub__(self, rhs: Self | float) -> Self:
        if not isinstance(rhs, (SimpleBase, numbers.Real)):
            return NotImplemented

        return self.minus(rhs)

    def __mul__(self, rhs: float) -> Self:
        if not isinstance(rhs, numbers.Real):
            return NotImplemented

        return self.scale(rhs)

    def __truediv__(self, rhs: float) -> Self:
        if not isinstance(rhs, numbers.Real):
            return NotImplemented

        return self.divide(rhs)

    def __matmul__(self, rhs: Self) -> Self:
        if not isinstance(rhs, SimpleBase):
            return NotImplemented

        return self.mult(rhs)

    def __radd__(self, lhs: float) -> Self:
        if not isinstance(lhs, numbers.Real):
            return NotImplemented

        return self.plus(lhs)

    def __rsub__(self, lhs: float) -> Self:
        if not isinstance(lhs, numbers.Real):
            return NotImplemented

        return self.negative().plus(lhs)

    def __rmul__(self, lhs: float) -> Self:
        if not isinstance(lhs, numbers.Real):
            return NotImplemented

        return self.scale(lhs)

    def __neg__(self) -> Self:
        return self.negative()

    def __pos__(self) -> Self:
        return self.copy()

    def __copy__(self) -> Self:
        return self.copy()
