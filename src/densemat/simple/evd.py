from typing import TYPE_CHECKING

import numpy as np
import numpy.typing as npt

from densemat.dense import common_ops, features
from densemat.errors import DimensionMismatchError, LinAlgError

if TYPE_CHECKING:
    from densemat.simple.simplebase import SimpleBase


class SimpleEVD[T: SimpleBase]:
    """Eigenvalue decomposition of a square matrix.

    Symmetric matrices are decomposed by a symmetric solver, in which case every
    eigenvalue is real and the eigenvectors are orthonormal.

    Parameters
    ----------
    a : SimpleBase
        Square matrix to be decomposed. It is not modified.

    Raises
    ------
    DimensionMismatchError
        If `a` is not square.
    LinAlgError
        If the decomposition does not converge.
    """

    __slots__ = ("_a", "_values", "_vectors", "_symmetric")
    _a: T
    _values: npt.NDArray
    _vectors: npt.NDArray
    _symmetric: bool

    def __init__(self, a: T):
        mat = a.get_matrix()

        if not features.is_square(mat):
            raise DimensionMismatchError(
                f"matrix must be square, got {mat.num_rows}x{mat.num_cols}"
            )

        tol = common_ops.element_max_abs(mat) * mat.precision.eps()
        self._a = a
        self._symmetric = features.is_symmetric(mat, tol)

        try:
            if self._symmetric:
                values, vectors = np.linalg.eigh(mat.as2d())
            else:
                values, vectors = np.linalg.eig(mat.as2d())
        except np.linalg.LinAlgError as exc:
            raise LinAlgError("eigenvalue decomposition did not converge") from exc

        self._values = values
        self._vectors = vectors

    @property
    def symmetric(self) -> bool:
        return self._symmetric

    def get_eigen_vector(self, index: int) -> T | None:
        """Return the eigenvector of the `index`-th eigenvalue as a column vector.

        ``None`` is returned if the eigenvalue is complex.
        """
        if np.iscomplexobj(self._values) and self._values[index].imag != 0:
            return None

        return self._a._from_array(self._vectors[:, index].real)

    def get_eigenvalue(self, index: int) -> complex:
        return complex(self._values[index])

    def get_index_max(self) -> int:
        """Return the index of the eigenvalue with the largest magnitude."""
        return int(np.argmax(np.abs(self._values)))

    def get_index_min(self) -> int:
        """Return the index of the eigenvalue with the smallest magnitude."""
        return int(np.argmin(np.abs(self._values)))

    def get_number_of_eigenvalues(self) -> int:
        return len(self._values)

    def quality(self) -> float:
        """Return ``norm_f(A @ V - V @ D) / norm_f(A)``, a measure of the accuracy of
        the decomposition."""
        a = self._a.get_matrix().as2d()
        residual = a @ self._vectors - self._vectors * self._values
        scale = np.linalg.norm(a)
        error = float(np.linalg.norm(residual))
        return error if scale == 0 else error / float(scale)
