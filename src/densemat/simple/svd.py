from typing import TYPE_CHECKING

import numpy as np
import numpy.typing as npt

from densemat.errors import LinAlgError

if TYPE_CHECKING:
    from densemat.simple.simplebase import SimpleBase


class SimpleSVD[T: SimpleBase]:
    """Singular value decomposition ``A = U @ W @ V.T`` of a matrix.

    Parameters
    ----------
    a : SimpleBase
        Matrix to be decomposed. It is not modified.
    compact : bool, default=False
        If ``True``, `U`, `W`, and `V` are ``m x k``, ``k x k``, and ``n x k``, where
        ``k = min(m, n)``. Otherwise they are ``m x m``, ``m x n``, and ``n x n``.

    Raises
    ------
    LinAlgError
        If the decomposition does not converge.

    Notes
    -----
    The singular values are sorted in descending order, and the factors are matrices
    of the same type and precision as `a`.
    """

    __slots__ = ("_a", "_compact", "_u", "_s", "_v")
    _a: T
    _compact: bool
    _u: npt.NDArray
    _s: npt.NDArray
    _v: npt.NDArray

    def __init__(self, a: T, compact: bool = False):
        self._a = a
        self._compact = compact

        try:
            u, s, vh = np.linalg.svd(a.get_matrix().as2d(), full_matrices=not compact)
        except np.linalg.LinAlgError as exc:
            raise LinAlgError("singular value decomposition did not converge") from exc

        self._u = u
        self._s = s
        self._v = vh.T

    @property
    def compact(self) -> bool:
        return self._compact

    def get_single_value(self, index: int) -> float:
        """Return the `index`-th largest singular value."""
        return float(self._s[index])

    def get_singular_values(self) -> list[float]:
        return [float(x) for x in self._s]

    def get_u(self) -> T:
        return self._a._from_array(self._u)

    def get_v(self) -> T:
        return self._a._from_array(self._v)

    def get_w(self) -> T:
        """Return the diagonal matrix of the singular values."""
        result = self._a._create_matrix(self._u.shape[1], self._v.shape[1])
        k = len(self._s)
        result.get_matrix().as2d()[range(k), range(k)] = self._s
        return result

    def null_space(self) -> T:
        """Return an orthonormal basis of the null space as the columns of a matrix.

        The basis consists of the right singular vectors whose singular values do not
        exceed :meth:`threshold`.
        """
        a = self._a.get_matrix().as2d()
        rank = self.rank()

        if self._compact:
            vh = np.linalg.svd(a, full_matrices=True)[2]
            v = vh.T
        else:
            v = self._v

        return self._a._from_array(v[:, rank:])

    def nullity(self) -> int:
        """Return the dimension of the null space."""
        return self._a.num_cols - self.rank()

    def quality(self) -> float:
        """Return ``norm_f(A - U @ W @ V.T) / norm_f(A)``, a measure of the accuracy
        of the decomposition."""
        a = self._a.get_matrix().as2d()
        k = len(self._s)
        residual = a - (self._u[:, :k] * self._s) @ self._v[:, :k].T
        scale = np.linalg.norm(a)
        error = float(np.linalg.norm(residual))
        return error if scale == 0 else error / float(scale)

    def rank(self) -> int:
        """Return the number of singular values greater than :meth:`threshold`."""
        return int(np.count_nonzero(self._s > self.threshold()))

    def threshold(self) -> float:
        """Return the tolerance below which a singular value is regarded as zero."""
        if len(self._s) == 0:
            return 0.0

        m, n = self._a.shape
        return max(m, n) * float(self._s[0]) * self._a.precision.eps()
