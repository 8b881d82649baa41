"""Matrix norms and condition numbers."""

import math

import numpy as np

from densemat.data import RowMatrix


def norm_f(a: RowMatrix) -> float:
    """Return the Frobenius norm.

    The elements are divided by the largest magnitude before they are squared, so
    that the computation neither overflows nor underflows in single precision.
    """
    x = a.data

    if len(x) == 0:
        return 0.0

    scale = np.max(np.abs(x))

    if scale == 0 or not math.isfinite(scale):
        return a.precision.tofloat(scale)

    y = x / scale
    return a.precision.tofloat(scale * np.sqrt(y @ y))


def condition_p2(a: RowMatrix) -> float:
    """Return the 2-norm condition number, the ratio of the largest to the smallest
    singular value.

    ``inf`` is returned if the smallest singular value is zero.
    """
    if a.get_num_elements() == 0:
        return math.inf

    s = np.linalg.svd(a.as2d(), compute_uv=False)

    if s[-1] == 0:
        return math.inf

    return a.precision.tofloat(s[0] / s[-1])
