import numpy as np

from densemat.precision.precision import Precision


class Float32(Precision):
    """Single-precision backend."""

    __slots__ = ()
    bits = 32
    dtype = np.float32
    ZERO = np.float32(0.0)
    ONE = np.float32(1.0)
    TEST_TOL = 1e-4


class Float64(Precision):
    """Double-precision backend."""

    __slots__ = ()
    bits = 64
    dtype = np.float64
    ZERO = np.float64(0.0)
    ONE = np.float64(1.0)
    TEST_TOL = 1e-8
