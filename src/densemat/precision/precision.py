import math
from abc import ABC
from typing import ClassVar

import numpy as np
import numpy.typing as npt

from densemat.errors import UnknownPrecisionError


class Precision(ABC):
    """Abstract base class for the scalar backends of dense matrices.

    A backend is never instantiated; the class itself is passed around and read for
    its constants, in the same way as the endpoint type of an interval.

    Attributes
    ----------
    bits : int
        Width of one element in bits.
    dtype : type[numpy.floating]
        NumPy scalar type used for the buffers.
    ZERO : numpy.floating
    ONE : numpy.floating
    TEST_TOL : float
        Tolerance suitable for comparing results computed in this precision.

    Notes
    -----
    Only :class:`Float32` and :class:`Float64` are defined. Adding another backend is
    not supported.
    """

    __slots__ = ()
    bits: ClassVar[int]
    dtype: ClassVar[type[np.floating]]
    ZERO: ClassVar[np.floating]
    ONE: ClassVar[np.floating]
    TEST_TOL: ClassVar[float]

    @classmethod
    def fromfloat(cls, value: float | int) -> np.floating:
        """Convert a Python number to the scalar type of the backend.

        The conversion narrows the value when the backend is :class:`Float32`.
        """
        return cls.dtype(value)

    @classmethod
    def tofloat(cls, value: np.floating | float) -> float:
        """Widen a scalar of the backend to a Python float."""
        return float(value)

    @classmethod
    def eps(cls) -> float:
        """Return the machine epsilon."""
        return float(np.finfo(cls.dtype).eps)

    @classmethod
    def isuncountable(cls, value: float | np.floating) -> bool:
        """Return ``True`` if `value` is NaN or infinite."""
        return not math.isfinite(value)

    @classmethod
    def zeros(cls, size: int) -> npt.NDArray:
        return np.zeros(size, cls.dtype)

    @staticmethod
    def fromdtype(dtype: npt.DTypeLike) -> "type[Precision]":
        """Return the backend storing elements of `dtype`.

        Raises
        ------
        UnknownPrecisionError
            If `dtype` is neither float32 nor float64.
        """
        dtype = np.dtype(dtype)

        for cls in _BACKENDS:
            if dtype == cls.dtype:
                return cls

        raise UnknownPrecisionError(f"no backend stores elements of type {dtype}")

    @staticmethod
    def frombits(bits: int) -> "type[Precision]":
        """Return the backend whose elements are `bits` wide."""
        for cls in _BACKENDS:
            if cls.bits == bits:
                return cls

        raise UnknownPrecisionError(f"no backend is {bits} bits wide")

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)

        if "dtype" in cls.__dict__:
            _BACKENDS.append(cls)


_BACKENDS: list[type[Precision]] = []
