import logging

from .config import Context, getcontext, localcontext, setcontext
from .errors import (
    DimensionMismatchError,
    IndexOutOfRangeError,
    InvalidArgumentError,
    LinAlgError,
    SingularMatrixError,
    UnknownPrecisionError,
)
from .precision import Float32, Float64, Precision
from .simple import END, SimpleBase, SimpleEVD, SimpleMatrix, SimpleSVD

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "Context",
    "getcontext",
    "localcontext",
    "setcontext",
    "DimensionMismatchError",
    "IndexOutOfRangeError",
    "InvalidArgumentError",
    "LinAlgError",
    "SingularMatrixError",
    "UnknownPrecisionError",
    "Float32",
    "Float64",
    "Precision",
    "END",
    "SimpleBase",
    "SimpleEVD",
    "SimpleMatrix",
    "SimpleSVD",
]
