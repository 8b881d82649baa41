"""
#####################################
Exceptions (:mod:`densemat.errors`)
#####################################

.. currentmodule:: densemat.errors

.. autosummary::
    :toctree: generated/

    LinAlgError
    DimensionMismatchError
    IndexOutOfRangeError
    InvalidArgumentError
    SingularMatrixError
    UnknownPrecisionError

"""

from typing import Literal


class LinAlgError(ValueError):
    """Error raised by :mod:`densemat` functions."""


class DimensionMismatchError(LinAlgError):
    """Shapes of the operands or of the output are incompatible."""


class IndexOutOfRangeError(LinAlgError, IndexError):
    """A row or column lies outside the extents of the matrix."""


class InvalidArgumentError(LinAlgError):
    """An argument is not acceptable for the requested operation."""


class SingularMatrixError(LinAlgError):
    """Matrix is singular or the result of the decomposition is unusable.

    Attributes
    ----------
    reason : Literal["decomposition", "uncountable"]
        ``"decomposition"`` if the decomposition reported a failure, and
        ``"uncountable"`` if it succeeded but produced NaN or infinity.
    """

    reason: Literal["decomposition", "uncountable"]

    def __init__(
        self,
        message: str = "matrix is singular",
        reason: Literal["decomposition", "uncountable"] = "decomposition",
    ):
        super().__init__(message)
        self.reason = reason


class UnknownPrecisionError(TypeError):
    """Element type of a buffer is neither single nor double precision."""
