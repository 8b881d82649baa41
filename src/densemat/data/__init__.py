"""
###########################################
Dense matrix storage (:mod:`densemat.data`)
###########################################

.. currentmodule:: densemat.data

.. autosummary::
    :toctree: generated/

    RowMatrix
    MatrixIterator

"""

from .rowmatrix import MatrixIterator, RowMatrix, check_same_precision, check_shape

__all__ = ["MatrixIterator", "RowMatrix", "check_same_precision", "check_shape"]
