"""
##############################################
Precision backends (:mod:`densemat.precision`)
##############################################

.. currentmodule:: densemat.precision

This module provides the two scalar backends a dense matrix can be stored in.

.. autosummary::
    :toctree: generated/

    Precision
    Float32
    Float64

"""

from .floatprecision import Float32, Float64
from .precision import Precision

__all__ = ["Float32", "Float64", "Precision"]
