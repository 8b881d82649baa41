"""
##################################################
High-level matrices (:mod:`densemat.simple`)
##################################################

.. currentmodule:: densemat.simple

This module provides matrices whose operations allocate their results, hiding the
precision the elements are stored in.

Matrices
========

.. autosummary::
    :toctree: generated/

    SimpleBase
    SimpleMatrix

Decompositions
==============

.. autosummary::
    :toctree: generated/

    SimpleEVD
    SimpleSVD

Constants
=========

.. autosummary::
    :toctree: generated/

    END

"""

from .evd import SimpleEVD
from .simplebase import END, SimpleBase
from .simplematrix import SimpleMatrix
from .svd import SimpleSVD

__all__ = ["END", "SimpleBase", "SimpleEVD", "SimpleMatrix", "SimpleSVD"]
