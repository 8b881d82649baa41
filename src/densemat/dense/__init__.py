"""
##################################################
Dense row-major operations (:mod:`densemat.dense`)
##################################################

.. currentmodule:: densemat.dense

Low-level routines that operate on :class:`~densemat.data.RowMatrix` objects and
write into caller-provided outputs.

Multiplication
==============

.. autosummary::
    :toctree: generated/

    mult.mult
    mult.mult_trans_a
    mult.mult_trans_b
    mult.mult_inner
    mult.mult_outer
    mult.kron
    mult.inner_prod
    mult_product.outer
    mult_product.inner_small
    mult_product.inner_reorder
    mult_product.inner_reorder_upper

Solvers
=======

.. autosummary::
    :toctree: generated/

    linsol.invert
    linsol.solve
    linsol.pinv
    linsol.det

"""

from . import common_ops, features, linsol, mult, mult_product, norm_ops

__all__ = ["common_ops", "features", "linsol", "mult", "mult_product", "norm_ops"]
