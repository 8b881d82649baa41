import math

import numpy as np
import pytest

from densemat.data import RowMatrix
from densemat.dense import common_ops
from densemat.errors import DimensionMismatchError, IndexOutOfRangeError
from densemat.precision import Float32


def test_identity():
    a = common_ops.identity(3)
    assert np.array_equal(a.toarray(), np.eye(3))

    a = common_ops.identity(2, 4, precision=Float32)
    assert a.precision is Float32
    assert np.array_equal(a.toarray(), np.eye(2, 4))

    a = common_ops.identity(4, 2)
    assert np.array_equal(a.toarray(), np.eye(4, 2))


def test_diag():
    a = common_ops.diag([1.0, 2.0, 3.0])
    assert np.array_equal(a.toarray(), np.diag([1.0, 2.0, 3.0]))


def test_transpose():
    a = RowMatrix.fromarray([[1.0, 2.0, 3.0], [4.0, 5.0, 6.0]])
    b = RowMatrix(3, 2)
    common_ops.transpose(a, b)
    assert np.array_equal(b.toarray(), a.toarray().T)

    c = RowMatrix(2, 3)
    common_ops.transpose(b, c)
    assert np.array_equal(c.toarray(), a.toarray())

    with pytest.raises(DimensionMismatchError):
        common_ops.transpose(a, RowMatrix(2, 3))


def test_add_subtract():
    a = RowMatrix.fromarray([[1.0, 2.0], [3.0, 4.0]])
    b = RowMatrix.fromarray([[1.0, 1.0], [1.0, 1.0]])
    c = RowMatrix(2, 2)

    common_ops.add(a, b, c)
    assert np.array_equal(c.toarray(), [[2.0, 3.0], [4.0, 5.0]])

    common_ops.subtract(a, b, c)
    assert np.array_equal(c.toarray(), [[0.0, 1.0], [2.0, 3.0]])

    common_ops.add_scalar(a, 0.5, c)
    assert np.array_equal(c.toarray(), [[1.5, 2.5], [3.5, 4.5]])

    common_ops.subtract_scalar(a, 1.0, c)
    assert np.array_equal(c.toarray(), [[0.0, 1.0], [2.0, 3.0]])

    common_ops.add_equals(c, b, -2.0)
    assert np.array_equal(c.toarray(), [[-2.0, -1.0], [0.0, 1.0]])

    with pytest.raises(DimensionMismatchError):
        common_ops.add(a, RowMatrix(2, 3), c)

    with pytest.raises(TypeError):
        common_ops.add(a, RowMatrix(2, 2, precision=Float32), c)


def test_scale_divide():
    a = RowMatrix.fromarray([[1.0, -2.0]])
    common_ops.scale(3.0, a)
    assert np.array_equal(a.toarray(), [[3.0, -6.0]])

    common_ops.divide(a, 2.0)
    assert np.array_equal(a.toarray(), [[1.5, -3.0]])

    common_ops.change_sign(a)
    assert np.array_equal(a.toarray(), [[-1.5, 3.0]])

    common_ops.divide(a, 0.0)
    assert a.get(0, 0) == -math.inf


def test_element_wise():
    a = RowMatrix.fromarray([[1.0, 4.0], [9.0, 16.0]])
    b = RowMatrix.fromarray([[2.0, 2.0], [3.0, 4.0]])
    c = RowMatrix(2, 2)

    common_ops.element_mult(a, b, c)
    assert np.array_equal(c.toarray(), [[2.0, 8.0], [27.0, 64.0]])

    common_ops.element_div(a, b, c)
    assert np.array_equal(c.toarray(), [[0.5, 2.0], [3.0, 4.0]])

    common_ops.element_power(a, 0.5, c)
    assert np.array_equal(c.toarray(), [[1.0, 2.0], [3.0, 4.0]])

    common_ops.element_power(b, b, c)
    assert np.array_equal(c.toarray(), [[4.0, 4.0], [27.0, 256.0]])

    common_ops.element_log(a, c)
    common_ops.element_exp(c, c)
    assert np.allclose(c.toarray(), a.toarray())

    assert common_ops.element_max_abs(RowMatrix.fromarray([[1.0, -5.0]])) == 5.0
    assert common_ops.element_max_abs(RowMatrix(0, 0)) == 0.0
    assert common_ops.element_sum(a) == 30.0


def test_trace():
    assert common_ops.trace(common_ops.identity(3)) == 3.0
    a = RowMatrix.fromarray([[1.0, 2.0, 3.0], [4.0, 5.0, 6.0]])
    assert common_ops.trace(a) == 6.0


def test_extract_insert():
    a = RowMatrix.fromarray(np.arange(12.0).reshape(3, 4))
    b = RowMatrix(2, 2)
    common_ops.extract(a, 1, 3, 2, 4, b)
    assert np.array_equal(b.toarray(), [[6.0, 7.0], [10.0, 11.0]])

    c = RowMatrix(3, 3)
    common_ops.insert(b, c, 1, 0)
    assert np.array_equal(c.toarray(), [[0, 0, 0], [6, 7, 0], [10, 11, 0]])

    with pytest.raises(IndexOutOfRangeError):
        common_ops.extract(a, 2, 1, 0, 1, b)

    with pytest.raises(IndexOutOfRangeError):
        common_ops.extract(a, 0, 4, 0, 1, b)

    with pytest.raises(DimensionMismatchError):
        common_ops.insert(b, c, 2, 0)


def test_extract_diag_subvector():
    a = RowMatrix.fromarray(np.arange(6.0).reshape(2, 3))
    d = RowMatrix(2, 1)
    common_ops.extract_diag(a, d)
    assert np.array_equal(d.data, [0.0, 4.0])

    with pytest.raises(DimensionMismatchError):
        common_ops.extract_diag(a, RowMatrix(3, 1))

    v = RowMatrix(1, 3)
    common_ops.subvector(a, 1, 0, 3, True, 0, v)
    assert np.array_equal(v.data, [3.0, 4.0, 5.0])

    v = RowMatrix(2, 1)
    common_ops.subvector(a, 0, 2, 2, False, 0, v)
    assert np.array_equal(v.data, [2.0, 5.0])

    with pytest.raises(IndexOutOfRangeError):
        common_ops.subvector(a, 0, 3, 2, False, 0, v)
