import math

import numpy as np
import pytest

from densemat import (
    END,
    DimensionMismatchError,
    Float32,
    Float64,
    IndexOutOfRangeError,
    InvalidArgumentError,
    SimpleMatrix,
    SingularMatrixError,
    localcontext,
)


def test_construction():
    a = SimpleMatrix(2, 3)
    assert a.shape == (2, 3)
    assert a.bits() == 64
    assert a.get_num_elements() == 6

    a = SimpleMatrix.identity(3, precision=Float32)
    assert a.bits() == 32
    assert a.get_matrix().data.dtype == np.float32

    with localcontext(precision=Float32):
        assert SimpleMatrix(1, 1).precision is Float32

    a = SimpleMatrix.diag([1.0, 2.0])
    assert a.toarray().tolist() == [[1.0, 0.0], [0.0, 2.0]]


def test_wrap():
    a = SimpleMatrix.fromarray([[1.0, 2.0]])
    b = SimpleMatrix.wrap(a.get_matrix())
    b.set(0, 0, 5.0)
    assert a.get(0, 0) == 5.0


def test_symmetric_products():
    a = SimpleMatrix.fromarray([[1.0, 2.0], [3.0, 4.0], [5.0, 6.0]])
    outer = a.mult_outer()
    assert outer.toarray().tolist() == [
        [5.0, 11.0, 17.0],
        [11.0, 25.0, 39.0],
        [17.0, 39.0, 61.0],
    ]
    assert outer.is_identical(a.mult(a.transpose()), 0.0)

    inner = a.mult_inner()
    assert inner.toarray().tolist() == [[35.0, 44.0], [44.0, 56.0]]
    assert inner.is_identical(a.T @ a, 0.0)

    with localcontext(mult_inner_switch=1):
        assert a.mult_inner() == inner


def test_arithmetic():
    a = SimpleMatrix.fromarray([[1.0, 2.0], [3.0, 4.0]])
    b = SimpleMatrix.identity(2)

    assert (a + b).toarray().tolist() == [[2.0, 2.0], [3.0, 5.0]]
    assert (a - b).toarray().tolist() == [[0.0, 2.0], [3.0, 3.0]]
    assert (a + 1).toarray().tolist() == [[2.0, 3.0], [4.0, 5.0]]
    assert (1 - a).toarray().tolist() == [[0.0, -1.0], [-2.0, -3.0]]
    assert (2 * a).toarray().tolist() == [[2.0, 4.0], [6.0, 8.0]]
    assert (a / 2).toarray().tolist() == [[0.5, 1.0], [1.5, 2.0]]
    assert (-a).toarray().tolist() == [[-1.0, -2.0], [-3.0, -4.0]]
    assert a.plus_scaled(2.0, b).toarray().tolist() == [[3.0, 2.0], [3.0, 6.0]]
    assert a @ b == a
    assert a.kron(b).shape == (4, 4)

    assert a.get(0, 0) == 1.0


def test_mixed_precision():
    a = SimpleMatrix(2, 2)
    b = SimpleMatrix(2, 2, precision=Float32)

    with pytest.raises(TypeError):
        a.mult(b)

    with pytest.raises(TypeError):
        a.plus(b)

    with pytest.raises(TypeError):
        a.element_mult(b)

    assert a != b


def test_dimension_mismatch():
    a = SimpleMatrix(2, 3)

    with pytest.raises(DimensionMismatchError):
        a.mult(a)

    with pytest.raises(DimensionMismatchError):
        a.plus(SimpleMatrix(3, 2))


def test_dot():
    a = SimpleMatrix.fromarray([[3.0]])
    b = SimpleMatrix.fromarray([[4.0]])
    assert a.dot(b) == 12.0

    x = SimpleMatrix.fromarray([1.0, 2.0])
    y = SimpleMatrix.fromarray([[3.0, 4.0]])
    assert x.dot(y) == 11.0

    with pytest.raises(InvalidArgumentError):
        SimpleMatrix(2, 2).dot(SimpleMatrix(2, 2))

    with pytest.raises(InvalidArgumentError):
        x.dot(SimpleMatrix(2, 2))


def test_invert():
    a = SimpleMatrix.fromarray([[4.0, 7.0], [2.0, 6.0]])
    assert (a @ a.invert()).is_identical(SimpleMatrix.identity(2), 1e-12)
    assert SimpleMatrix.identity(3).invert() == SimpleMatrix.identity(3)

    with pytest.raises(SingularMatrixError) as excinfo:
        SimpleMatrix(3, 3).invert()

    assert excinfo.value.reason == "decomposition"


def test_invert_uncountable():
    a = SimpleMatrix.fromarray([[math.nan, 0.0], [0.0, 1.0]])

    with pytest.raises(SingularMatrixError) as excinfo:
        a.invert()

    assert excinfo.value.reason == "uncountable"

    a = SimpleMatrix.fromarray([[1e-310]])

    with pytest.raises(SingularMatrixError) as excinfo:
        a.invert()

    assert excinfo.value.reason == "uncountable"


def test_solve_uncountable():
    a = SimpleMatrix.fromarray([[1e-310]])

    with pytest.raises(SingularMatrixError) as excinfo:
        a.solve(SimpleMatrix.fromarray([[1.0]]))

    assert excinfo.value.reason == "uncountable"


def test_solve():
    a = SimpleMatrix.fromarray([[3.0, 1.0], [1.0, 2.0]])
    b = SimpleMatrix.fromarray([[9.0, 1.0], [8.0, 2.0]])
    x = a.solve(b)
    assert (a @ x).is_identical(b, Float64.TEST_TOL)

    with pytest.raises(SingularMatrixError):
        SimpleMatrix.fromarray([[1.0, 2.0], [1.0, 2.0]]).solve(b)

    with pytest.raises(DimensionMismatchError):
        a.solve(SimpleMatrix(3, 1))


def test_pseudo_inverse():
    a = SimpleMatrix.fromarray([[1.0, 2.0], [2.0, 4.0], [0.0, 0.0]])
    p = a.pseudo_inverse()
    assert p.shape == (2, 3)
    assert (a @ p @ a).is_identical(a, Float64.TEST_TOL)


def test_determinant_trace():
    a = SimpleMatrix.identity(3)
    assert a.determinant() == pytest.approx(1.0)
    assert a.trace() == 3.0

    a = SimpleMatrix.fromarray([[math.inf, 0.0], [0.0, 1.0]])
    assert a.determinant() == 0.0

    with pytest.raises(DimensionMismatchError):
        SimpleMatrix(2, 3).determinant()


def test_norms():
    a = SimpleMatrix.fromarray([[3.0, 0.0], [0.0, 4.0]])
    assert a.norm_f() == pytest.approx(5.0)
    assert a.condition_p2() == pytest.approx(4.0 / 3.0)
    assert a.element_max_abs() == 4.0
    assert a.element_sum() == 7.0


def test_element_wise():
    a = SimpleMatrix.fromarray([[1.0, 4.0]])
    b = SimpleMatrix.fromarray([[2.0, 2.0]])
    assert a.element_mult(b).toarray().tolist() == [[2.0, 8.0]]
    assert a.element_div(b).toarray().tolist() == [[0.5, 2.0]]
    assert a.element_power(b).toarray().tolist() == [[1.0, 16.0]]
    assert a.element_power(0.5).toarray().tolist() == [[1.0, 2.0]]
    assert a.element_log().element_exp().is_identical(a, Float64.TEST_TOL)
    assert a.negative().toarray().tolist() == [[-1.0, -4.0]]


def test_accessors():
    a = SimpleMatrix(3, 3)
    a.set_row(1, 0, 1.0, 2.0, 3.0)
    a.set_column(2, 0, 7.0, 8.0)
    assert a.toarray().tolist() == [[0, 0, 7], [1, 2, 8], [0, 0, 0]]
    assert a[1, 1] == 2.0

    a[2, 2] = 9.0
    assert a.get_flat(8) == 9.0
    assert a.get_index(2, 2) == 8
    assert a.is_in_bounds(2, 2)
    assert not a.is_in_bounds(3, 0)

    with pytest.raises(IndexOutOfRangeError):
        a.get(3, 0)

    with pytest.raises(IndexOutOfRangeError):
        a.set_row(0, 2, 1.0, 2.0)

    a.fill(1.0)
    assert a.element_sum() == 9.0

    a.zero()
    assert a.element_sum() == 0.0

    assert [x for _, _, x in a.iterator(True, 0, 0, 0, 2)] == [0.0, 0.0, 0.0]


def test_extract():
    a = SimpleMatrix.fromarray(np.arange(12.0).reshape(3, 4))
    assert a.extract_matrix(0, END, 0, END).is_identical(a, 0.0)
    assert a.extract_matrix(1, 2, 2, END).toarray().tolist() == [[6.0, 7.0]]
    assert a.extract_matrix(END, END, 0, END).shape == (0, 4)
    assert a.extract_vector(True, 1).toarray().tolist() == [[4.0, 5.0, 6.0, 7.0]]
    assert a.extract_vector(False, 3).shape == (3, 1)
    assert a.extract_diag().toarray().tolist() == [[0.0], [5.0], [10.0]]

    with pytest.raises(InvalidArgumentError):
        a.extract_matrix(2, 1, 0, END)

    with pytest.raises(IndexOutOfRangeError):
        a.extract_matrix(0, 4, 0, END)


def test_insert_combine():
    a = SimpleMatrix.identity(2)
    b = SimpleMatrix.fromarray([[5.0, 6.0]])

    c = a.combine(END, 0, b)
    assert c.toarray().tolist() == [[1.0, 0.0], [0.0, 1.0], [5.0, 6.0]]
    assert a.shape == (2, 2)

    c = a.combine(1, 1, b)
    assert c.toarray().tolist() == [[1.0, 0.0, 0.0], [0.0, 5.0, 6.0]]

    c = a.combine(0, 0, b)
    assert c.toarray().tolist() == [[5.0, 6.0], [0.0, 1.0]]
    assert a.get(0, 0) == 1.0

    a.insert_into_this(1, 0, b)
    assert a.toarray().tolist() == [[1.0, 0.0], [5.0, 6.0]]

    with pytest.raises(DimensionMismatchError):
        a.insert_into_this(0, 1, b)


def test_reshape_copy():
    a = SimpleMatrix.fromarray([[1.0, 2.0, 3.0], [4.0, 5.0, 6.0]])
    b = a.copy()
    a.reshape(3, 2)
    assert a.toarray().tolist() == [[1.0, 2.0], [3.0, 4.0], [5.0, 6.0]]
    assert b.shape == (2, 3)

    a.reshape(4, 4)
    assert a.element_sum() == 0.0

    b.set_to(SimpleMatrix.identity(2))
    assert b == SimpleMatrix.identity(2)


def test_transpose():
    a = SimpleMatrix.fromarray([[1.0, 2.0, 3.0]])
    assert a.transpose().shape == (3, 1)
    assert a.T.T == a


def test_has_uncountable():
    a = SimpleMatrix(2, 2)
    assert not a.has_uncountable()
    a.set(1, 1, math.nan)
    assert a.has_uncountable()
    assert a != a.copy()


def test_float32():
    a = SimpleMatrix.fromarray([[4.0, 7.0], [2.0, 6.0]], precision=Float32)
    b = a.invert()
    assert b.precision is Float32
    assert (a @ b).is_identical(SimpleMatrix.identity(2, precision=Float32), 1e-5)
    assert isinstance(a.determinant(), float)
    assert a.determinant() == pytest.approx(10.0, rel=Float32.TEST_TOL)
    assert a.scale(0.1).get_matrix().data.dtype == np.float32


def test_subclass():
    class Derived(SimpleMatrix):
        __slots__ = ()

    a = Derived.fromarray([[1.0, 2.0], [3.0, 4.0]])
    assert isinstance(a.transpose(), Derived)
    assert isinstance(a.mult_inner(), Derived)
    assert isinstance(a + a, Derived)
    assert isinstance(a.svd().get_u(), Derived)


def test_str(capsys):
    a = SimpleMatrix.fromarray([[1.0, 2.0]])
    text = str(a)
    assert text.startswith("Type = SimpleMatrix, Float64, numRows = 1, numCols = 2")

    a.print()
    assert capsys.readouterr().out == text + "\n"


def test_persistence(tmp_path):
    a = SimpleMatrix.fromarray([[1.5, 2.0], [3.0, -4.0]])

    a.save_to_file_binary(tmp_path / "a.npy")
    assert SimpleMatrix.load_binary(tmp_path / "a.npy") == a

    a.save_to_file_csv(tmp_path / "a.csv")
    assert SimpleMatrix.load_csv(tmp_path / "a.csv") == a


def test_numpy_scalars():
    a = SimpleMatrix.fromarray([[1.0, 2.0]], precision=Float32)
    x = a.get_matrix().data[0]
    assert isinstance(x, np.float32)

    assert a.plus(x).toarray().tolist() == [[2.0, 3.0]]
    assert a.minus(x).toarray().tolist() == [[0.0, 1.0]]
    assert (a + x).precision is Float32
    assert (x - a).toarray().tolist() == [[0.0, -1.0]]
    assert (a * np.float64(2.0)).toarray().tolist() == [[2.0, 4.0]]
    assert (a / np.int64(2)).toarray().tolist() == [[0.5, 1.0]]
    assert a.element_power(np.int64(2)).toarray().tolist() == [[1.0, 4.0]]
