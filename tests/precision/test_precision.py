import math

import numpy as np
import pytest

from densemat.errors import UnknownPrecisionError
from densemat.precision import Float32, Float64, Precision


def test_constants():
    assert Float32.bits == 32
    assert Float64.bits == 64
    assert Float32.ONE.dtype == np.float32
    assert Float64.ZERO == 0.0
    assert Float32.TEST_TOL > Float64.TEST_TOL
    assert Float32.eps() > Float64.eps()


def test_conversion():
    x = Float32.fromfloat(0.1)
    assert isinstance(x, np.float32)
    assert Float32.tofloat(x) != 0.1
    assert Float64.tofloat(Float64.fromfloat(0.1)) == 0.1
    assert isinstance(Float32.tofloat(x), float)


def test_isuncountable():
    assert Float64.isuncountable(math.nan)
    assert Float64.isuncountable(-math.inf)
    assert not Float32.isuncountable(Float32.fromfloat(1e30))


def test_lookup():
    assert Precision.fromdtype(np.float32) is Float32
    assert Precision.fromdtype("float64") is Float64
    assert Precision.frombits(32) is Float32
    assert Precision.frombits(64) is Float64

    with pytest.raises(UnknownPrecisionError):
        Precision.fromdtype(np.int64)

    with pytest.raises(TypeError):
        Precision.frombits(16)
