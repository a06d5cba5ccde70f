import numpy as np
import numpy.testing as np_test
import pytest

from upoly import arrays
from upoly.algebra import ZZ, MachineIntegers
from upoly.poly import Poly


def test_to_and_from_array():
    p = Poly(3, 0, -1)
    np_test.assert_array_equal(arrays.to_array(p), np.array([3, 0, -1]))
    assert arrays.from_array(np.array([3, 0, -1, 0, 0])) == p
    assert arrays.from_array(np.zeros(4, dtype=int)) == Poly.zero()
    assert arrays.to_array(Poly.zero()).shape == (0,)


def test_from_array_gives_python_ints():
    p = arrays.from_array(np.array([1, 2], dtype=np.int64))
    assert all(type(c) is int for c in p.coeffs)


def test_pack_and_unpack():
    ps = [Poly(1, 2), Poly(), Poly(0, 0, 5)]
    A = arrays.pack(ps)
    np_test.assert_array_equal(A, np.array([[1, 2, 0], [0, 0, 0], [0, 0, 5]]))
    assert arrays.unpack(A) == ps
    assert arrays.pack([]).shape == (0, 0)
    assert arrays.pack([Poly(1, 2)], dtype=np.int16).dtype == np.int16


def test_trim():
    A = np.array([[1, 0, 0, 0], [2, 3, 0, 0]])
    np_test.assert_array_equal(arrays.trim(A), np.array([[1, 0], [2, 3]]))
    assert arrays.trim(np.zeros((2, 3))).shape == (2, 0)

    # Nothing to trim, so the same array comes back.
    B = np.array([1, 2])
    assert arrays.trim(B) is B

    # Columns are kept while any polynomial in the stack still uses them.
    C = np.zeros((2, 2, 5), dtype=int)
    C[1, 0, 2] = 7
    assert arrays.trim(C).shape == (2, 2, 3)
    assert arrays.trim(np.zeros((0, 4))).shape == (0, 0)


def test_zeropad():
    np_test.assert_array_equal(arrays.zeropad(np.array([[1], [2]]), 3), np.array([[1, 0, 0], [2, 0, 0]]))
    assert arrays.zeropad(np.array([1, 2], dtype=np.int8), 4).dtype == np.int8
    with pytest.raises(AssertionError):
        arrays.zeropad(np.array([1, 2, 3]), 2)


def test_degrees():
    A = arrays.pack([Poly(1), Poly(), Poly(0, 1, 0, 4)])
    np_test.assert_array_equal(arrays.degrees(A), np.array([0, -1, 3]))


def test_array_product_matches_numpy():
    p, q = Poly(1, -2, 3), Poly(4, 0, 5)
    np_test.assert_array_equal(arrays.to_array(p * q), np.convolve(arrays.to_array(p), arrays.to_array(q)))


@pytest.mark.parametrize("dtype", ['int8', 'int16'])
def test_machine_integers_wrap_like_numpy(dtype):
    R = MachineIntegers(dtype)
    p = arrays.from_array(np.array([100, 100], dtype=dtype), ring=R)
    product = arrays.to_array(p * p, dtype=dtype)

    x = np.array([100, 100], dtype=dtype)
    np_test.assert_array_equal(product, arrays.trim(np.convolve(x, x)))
    assert p.ring == R and R != ZZ
