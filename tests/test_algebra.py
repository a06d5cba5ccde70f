import fractions
import unittest

import numpy as np
import pytest

from upoly.algebra import (BOOL, QQ, RR, ZZ, Field, GcdDomain, IntegersMod, MachineIntegers, PrimeField, Ring,
                           ZeroRing, require)
from upoly.errors import CapabilityError, PolynomialError


class TestCapabilities(unittest.TestCase):
    def test_hierarchy(self):
        self.assertIsInstance(ZZ, GcdDomain)
        self.assertNotIsInstance(ZZ, Field)
        self.assertIsInstance(QQ, Field)
        self.assertIsInstance(PrimeField(5), Field)
        self.assertIsInstance(IntegersMod(6), Ring)
        self.assertNotIsInstance(IntegersMod(6), GcdDomain)
        self.assertNotIsInstance(BOOL, Ring)

    def test_require(self):
        require(QQ, Field, "Anything")
        with self.assertRaises(CapabilityError):
            require(ZZ, Field, "Integration")

        # Capability errors are also type errors.
        with self.assertRaises(TypeError):
            require(BOOL, Ring, "Negation")

    def test_negative_integer_in_semiring(self):
        self.assertEqual(BOOL.from_integer(3), True)
        with self.assertRaises(PolynomialError):
            BOOL.from_integer(-1)


class TestRings(unittest.TestCase):
    def test_from_natural(self):
        for n in range(20):
            self.assertEqual(IntegersMod(7).from_natural(n), n % 7)
            self.assertEqual(QQ.from_natural(n), fractions.Fraction(n))
            self.assertEqual(BOOL.from_natural(n), n > 0)

    def test_from_integer(self):
        self.assertEqual(IntegersMod(7).from_integer(-1), 6)
        self.assertEqual(ZZ.from_integer(-5), -5)
        self.assertEqual(RR.from_integer(-2), -2.0)

    def test_power(self):
        self.assertEqual(ZZ.power(3, 0), 1)
        self.assertEqual(ZZ.power(3, 5), 243)
        self.assertEqual(PrimeField(7).power(3, 6), 1)
        with self.assertRaises(ValueError):
            ZZ.power(3, -1)

    def test_integer_division(self):
        self.assertEqual(ZZ.divide(12, 4), 3)
        self.assertIsNone(ZZ.divide(12, 5))
        self.assertIsNone(ZZ.divide(12, 0))
        self.assertEqual(ZZ.gcd(12, -18), 6)
        self.assertEqual(ZZ.unit_normal(-3), -1)

    def test_field_division(self):
        self.assertEqual(QQ.divide(1, 3), fractions.Fraction(1, 3))
        self.assertIsNone(QQ.divide(1, 0))
        self.assertEqual(QQ.unit_normal(fractions.Fraction(2, 3)), fractions.Fraction(3, 2))
        with self.assertRaises(ZeroDivisionError):
            QQ.recip(0)

    def test_prime_field(self):
        F = PrimeField(11)
        for a in range(1, 11):
            self.assertEqual(F.times(a, F.recip(a)), 1)

        with self.assertRaises(ZeroDivisionError):
            F.recip(0)
        with self.assertRaises(ValueError):
            PrimeField(12)

    def test_large_prime_fields(self):
        for p in [2, 3, 2 ** 31 - 1, 2 ** 61 - 1, 2 ** 89 - 1]:
            F = PrimeField(p)
            self.assertEqual(F.times(p - 1, F.recip(p - 1)), 1)

        # 561 is a Carmichael number, and 3215031751 a strong pseudoprime to the bases 2, 3, 5 and 7.
        for n in [0, 1, 561, 3215031751, 2 ** 61 + 1, (2 ** 31 - 1) * (2 ** 61 - 1)]:
            with self.assertRaises(ValueError):
                PrimeField(n)

    def test_zero_divisors(self):
        Z6 = IntegersMod(6)
        self.assertEqual(Z6.times(2, 3), 0)
        self.assertTrue(Z6.is_zero(Z6.times(4, 3)))

    def test_zero_ring(self):
        R = ZeroRing()
        self.assertTrue(R.is_zero(R.one))
        self.assertTrue(R.is_zero(R.from_integer(5)))

    def test_show(self):
        self.assertEqual(ZZ.show(3), '3')
        self.assertEqual(ZZ.show(-3), '(-3)')
        self.assertEqual(QQ.show(fractions.Fraction(1, 2)), '1/2')


@pytest.mark.parametrize("dtype", ['int8', 'int16', 'uint8', 'int32'])
def test_machine_integers_agree_with_numpy(dtype):
    R = MachineIntegers(dtype)
    info = np.iinfo(dtype)
    for a, b in [(info.max, 1), (info.max, info.max), (info.min, -1), (7, 9)]:
        a, b = R.coerce(int(a)), R.coerce(int(b))
        expected_sum = np.array([a], dtype=dtype) + np.array([b], dtype=dtype)
        expected_product = np.array([a], dtype=dtype) * np.array([b], dtype=dtype)
        assert R.plus(a, b) == int(expected_sum[0])
        assert R.times(a, b) == int(expected_product[0])


def test_machine_integers_rejects_floats():
    with pytest.raises(ValueError):
        MachineIntegers('float64')


def test_machine_integer_zero_divisors():
    R = MachineIntegers('int8')
    assert R.times(16, 16) == 0
