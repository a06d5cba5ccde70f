import fractions
import logging

import hypothesis
import pytest

from upoly import euclid
from upoly.algebra import QQ, RR, IntegersMod, PrimeField
from upoly.errors import CapabilityError
from upoly.poly import Poly
from upoly.sparse import SparsePoly

from poly_strategies import nonzero_polys


@hypothesis.settings(deadline=None)
@hypothesis.given(nonzero_polys(), nonzero_polys())
def test_divide_undoes_multiplication(p, q):
    assert euclid.divide(p * q, q) == p
    assert (p * q).to_sparse().divide(q.to_sparse()) == p.to_sparse()


@hypothesis.settings(deadline=None)
@hypothesis.given(nonzero_polys(ring=QQ, max_deg=6), nonzero_polys(ring=QQ))
def test_quot_rem(n, d):
    q, r = euclid.quot_rem(n, d)
    assert q * d + r == n
    assert r.deg() < d.deg()


@hypothesis.settings(deadline=None)
@hypothesis.given(nonzero_polys(), nonzero_polys(), nonzero_polys())
def test_gcd_contains_common_factor(p, q, r):
    g = euclid.gcd(p * r, q * r)
    assert euclid.divide(p * r, g) is not None
    assert euclid.divide(q * r, g) is not None
    assert euclid.divide(g, r) is not None
    assert g.leading()[1] > 0


@hypothesis.settings(deadline=None)
@hypothesis.given(nonzero_polys(ring=QQ), nonzero_polys(ring=QQ), nonzero_polys(ring=QQ))
def test_field_gcd_agrees_with_generic_gcd(p, q, r):
    g = euclid.field_gcd(p * r, q * r)
    assert g.leading()[1] == 1
    assert g == euclid.gcd(p * r, q * r)


def test_gcd_examples():
    assert euclid.gcd(Poly(-1, 0, 1), Poly(1, 2, 1)) == Poly(1, 1)
    assert euclid.gcd(Poly(2, 2), Poly(4, 4)) == Poly(2, 2)
    assert euclid.gcd(Poly(0, -3), Poly()) == Poly(0, 3)
    assert euclid.gcd(Poly(), Poly()) == Poly()
    assert euclid.gcd(Poly(1, 1), Poly(1, -1)) == Poly(1)

    F5 = PrimeField(5)
    assert euclid.field_gcd(Poly(4, 0, 1, ring=F5), Poly(1, 1, ring=F5)) == Poly(1, 1, ring=F5)


def test_sparse_gcd():
    X = SparsePoly.var()
    assert euclid.gcd((X ** 100 - 1) * (X + 3), (X ** 100 - 1) * (X - 3)) == X ** 100 - 1


def test_content_and_primitive_part():
    p = Poly(6, -4, 2)
    assert euclid.content(p) == 2
    assert euclid.primitive_part(p) == Poly(3, -2, 1)
    assert euclid.content(Poly()) == 0
    assert euclid.primitive_part(Poly()) == Poly()


def test_pseudo_remainder():
    # prem(X^2 + 1, 2X + 1) = 4 (X^2 + 1) - (2X - 1)(2X + 1) = 5.
    assert euclid.pseudo_remainder(Poly(1, 0, 1), Poly(1, 2)) == Poly(5)


def test_division_failures():
    assert euclid.divide(Poly(1, 0, 1), Poly(1, 1)) is None
    assert euclid.divide(Poly(1), Poly(0, 1)) is None
    assert euclid.divide(Poly(1, 1), Poly(2)) is None
    with pytest.raises(ZeroDivisionError):
        euclid.divide(Poly(1, 1), Poly())
    with pytest.raises(ZeroDivisionError):
        euclid.quot_rem(Poly(1, 1, ring=QQ), Poly(ring=QQ))


def test_capabilities():
    with pytest.raises(CapabilityError):
        euclid.quot_rem(Poly(1, 1), Poly(1))
    with pytest.raises(CapabilityError):
        euclid.divide(Poly(1, 1, ring=IntegersMod(4)), Poly(1, ring=IntegersMod(4)))
    with pytest.raises(CapabilityError):
        euclid.field_gcd(Poly(1, 1), Poly(1))


def test_float_division_terminates():
    n = Poly(1.0, 2.0, 3.0, 4.0, ring=RR)
    d = Poly(0.1, 0.3, ring=RR)
    q, r = euclid.quot_rem(n, d)
    assert r.deg() < d.deg()
    for x in [0.0, 1.0, -2.5]:
        assert (q * d + r).evaluate(x) == pytest.approx(n.evaluate(x))


def test_exact_rationals():
    q, r = divmod(Poly(1, 0, 1, ring=QQ), Poly(0, 2, ring=QQ))
    assert q == Poly(0, fractions.Fraction(1, 2), ring=QQ)
    assert r == Poly(1, ring=QQ)


def test_debug_logging(caplog):
    with caplog.at_level(logging.DEBUG, logger='upoly.euclid'):
        euclid.gcd(Poly(-1, 0, 1), Poly(1, 2, 1))

    assert "primitive remainder sequence finished after 2 steps with degree 1" in caplog.text
