"""
Division and greatest common divisors.

These functions work for both dense and sparse polynomials, using only the operations the two have in common:
leading(), drop_leading(), scale(), subtraction and from_terms(). Each division step removes the leading term of
the running remainder explicitly rather than relying on it to cancel, so that the loops terminate even when the
coefficients are floats.

>>> from upoly.poly import Poly
>>> from upoly.algebra import QQ
>>> divmod(Poly(-1, 0, 0, 1, ring=QQ), Poly(-1, 1, ring=QQ))
(Poly('1 * X^2 + 1 * X + 1', ring=Rationals()), Poly('0', ring=Rationals()))
"""
from __future__ import annotations

import functools
import logging
from typing import Optional, TypeVar

from .algebra import Field, GcdDomain, require

_logger = logging.getLogger(__name__)

P = TypeVar('P')


def _check_divisor(d):
    if d.is_zero():
        raise ZeroDivisionError("Polynomial division by zero.")


def divide(n: P, d: P) -> Optional[P]:
    """
    Return the q such that n = q * d, or None if there is none. Every leading coefficient along the way must be
    exactly divisible by the leading coefficient of d.
    """
    ring = n.ring
    require(ring, GcdDomain, "Exact division")
    _check_divisor(d)

    d_deg, d_lead = d.leading()
    d_tail = d.drop_leading()

    quotient = []
    r = n
    while not r.is_zero():
        r_deg, r_lead = r.leading()
        if r_deg < d_deg:
            return None

        c = ring.divide(r_lead, d_lead)
        if c is None:
            return None

        quotient.append((r_deg - d_deg, c))
        r = r.drop_leading() - d_tail.scale(r_deg - d_deg, c)

    return type(n).from_terms(quotient, ring=ring)


def quot_rem(n: P, d: P) -> tuple[P, P]:
    """Return (q, r) with n = q * d + r and deg(r) < deg(d). The coefficients must form a field."""
    ring = n.ring
    require(ring, Field, "Division with remainder")
    _check_divisor(d)

    d_deg, d_lead = d.leading()
    d_inv = ring.recip(d_lead)
    d_tail = d.drop_leading()

    quotient = []
    r = n
    while not r.is_zero() and r.deg() >= d_deg:
        r_deg, r_lead = r.leading()
        c = ring.times(r_lead, d_inv)
        quotient.append((r_deg - d_deg, c))
        r = r.drop_leading() - d_tail.scale(r_deg - d_deg, c)

    return type(n).from_terms(quotient, ring=ring), r


def pseudo_remainder(a: P, b: P) -> P:
    """
    A remainder of a modulo b computed without division, by multiplying through by the leading coefficient of b at
    every step. The result is a constant multiple of the true remainder, which is all a gcd computation needs.
    """
    _check_divisor(b)
    b_deg, b_lead = b.leading()
    b_tail = b.drop_leading()

    r = a
    while not r.is_zero() and r.deg() >= b_deg:
        r_deg, r_lead = r.leading()
        r = r.drop_leading().scale(0, b_lead) - b_tail.scale(r_deg - b_deg, r_lead)

    return r


def content(p: P):
    """The gcd of the coefficients of p, or zero for the zero polynomial."""
    ring = p.ring
    return functools.reduce(ring.gcd, (c for _, c in p.nonzero_terms()), ring.zero)


def primitive_part(p: P) -> P:
    """p divided by its content."""
    ring = p.ring
    c = content(p)
    if ring.is_zero(c):
        return p

    return type(p).from_terms([(deg, ring.divide(x, c)) for deg, x in p.nonzero_terms()], ring=ring)


def _unit_normalize(p: P) -> P:
    if p.is_zero():
        return p
    return p.scale(0, p.ring.unit_normal(p.leading()[1]))


def gcd(a: P, b: P) -> P:
    """
    The greatest common divisor over any GcdDomain, by the primitive pseudo-remainder sequence. The result is
    normalised by the coefficient ring's unit_normal, which makes it have a positive leading coefficient over the
    integers and be monic over a field.
    """
    ring = a.ring
    require(ring, GcdDomain, "Greatest common divisor")
    if a.is_zero():
        return _unit_normalize(b)
    if b.is_zero():
        return _unit_normalize(a)

    g = ring.gcd(content(a), content(b))
    a, b = primitive_part(a), primitive_part(b)
    if a.deg() < b.deg():
        a, b = b, a

    steps = 0
    while not b.is_zero():
        a, b = b, primitive_part(pseudo_remainder(a, b))
        steps += 1

    _logger.debug("primitive remainder sequence finished after %d steps with degree %d", steps, a.deg())
    return _unit_normalize(a.scale(0, g))


def field_gcd(a: P, b: P) -> P:
    """The monic greatest common divisor over a field, by Euclid's algorithm."""
    require(a.ring, Field, "Euclid's algorithm")

    steps = 0
    while not b.is_zero():
        a, b = b, quot_rem(a, b)[1]
        steps += 1

    _logger.debug("Euclid's algorithm finished after %d steps with degree %d", steps, a.deg())
    return _unit_normalize(a)
