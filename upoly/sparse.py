"""
Sparse polynomials.

A sparse polynomial stores only its non-zero terms, as (degree, coefficient) pairs in increasing order of degree.
X^1000 + 1 takes two pairs ((0, 1), (1000, 1)) rather than a thousand and one coefficients.
"""
from __future__ import annotations

import dataclasses
import functools
from typing import Iterable, Literal, Optional

from . import euclid, kernel
from .algebra import ZZ, Field, Ring, Semiring, require
from .errors import NotDivisibleError, RingMismatchError
from .show import Latex, fmt_terms


@functools.total_ordering
@dataclasses.dataclass(init=False, eq=True, unsafe_hash=True)
class SparsePoly:
    """
    A polynomial over a coefficient ring, represented by its (degree, coefficient) pairs. The pairs given to the
    constructor may come in any order, and repeated degrees are summed:

    >>> SparsePoly((2, 3), (0, 1), (1, 2))
    SparsePoly('3 * X^2 + 2 * X + 1')
    >>> SparsePoly((1, 1), (0, 1), (1, -1))
    SparsePoly('1')
    >>> SparsePoly((1, 1), (0, 1)) * SparsePoly((1, 1), (0, -1))
    SparsePoly('1 * X^2 + (-1)')
    """
    terms: tuple
    ring: Semiring

    def __init__(self, *terms: tuple[int, object], ring: Semiring = ZZ):
        checked = [(kernel.checked_degree(deg), ring.coerce(c)) for deg, c in terms]

        self.terms = tuple(kernel.sparse_normalize(ring, checked))
        self.ring = ring

    @classmethod
    def _make(cls, ring: Semiring, terms: Iterable[tuple[int, object]]) -> SparsePoly:
        """Wrap a buffer which is already normalised."""
        poly = cls.__new__(cls)
        poly.terms = tuple(terms)
        poly.ring = ring
        return poly

    @classmethod
    def zero(cls, ring: Semiring = ZZ) -> SparsePoly:
        return cls._make(ring, ())

    @classmethod
    def one(cls, ring: Semiring = ZZ) -> SparsePoly:
        return cls.constant(ring.one, ring=ring)

    @classmethod
    def constant(cls, c, ring: Semiring = ZZ) -> SparsePoly:
        return cls.monomial(0, c, ring=ring)

    @classmethod
    def monomial(cls, deg: int, c, ring: Semiring = ZZ) -> SparsePoly:
        if deg < 0:
            raise ValueError("The degree of a monomial must be >= 0.")

        c = ring.coerce(c)
        if ring.is_zero(c):
            return cls.zero(ring)
        return cls._make(ring, [(deg, c)])

    @classmethod
    def var(cls, ring: Semiring = ZZ) -> SparsePoly:
        return cls.monomial(1, ring.one, ring=ring)

    @classmethod
    def from_terms(cls, terms: Iterable[tuple[int, object]], ring: Semiring = ZZ) -> SparsePoly:
        return cls(*terms, ring=ring)

    def is_var(self) -> bool:
        return self == SparsePoly.var(self.ring)

    def deg(self) -> int:
        return self.terms[-1][0] if self.terms else -1

    def is_zero(self) -> bool:
        return len(self.terms) == 0

    def coeff(self, deg: int):
        for p, c in self.terms:
            if p == deg:
                return c
        return self.ring.zero

    def leading(self) -> Optional[tuple[int, object]]:
        return self.terms[-1] if self.terms else None

    def nonzero_terms(self) -> list[tuple[int, object]]:
        return list(self.terms)

    def drop_leading(self) -> SparsePoly:
        return SparsePoly._make(self.ring, self.terms[:-1])

    def evaluate(self, x):
        """
        Evaluate at a point. Between consecutive terms, the running power of x is raised by the gap in degrees.

        >>> SparsePoly((0, 1), (10, 1)).evaluate(2)
        1025
        """
        ring = self.ring
        x = ring.coerce(x)

        acc, prev, power = ring.zero, 0, ring.one
        for deg, c in self.terms:
            if deg != prev:
                power = ring.times(power, ring.power(x, deg - prev))
            acc = ring.plus(acc, ring.times(c, power))
            prev = deg

        return acc

    def subst(self, inner):
        """Substitute another polynomial (dense, sparse or Laurent) for X. The result has the type of inner."""
        if inner.ring != self.ring:
            raise RingMismatchError(f"Cannot substitute a polynomial over {inner.ring} into one over {self.ring}.")

        kind = type(inner)
        result, prev, power = kind.zero(inner.ring), 0, kind.one(inner.ring)
        for deg, c in self.terms:
            if deg != prev:
                power = power * inner ** (deg - prev)
            result = result + power.scale(0, c)
            prev = deg

        return result

    def deriv(self) -> SparsePoly:
        """
        >>> SparsePoly((3, 1), (1, 3)).deriv()
        SparsePoly('3 * X^2 + 3')
        """
        ring = self.ring
        terms = []
        for deg, c in self.terms:
            if deg == 0:
                continue

            # A non-zero coefficient can vanish in positive characteristic.
            d = ring.times(ring.from_natural(deg), c)
            if not ring.is_zero(d):
                terms.append((deg - 1, d))

        return SparsePoly._make(ring, terms)

    def integral(self) -> SparsePoly:
        """
        The indefinite integral with constant term zero, over a field. In characteristic p a term of degree p - 1
        has no antiderivative, and raises an IntegrationError.
        """
        ring = self.ring
        require(ring, Field, "Integration")
        terms = [(deg + 1, ring.times(c, kernel.recip_natural(ring, deg + 1))) for deg, c in self.terms]
        return SparsePoly._make(ring, terms)

    def scale(self, deg: int, c) -> SparsePoly:
        """Multiply by the monomial c X^deg."""
        if deg < 0:
            raise ValueError("Cannot scale a polynomial by a negative power of X.")
        return SparsePoly._make(self.ring, kernel.sparse_scale(self.ring, deg, self.ring.coerce(c), self.terms))

    def to_dense(self):
        from .poly import Poly
        return Poly.from_terms(self.terms, ring=self.ring)

    def __repr__(self):
        if self.ring == ZZ:
            return f"SparsePoly('{self}')"
        return f"SparsePoly('{self}', ring={self.ring!r})"

    def __str__(self):
        return self.fmt()

    def fmt(self, mode: Literal[None, 'latex'] = None):
        return fmt_terms(reversed(self.terms), self.ring, mode=mode)

    def _repr_latex_(self):
        return Latex(self.fmt(mode='latex'))._repr_latex_()

    def _coerce(self, other):
        if isinstance(other, SparsePoly):
            if other.ring != self.ring:
                raise RingMismatchError(f"Cannot combine polynomials over {self.ring} and {other.ring}.")
            return other
        if hasattr(other, 'nonzero_terms'):
            return NotImplemented
        return SparsePoly.constant(other, ring=self.ring)

    def __add__(self, other) -> SparsePoly:
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return SparsePoly._make(self.ring, kernel.sparse_plus(self.ring, self.terms, other.terms))

    __radd__ = __add__

    def __sub__(self, other) -> SparsePoly:
        require(self.ring, Ring, "Subtraction")
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return SparsePoly._make(self.ring, kernel.sparse_minus(self.ring, self.terms, other.terms))

    def __rsub__(self, other) -> SparsePoly:
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return other - self

    def __neg__(self) -> SparsePoly:
        require(self.ring, Ring, "Negation")
        return SparsePoly._make(self.ring, kernel.sparse_negate(self.ring, self.terms))

    def __mul__(self, other) -> SparsePoly:
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return SparsePoly._make(self.ring, kernel.sparse_convolution(self.ring, self.terms, other.terms))

    def __rmul__(self, other) -> SparsePoly:
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return other * self

    def __pow__(self, n: int) -> SparsePoly:
        if n < 0:
            raise ValueError("Cannot invert a polynomial.")
        if n == 0:
            return SparsePoly.one(self.ring)
        if n == 1:
            return self

        sqrt = self ** (n // 2)
        return sqrt * sqrt if n % 2 == 0 else sqrt * sqrt * self

    def __lt__(self, other: SparsePoly) -> bool:
        if not isinstance(other, SparsePoly):
            return NotImplemented
        return self.terms < other.terms

    def divide(self, other: SparsePoly) -> Optional[SparsePoly]:
        return euclid.divide(self, self._coerce(other))

    def gcd(self, other: SparsePoly) -> SparsePoly:
        return euclid.gcd(self, self._coerce(other))

    def __divmod__(self, other: SparsePoly) -> tuple[SparsePoly, SparsePoly]:
        return euclid.quot_rem(self, self._coerce(other))

    def __floordiv__(self, other: SparsePoly) -> SparsePoly:
        return divmod(self, other)[0]

    def __mod__(self, other: SparsePoly) -> SparsePoly:
        return divmod(self, other)[1]

    def __truediv__(self, other: SparsePoly) -> SparsePoly:
        quo = self.divide(other)
        if quo is None:
            raise NotDivisibleError(f"{self} is not divisible by {other}.")

        return quo
