"""
Dense polynomials.

In this module, a polynomial is represented by a tuple of coefficients indexed by degree, for instance 1 - 2X + X^3
would be the tuple (1, -2, 0, 1). The tuple never ends in a zero, so the zero polynomial is the empty tuple.
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
class Poly:
    """
    A polynomial over a coefficient ring (the integers by default), represented by a dense list of coefficients
    starting with the constant term. Thus Poly(1) is the integer 1, and Poly(0, 1) is the variable X.

    >>> Poly(1, 0, 1)
    Poly('1 * X^2 + 0 * X + 1')
    >>> Poly(1, 2, 3) * Poly(4, 5)
    Poly('15 * X^3 + 22 * X^2 + 13 * X + 4')
    >>> Poly(1, 1) - Poly(1, 1)
    Poly('0')

    The ordering of polynomials is only there so that they can be sorted, it has no mathematical meaning.
    """
    coeffs: tuple
    ring: Semiring

    def __init__(self, *args, ring: Semiring = ZZ):
        # Trim trailing zeros.
        self.coeffs = tuple(kernel.dense_trim(ring, [ring.coerce(c) for c in args]))
        self.ring = ring

    @classmethod
    def _make(cls, ring: Semiring, coeffs: Iterable) -> Poly:
        """Wrap a buffer which is already normalised."""
        poly = cls.__new__(cls)
        poly.coeffs = tuple(coeffs)
        poly.ring = ring
        return poly

    @classmethod
    def zero(cls, ring: Semiring = ZZ) -> Poly:
        return cls._make(ring, ())

    @classmethod
    def one(cls, ring: Semiring = ZZ) -> Poly:
        return cls.constant(ring.one, ring=ring)

    @classmethod
    def constant(cls, c, ring: Semiring = ZZ) -> Poly:
        return cls(c, ring=ring)

    @classmethod
    def monomial(cls, deg: int, c, ring: Semiring = ZZ) -> Poly:
        """
        The monomial c X^deg.

        >>> Poly.monomial(3, 2)
        Poly('2 * X^3 + 0 * X^2 + 0 * X + 0')
        """
        if deg < 0:
            raise ValueError("The degree of a monomial must be >= 0.")

        c = ring.coerce(c)
        if ring.is_zero(c):
            return cls.zero(ring)
        return cls._make(ring, [ring.zero] * deg + [c])

    @classmethod
    def var(cls, ring: Semiring = ZZ) -> Poly:
        """The variable X, which is zero over the zero ring."""
        return cls.monomial(1, ring.one, ring=ring)

    @classmethod
    def from_terms(cls, terms: Iterable[tuple[int, object]], ring: Semiring = ZZ) -> Poly:
        """Make a polynomial from (degree, coefficient) pairs, given in any order."""
        terms = kernel.sparse_normalize(ring, [(kernel.checked_degree(deg), ring.coerce(c)) for deg, c in terms])
        if not terms:
            return cls.zero(ring)

        coeffs = [ring.zero] * (terms[-1][0] + 1)
        for deg, c in terms:
            coeffs[deg] = c

        return cls._make(ring, coeffs)

    def is_var(self) -> bool:
        return self == Poly.var(self.ring)

    def deg(self) -> int:
        """The degree of a polynomial is the degree of its leading term. The zero polynomial has degree -1."""
        return len(self.coeffs) - 1

    def is_zero(self) -> bool:
        return len(self.coeffs) == 0

    def coeff(self, deg: int):
        return self.coeffs[deg] if 0 <= deg < len(self.coeffs) else self.ring.zero

    def leading(self) -> Optional[tuple[int, object]]:
        """
        The degree and coefficient of the leading term, or None for the zero polynomial.

        >>> Poly(1, 0, 5).leading()
        (2, 5)
        """
        if not self.coeffs:
            return None
        return len(self.coeffs) - 1, self.coeffs[-1]

    def nonzero_terms(self) -> list[tuple[int, object]]:
        return [(i, c) for i, c in enumerate(self.coeffs) if not self.ring.is_zero(c)]

    def drop_leading(self) -> Poly:
        """The polynomial with its leading term removed."""
        if not self.coeffs:
            return self
        return Poly._make(self.ring, kernel.dense_trim(self.ring, list(self.coeffs[:-1])))

    def evaluate(self, x):
        """
        Evaluate the polynomial at some point, keeping a running power of x.

        >>> Poly(1, 0, 1).evaluate(3)
        10
        """
        ring = self.ring
        x = ring.coerce(x)

        acc, power = ring.zero, ring.one
        for i, c in enumerate(self.coeffs):
            if i > 0:
                power = ring.times(power, x)
            if not ring.is_zero(c):
                acc = ring.plus(acc, ring.times(c, power))

        return acc

    def subst(self, inner):
        """
        Substitute another polynomial (dense, sparse or Laurent) for X. The result has the type of inner.

        >>> Poly(1, 1, 1).subst(Poly(0, 2))
        Poly('4 * X^2 + 2 * X + 1')
        """
        if inner.ring != self.ring:
            raise RingMismatchError(f"Cannot substitute a polynomial over {inner.ring} into one over {self.ring}.")

        kind = type(inner)
        result, power = kind.zero(inner.ring), kind.one(inner.ring)
        for i, c in enumerate(self.coeffs):
            if i > 0:
                power = power * inner
            if not self.ring.is_zero(c):
                result = result + power.scale(0, c)

        return result

    def deriv(self) -> Poly:
        """
        >>> Poly(0, 3, 0, 1).deriv()
        Poly('3 * X^2 + 0 * X + 3')
        """
        ring = self.ring
        coeffs = [ring.times(ring.from_natural(i), c) for i, c in enumerate(self.coeffs) if i > 0]
        return Poly._make(ring, kernel.dense_trim(ring, coeffs))

    def integral(self) -> Poly:
        """
        The indefinite integral with constant term zero. Only defined over a field, and in characteristic p a term
        of degree p - 1 has no antiderivative, which raises an IntegrationError.

        >>> from upoly.algebra import QQ
        >>> Poly(3, 0, 3, ring=QQ).integral()
        Poly('1 * X^3 + 0 * X^2 + 3 * X + 0', ring=Rationals())
        """
        ring = self.ring
        require(ring, Field, "Integration")
        if self.is_zero():
            return self

        coeffs = [ring.zero] + [
            ring.zero if ring.is_zero(c) else ring.times(c, kernel.recip_natural(ring, i + 1))
            for i, c in enumerate(self.coeffs)
        ]
        return Poly._make(ring, coeffs)

    def scale(self, deg: int, c) -> Poly:
        """Multiply by the monomial c X^deg."""
        if deg < 0:
            raise ValueError("Cannot scale a polynomial by a negative power of X.")
        return Poly._make(self.ring, kernel.dense_scale(self.ring, deg, self.ring.coerce(c), self.coeffs))

    def to_sparse(self):
        from .sparse import SparsePoly
        return SparsePoly._make(self.ring, self.nonzero_terms())

    def __repr__(self):
        """
        >>> Poly()
        Poly('0')
        >>> Poly(-1)
        Poly('(-1)')
        >>> Poly(0, 1)
        Poly('1 * X + 0')
        >>> Poly(-1, 0, 2)
        Poly('2 * X^2 + 0 * X + (-1)')
        """
        if self.ring == ZZ:
            return f"Poly('{self}')"
        return f"Poly('{self}', ring={self.ring!r})"

    def __str__(self):
        return self.fmt()

    def fmt(self, mode: Literal[None, 'latex'] = None):
        return fmt_terms(reversed(list(enumerate(self.coeffs))), self.ring, mode=mode)

    def _repr_latex_(self):
        return Latex(self.fmt(mode='latex'))._repr_latex_()

    def _coerce(self, other):
        if isinstance(other, Poly):
            if other.ring != self.ring:
                raise RingMismatchError(f"Cannot combine polynomials over {self.ring} and {other.ring}.")
            return other
        if hasattr(other, 'nonzero_terms'):
            # Another kind of polynomial, which may know how to combine itself with this one.
            return NotImplemented
        return Poly.constant(other, ring=self.ring)

    def __add__(self, other) -> Poly:
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return Poly._make(self.ring, kernel.dense_plus(self.ring, self.coeffs, other.coeffs))

    __radd__ = __add__

    def __sub__(self, other) -> Poly:
        require(self.ring, Ring, "Subtraction")
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return Poly._make(self.ring, kernel.dense_minus(self.ring, self.coeffs, other.coeffs))

    def __rsub__(self, other) -> Poly:
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return other - self

    def __neg__(self) -> Poly:
        require(self.ring, Ring, "Negation")
        return Poly._make(self.ring, kernel.dense_negate(self.ring, self.coeffs))

    def __mul__(self, other) -> Poly:
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return Poly._make(self.ring, kernel.dense_convolution(self.ring, self.coeffs, other.coeffs))

    def __rmul__(self, other) -> Poly:
        # The constant goes on the left, which matters when the coefficients do not commute.
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return other * self

    def __pow__(self, n: int) -> Poly:
        if n < 0:
            raise ValueError("Cannot invert a polynomial.")
        if n == 0:
            return Poly.one(self.ring)
        if n == 1:
            return self

        sqrt = self ** (n // 2)
        return sqrt * sqrt if n % 2 == 0 else sqrt * sqrt * self

    def __lt__(self, other: Poly) -> bool:
        if not isinstance(other, Poly):
            return NotImplemented
        return self.coeffs < other.coeffs

    def divide(self, other: Poly) -> Optional[Poly]:
        """
        Return the exact quotient self / other, or None if other does not divide self.

        >>> Poly(-1, 0, 1).divide(Poly(1, 1))
        Poly('1 * X + (-1)')
        >>> Poly(1, 0, 1).divide(Poly(1, 1)) is None
        True
        """
        return euclid.divide(self, self._coerce(other))

    def gcd(self, other: Poly) -> Poly:
        """
        >>> Poly(-1, 0, 1).gcd(Poly(1, 2, 1))
        Poly('1 * X + 1')
        """
        return euclid.gcd(self, self._coerce(other))

    def __divmod__(self, other: Poly) -> tuple[Poly, Poly]:
        """
        Return the quotient and remainder of self / other over a field, i.e. the unique solution to
        self = other * q + r where deg(r) < deg(other).
        """
        return euclid.quot_rem(self, self._coerce(other))

    def __floordiv__(self, other: Poly) -> Poly:
        return divmod(self, other)[0]

    def __mod__(self, other: Poly) -> Poly:
        return divmod(self, other)[1]

    def __truediv__(self, other: Poly) -> Poly:
        """Return self / other if self is divisible by other, otherwise raise an error."""
        quo = self.divide(other)
        if quo is None:
            raise NotDivisibleError(f"{self} is not divisible by {other}.")

        return quo
