"""
Laurent polynomials: polynomials in X and X^-1.
"""
from __future__ import annotations

import dataclasses
import functools
from typing import Literal, Optional, Sequence, Union

from . import kernel
from .algebra import ZZ, Field, Ring, Semiring, require
from .errors import NotDivisibleError, RingMismatchError, VariableError
from .poly import Poly
from .show import Latex, fmt_terms


@functools.total_ordering
@dataclasses.dataclass(init=False, eq=True, unsafe_hash=True)
class Laurent:
    """
    A Laurent polynomial, represented by an offset and a dense polynomial: the coefficient of X^(offset + i) is the
    coefficient of X^i in the dense part. Leading zeros of the dense part are moved into the offset, so that the
    dense part always has a non-zero constant term and the offset is as large as possible. The zero polynomial is
    represented by an offset of 0 and the zero dense part.

    >>> Laurent(0, ())
    Laurent('0')
    >>> Laurent(0, (0, 1))
    Laurent('1 * X')
    >>> Laurent(1, (1,))
    Laurent('1 * X')
    >>> X = Laurent.var()
    >>> X**-1
    Laurent('1 * X^-1')
    >>> (X + 1) * (1 - X**-1)
    Laurent('1 * X + 0 + (-1) * X^-1')
    """
    offset: int
    poly: Poly

    def __init__(self, offset: int, poly: Union[Poly, Sequence] = (), ring: Semiring = ZZ):
        if not isinstance(poly, Poly):
            poly = Poly(*poly, ring=ring)

        # Trim leading zeros.
        coeffs = poly.coeffs
        start = 0
        while start < len(coeffs) and poly.ring.is_zero(coeffs[start]):
            start += 1

        if start == len(coeffs):
            self.offset = 0
            self.poly = Poly.zero(poly.ring)
        else:
            self.offset = offset + start
            self.poly = poly if start == 0 else Poly._make(poly.ring, coeffs[start:])

    @classmethod
    def _make(cls, offset: int, poly: Poly) -> Laurent:
        """Wrap an offset and dense part which are already normalised."""
        laurent = cls.__new__(cls)
        laurent.offset = offset
        laurent.poly = poly
        return laurent

    @property
    def ring(self) -> Semiring:
        return self.poly.ring

    @classmethod
    def zero(cls, ring: Semiring = ZZ) -> Laurent:
        return cls._make(0, Poly.zero(ring))

    @classmethod
    def one(cls, ring: Semiring = ZZ) -> Laurent:
        return cls._make(0, Poly.one(ring))

    @classmethod
    def constant(cls, c, ring: Semiring = ZZ) -> Laurent:
        return cls.monomial(0, c, ring=ring)

    @classmethod
    def monomial(cls, deg: int, c, ring: Semiring = ZZ) -> Laurent:
        """The monomial c X^deg, where deg may be negative."""
        c = ring.coerce(c)
        if ring.is_zero(c):
            return cls.zero(ring)
        return cls._make(deg, Poly._make(ring, (c,)))

    @classmethod
    def var(cls, ring: Semiring = ZZ) -> Laurent:
        """The variable X, which is zero over the zero ring."""
        if ring.is_zero(ring.one):
            return cls.zero(ring)
        return cls._make(1, Poly.one(ring))

    def is_var(self) -> bool:
        return self == Laurent.var(self.ring)

    def un_laurent(self) -> tuple[int, Poly]:
        """
        Decompose into the offset and the dense part.

        >>> Laurent(-3, (0, 0, 2, 1)).un_laurent()
        (-1, Poly('1 * X + 2'))
        """
        return self.offset, self.poly

    def is_zero(self) -> bool:
        return self.poly.is_zero()

    def leading(self) -> Optional[tuple[int, object]]:
        """
        >>> Laurent(-2, (1, 0, 4)).leading()
        (0, 4)
        """
        lead = self.poly.leading()
        if lead is None:
            return None
        return self.offset + lead[0], lead[1]

    def nonzero_terms(self) -> list[tuple[int, object]]:
        return [(self.offset + i, c) for i, c in self.poly.nonzero_terms()]

    def valuation(self) -> int:
        """
        The valuation of a Laurent polynomial is the degree of the lowest power of X, or garbage (0)
        for the zero polynomial.
        """
        return self.offset

    def degree(self) -> int:
        """
        The degree of a Laurent polynomial is the degree of the highest power of X, or garbage (-1)
        for the zero polynomial.
        """
        return self.offset + self.poly.deg()

    def evaluate(self, x):
        """
        Evaluate at a point. A negative offset needs the inverse of x, so the coefficients must form a field.

        >>> from upoly.algebra import QQ
        >>> Laurent(-1, (1, 0, 1), ring=QQ).evaluate(2)
        Fraction(5, 2)
        """
        ring = self.ring
        x = ring.coerce(x)
        value = self.poly.evaluate(x)
        if self.offset >= 0:
            return ring.times(value, ring.power(x, self.offset))

        require(ring, Field, "Evaluation of negative powers")
        return ring.times(value, ring.power(ring.recip(x), -self.offset))

    def deriv(self) -> Laurent:
        """
        >>> Laurent(-1, (1, 0, 1)).deriv()
        Laurent('1 + 0 * X^-1 + (-1) * X^-2')
        """
        ring = self.ring
        require(ring, Ring, "Differentiation of Laurent polynomials")
        coeffs = [ring.times(ring.from_integer(self.offset + i), c) for i, c in enumerate(self.poly.coeffs)]
        return Laurent(self.offset - 1, Poly._make(ring, kernel.dense_trim(ring, coeffs)))

    def scale(self, deg: int, c) -> Laurent:
        """Multiply by the monomial c X^deg, where deg may be negative."""
        return Laurent(self.offset + deg, self.poly.scale(0, c))

    def __repr__(self):
        """
        >>> Laurent(0, (-1,))
        Laurent('(-1)')
        >>> Laurent(0, (0, 0, 2))
        Laurent('2 * X^2')
        >>> Laurent(-1, (1, 0, 1))**2
        Laurent('1 * X^2 + 0 * X + 2 + 0 * X^-1 + 1 * X^-2')
        """
        if self.ring == ZZ:
            return f"Laurent('{self}')"
        return f"Laurent('{self}', ring={self.ring!r})"

    def __str__(self):
        return self.fmt()

    def fmt(self, mode: Literal[None, 'latex'] = None):
        terms = [(self.offset + i, c) for i, c in enumerate(self.poly.coeffs)]
        return fmt_terms(reversed(terms), self.ring, mode=mode)

    def _repr_latex_(self):
        return Latex(self.fmt(mode='latex'))._repr_latex_()

    def _coerce(self, other):
        if isinstance(other, Poly):
            other = Laurent(0, other)
        if isinstance(other, Laurent):
            if other.ring != self.ring:
                raise RingMismatchError(f"Cannot combine polynomials over {self.ring} and {other.ring}.")
            return other
        if hasattr(other, 'nonzero_terms'):
            return NotImplemented
        return Laurent.constant(other, ring=self.ring)

    def _align(self, other: Laurent) -> tuple[int, Poly, Poly]:
        """Bring both dense parts to the smaller of the two offsets, by multiplying one of them by a power of X."""
        one = self.ring.one
        if self.offset <= other.offset:
            return self.offset, self.poly, other.poly.scale(other.offset - self.offset, one)
        return other.offset, self.poly.scale(self.offset - other.offset, one), other.poly

    def __add__(self, other) -> Laurent:
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented

        offset, p, q = self._align(other)
        return Laurent(offset, p + q)

    __radd__ = __add__

    def __sub__(self, other) -> Laurent:
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented

        offset, p, q = self._align(other)
        return Laurent(offset, p - q)

    def __rsub__(self, other) -> Laurent:
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return other - self

    def __neg__(self) -> Laurent:
        return Laurent._make(self.offset, -self.poly)

    def __mul__(self, other) -> Laurent:
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented

        # The product of the constant terms may vanish if the ring has zero divisors, so renormalise.
        return Laurent(self.offset + other.offset, self.poly * other.poly)

    def __rmul__(self, other) -> Laurent:
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return other * self

    def __pow__(self, n: int) -> Laurent:
        """
        Non-negative powers of any Laurent polynomial, and negative powers of the variable X only.

        >>> X = Laurent.var()
        >>> X**-2 * X**2
        Laurent('1')
        """
        if n < 0:
            if not self.is_var():
                raise VariableError(f"Negative powers may only be taken of the variable X, not of {self}.")
            return Laurent.monomial(n, self.ring.one, ring=self.ring)
        if n == 0:
            return Laurent.one(self.ring)
        if n == 1:
            return self

        sqrt = self ** (n // 2)
        return sqrt * sqrt if n % 2 == 0 else sqrt * sqrt * self

    def __lt__(self, other: Laurent) -> bool:
        if not isinstance(other, Laurent):
            return NotImplemented
        return (self.offset, self.poly) < (other.offset, other.poly)

    def divide(self, other) -> Optional[Laurent]:
        """
        The exact quotient, or None. The offsets subtract and the dense parts are divided.

        >>> Laurent(-2, (-1, 0, 1)).divide(Laurent(3, (1, 1)))
        Laurent('1 * X^-4 + (-1) * X^-5')
        """
        other = self._coerce(other)
        quo = self.poly.divide(other.poly)
        if quo is None:
            return None
        return Laurent(self.offset - other.offset, quo)

    def gcd(self, other) -> Laurent:
        """The gcd is only defined up to units, and every power of X is a unit, so the offset is always 0."""
        other = self._coerce(other)
        return Laurent(0, self.poly.gcd(other.poly))

    def __truediv__(self, other) -> Laurent:
        quo = self.divide(other)
        if quo is None:
            raise NotDivisibleError(f"{self} is not divisible by {other}.")

        return quo
