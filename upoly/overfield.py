"""
Polynomials over a field.

Over a field the generic gcd of euclid.gcd, which avoids division by working with pseudo-remainders, does a lot of
needless work: Euclid's algorithm with ordinary remainders gives the same answer directly. The wrappers here hold a
dense or Laurent polynomial with field coefficients, forward arithmetic to it, and replace division and gcd with the
remainder-based versions.

>>> from upoly.algebra import QQ
>>> a = PolyOverField(Poly(-1, 0, 1, ring=QQ))
>>> b = PolyOverField(Poly(1, 2, 1, ring=QQ))
>>> a.gcd(b)
PolyOverField(Poly('1 * X + 1', ring=Rationals()))
"""
from __future__ import annotations

import dataclasses
from typing import Optional

from . import euclid
from .algebra import Field, require
from .errors import NotDivisibleError
from .laurent import Laurent
from .poly import Poly


@dataclasses.dataclass(frozen=True)
class _OverField:
    value: object

    def __post_init__(self):
        require(self.value.ring, Field, type(self).__name__)

    @property
    def ring(self):
        return self.value.ring

    def _unwrap(self, other):
        return other.value if isinstance(other, type(self)) else other

    def _wrap(self, result):
        return type(self)(result) if isinstance(result, type(self.value)) else result

    def __repr__(self):
        return f"{type(self).__name__}({self.value!r})"

    def __str__(self):
        return str(self.value)

    def _repr_latex_(self):
        return self.value._repr_latex_()

    def is_zero(self) -> bool:
        return self.value.is_zero()

    def evaluate(self, x):
        return self.value.evaluate(x)

    def nonzero_terms(self):
        return self.value.nonzero_terms()

    def deriv(self):
        return self._wrap(self.value.deriv())

    def __add__(self, other):
        return self._wrap(self.value + self._unwrap(other))

    def __radd__(self, other):
        return self._wrap(self._unwrap(other) + self.value)

    def __sub__(self, other):
        return self._wrap(self.value - self._unwrap(other))

    def __rsub__(self, other):
        return self._wrap(self._unwrap(other) - self.value)

    def __mul__(self, other):
        return self._wrap(self.value * self._unwrap(other))

    def __rmul__(self, other):
        return self._wrap(self._unwrap(other) * self.value)

    def __neg__(self):
        return self._wrap(-self.value)

    def __pow__(self, n: int):
        return self._wrap(self.value ** n)

    def __truediv__(self, other):
        quo = self.divide(other)
        if quo is None:
            raise NotDivisibleError(f"{self} is not divisible by {other}.")

        return quo


class PolyOverField(_OverField):
    """A dense polynomial with coefficients in a field."""
    value: Poly

    def deg(self) -> int:
        return self.value.deg()

    def integral(self) -> PolyOverField:
        return PolyOverField(self.value.integral())

    def divide(self, other) -> Optional[PolyOverField]:
        """
        Exact division, by checking that the remainder vanishes.

        >>> from upoly.algebra import QQ
        >>> PolyOverField(Poly(2, 2, ring=QQ)).divide(PolyOverField(Poly(2, ring=QQ)))
        PolyOverField(Poly('1 * X + 1', ring=Rationals()))
        """
        q, r = euclid.quot_rem(self.value, self._unwrap(other))
        return None if not r.is_zero() else PolyOverField(q)

    def gcd(self, other) -> PolyOverField:
        return PolyOverField(euclid.field_gcd(self.value, self._unwrap(other)))

    def __divmod__(self, other) -> tuple[PolyOverField, PolyOverField]:
        q, r = euclid.quot_rem(self.value, self._unwrap(other))
        return PolyOverField(q), PolyOverField(r)

    def __floordiv__(self, other) -> PolyOverField:
        return divmod(self, other)[0]

    def __mod__(self, other) -> PolyOverField:
        return divmod(self, other)[1]


class LaurentOverField(_OverField):
    """A Laurent polynomial with coefficients in a field."""
    value: Laurent

    def degree(self) -> int:
        return self.value.degree()

    def valuation(self) -> int:
        return self.value.valuation()

    def divide(self, other) -> Optional[LaurentOverField]:
        """
        Exact division. Every power of X is a unit, so only the dense parts need dividing.

        >>> from upoly.algebra import QQ
        >>> n = LaurentOverField(Laurent(-2, (-1, 0, 1), ring=QQ))
        >>> n.divide(LaurentOverField(Laurent(1, (1, 1), ring=QQ)))
        LaurentOverField(Laurent('1 * X^-2 + (-1) * X^-3', ring=Rationals()))
        """
        other = self._unwrap(other)
        q, r = euclid.quot_rem(self.value.poly, other.poly)
        if not r.is_zero():
            return None

        return LaurentOverField(Laurent(self.value.offset - other.offset, q))

    def gcd(self, other) -> LaurentOverField:
        other = self._unwrap(other)
        return LaurentOverField(Laurent(0, euclid.field_gcd(self.value.poly, other.poly)))
