"""
Coefficient rings.

A polynomial knows nothing about its coefficients except what its coefficient ring tells it. A ring is an object
which performs arithmetic on plain Python values: for instance the ring IntegersMod(6) acts on the ints 0, ..., 5,

>>> IntegersMod(6).times(2, 3)
0

and the capability interfaces Semiring ⊂ Ring ⊂ GcdDomain ⊂ Euclidean ⊂ Field record which operations a ring
supports. Polynomial operations check for the capability they need, and raise a CapabilityError if it is missing.

>>> ZZ.from_integer(-3)
-3
>>> PrimeField(7).recip(3)
5
>>> MachineIntegers('int8').plus(100, 100)
-56
"""
from __future__ import annotations

import abc
import dataclasses
import fractions
import math
import operator
from typing import Any, Optional

import numpy as np

from .errors import CapabilityError


class Semiring(abc.ABC):
    """
    Addition and multiplication with identities zero and one. Addition is commutative, multiplication need not be.
    """

    @property
    @abc.abstractmethod
    def zero(self) -> Any:
        ...

    @property
    @abc.abstractmethod
    def one(self) -> Any:
        ...

    @abc.abstractmethod
    def plus(self, a, b):
        ...

    @abc.abstractmethod
    def times(self, a, b):
        ...

    def is_zero(self, a) -> bool:
        return a == self.zero

    def from_natural(self, n: int):
        """The image of the natural number n, i.e. one + ... + one (n times), computed by doubling."""
        if n < 0:
            raise ValueError(f"{n} is not a natural number.")

        result, power = self.zero, self.one
        while n:
            if n & 1:
                result = self.plus(result, power)
            power = self.plus(power, power)
            n >>= 1

        return result

    def from_integer(self, n: int):
        if n < 0:
            raise CapabilityError(f"{self} has no additive inverses, so cannot represent {n}.")
        return self.from_natural(n)

    def power(self, a, n: int):
        """Raise a to the power n >= 0 by repeated squaring."""
        if n < 0:
            raise ValueError("Cannot raise to a negative power in a semiring.")

        result = self.one
        while n:
            if n & 1:
                result = self.times(result, a)
            a = self.times(a, a)
            n >>= 1

        return result

    def coerce(self, x):
        """Convert a Python value into an element of this ring."""
        if isinstance(x, int):
            return self.from_integer(x)
        return x

    def show(self, a) -> str:
        s = str(a)
        return f'({s})' if s.startswith('-') or ' ' in s else s


def require(ring: Semiring, capability: type, what: str):
    """Raise a CapabilityError unless the ring is an instance of the capability."""
    if not isinstance(ring, capability):
        raise CapabilityError(f"{what} needs coefficients in a {capability.__name__}, but {ring} is not one.")


class Ring(Semiring):
    """A semiring with additive inverses."""

    @abc.abstractmethod
    def negate(self, a):
        ...

    def minus(self, a, b):
        return self.plus(a, self.negate(b))

    def from_integer(self, n: int):
        return self.negate(self.from_natural(-n)) if n < 0 else self.from_natural(n)


class GcdDomain(Ring):
    """A commutative ring with exact division tests and greatest common divisors."""

    @abc.abstractmethod
    def divide(self, a, b) -> Optional[Any]:
        """Return the c such that a = b * c, or None if there is no such c."""

    @abc.abstractmethod
    def gcd(self, a, b):
        ...

    def unit_normal(self, a):
        """Return a unit u such that u * a is the preferred associate of a."""
        return self.one


class Euclidean(GcdDomain):
    @abc.abstractmethod
    def quot_rem(self, a, b) -> tuple[Any, Any]:
        ...

    @abc.abstractmethod
    def degree(self, a) -> int:
        ...


class Field(Euclidean):
    """A ring in which every non-zero element is invertible. Everything to do with division follows from recip."""

    @abc.abstractmethod
    def recip(self, a):
        ...

    def quot(self, a, b):
        return self.times(a, self.recip(b))

    def divide(self, a, b):
        return None if self.is_zero(b) else self.quot(a, b)

    def gcd(self, a, b):
        return self.zero if self.is_zero(a) and self.is_zero(b) else self.one

    def unit_normal(self, a):
        return self.one if self.is_zero(a) else self.recip(a)

    def quot_rem(self, a, b):
        return self.quot(a, b), self.zero

    def degree(self, a) -> int:
        return 0


@dataclasses.dataclass(frozen=True)
class Integers(Euclidean):
    zero = 0
    one = 1

    def plus(self, a, b):
        return a + b

    def times(self, a, b):
        return a * b

    def negate(self, a):
        return -a

    def minus(self, a, b):
        return a - b

    def from_natural(self, n: int):
        if n < 0:
            raise ValueError(f"{n} is not a natural number.")
        return n

    def from_integer(self, n: int):
        return n

    def coerce(self, x):
        return operator.index(x)

    def divide(self, a, b):
        if b == 0:
            return None
        q, r = divmod(a, b)
        return q if r == 0 else None

    def gcd(self, a, b):
        return math.gcd(a, b)

    def unit_normal(self, a):
        return -1 if a < 0 else 1

    def quot_rem(self, a, b):
        return divmod(a, b)

    def degree(self, a) -> int:
        return abs(a)


@dataclasses.dataclass(frozen=True)
class Rationals(Field):
    zero = fractions.Fraction(0)
    one = fractions.Fraction(1)

    def plus(self, a, b):
        return a + b

    def times(self, a, b):
        return a * b

    def negate(self, a):
        return -a

    def minus(self, a, b):
        return a - b

    def recip(self, a):
        if a == 0:
            raise ZeroDivisionError("Zero has no reciprocal.")
        return 1 / fractions.Fraction(a)

    def from_integer(self, n: int):
        return fractions.Fraction(n)

    def from_natural(self, n: int):
        if n < 0:
            raise ValueError(f"{n} is not a natural number.")
        return fractions.Fraction(n)

    def coerce(self, x):
        return fractions.Fraction(x)


@dataclasses.dataclass(frozen=True)
class Reals(Field):
    """Floating point numbers. Exact cancellation is not guaranteed, so results are only as good as the floats."""
    zero = 0.0
    one = 1.0

    def plus(self, a, b):
        return a + b

    def times(self, a, b):
        return a * b

    def negate(self, a):
        return -a

    def minus(self, a, b):
        return a - b

    def recip(self, a):
        return 1.0 / a

    def from_natural(self, n: int):
        if n < 0:
            raise ValueError(f"{n} is not a natural number.")
        return float(n)

    def from_integer(self, n: int):
        return float(n)

    def coerce(self, x):
        return float(x)


class _Modular:
    """Arithmetic on the representatives 0, ..., modulus - 1."""
    modulus: int

    zero = 0

    @property
    def one(self):
        return 1 % self.modulus

    def plus(self, a, b):
        return (a + b) % self.modulus

    def times(self, a, b):
        return (a * b) % self.modulus

    def negate(self, a):
        return -a % self.modulus

    def minus(self, a, b):
        return (a - b) % self.modulus

    def from_natural(self, n: int):
        if n < 0:
            raise ValueError(f"{n} is not a natural number.")
        return n % self.modulus

    def from_integer(self, n: int):
        return n % self.modulus

    def coerce(self, x):
        return operator.index(x) % self.modulus


@dataclasses.dataclass(frozen=True)
class IntegersMod(_Modular, Ring):
    """The ring Z/nZ, which has zero divisors whenever n is composite."""
    modulus: int

    def __post_init__(self):
        if self.modulus < 1:
            raise ValueError(f"The modulus must be positive, was given {self.modulus}.")


# Witnesses which make the strong pseudoprime test exact for every n < 3.3 * 10^24.
_WITNESSES = (2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37)


def _is_prime(n: int) -> bool:
    """
    Miller-Rabin with a fixed witness set. This is exact below 3.3 * 10^24, and a strong probable-prime
    test beyond that.

    >>> [n for n in range(30) if _is_prime(n)]
    [2, 3, 5, 7, 11, 13, 17, 19, 23, 29]
    >>> _is_prime(561), _is_prime(2**61 - 1)
    (False, True)
    """
    if n < 2:
        return False
    for a in _WITNESSES:
        if n % a == 0:
            return n == a

    d, r = n - 1, 0
    while d % 2 == 0:
        d, r = d // 2, r + 1

    for a in _WITNESSES:
        x = pow(a, d, n)
        if x == 1 or x == n - 1:
            continue
        for _ in range(r - 1):
            x = pow(x, 2, n)
            if x == n - 1:
                break
        else:
            return False
    return True


@dataclasses.dataclass(frozen=True)
class PrimeField(_Modular, Field):
    """The finite field Z/pZ."""
    modulus: int

    def __post_init__(self):
        p = self.modulus
        if not _is_prime(p):
            raise ValueError(f"{p} is not a prime.")

    def recip(self, a):
        if a % self.modulus == 0:
            raise ZeroDivisionError("Zero has no reciprocal.")
        return pow(a, -1, self.modulus)


@dataclasses.dataclass(frozen=True)
class Booleans(Semiring):
    """The Boolean semiring ({False, True}, or, and), which has no subtraction."""
    zero = False
    one = True

    def plus(self, a, b):
        return a or b

    def times(self, a, b):
        return a and b

    def coerce(self, x):
        return bool(x)


@dataclasses.dataclass(frozen=True)
class ZeroRing(Ring):
    """The ring with a single element, in which one is equal to zero."""
    zero = 0
    one = 0

    def plus(self, a, b):
        return 0

    def times(self, a, b):
        return 0

    def negate(self, a):
        return 0

    def is_zero(self, a) -> bool:
        return True

    def coerce(self, x):
        return 0


@dataclasses.dataclass(frozen=True)
class MachineIntegers(Ring):
    """
    Fixed width integers with wrap-around arithmetic, like the numpy integer dtypes. The ring Z/2^k which these
    implement has plenty of zero divisors: in int8, 16 * 16 == 0.
    """
    dtype: str = 'int8'

    def __post_init__(self):
        dtype = np.dtype(self.dtype)
        if not np.issubdtype(dtype, np.integer):
            raise ValueError(f"{dtype} is not an integer dtype.")

        info = np.iinfo(dtype)
        object.__setattr__(self, 'dtype', dtype.name)
        object.__setattr__(self, '_min', int(info.min))
        object.__setattr__(self, '_span', int(info.max) - int(info.min) + 1)

    @property
    def zero(self):
        return 0

    @property
    def one(self):
        return 1

    def _wrap(self, n: int) -> int:
        return (n - self._min) % self._span + self._min

    def plus(self, a, b):
        return self._wrap(a + b)

    def times(self, a, b):
        return self._wrap(a * b)

    def negate(self, a):
        return self._wrap(-a)

    def minus(self, a, b):
        return self._wrap(a - b)

    def from_natural(self, n: int):
        if n < 0:
            raise ValueError(f"{n} is not a natural number.")
        return self._wrap(n)

    def from_integer(self, n: int):
        return self._wrap(n)

    def coerce(self, x):
        return self._wrap(operator.index(x))


ZZ = Integers()
QQ = Rationals()
RR = Reals()
BOOL = Booleans()
