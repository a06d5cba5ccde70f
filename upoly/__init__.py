import logging

from .algebra import (BOOL, QQ, RR, ZZ, Booleans, Euclidean, Field, GcdDomain, Integers, IntegersMod,
                      MachineIntegers, PrimeField, Rationals, Reals, Ring, Semiring, ZeroRing)
from .errors import (CapabilityError, IntegrationError, NotDivisibleError, PolynomialError, RingMismatchError,
                     VariableError)
from .laurent import Laurent
from .overfield import LaurentOverField, PolyOverField
from .poly import Poly
from .sparse import SparsePoly

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "BOOL",
    "Booleans",
    "CapabilityError",
    "Euclidean",
    "Field",
    "GcdDomain",
    "Integers",
    "IntegrationError",
    "IntegersMod",
    "Laurent",
    "LaurentOverField",
    "MachineIntegers",
    "NotDivisibleError",
    "Poly",
    "PolyOverField",
    "PolynomialError",
    "PrimeField",
    "QQ",
    "RR",
    "Rationals",
    "Reals",
    "Ring",
    "RingMismatchError",
    "Semiring",
    "SparsePoly",
    "VariableError",
    "ZZ",
    "ZeroRing",
]
