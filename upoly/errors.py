"""Exception hierarchy for polynomial operations."""


class PolynomialError(Exception):
    """Base class for errors raised by upoly."""


class CapabilityError(PolynomialError, TypeError):
    """
    The coefficient ring lacks a capability needed by an operation, for example integrating a polynomial whose
    coefficients do not form a field.
    """


class RingMismatchError(PolynomialError, ValueError):
    """Arithmetic between polynomials over different coefficient rings."""


class NotDivisibleError(PolynomialError, ValueError):
    """Exact division was requested but the divisor does not divide the dividend."""


class VariableError(PolynomialError, ValueError):
    """A negative power was taken of a Laurent polynomial other than the variable X."""


class IntegrationError(PolynomialError, ZeroDivisionError):
    """An antiderivative needs to divide by a degree which is zero in the coefficient field."""
