"""
Show is a module for rendering polynomials, as plain text for repr() and str(), and as LaTeX for rich display in
IPython (via the _repr_latex_ hook).
"""
from __future__ import annotations

from typing import Iterable, Literal

from .algebra import Semiring


def fmt_terms(terms: Iterable[tuple[int, object]], ring: Semiring, mode: Literal[None, 'latex'] = None) -> str:
    """
    Render (degree, coefficient) pairs, which should be given in descending order of degree, as a sum of terms.

    >>> from upoly.algebra import ZZ
    >>> fmt_terms([(2, 3), (1, -1), (0, 5)], ZZ)
    '3 * X^2 + (-1) * X + 5'
    >>> fmt_terms([(2, 3), (-1, 1)], ZZ, mode='latex')
    '3 X^{2} + 1 X^{-1}'
    >>> fmt_terms([], ZZ)
    '0'
    """
    power_fmt = 'X^{}' if mode is None else 'X^{{{}}}'
    times = ' * ' if mode is None else ' '

    parts: list[str] = []
    for deg, coeff in terms:
        term = '' if deg == 0 else 'X' if deg == 1 else power_fmt.format(deg)
        parts += [ring.show(coeff) + (times + term if term else '')]

    return ' + '.join(parts) if parts else '0'


class Latex:
    def __init__(self, markup: str):
        self.markup = markup

    def _repr_latex_(self):
        return '$' + self.markup + '$'
