"""
arrays: dense polynomials as numpy arrays.

A dense polynomial c_0 + c_1 X + ... + c_k X^k is the 1D array [c_0, ..., c_k], indexed by degree. Several
polynomials are packed into a 2D array of shape (L, D), one row per polynomial, where D is the largest length of
any of them and shorter rows are padded with zeros.
"""
from __future__ import annotations

from typing import Sequence

import numpy as np
import numpy.typing as npt

from .algebra import ZZ, Semiring
from .poly import Poly


def trim(A: npt.NDArray):
    """
    Drop the columns of trailing zeros along the last (degree) axis, so that the highest remaining degree is
    nonzero in at least one polynomial. An array with nothing to drop is returned as is.

    >>> trim(np.array([[1, 0, 0], [0, 2, 0]]))
    array([[1, 0],
           [0, 2]])
    """
    if A.shape[-1] == 0:
        return A

    used = np.flatnonzero(A.reshape(-1, A.shape[-1]).any(axis=0))
    length = used[-1] + 1 if len(used) else 0
    return A if length == A.shape[-1] else A[..., :length]


def zeropad(A: npt.NDArray, D: int):
    """Extend the last (degree) axis of A to length D with zero coefficients. A must not already be longer."""
    assert A.shape[-1] <= D, f"Cannot pad an array of length {A.shape[-1]} down to {D}."
    return np.pad(A, [(0, 0)] * (A.ndim - 1) + [(0, D - A.shape[-1])])


def to_array(p: Poly, dtype: npt.DTypeLike = np.int64):
    """
    The coefficients of a dense polynomial, constant term first.

    >>> to_array(Poly(1, 0, 3))
    array([1, 0, 3])
    """
    return np.array(p.coeffs, dtype=dtype)


def from_array(A: npt.NDArray, ring: Semiring = ZZ) -> Poly:
    """
    The dense polynomial with coefficients A, constant term first. Each entry is converted to a Python scalar and
    coerced into the ring, so that the polynomial never holds numpy scalars.

    >>> from upoly.algebra import MachineIntegers
    >>> from_array(np.array([1, 2, 0], dtype=np.int8), ring=MachineIntegers('int8'))
    Poly('2 * X + 1', ring=MachineIntegers(dtype='int8'))
    """
    assert len(A.shape) == 1, f"Expected a 1D array of coefficients, was given shape {A.shape}."
    return Poly(*trim(A).tolist(), ring=ring)


def pack(ps: Sequence[Poly], dtype: npt.DTypeLike = np.int64):
    """
    Pack a list of polynomials into a single array of shape (L, D), where L is the length of the list and D is the
    length of the longest polynomial. An empty list packs to shape (0, 0).
    """
    if not ps:
        return np.zeros((0, 0), dtype=dtype)

    D = max(len(p.coeffs) for p in ps)
    return np.stack([zeropad(to_array(p, dtype), D) for p in ps])


def unpack(A: npt.NDArray, ring: Semiring = ZZ) -> list[Poly]:
    """The inverse of pack: one polynomial per row of A."""
    assert len(A.shape) == 2, f"Expected a 2D array, was given shape {A.shape}."
    return [from_array(row, ring=ring) for row in A]


def degrees(A: npt.NDArray):
    """
    The degree of each polynomial in a packed array, or -1 for the zero polynomial. Broadcasts along a prefix.

    >>> degrees(pack([Poly(1, 2), Poly(), Poly(0, 0, 5)]))
    array([ 1, -1,  2])
    """
    # Argmax finds the first occurrence of True, but we want the last, so search the reversed array.
    nonzero = A[..., ::-1] != 0
    return np.where(np.any(nonzero, axis=-1), A.shape[-1] - 1 - np.argmax(nonzero, axis=-1), -1)
