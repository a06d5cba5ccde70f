"""
The arithmetic kernel: normalisation, merging and multiplication of raw coefficient buffers.

There are two buffer formats. A dense buffer is a sequence of coefficients indexed by degree, and is normalised
when its last coefficient is non-zero, so that for instance 1 - 2x + x^3 is (1, -2, 0, 1). A sparse buffer is a
sequence of (degree, coefficient) pairs with strictly increasing degrees and no zero coefficients, so that the same
polynomial is ((0, 1), (1, -2), (3, 1)). The empty buffer is the zero polynomial in both formats.

Every function here takes the coefficient ring as its first argument, accepts normalised buffers (except for the
normalisation functions themselves), never mutates its inputs, and returns a freshly allocated normalised list.

>>> from upoly.algebra import ZZ
>>> dense_convolution(ZZ, [1, 2, 3], [4, 5])
[4, 13, 22, 15]
>>> sparse_normalize(ZZ, [(2, 1), (0, 3), (2, -1), (1, 0)])
[(0, 3)]
"""
from __future__ import annotations

import logging
import operator
from typing import Any, Callable, Optional, Sequence

from .algebra import Field, Ring, Semiring
from .errors import IntegrationError

_logger = logging.getLogger(__name__)

Term = tuple[int, Any]


def _flipped(mul: Callable[[Any, Any], Any]) -> Callable[[Any, Any], Any]:
    return lambda a, b: mul(b, a)


def _tree_reduce(items: list, merge: Callable[[Any, Any], Any]):
    """
    Reduce a list with an associative merge, pairing up adjacent items in rounds: [a, b, c, d, e] becomes
    [ab, cd, e], then [abcd, e], then [abcde]. Each round does work proportional to the total size of the items, and
    there are log2(len(items)) rounds. Returns the number of rounds along with the result (None for no items).
    """
    rounds = 0
    while len(items) > 1:
        merged = [merge(items[i], items[i + 1]) for i in range(0, len(items) - 1, 2)]
        if len(items) % 2 == 1:
            merged.append(items[-1])

        items = merged
        rounds += 1

    return rounds, (items[0] if items else None)


def checked_degree(deg) -> int:
    """Return an exponent as an int, rejecting negative and non-integral ones."""
    deg = operator.index(deg)
    if deg < 0:
        raise ValueError(f"Degrees must be >= 0, was given {deg}.")
    return deg


def recip_natural(ring: Field, n: int):
    """
    The inverse of the natural number n in a field, as needed to integrate X^(n - 1). In characteristic p there is
    no such inverse when p divides n.

    >>> from upoly.algebra import PrimeField
    >>> recip_natural(PrimeField(5), 3)
    2
    """
    d = ring.from_natural(n)
    if ring.is_zero(d):
        raise IntegrationError(f"{n} is zero in {ring}, so X^{n - 1} has no antiderivative.")
    return ring.recip(d)


# Dense buffers.

def dense_trim(ring: Semiring, coeffs: list) -> list:
    """Strip the run of trailing zeros from coeffs, in place, and return it."""
    end = len(coeffs)
    while end >= 1 and ring.is_zero(coeffs[end - 1]):
        end -= 1

    del coeffs[end:]
    return coeffs


def dense_plus(ring: Semiring, xs: Sequence, ys: Sequence) -> list:
    zs = [ring.plus(x, y) for x, y in zip(xs, ys)]
    if len(xs) > len(ys):
        zs.extend(xs[len(ys):])
    elif len(ys) > len(xs):
        zs.extend(ys[len(xs):])
    else:
        # Only a cancellation in the top coefficient can lower the degree.
        dense_trim(ring, zs)

    return zs


def dense_minus(ring: Ring, xs: Sequence, ys: Sequence) -> list:
    zs = [ring.minus(x, y) for x, y in zip(xs, ys)]
    if len(xs) > len(ys):
        zs.extend(xs[len(ys):])
    elif len(ys) > len(xs):
        zs.extend(ring.negate(y) for y in ys[len(xs):])
    else:
        dense_trim(ring, zs)

    return zs


def dense_negate(ring: Ring, xs: Sequence) -> list:
    return [ring.negate(x) for x in xs]


def dense_scale(ring: Semiring, shift: int, c, xs: Sequence) -> list:
    """Multiply by the monomial c X^shift, with c on the left."""
    if ring.is_zero(c) or not xs:
        return []

    zs = [ring.zero] * shift
    zs.extend(ring.times(c, x) for x in xs)
    return dense_trim(ring, zs)


def _dense_strip(ring: Semiring, low: int, buf: list) -> Optional[tuple[int, list]]:
    """Strip zeros from both ends of a (low, buf) partial product, or return None if nothing remains."""
    start, end = 0, len(buf)
    while start < end and ring.is_zero(buf[start]):
        start += 1
    while end > start and ring.is_zero(buf[end - 1]):
        end -= 1

    if start == end:
        return None
    if start == 0 and end == len(buf):
        return low, buf
    return low + start, buf[start:end]


def _dense_merge(ring: Semiring, a: tuple[int, list], b: tuple[int, list]) -> Optional[tuple[int, list]]:
    """
    Add two partial products. A partial product (low, buf) has the coefficient buf[i] in degree low + i, and neither
    end of buf is zero. The output buffer is allocated once at its final size.
    """
    if a is None or b is None:
        return a if b is None else b

    (low_a, buf_a), (low_b, buf_b) = a, b
    low = min(low_a, low_b)
    high = max(low_a + len(buf_a), low_b + len(buf_b))

    buf = [ring.zero] * (high - low)
    buf[low_a - low:low_a - low + len(buf_a)] = buf_a
    for i, y in enumerate(buf_b, low_b - low):
        buf[i] = ring.plus(buf[i], y)

    return _dense_strip(ring, low, buf)


def dense_convolution(ring: Semiring, xs: Sequence, ys: Sequence) -> list:
    """
    Multiply two dense buffers. The operand with more coefficients is designated "long" and the other "short": each
    non-zero coefficient of the short operand scales a copy of the long one, and the resulting partial products are
    summed by a balanced pairwise merge.

    The coefficient of X^k in the product is the sum of xs[i] * ys[j] over i + j = k, with the coefficient of xs on
    the left, regardless of which operand is the long one.
    """
    if not xs or not ys:
        return []

    if len(xs) >= len(ys):
        long, short, mul = xs, ys, ring.times
    else:
        long, short, mul = ys, xs, _flipped(ring.times)

    parts = []
    for shift, c in enumerate(short):
        if ring.is_zero(c):
            continue

        # Scaling may annihilate coefficients when the ring has zero divisors.
        part = _dense_strip(ring, shift, [mul(x, c) for x in long])
        if part is not None:
            parts.append(part)

    rounds, product = _tree_reduce(parts, lambda a, b: _dense_merge(ring, a, b))
    _logger.debug("dense convolution of %d by %d coefficients: %d partial products, %d rounds",
                  len(long), len(short), len(parts), rounds)

    if product is None:
        return []

    low, buf = product
    result = [ring.zero] * low
    result.extend(buf)
    return result


# Sparse buffers.

def sparse_normalize(ring: Semiring, terms: Sequence[Term]) -> list:
    """
    Bring an arbitrary sequence of (degree, coefficient) pairs into normal form: sort by degree (stably), sum the
    coefficients of each degree, and drop the degrees whose sum is zero.
    """
    ws = sorted(terms, key=operator.itemgetter(0))
    if not ws:
        return []

    result = []
    acc_deg, acc_coeff = ws[0]
    for deg, coeff in ws[1:]:
        if deg == acc_deg:
            acc_coeff = ring.plus(acc_coeff, coeff)
            continue

        if not ring.is_zero(acc_coeff):
            result.append((acc_deg, acc_coeff))
        acc_deg, acc_coeff = deg, coeff

    if not ring.is_zero(acc_coeff):
        result.append((acc_deg, acc_coeff))

    return result


def _sparse_plus_into(
    ring: Semiring,
    xs: Sequence[Term], ix: int, end_x: int,
    ys: Sequence[Term], iy: int, end_y: int,
    zs: list, iz: int,
) -> int:
    """
    Merge xs[ix:end_x] and ys[iy:end_y] into zs starting at iz, returning the number of terms written. There must be
    room for (end_x - ix) + (end_y - iy) terms in zs.
    """
    start = iz
    while ix < end_x and iy < end_y:
        (xp, xc), (yp, yc) = xs[ix], ys[iy]
        if xp < yp:
            zs[iz] = xs[ix]
            ix += 1
            iz += 1
        elif xp > yp:
            zs[iz] = ys[iy]
            iy += 1
            iz += 1
        else:
            zc = ring.plus(xc, yc)
            if not ring.is_zero(zc):
                zs[iz] = (xp, zc)
                iz += 1
            ix += 1
            iy += 1

    # At most one of these copies is non-empty.
    zs[iz:iz + end_x - ix] = xs[ix:end_x]
    iz += end_x - ix
    zs[iz:iz + end_y - iy] = ys[iy:end_y]
    iz += end_y - iy

    return iz - start


def sparse_plus(ring: Semiring, xs: Sequence[Term], ys: Sequence[Term]) -> list:
    zs = [None] * (len(xs) + len(ys))
    length = _sparse_plus_into(ring, xs, 0, len(xs), ys, 0, len(ys), zs, 0)
    del zs[length:]
    return zs


def sparse_minus(ring: Ring, xs: Sequence[Term], ys: Sequence[Term]) -> list:
    zs = []
    ix, iy = 0, 0
    while ix < len(xs) and iy < len(ys):
        (xp, xc), (yp, yc) = xs[ix], ys[iy]
        if xp < yp:
            zs.append(xs[ix])
            ix += 1
        elif xp > yp:
            zs.append((yp, ring.negate(yc)))
            iy += 1
        else:
            zc = ring.minus(xc, yc)
            if not ring.is_zero(zc):
                zs.append((xp, zc))
            ix += 1
            iy += 1

    zs.extend(xs[ix:])
    zs.extend((yp, ring.negate(yc)) for yp, yc in ys[iy:])
    return zs


def sparse_negate(ring: Ring, xs: Sequence[Term]) -> list:
    return [(p, ring.negate(c)) for p, c in xs]


def _sparse_scale_into(
    ring: Semiring,
    mul: Callable[[Any, Any], Any],
    xs: Sequence[Term],
    shift: int,
    c,
    zs: list,
    iz: int,
) -> int:
    """Write the terms (p + shift, mul(x, c)) of xs into zs from iz, skipping zeros. Returns the number written."""
    start = iz
    for p, x in xs:
        z = mul(x, c)
        if not ring.is_zero(z):
            zs[iz] = (p + shift, z)
            iz += 1

    return iz - start


def sparse_scale(ring: Semiring, shift: int, c, xs: Sequence[Term]) -> list:
    """Multiply by the monomial c X^shift, with c on the left."""
    zs = [None] * len(xs)
    length = _sparse_scale_into(ring, _flipped(ring.times), xs, shift, c, zs, 0)
    del zs[length:]
    return zs


def sparse_convolution(ring: Semiring, xs: Sequence[Term], ys: Sequence[Term]) -> list:
    """
    Multiply two sparse buffers.

    The partial products (long scaled by each term of short) are written into consecutive regions of an arena of
    len(long) * len(short) slots, recorded as (start, length) slices, where region i begins at i * len(long). Each
    round merges the slices pairwise into a second arena of the same size, at the start of the first slice of the
    pair: the merged run is no longer than the two inputs together, and so fits in the union of their regions. The
    two arenas then swap roles, until a single slice remains.
    """
    if not xs or not ys:
        return []

    if len(xs) >= len(ys):
        long, short, mul = xs, ys, ring.times
    else:
        long, short, mul = ys, xs, _flipped(ring.times)

    width = len(long)
    buffer: list = [None] * (width * len(short))
    slices = []
    for i, (shift, c) in enumerate(short):
        start = i * width
        slices.append((start, _sparse_scale_into(ring, mul, long, shift, c, buffer, start)))

    scratch: list = [None] * len(buffer)
    rounds = 0
    while len(slices) > 1:
        merged = []
        for k in range(0, len(slices) - 1, 2):
            (start1, len1), (start2, len2) = slices[k], slices[k + 1]
            length = _sparse_plus_into(
                ring,
                buffer, start1, start1 + len1,
                buffer, start2, start2 + len2,
                scratch, start1,
            )
            merged.append((start1, length))

        if len(slices) % 2 == 1:
            start, length = slices[-1]
            scratch[start:start + length] = buffer[start:start + length]
            merged.append((start, length))

        slices = merged
        buffer, scratch = scratch, buffer
        rounds += 1

    _logger.debug("sparse convolution of %d by %d terms: %d rounds", len(long), len(short), rounds)

    start, length = slices[0]
    return buffer[start:start + length]
