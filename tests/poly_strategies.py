import hypothesis.strategies

from upoly import kernel
from upoly.algebra import ZZ
from upoly.poly import Poly
from upoly.sparse import SparsePoly


def coefficient_lists(
    max_size: int = 8,
    bound: int = 5,
    min_size: int = 0,
) -> hypothesis.strategies.SearchStrategy[list[int]]:
    """Strategy for trimmed lists of small integer coefficients, constant term first."""
    return hypothesis.strategies.lists(
        hypothesis.strategies.integers(min_value=-bound, max_value=bound),
        min_size=min_size,
        max_size=max_size,
    ).map(lambda coeffs: kernel.dense_trim(ZZ, coeffs))


def dense_polys(ring=ZZ, max_size: int = 8) -> hypothesis.strategies.SearchStrategy[Poly]:
    """Strategy for dense polynomials with small integer coefficients coerced into ring."""
    return coefficient_lists(max_size=max_size).map(lambda coeffs: Poly(*coeffs, ring=ring))


def nonzero_polys(ring=ZZ, max_deg: int = 4) -> hypothesis.strategies.SearchStrategy[Poly]:
    """Strategy for dense polynomials of degree at most max_deg with a small nonzero leading coefficient."""
    return hypothesis.strategies.tuples(
        hypothesis.strategies.lists(
            hypothesis.strategies.integers(min_value=-4, max_value=4), max_size=max_deg
        ),
        hypothesis.strategies.sampled_from([-3, -2, -1, 1, 2, 3]),
    ).map(lambda pair: Poly(*pair[0], pair[1], ring=ring))


def sparse_terms(
    max_terms: int = 6,
    max_deg: int = 50,
) -> hypothesis.strategies.SearchStrategy[list[tuple[int, int]]]:
    """Strategy for unsorted (degree, coefficient) pairs, possibly with repeated degrees and zero coefficients."""
    return hypothesis.strategies.lists(
        hypothesis.strategies.tuples(
            hypothesis.strategies.integers(min_value=0, max_value=max_deg),
            hypothesis.strategies.integers(min_value=-5, max_value=5),
        ),
        max_size=max_terms,
    )


def sparse_polys(
    ring=ZZ,
    max_terms: int = 6,
    max_deg: int = 50,
) -> hypothesis.strategies.SearchStrategy[SparsePoly]:
    """Strategy for sparse polynomials with a handful of terms spread up to max_deg."""
    return sparse_terms(max_terms=max_terms, max_deg=max_deg).map(lambda terms: SparsePoly(*terms, ring=ring))
