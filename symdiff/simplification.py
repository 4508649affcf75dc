""" Normalization of polynomial expressions into a flat sum of monomials.

    simplify runs five stages in order:

    - apply_products: push every product coefficient down onto its constant
      and monomial leaves
    - flatten: splice nested sums into one list of terms
    - fold: add up terms of the same symbol and exponent, x^0 counts as a constant
    - drop_zero: remove zero constants unless the whole thing is zero
    - join: wrap what is left into one sum

    Distribution is a single recursive walk, not iterated to a fixed point.
    fold keeps any shape it does not know how to combine as an opaque term.
"""

import logging
from collections import defaultdict
from typing import Dict, List

from .errors import InvariantViolation
from .expression import Constant, Monomial, PolyExp, Product, Sum, check

logger = logging.getLogger(__name__)


def simplify(poly: PolyExp) -> PolyExp:
    distributed = apply_products(1, poly)
    logger.debug(f"distributed: {distributed}")
    terms = flatten(distributed)
    terms = fold(terms)
    logger.debug(f"folded: {terms}")
    terms = drop_zero(terms)
    return join(terms)


def apply_products(mult: int, poly: PolyExp) -> PolyExp:
    if mult == 0:
        return Constant(0)
    if isinstance(poly, Constant):
        return Constant(poly.value * mult)
    if isinstance(poly, Monomial):
        return Product(Constant(mult), poly)
    if isinstance(poly, Sum):
        return Sum(tuple(apply_products(mult, p) for p in poly.terms))
    if isinstance(poly, Product):
        return apply_products(poly.coefficient.value * mult, poly.inner)
    raise InvariantViolation(f"Not a polynomial expression: {poly!r}")


def flatten(poly: PolyExp) -> List[PolyExp]:
    # products are not expanded, apply_products is expected to have run first
    if isinstance(poly, (Constant, Monomial, Product)):
        return [poly]
    if isinstance(poly, Sum):
        flattened = []
        for p in poly.terms:
            flattened.extend(flatten(p))
        return flattened
    raise InvariantViolation(f"Not a polynomial expression: {poly!r}")


def fold(polys: List[PolyExp]) -> List[PolyExp]:
    """Combine monomials with the same symbol and exponent.

    Sums and products over anything but a monomial or a constant are kept
    as they are, ahead of the combined terms. The output is ordered by
    symbol, then exponent, and always ends with the constant term, even
    when it is zero.
    """
    # ( * a ( ^ x n ) ) ==> coefficients[x][n] == a
    coefficients: Dict[str, Dict[int, int]] = defaultdict(lambda: defaultdict(int))
    constant = 0
    terms: List[PolyExp] = []

    for poly in polys:
        check(poly)
        if isinstance(poly, Monomial):
            coefficients[poly.symbol][poly.exponent] += 1
        elif isinstance(poly, Constant):
            constant += poly.value
        elif isinstance(poly, Product) and isinstance(poly.inner, Monomial):
            mon = poly.inner
            coefficients[mon.symbol][mon.exponent] += poly.coefficient.value
        elif isinstance(poly, Product) and isinstance(poly.inner, Constant):
            constant += poly.coefficient.value * poly.inner.value
        else:
            terms.append(poly)

    for symbol in sorted(coefficients):
        powers = coefficients[symbol]
        for power in sorted(powers):
            a = powers[power]
            if power == 0:
                constant += a
                continue
            mon = Monomial(symbol, power)
            terms.append(mon if a == 1 else Product(Constant(a), mon))

    terms.append(Constant(constant))
    return terms


def drop_zero(polys: List[PolyExp]) -> List[PolyExp]:
    # a lone zero is the zero polynomial
    if len(polys) < 2:
        return list(polys)
    nonzero = [p for p in polys if not (isinstance(p, Constant) and p.value == 0)]
    return nonzero or [Constant(0)]


def join(polys: List[PolyExp]) -> PolyExp:
    if not polys:
        raise InvariantViolation("cannot join an empty list of terms")
    if len(polys) == 1:
        return polys[0]
    return Sum(tuple(polys))
