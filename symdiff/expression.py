""" Polynomial expressions of a single variable.

    <poly exp>     ::= <sum exp> | <monomial exp> | <product exp> | <constant exp>
    <sum exp>      ::= ( + <poly exp> <poly exp> ... <poly exp> )
    <monomial exp> ::= ( ^ <symbol> <int> )
    <product exp>  ::= ( * <int> <poly exp> )
    <constant exp> ::= <int>

    `sum`, `mon` and `prod` are accepted as long forms of `+`, `^` and `*`.

    5 x^5 + 6 x^3 - x + 6  ==>  (+ (* 5 (^ x 5)) (* 6 (^ x 3)) (* -1 (^ x 1)) 6)
"""

import re
from dataclasses import dataclass
from typing import Tuple, Union

from .errors import InvariantViolation, OutputError, SemanticError
from .sexp import (
    MONOMIAL_SUGAR,
    PRODUCT_SUGAR,
    SUM_SUGAR,
    Atom,
    SExp,
    SList,
    parse_sexp,
    sexp_to_string,
)

SUM_KEYWORDS = frozenset({"sum", SUM_SUGAR})
MONOMIAL_KEYWORDS = frozenset({"mon", MONOMIAL_SUGAR})
PRODUCT_KEYWORDS = frozenset({"prod", PRODUCT_SUGAR})

INTEGER_RE = re.compile(r"-?[0-9]+")
SYMBOL_RE = re.compile(r"[A-Za-z]+")


def is_symbol(s: str) -> bool:
    return SYMBOL_RE.fullmatch(s) is not None


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass(frozen=True)
class Constant:
    value: int

    def __post_init__(self):
        if not _is_int(self.value):
            raise InvariantViolation(f"Constant value must be an int: {self.value!r}")

    def __iter__(self):
        return iter(())

    def __str__(self):
        return poly_to_string(self)


@dataclass(frozen=True)
class Monomial:
    symbol: str
    exponent: int

    def __post_init__(self):
        if not isinstance(self.symbol, str) or not is_symbol(self.symbol):
            raise InvariantViolation(f"Invalid monomial symbol: {self.symbol!r}")
        if not _is_int(self.exponent):
            raise InvariantViolation(
                f"Monomial exponent must be an int: {self.exponent!r}"
            )

    def __iter__(self):
        return iter(())

    def __str__(self):
        return poly_to_string(self)


@dataclass(frozen=True)
class Product:
    coefficient: Constant
    inner: "PolyExp"

    def __post_init__(self):
        if not isinstance(self.coefficient, Constant):
            raise InvariantViolation(
                f"Product coefficient must be a constant: {self.coefficient!r}"
            )
        check(self.inner)

    def __iter__(self):
        yield self.coefficient
        yield self.inner

    def __str__(self):
        return poly_to_string(self)


@dataclass(frozen=True)
class Sum:
    terms: Tuple["PolyExp", ...]

    def __post_init__(self):
        if not isinstance(self.terms, tuple):
            raise InvariantViolation(f"Sum terms must be a tuple: {self.terms!r}")
        if len(self.terms) < 2:
            raise InvariantViolation(
                f"Sum needs at least two terms, got {len(self.terms)}"
            )
        for term in self.terms:
            check(term)

    def __iter__(self):
        return iter(self.terms)

    def __str__(self):
        return poly_to_string(self)


PolyExp = Union[Constant, Monomial, Product, Sum]

VARIANTS = (Constant, Monomial, Product, Sum)


def check(poly) -> "PolyExp":
    if not isinstance(poly, VARIANTS):
        raise InvariantViolation(f"Not a polynomial expression: {poly!r}")
    return poly


def zero() -> Constant:
    return Constant(0)


def _parse_int(sexp: SExp, what: str) -> int:
    if not isinstance(sexp, Atom) or not INTEGER_RE.fullmatch(sexp.token):
        raise SemanticError(f"failed to parse {what} {sexp}, expected an integer")
    try:
        return int(sexp.token)
    except ValueError as exc:
        raise SemanticError(
            f"failed to parse {what}, {len(sexp.token)} digit integer is too long"
        ) from exc


def _int_text(n: int) -> str:
    try:
        return str(n)
    except ValueError as exc:
        raise OutputError(
            f"{n.bit_length()} bit integer is too long to print"
        ) from exc


def _parse_constant(sexp: SExp) -> Constant:
    return Constant(_parse_int(sexp, "constant"))


def _parse_sum(sexp: SList) -> Sum:
    if len(sexp.items) < 3:
        raise SemanticError(
            f"invalid S-expression, cannot parse as polynomial sum {sexp}"
        )
    terms = []
    for item in sexp.items[1:]:
        try:
            terms.append(parse_poly(item))
        except SemanticError as exc:
            raise SemanticError(
                f"{exc}, failed to parse sub expression {item} "
                f"while parsing sum {sexp}"
            ) from exc
    return Sum(tuple(terms))


def _parse_monomial(sexp: SList) -> Monomial:
    if len(sexp.items) != 3:
        raise SemanticError(f"invalid S-expression, cannot parse as monomial {sexp}")
    _, symbol, exponent = sexp.items
    if not isinstance(symbol, Atom) or not is_symbol(symbol.token):
        raise SemanticError(f"not a valid symbol {symbol} for monomial {sexp}")
    try:
        n = _parse_int(exponent, "exponent")
    except SemanticError as exc:
        raise SemanticError(f"{exc} for monomial {sexp}") from exc
    return Monomial(symbol.token, n)


def _parse_product(sexp: SList) -> Product:
    if len(sexp.items) != 3:
        raise SemanticError(
            f"invalid S-expression, cannot parse as polynomial product {sexp}"
        )
    _, left, right = sexp.items
    try:
        coefficient = _parse_constant(left)
    except SemanticError as exc:
        raise SemanticError(
            f"{exc}, failed to parse left multiplicand {left} as constant polynomial"
        ) from exc
    try:
        inner = parse_poly(right)
    except SemanticError as exc:
        raise SemanticError(
            f"{exc}, failed to parse sub expression {right} as polynomial"
        ) from exc
    return Product(coefficient, inner)


def parse_poly(sexp: SExp) -> PolyExp:
    """Build a polynomial expression out of a parsed S-expression."""
    if isinstance(sexp, Atom):
        poly = _parse_constant(sexp)
    elif isinstance(sexp, SList):
        if not sexp.items or not isinstance(sexp.items[0], Atom):
            raise SemanticError(
                f"invalid S-expression, cannot parse as polynomial {sexp}"
            )
        head = sexp.items[0].token
        if head in SUM_KEYWORDS:
            poly = _parse_sum(sexp)
        elif head in MONOMIAL_KEYWORDS:
            poly = _parse_monomial(sexp)
        elif head in PRODUCT_KEYWORDS:
            poly = _parse_product(sexp)
        else:
            raise SemanticError(
                f"invalid S-expression, unknown operator {head!r} in {sexp}"
            )
    else:
        raise InvariantViolation(f"Not an S-expression: {sexp!r}")
    return check(poly)


def to_sexp(poly: PolyExp) -> SExp:
    if isinstance(poly, Constant):
        return Atom(_int_text(poly.value))
    if isinstance(poly, Monomial):
        exponent = Atom(_int_text(poly.exponent))
        return SList((Atom(MONOMIAL_SUGAR), Atom(poly.symbol), exponent))
    if isinstance(poly, Product):
        return SList(
            (Atom(PRODUCT_SUGAR), to_sexp(poly.coefficient), to_sexp(poly.inner))
        )
    if isinstance(poly, Sum):
        return SList((Atom(SUM_SUGAR),) + tuple(to_sexp(t) for t in poly.terms))
    raise InvariantViolation(f"Not a polynomial expression: {poly!r}")


def poly_from_string(raw: str) -> PolyExp:
    return parse_poly(parse_sexp(raw))


def poly_to_string(poly: PolyExp) -> str:
    return sexp_to_string(to_sexp(poly))
