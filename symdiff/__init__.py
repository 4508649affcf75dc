"""Symbolic differentiation of S-expression polynomials."""
from .errors import (
    InvariantViolation,
    OutputError,
    ParseError,
    SemanticError,
    SymdiffError,
    VariableMismatchError,
)
from .sexp import Atom, SExp, SList, parse_sexp, sexp_to_string
from .expression import (
    Constant,
    Monomial,
    PolyExp,
    Product,
    Sum,
    parse_poly,
    poly_from_string,
    poly_to_string,
    to_sexp,
    zero,
)
from .differentiate import differentiate
from .simplification import simplify

__version__ = "0.1.0"

__all__ = [
    "Atom",
    "SExp",
    "SList",
    "parse_sexp",
    "sexp_to_string",
    "Constant",
    "Monomial",
    "PolyExp",
    "Product",
    "Sum",
    "parse_poly",
    "poly_from_string",
    "poly_to_string",
    "to_sexp",
    "zero",
    "differentiate",
    "simplify",
    "SymdiffError",
    "ParseError",
    "SemanticError",
    "VariableMismatchError",
    "OutputError",
    "InvariantViolation",
]
