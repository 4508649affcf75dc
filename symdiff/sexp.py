""" Generic S-expressions: atoms and lists of S-expressions.

    "( A ( B 0 ) () )" parses to

    SList((Atom("A"), SList((Atom("B"), Atom("0"))), SList(())))
"""

import logging
import re
from dataclasses import dataclass
from typing import List, Tuple, Union

from .errors import InvariantViolation, ParseError

logger = logging.getLogger(__name__)

SUM_SUGAR = "+"
MONOMIAL_SUGAR = "^"
PRODUCT_SUGAR = "*"
DEPRECATED_MONOMIAL_SUGAR = "'"

# valid atoms that are not alphanumeric
SPECIAL_ATOMS = frozenset(
    {SUM_SUGAR, MONOMIAL_SUGAR, PRODUCT_SUGAR, DEPRECATED_MONOMIAL_SUGAR}
)

ATOM_RE = re.compile(r"[A-Za-z0-9-]+")


@dataclass(frozen=True)
class Atom:
    token: str

    def __post_init__(self):
        if not is_atom(self.token):
            raise InvariantViolation(f"Invalid atom token: {self.token!r}")

    def __iter__(self):
        return iter(())

    def __str__(self):
        return sexp_to_string(self)


@dataclass(frozen=True)
class SList:
    items: Tuple["SExp", ...] = ()

    def __iter__(self):
        return iter(self.items)

    def __str__(self):
        return sexp_to_string(self)


SExp = Union[Atom, SList]


def is_atom(raw: str) -> bool:
    if raw in SPECIAL_ATOMS:
        return True
    return ATOM_RE.fullmatch(raw) is not None


def normalize_spaces(s: str) -> str:
    """Collapse every run of whitespace to one space and trim the ends."""
    return " ".join(s.split())


def unwrap(raw: str) -> str:
    """Strip exactly one pair of outer parens."""
    raw = raw.strip()
    if len(raw) < 2:
        raise ParseError(f'bad S-expression "{raw}", not enough chars to unwrap')
    if raw[0] != "(":
        raise ParseError(f'bad S-expression "{raw}", no opening paren')
    if raw[-1] != ")":
        raise ParseError(f'bad S-expression "{raw}", no closing paren')
    return raw[1:-1]


def take_sexp(raw: str) -> Tuple[str, str]:
    """Split the next S-expression off the inside of an unwrapped list.

    Returns (next, remaining); next is "" once the list is exhausted.
    """
    # pad the parens so "(a)(b)" and "( atom(..) )" split like spaced input
    rest = normalize_spaces(raw.replace("(", " ( ").replace(")", " ) "))
    if not rest:
        return "", ""
    fields = rest.split(" ")

    if rest[0] != "(":
        if not is_atom(fields[0]):
            raise ParseError(
                f"invalid S-expression list {rest!r}, "
                f"invalid atom {fields[0]!r} at head of list"
            )
        return fields[0], " ".join(fields[1:])

    depth = 0
    end = None
    for i, ch in enumerate(rest):
        if ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
            if depth == 0:
                end = i
                break
    if end is None:
        raise ParseError(
            f"invalid S-expression list {rest!r}, "
            "mismatching parens at head of list"
        )
    return rest[: end + 1], rest[end + 1 :]


def parse_sexp(raw: str) -> SExp:
    raw = raw.strip()
    logger.debug(f"Parsing S-expression {raw!r}")
    if is_atom(raw):
        return Atom(raw)

    # each frame holds the items read so far and the unread inside of one list
    stack: List[Tuple[List[SExp], str]] = [([], unwrap(raw))]
    while True:
        items, remaining = stack[-1]
        chunk, remaining = take_sexp(remaining)
        stack[-1] = (items, remaining)
        if not chunk:
            done = SList(tuple(items))
            stack.pop()
            if not stack:
                return done
            stack[-1][0].append(done)
        elif is_atom(chunk):
            items.append(Atom(chunk))
        else:
            stack.append(([], unwrap(chunk)))


def sexp_to_string(sexp: SExp) -> str:
    if isinstance(sexp, Atom):
        return sexp.token
    if isinstance(sexp, SList):
        if not sexp.items:
            return "( )"
        return "( " + "".join(sexp_to_string(item) + " " for item in sexp) + ")"
    raise InvariantViolation(f"Not an S-expression: {sexp!r}")
