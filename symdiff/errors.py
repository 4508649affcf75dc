"""Errors raised while reading, differentiating and simplifying polynomials."""


class SymdiffError(Exception):
    pass


class ParseError(SymdiffError, SyntaxError):
    """Malformed S-expression text: unbalanced parens or an invalid atom."""


class SemanticError(SymdiffError, ValueError):
    """A well formed S-expression that is not a polynomial expression."""


class VariableMismatchError(SymdiffError, ValueError):
    """Differentiation of a monomial bound in another variable."""


class InvariantViolation(SymdiffError, RuntimeError):
    """A node was built in a shape the grammar does not allow.

    Unreachable from parsed input; it signals a bug in whatever code built
    the node.
    """


class OutputError(SymdiffError, ValueError):
    """An expression that cannot be printed back as text."""
