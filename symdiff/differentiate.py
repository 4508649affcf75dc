from .errors import InvariantViolation, VariableMismatchError
from .expression import Constant, Monomial, PolyExp, Product, Sum


def differentiate(bound: str, node: PolyExp) -> PolyExp:
    """Derivative of `node` in the variable `bound`, left unsimplified."""
    if isinstance(node, Constant):
        return Constant(0)

    if isinstance(node, Sum):
        return Sum(tuple(differentiate(bound, term) for term in node.terms))

    if isinstance(node, Monomial):
        if node.symbol != bound:
            raise VariableMismatchError(
                f"cannot differentiate a polynomial function bound in a different "
                f"variable: {node} is in {node.symbol!r}, not {bound!r}"
            )
        # keeps the product shape for x^0 so the result stays a monomial term
        if node.exponent == 0:
            return Product(Constant(0), Monomial(node.symbol, 0))
        return Product(
            Constant(node.exponent), Monomial(node.symbol, node.exponent - 1)
        )

    if isinstance(node, Product):
        # the left operand is always a constant: (c f)' = c f'
        return Product(node.coefficient, differentiate(bound, node.inner))

    raise InvariantViolation(f"Not a polynomial expression: {node!r}")
