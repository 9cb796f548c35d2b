"""Operator semantics and dangerousness analysis for compound queries.

Trees can be produced by chained named-query composition and get deep, so
every walk here uses an explicit stack instead of recursion.
"""

from collections.abc import Iterator

from bookkeeping.domain.errors import MalformedQueryError, UnknownOperatorError
from bookkeeping.domain.models.query import (
    BINARY_OPERATORS,
    UNARY_OPERATORS,
    CompoundQuery,
    DetailAtom,
    DistributedAtom,
    OperatorType,
    QueryAtom,
    QueryBinary,
    QueryLeaf,
    QueryUnary,
    VoucherAtom,
)

_UNARY_MARKS = {
    "+": OperatorType.IDENTITY,
    "-": OperatorType.COMPLEMENT,
}
_BINARY_MARKS = {
    "+": OperatorType.UNION,
    "-": OperatorType.SUBTRACT,
    "*": OperatorType.INTERSECT,
}


def resolve_operator(mark: str | None, binary: bool) -> OperatorType:
    """Map a raw operator mark to its algebra operator.

    Args:
        mark: Operator text from the parser, or None for a bare operand.
        binary: Whether the node has a right-hand operand.

    Returns:
        OperatorType: Resolved operator.

    Raises:
        UnknownOperatorError: When the mark is not defined for the arity.
    """
    if mark is None:
        if binary:
            raise UnknownOperatorError("Binary node without operator mark")
        return OperatorType.NONE
    table = _BINARY_MARKS if binary else _UNARY_MARKS
    try:
        return table[mark]
    except KeyError:
        kind = "binary" if binary else "unary"
        raise UnknownOperatorError(
            f"Unknown {kind} operator mark: {mark!r}"
        ) from None


def operands(node: CompoundQuery) -> tuple[CompoundQuery, ...]:
    """Return the direct operands of a node, validating its shape."""
    if isinstance(node, QueryLeaf):
        return ()
    if isinstance(node, QueryUnary):
        if node.op not in UNARY_OPERATORS:
            _reject_operator(node.op, "unary")
        if node.operand is None:
            raise MalformedQueryError(f"{node.op.name} node without operand")
        return (node.operand,)
    if isinstance(node, QueryBinary):
        if node.op not in BINARY_OPERATORS:
            _reject_operator(node.op, "binary")
        if node.left is None:
            raise MalformedQueryError(f"{node.op.name} node without left operand")
        if node.right is None:
            if node.op is not OperatorType.INTERSECT:
                raise MalformedQueryError(
                    f"{node.op.name} node without right operand"
                )
            return (node.left,)
        return (node.left, node.right)
    raise MalformedQueryError(f"Unknown query node: {type(node).__name__}")


def _reject_operator(op, arity: str) -> None:
    if isinstance(op, OperatorType):
        raise MalformedQueryError(f"Operator {op.name} is not {arity}")
    raise UnknownOperatorError(f"Unknown operator: {op!r}")


def iter_post_order(query: CompoundQuery) -> Iterator[CompoundQuery]:
    """Yield every node after its operands, left operand first."""
    stack: list[tuple[CompoundQuery, bool]] = [(query, False)]
    while stack:
        node, expanded = stack.pop()
        if expanded:
            yield node
            continue
        stack.append((node, True))
        for operand in reversed(operands(node)):
            stack.append((operand, False))


def atom_types(query: CompoundQuery | None) -> set[type]:
    """Return the set of atom classes used by the leaves of a query."""
    if query is None:
        return set()
    return {
        type(node.atom)
        for node in iter_post_order(query)
        if isinstance(node, QueryLeaf)
    }


def atom_is_dangerous(atom: QueryAtom) -> bool:
    """Return True when a leaf atom imposes no bounding constraint."""
    if isinstance(atom, DetailAtom):
        return not (atom.content or atom.remark or atom.fund is not None)
    if isinstance(atom, VoucherAtom):
        if not atom.date_range.is_unconstrained or atom.remark:
            return False
        return is_dangerous(atom.details)
    if isinstance(atom, DistributedAtom):
        if atom.id is not None or atom.name or atom.remark:
            return False
        return atom.date_range.is_unconstrained
    raise MalformedQueryError(f"Unknown query atom: {type(atom).__name__}")


def is_dangerous(query: CompoundQuery | None) -> bool:
    """Return True when the query cannot be proven to match a bounded set.

    A missing query matches everything and is dangerous. Complement is
    always dangerous; Union is dangerous when either side is; Intersect only
    when both sides are (a missing right side counts as dangerous); Subtract
    follows its left side.
    """
    if query is None:
        return True
    values: list[bool] = []
    for node in iter_post_order(query):
        if isinstance(node, QueryLeaf):
            values.append(atom_is_dangerous(node.atom))
        elif isinstance(node, QueryUnary):
            operand = values.pop()
            if node.op is OperatorType.COMPLEMENT:
                values.append(True)
            else:
                values.append(operand)
        else:
            right = values.pop() if node.right is not None else True
            left = values.pop()
            values.append(_combine(node.op, left, right))
    return values.pop()


def _combine(op: OperatorType, left: bool, right: bool) -> bool:
    if op is OperatorType.UNION:
        return left or right
    if op is OperatorType.INTERSECT:
        return left and right
    if op is OperatorType.SUBTRACT:
        return left
    raise UnknownOperatorError(f"Unknown operator: {op!r}")


__all__ = [
    "resolve_operator",
    "operands",
    "iter_post_order",
    "atom_types",
    "atom_is_dangerous",
    "is_dangerous",
]
