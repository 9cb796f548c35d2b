"""Tests for operator resolution and dangerousness analysis."""

from datetime import date

import pytest

from bookkeeping.domain.errors import MalformedQueryError, UnknownOperatorError
from bookkeeping.domain.models.query import (
    DateRange,
    DetailAtom,
    DistributedAtom,
    OperatorType,
    QueryBinary,
    QueryUnary,
    VoucherAtom,
    complement,
    identity,
    intersect,
    leaf,
    subtract,
    union,
)
from bookkeeping.domain.services.query_algebra import (
    atom_is_dangerous,
    atom_types,
    is_dangerous,
    iter_post_order,
    resolve_operator,
)

BOUNDED = leaf(DetailAtom(content="cash"))
UNBOUNDED = leaf(DetailAtom(title=1001))


@pytest.mark.parametrize(
    ("mark", "binary", "expected"),
    [
        (None, False, OperatorType.NONE),
        ("+", False, OperatorType.IDENTITY),
        ("-", False, OperatorType.COMPLEMENT),
        ("+", True, OperatorType.UNION),
        ("-", True, OperatorType.SUBTRACT),
        ("*", True, OperatorType.INTERSECT),
    ],
)
def test_resolve_operator_maps_marks(mark, binary, expected) -> None:
    """Marks should map to operators according to arity."""
    assert resolve_operator(mark, binary) is expected


@pytest.mark.parametrize(("mark", "binary"), [("*", False), ("/", True), (None, True)])
def test_resolve_operator_rejects_unknown_marks(mark, binary) -> None:
    """Unknown marks should raise UnknownOperatorError."""
    with pytest.raises(UnknownOperatorError):
        resolve_operator(mark, binary)


def test_detail_atom_dangerousness() -> None:
    """Only content, remark or fund bound a detail atom."""
    assert atom_is_dangerous(DetailAtom()) is True
    assert atom_is_dangerous(DetailAtom(title=1001, subtitle=1, direction=1)) is True
    assert atom_is_dangerous(DetailAtom(content="")) is True
    assert atom_is_dangerous(DetailAtom(content="cash")) is False
    assert atom_is_dangerous(DetailAtom(remark="rent")) is False
    assert atom_is_dangerous(DetailAtom(fund=0)) is False


def test_voucher_and_distributed_atom_dangerousness() -> None:
    """Date ranges, remarks, ids and names bound the other atoms."""
    bounded_range = DateRange.between(date(2024, 1, 1), date(2024, 1, 31))

    assert atom_is_dangerous(VoucherAtom()) is True
    assert atom_is_dangerous(VoucherAtom(date_range=bounded_range)) is False
    assert atom_is_dangerous(VoucherAtom(remark="salary")) is False
    assert atom_is_dangerous(VoucherAtom(details=BOUNDED)) is False
    assert atom_is_dangerous(VoucherAtom(details=UNBOUNDED)) is True
    assert atom_is_dangerous(DistributedAtom()) is True
    assert atom_is_dangerous(DistributedAtom(id="a1")) is False
    assert atom_is_dangerous(DistributedAtom(name="laptop")) is False
    assert atom_is_dangerous(DistributedAtom(date_range=bounded_range)) is False


def test_dangerousness_propagation_rules() -> None:
    """Union ORs, Intersect ANDs, Complement is always dangerous."""
    operands = [BOUNDED, UNBOUNDED]
    for a in operands:
        assert is_dangerous(complement(a)) is True
        assert is_dangerous(identity(a)) == is_dangerous(a)
        for b in operands:
            assert is_dangerous(union(a, b)) == (is_dangerous(a) or is_dangerous(b))
            assert is_dangerous(intersect(a, b)) == (
                is_dangerous(a) and is_dangerous(b)
            )
            assert is_dangerous(subtract(a, b)) == is_dangerous(a)


def test_intersect_without_right_operand_follows_left() -> None:
    """A missing second operand is neutral for Intersect."""
    assert is_dangerous(intersect(BOUNDED, None)) is False
    assert is_dangerous(intersect(UNBOUNDED, None)) is True


def test_missing_query_is_dangerous() -> None:
    """No query at all matches everything."""
    assert is_dangerous(None) is True


def test_deep_trees_do_not_recurse() -> None:
    """Very deep trees should be analysed with an explicit stack."""
    query = BOUNDED
    for _ in range(5000):
        query = union(query, BOUNDED)

    assert is_dangerous(query) is False
    assert is_dangerous(union(query, UNBOUNDED)) is True


def test_iter_post_order_yields_operands_first() -> None:
    """Operands should come before their parent, left first."""
    left = leaf(DetailAtom(title=1))
    right = leaf(DetailAtom(title=2))
    root = union(left, complement(right))

    nodes = list(iter_post_order(root))

    assert nodes[0] is left
    assert nodes[1] is right
    assert nodes[-1] is root
    assert len(nodes) == 4


def test_atom_types_collects_leaf_kinds() -> None:
    """atom_types should report every atom class used by the leaves."""
    query = intersect(leaf(VoucherAtom()), UNBOUNDED)

    assert atom_types(query) == {VoucherAtom, DetailAtom}
    assert atom_types(None) == set()


def test_malformed_nodes_are_rejected() -> None:
    """Structurally invalid nodes should raise explicit errors."""
    with pytest.raises(MalformedQueryError):
        is_dangerous(QueryBinary(OperatorType.UNION, BOUNDED, None))
    with pytest.raises(MalformedQueryError):
        is_dangerous(QueryUnary(OperatorType.UNION, BOUNDED))
    with pytest.raises(UnknownOperatorError):
        is_dangerous(QueryUnary("bogus", BOUNDED))
    with pytest.raises(MalformedQueryError):
        atom_is_dangerous(object())
