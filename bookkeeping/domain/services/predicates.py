"""Compile compound queries into pure record predicates.

The compiled predicate is the whole contract offered to storage adapters:
they may run it in-process, or read ``CompiledPredicate.query`` to build a
native filter with the same semantics.
"""

from collections.abc import Callable, Iterable
from decimal import Decimal

from bookkeeping.domain.errors import MalformedQueryError
from bookkeeping.domain.models.query import (
    CompoundQuery,
    DetailAtom,
    DistributedAtom,
    OperatorType,
    QueryAtom,
    QueryLeaf,
    QueryUnary,
    VoucherAtom,
)
from bookkeeping.domain.services.query_algebra import atom_types, iter_post_order
from bookkeeping.utils.decimal_utils import coerce_decimal, is_zero

Matcher = Callable[[object], bool]

_ATOM = "atom"


class CompiledPredicate:
    """Matching function over records, evaluated without recursion."""

    def __init__(
        self,
        query: CompoundQuery | None,
        program: Iterable[tuple[object, Matcher | None]],
    ) -> None:
        self.query = query
        self._program = tuple(program)

    def __call__(self, record) -> bool:
        stack: list[bool] = []
        for op, matcher in self._program:
            if op == _ATOM:
                stack.append(matcher(record))
            elif op is OperatorType.COMPLEMENT:
                stack.append(not stack.pop())
            else:
                right = stack.pop()
                left = stack.pop()
                if op is OperatorType.UNION:
                    stack.append(left or right)
                elif op is OperatorType.INTERSECT:
                    stack.append(left and right)
                else:
                    stack.append(left and not right)
        return stack.pop()


def compile_filter(
    query: CompoundQuery | None,
    *,
    lift_details: bool = False,
) -> CompiledPredicate:
    """Compile a compound query into a predicate.

    Args:
        query: Compound query, or None to match every record.
        lift_details: Evaluate detail atoms against vouchers, matching when
            any detail of the voucher matches.

    Returns:
        CompiledPredicate: Pure function from record to bool.
    """
    if query is None:
        return CompiledPredicate(None, [(_ATOM, _match_all)])
    program: list[tuple[object, Matcher | None]] = []
    for node in iter_post_order(query):
        if isinstance(node, QueryLeaf):
            matcher = compile_atom(node.atom)
            if lift_details and isinstance(node.atom, DetailAtom):
                matcher = lift_to_vouchers(matcher)
            program.append((_ATOM, matcher))
        elif isinstance(node, QueryUnary):
            if node.op is OperatorType.COMPLEMENT:
                program.append((OperatorType.COMPLEMENT, None))
        elif node.right is not None:
            program.append((node.op, None))
    return CompiledPredicate(query, program)


def compile_voucher_filter(query: CompoundQuery | None) -> CompiledPredicate:
    """Compile a query evaluated against whole vouchers.

    A pure detail query is lifted as a whole: a voucher matches when one of
    its details satisfies the entire query. In a mixed query each detail
    atom is lifted on its own.
    """
    if query is not None and atom_types(query) <= {DetailAtom}:
        detail_predicate = compile_filter(query)
        return CompiledPredicate(
            query, [(_ATOM, lift_to_vouchers(detail_predicate))]
        )
    return compile_filter(query, lift_details=True)


def compile_atom(atom: QueryAtom) -> Matcher:
    """Compile a single leaf atom into a matcher."""
    if isinstance(atom, DetailAtom):
        return _compile_detail_atom(atom)
    if isinstance(atom, VoucherAtom):
        return _compile_voucher_atom(atom)
    if isinstance(atom, DistributedAtom):
        return _compile_distributed_atom(atom)
    raise MalformedQueryError(f"Unknown query atom: {type(atom).__name__}")


def lift_to_vouchers(predicate: Matcher, for_all: bool = False) -> Matcher:
    """Turn a detail predicate into a voucher predicate.

    A voucher matches when any detail matches, or every detail when
    ``for_all`` is set.
    """
    if for_all:
        return lambda voucher: all(predicate(d) for d in voucher.details)
    return lambda voucher: any(predicate(d) for d in voucher.details)


def _match_all(record) -> bool:
    return True


def _all_of(checks: list[Matcher]) -> Matcher:
    if not checks:
        return _match_all
    return lambda record: all(check(record) for check in checks)


def _text_check(field: str, expected: str) -> Matcher:
    if expected == "":
        return lambda record: getattr(record, field) is None
    return lambda record: getattr(record, field) == expected


def _fund_check(expected: Decimal) -> Matcher:
    target = coerce_decimal(expected)

    def check(record) -> bool:
        fund = record.fund
        return fund is not None and is_zero(coerce_decimal(fund) - target)

    return check


def _compile_detail_atom(atom: DetailAtom) -> Matcher:
    checks: list[Matcher] = []
    if atom.direction > 0:
        checks.append(lambda d: d.fund is not None and d.fund > 0)
    elif atom.direction < 0:
        checks.append(lambda d: d.fund is not None and d.fund < 0)
    if atom.title is not None:
        title = atom.title
        checks.append(lambda d: d.title == title)
    if atom.subtitle is not None:
        subtitle = atom.subtitle
        if subtitle == 0:
            checks.append(lambda d: d.subtitle is None)
        else:
            checks.append(lambda d: d.subtitle == subtitle)
    if atom.content is not None:
        checks.append(_text_check("content", atom.content))
    if atom.remark is not None:
        checks.append(_text_check("remark", atom.remark))
    if atom.fund is not None:
        checks.append(_fund_check(atom.fund))
    if atom.currency is not None:
        currency = atom.currency.upper()
        checks.append(lambda d: (d.currency or "").upper() == currency)
    if atom.user is not None:
        user = atom.user
        checks.append(lambda d: d.user == user)
    return _all_of(checks)


def _compile_voucher_atom(atom: VoucherAtom) -> Matcher:
    checks: list[Matcher] = []
    date_range = atom.date_range
    if not date_range.is_unconstrained:
        checks.append(lambda v: date_range.contains(v.date))
    if atom.type is not None:
        voucher_type = atom.type
        checks.append(lambda v: v.type == voucher_type)
    if atom.remark is not None:
        checks.append(_text_check("remark", atom.remark))
    if atom.details is not None:
        checks.append(
            lift_to_vouchers(compile_filter(atom.details), atom.for_all)
        )
    return _all_of(checks)


def _compile_distributed_atom(atom: DistributedAtom) -> Matcher:
    checks: list[Matcher] = []
    if atom.id is not None:
        expected_id = str(atom.id).lower()
        checks.append(
            lambda a: a.id is not None and str(a.id).lower() == expected_id
        )
    if atom.name is not None:
        checks.append(_text_check("name", atom.name))
    if atom.remark is not None:
        checks.append(_text_check("remark", atom.remark))
    if atom.user is not None:
        user = atom.user
        checks.append(lambda a: a.user == user)
    date_range = atom.date_range
    if not date_range.is_unconstrained:
        checks.append(lambda a: date_range.contains(a.date))
    return _all_of(checks)


__all__ = [
    "CompiledPredicate",
    "compile_filter",
    "compile_voucher_filter",
    "compile_atom",
    "lift_to_vouchers",
]
