"""Hierarchical subtotal aggregation.

Amounts are added to every node on their path, so an internal node always
holds the sum of its children. Running-balance modes attach a ``series`` of
readings to each leaf and leave the leaf's point total untouched.
"""

from collections.abc import Iterable
from datetime import date
from decimal import Decimal
from logging import Logger
from typing import Any

from bookkeeping.domain.errors import MalformedQueryError
from bookkeeping.domain.models.query import DateRange
from bookkeeping.domain.models.subtotal import (
    AggregationMode,
    AggregationNode,
    Balance,
    GatherMode,
    GroupLevel,
    SubtotalSpec,
)
from bookkeeping.domain.services.dates import (
    date_sort_key,
    next_bucket,
    normalize_date,
)
from bookkeeping.domain.services.fx import convert_amount
from bookkeeping.utils.decimal_utils import coerce_decimal, is_zero

_FIELD_LEVELS = {
    GroupLevel.CURRENCY: "currency",
    GroupLevel.TITLE: "title",
    GroupLevel.SUBTITLE: "subtitle",
    GroupLevel.CONTENT: "content",
    GroupLevel.REMARK: "remark",
    GroupLevel.USER: "user",
}

Point = tuple[date | None, Decimal]


def group_key(record, level: GroupLevel) -> Any:
    """Return the key of a record for one grouping level."""
    if level.is_date:
        return normalize_date(record.date, level)
    try:
        return getattr(record, _FIELD_LEVELS[level])
    except KeyError:
        raise MalformedQueryError(f"Unknown group level: {level}") from None


def matched_entries(records: Iterable) -> list[tuple[Any, Decimal]]:
    """Pair each matched record with its own fund."""
    return [(record, coerce_decimal(record.fund)) for record in records]


def build_aggregation(
    spec: SubtotalSpec,
    entries: Iterable[tuple[Any, Decimal]],
    rate_lookup=None,
    *,
    logger: Logger,
) -> AggregationNode:
    """Group matched amounts into a subtotal tree.

    Args:
        spec: Subtotal request.
        entries: ``(record, amount)`` pairs that passed the filter.
        rate_lookup: Object implementing ``RateLookupPort``; required when
            ``spec.equivalent_currency`` is set.
        logger: Logger used for diagnostics.

    Returns:
        AggregationNode: Root of the subtotal tree.

    Raises:
        MissingRateError: When a currency conversion has no rate.
    """
    levels = spec.resolved_levels
    running = spec.aggregation is not AggregationMode.NONE
    root = AggregationNode(is_leaf=not levels)
    points: dict[int, list[Point]] = {}
    leaves: dict[int, AggregationNode] = {}
    voucher_ids: dict[int, set] = {}
    count = 0

    for record, amount in entries:
        count += 1
        path = [root]
        node = root
        for index, level in enumerate(levels):
            node = node.child(
                group_key(record, level), is_leaf=index == len(levels) - 1
            )
            path.append(node)
        leaf = path[-1]

        if spec.gather is GatherMode.COUNT:
            value = Decimal("1")
        elif spec.gather is GatherMode.VOUCHER_COUNT:
            seen = voucher_ids.setdefault(id(leaf), set())
            voucher_id = getattr(record, "voucher_id", None)
            value = Decimal("0") if voucher_id in seen else Decimal("1")
            seen.add(voucher_id)
        elif spec.equivalent_currency:
            value = convert_amount(
                amount,
                record.currency,
                spec.equivalent_date or record.date,
                spec.equivalent_currency,
                rate_lookup,
                logger,
            )
        else:
            value = coerce_decimal(amount)

        for item in path:
            item.fund += value
        if running:
            leaves[id(leaf)] = leaf
            points.setdefault(id(leaf), []).append(
                (normalize_date(record.date, spec.aggregation_interval), value)
            )

    if running:
        _attach_series(spec, leaves, points)
    if spec.gather is GatherMode.NON_ZERO:
        prune_zero_leaves(
            root, keep_series=spec.aggregation is AggregationMode.CHANGED_DAY
        )
    logger.debug(
        f"Aggregated {count} entries over {len(levels)} levels "
        f"(gather={spec.gather.value}, aggregation={spec.aggregation.value})"
    )
    return root


def _attach_series(
    spec: SubtotalSpec,
    leaves: dict[int, AggregationNode],
    points: dict[int, list[Point]],
) -> None:
    if spec.aggregation is AggregationMode.CHANGED_DAY:
        for key, leaf in leaves.items():
            leaf.series = aggregate_changed_day(points[key])
        return
    bounds = _resolve_every_day_range(spec.every_day_range, points.values())
    for key, leaf in leaves.items():
        leaf.series = aggregate_every_day(
            points[key], bounds, spec.aggregation_interval
        )


def _resolve_every_day_range(
    date_range: DateRange,
    groups: Iterable[list[Point]],
) -> DateRange:
    if date_range.start is not None and date_range.end is not None:
        return date_range
    dated = [bucket for group in groups for bucket, _ in group if bucket]
    if not dated:
        return date_range
    return DateRange(
        start=date_range.start or min(dated),
        end=date_range.end or max(dated),
        nullable=date_range.nullable,
    )


def _merge_points(points: Iterable[Point]) -> list[Point]:
    merged: dict[date | None, Decimal] = {}
    for bucket, value in points:
        merged[bucket] = merged.get(bucket, Decimal("0")) + coerce_decimal(value)
    return sorted(merged.items(), key=lambda item: date_sort_key(item[0]))


def running_balances(points: Iterable[Point]) -> list[Balance]:
    """Turn point totals into chronological cumulative balances.

    Points sharing a bucket are merged first; the undated bucket comes first.
    """
    balance = Decimal("0")
    result: list[Balance] = []
    for bucket, value in _merge_points(points):
        balance += value
        result.append(Balance(bucket, balance))
    return result


def drop_unchanged(balances: Iterable[Balance]) -> list[Balance]:
    """Keep the first reading and every reading that differs from the last kept."""
    kept: list[Balance] = []
    for reading in balances:
        if kept and is_zero(reading.fund - kept[-1].fund):
            continue
        kept.append(reading)
    return kept


def aggregate_changed_day(points: Iterable[Point]) -> list[Balance]:
    """Running balance restricted to the buckets where it changes."""
    return drop_unchanged(running_balances(points))


def aggregate_every_day(
    points: Iterable[Point],
    date_range: DateRange,
    interval: GroupLevel = GroupLevel.DAY,
) -> list[Balance]:
    """Emit one running-balance reading per bucket across the range.

    Undated points and points before the range feed the opening balance;
    points after the range are ignored. A range without both bounds falls
    back to the plain running balances.
    """
    merged = _merge_points(points)
    if date_range.start is None or date_range.end is None:
        return running_balances(merged)
    start = normalize_date(date_range.start, interval)
    end = normalize_date(date_range.end, interval)
    opening = Decimal("0")
    movements: dict[date, Decimal] = {}
    for bucket, value in merged:
        if bucket is None or bucket < start:
            opening += value
        elif bucket <= end:
            movements[bucket] = value

    result: list[Balance] = []
    balance = opening
    current = start
    while current <= end:
        balance += movements.get(current, Decimal("0"))
        result.append(Balance(current, balance))
        current = next_bucket(current, interval)
    return result


def _nodes_top_down(root: AggregationNode) -> list[AggregationNode]:
    ordered: list[AggregationNode] = []
    stack = [root]
    while stack:
        node = stack.pop()
        ordered.append(node)
        stack.extend(node.children.values())
    return ordered


def _is_zero_leaf(leaf: AggregationNode, keep_series: bool) -> bool:
    if leaf.series is None:
        return is_zero(leaf.fund)
    if keep_series:
        return False
    return all(is_zero(reading.fund) for reading in leaf.series)


def prune_zero_leaves(
    root: AggregationNode,
    keep_series: bool = True,
) -> AggregationNode:
    """Drop zero leaves and the internal nodes they leave empty.

    With ``keep_series`` a leaf carrying a running-balance series is always
    kept; otherwise it is dropped when every reading is zero. Internal funds
    are re-summed from the surviving children.
    """
    for node in reversed(_nodes_top_down(root)):
        if node.is_leaf:
            continue
        survivors = {}
        for key, child in node.children.items():
            if child.is_leaf:
                if _is_zero_leaf(child, keep_series):
                    continue
            elif not child.children:
                continue
            survivors[key] = child
        node.children = survivors
        node.fund = sum(
            (child.fund for child in survivors.values()), Decimal("0")
        )
    return root


__all__ = [
    "group_key",
    "matched_entries",
    "build_aggregation",
    "running_balances",
    "drop_unchanged",
    "aggregate_changed_day",
    "aggregate_every_day",
    "prune_zero_leaves",
]
