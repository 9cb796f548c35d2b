"""Subtotal specification and the aggregation tree it produces."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any

from bookkeeping.domain.models.query import CompoundQuery, DateRange


class GroupLevel(Enum):
    """One grouping dimension of a subtotal hierarchy."""

    CURRENCY = "currency"
    TITLE = "title"
    SUBTITLE = "subtitle"
    CONTENT = "content"
    REMARK = "remark"
    USER = "user"
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"
    BILLING_MONTH = "billing_month"
    FINANCIAL_MONTH = "financial_month"

    @property
    def is_date(self) -> bool:
        return self in DATE_LEVELS


DATE_LEVELS = frozenset(
    {
        GroupLevel.DAY,
        GroupLevel.WEEK,
        GroupLevel.MONTH,
        GroupLevel.YEAR,
        GroupLevel.BILLING_MONTH,
        GroupLevel.FINANCIAL_MONTH,
    }
)


class GatherMode(Enum):
    """Quantity reported by each leaf."""

    ALL = "all"
    NON_ZERO = "non_zero"
    COUNT = "count"
    VOUCHER_COUNT = "voucher_count"

    @property
    def is_count(self) -> bool:
        return self in (GatherMode.COUNT, GatherMode.VOUCHER_COUNT)


class AggregationMode(Enum):
    """Post-processing of the per-leaf time series."""

    NONE = "none"
    CHANGED_DAY = "changed_day"
    EVERY_DAY = "every_day"


DEFAULT_LEVELS = (
    GroupLevel.CURRENCY,
    GroupLevel.TITLE,
    GroupLevel.SUBTITLE,
    GroupLevel.USER,
    GroupLevel.CONTENT,
)
DEFAULT_EQUIVALENT_LEVELS = (
    GroupLevel.TITLE,
    GroupLevel.SUBTITLE,
    GroupLevel.USER,
    GroupLevel.CONTENT,
)


@dataclass(frozen=True)
class SubtotalSpec:
    """Immutable subtotal request.

    Attributes:
        levels: Ordered grouping levels; ``None`` selects the defaults.
        gather: Reported quantity.
        aggregation: Running-balance mode applied to each leaf group.
        every_day_range: Bounding range for ``EVERY_DAY``.
        aggregation_interval: Bucket granularity of the running series.
        equivalent_currency: Currency every amount is converted into.
        equivalent_date: Rate date; record dates are used when missing.
    """

    levels: tuple[GroupLevel, ...] | None = None
    gather: GatherMode = GatherMode.ALL
    aggregation: AggregationMode = AggregationMode.NONE
    every_day_range: DateRange = DateRange()
    aggregation_interval: GroupLevel = GroupLevel.DAY
    equivalent_currency: str | None = None
    equivalent_date: date | None = None

    @property
    def resolved_levels(self) -> tuple[GroupLevel, ...]:
        if self.levels is not None:
            return tuple(self.levels)
        if self.equivalent_currency:
            return DEFAULT_EQUIVALENT_LEVELS
        return DEFAULT_LEVELS


@dataclass(frozen=True)
class Balance:
    """A reading of a series: a date bucket and its amount."""

    date: date | None
    fund: Decimal


@dataclass
class AggregationNode:
    """Node of a subtotal tree.

    The level a node was grouped by is ``levels[depth - 1]``; it is never
    stored on the node.
    """

    key: Any = None
    fund: Decimal = Decimal("0")
    children: dict[Any, "AggregationNode"] = field(default_factory=dict)
    is_leaf: bool = False
    series: list[Balance] | None = None

    def child(self, key: Any, is_leaf: bool) -> "AggregationNode":
        node = self.children.get(key)
        if node is None:
            node = AggregationNode(key=key, is_leaf=is_leaf)
            self.children[key] = node
        return node


@dataclass(frozen=True)
class GroupedQuery:
    """Detail filter, optional voucher filter and subtotal request."""

    details: CompoundQuery | None
    subtotal: SubtotalSpec = SubtotalSpec()
    vouchers: CompoundQuery | None = None


__all__ = [
    "GroupLevel",
    "DATE_LEVELS",
    "GatherMode",
    "AggregationMode",
    "DEFAULT_LEVELS",
    "DEFAULT_EQUIVALENT_LEVELS",
    "SubtotalSpec",
    "Balance",
    "AggregationNode",
    "GroupedQuery",
]
