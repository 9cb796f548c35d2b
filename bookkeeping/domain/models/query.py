"""Query atoms and the compound query tree handed over by the parser.

A missing atom field (``None``) is a wildcard. An empty string on a text
field means the field must be absent on the record. A sub-title of ``0``
means the sub-title must be absent.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Union
from uuid import UUID

from bookkeeping.domain.models.vouchers import VoucherType


class OperatorType(Enum):
    """Operators of the query algebra."""

    NONE = "none"
    IDENTITY = "identity"
    COMPLEMENT = "complement"
    UNION = "union"
    INTERSECT = "intersect"
    SUBTRACT = "subtract"


UNARY_OPERATORS = frozenset(
    {OperatorType.NONE, OperatorType.IDENTITY, OperatorType.COMPLEMENT}
)
BINARY_OPERATORS = frozenset(
    {OperatorType.UNION, OperatorType.INTERSECT, OperatorType.SUBTRACT}
)


@dataclass(frozen=True)
class DateRange:
    """Inclusive date range with explicit handling of undated records.

    Attributes:
        start: Lower bound, or None for open.
        end: Upper bound, or None for open.
        nullable: Whether undated records match.
        null_only: Whether only undated records match.
    """

    start: date | None = None
    end: date | None = None
    nullable: bool = True
    null_only: bool = False

    @classmethod
    def unconstrained(cls) -> "DateRange":
        return cls()

    @classmethod
    def between(cls, start: date, end: date) -> "DateRange":
        return cls(start=start, end=end, nullable=False)

    @classmethod
    def since(cls, start: date) -> "DateRange":
        return cls(start=start, nullable=False)

    @classmethod
    def until(cls, end: date) -> "DateRange":
        return cls(end=end, nullable=True)

    @classmethod
    def undated(cls) -> "DateRange":
        return cls(null_only=True)

    @property
    def is_unconstrained(self) -> bool:
        return (
            self.start is None
            and self.end is None
            and self.nullable
            and not self.null_only
        )

    def contains(self, value: date | None) -> bool:
        """Return True when the date falls inside the range."""
        if self.null_only:
            return value is None
        if value is None:
            return self.nullable
        if self.start is not None and value < self.start:
            return False
        if self.end is not None and value > self.end:
            return False
        return True


@dataclass(frozen=True)
class DetailAtom:
    """Leaf filter over voucher details."""

    direction: int = 0
    title: int | None = None
    subtitle: int | None = None
    content: str | None = None
    remark: str | None = None
    fund: Decimal | None = None
    currency: str | None = None
    user: str | None = None


@dataclass(frozen=True)
class VoucherAtom:
    """Leaf filter over whole vouchers."""

    date_range: DateRange = DateRange()
    type: VoucherType | None = None
    remark: str | None = None
    details: "CompoundQuery | None" = None
    for_all: bool = False


@dataclass(frozen=True)
class DistributedAtom:
    """Leaf filter over assets and amortizations."""

    id: UUID | str | None = None
    name: str | None = None
    remark: str | None = None
    user: str | None = None
    date_range: DateRange = DateRange()


QueryAtom = Union[DetailAtom, VoucherAtom, DistributedAtom]


@dataclass(frozen=True)
class QueryLeaf:
    atom: QueryAtom


@dataclass(frozen=True)
class QueryUnary:
    op: OperatorType
    operand: "CompoundQuery"


@dataclass(frozen=True)
class QueryBinary:
    """Binary node; ``right`` may only be missing for Intersect."""

    op: OperatorType
    left: "CompoundQuery"
    right: "CompoundQuery | None" = None


CompoundQuery = Union[QueryLeaf, QueryUnary, QueryBinary]


def leaf(atom: QueryAtom) -> QueryLeaf:
    return QueryLeaf(atom)


def identity(operand: CompoundQuery) -> QueryUnary:
    return QueryUnary(OperatorType.IDENTITY, operand)


def complement(operand: CompoundQuery) -> QueryUnary:
    return QueryUnary(OperatorType.COMPLEMENT, operand)


def union(left: CompoundQuery, right: CompoundQuery) -> QueryBinary:
    return QueryBinary(OperatorType.UNION, left, right)


def intersect(left: CompoundQuery, right: CompoundQuery | None) -> QueryBinary:
    return QueryBinary(OperatorType.INTERSECT, left, right)


def subtract(left: CompoundQuery, right: CompoundQuery) -> QueryBinary:
    return QueryBinary(OperatorType.SUBTRACT, left, right)


__all__ = [
    "OperatorType",
    "UNARY_OPERATORS",
    "BINARY_OPERATORS",
    "DateRange",
    "DetailAtom",
    "VoucherAtom",
    "DistributedAtom",
    "QueryAtom",
    "QueryLeaf",
    "QueryUnary",
    "QueryBinary",
    "CompoundQuery",
    "leaf",
    "identity",
    "complement",
    "union",
    "intersect",
    "subtract",
]
