"""Named queries composed into weighted reports."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Union

from bookkeeping.domain.models.subtotal import GroupedQuery


@dataclass(frozen=True)
class NamedQueryLeaf:
    """A named grouped query with its weight."""

    name: str
    query: GroupedQuery
    coefficient: Decimal = Decimal("1")


@dataclass(frozen=True)
class NamedQueryGroup:
    """A named list of weighted named queries."""

    name: str
    items: tuple["NamedQuery", ...]
    coefficient: Decimal = Decimal("1")


@dataclass(frozen=True)
class NamedQueryReference:
    """Reference to a stored named-query template."""

    name: str
    coefficient: Decimal = Decimal("1")


NamedQuery = Union[NamedQueryLeaf, NamedQueryGroup, NamedQueryReference]


__all__ = [
    "NamedQueryLeaf",
    "NamedQueryGroup",
    "NamedQueryReference",
    "NamedQuery",
]
