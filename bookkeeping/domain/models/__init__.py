"""Domain models package."""

from .named_query import (
    NamedQuery,
    NamedQueryGroup,
    NamedQueryLeaf,
    NamedQueryReference,
)
from .query import (
    CompoundQuery,
    DateRange,
    DetailAtom,
    DistributedAtom,
    OperatorType,
    QueryBinary,
    QueryLeaf,
    QueryUnary,
    VoucherAtom,
    complement,
    identity,
    intersect,
    leaf,
    subtract,
    union,
)
from .subtotal import (
    AggregationMode,
    AggregationNode,
    Balance,
    GatherMode,
    GroupedQuery,
    GroupLevel,
    SubtotalSpec,
)
from .vouchers import (
    DetailRecord,
    DistributedRecord,
    Voucher,
    VoucherDetail,
    VoucherType,
)

__all__ = [
    "AggregationMode",
    "AggregationNode",
    "Balance",
    "CompoundQuery",
    "DateRange",
    "DetailAtom",
    "DetailRecord",
    "DistributedAtom",
    "DistributedRecord",
    "GatherMode",
    "GroupedQuery",
    "GroupLevel",
    "NamedQuery",
    "NamedQueryGroup",
    "NamedQueryLeaf",
    "NamedQueryReference",
    "OperatorType",
    "QueryBinary",
    "QueryLeaf",
    "QueryUnary",
    "SubtotalSpec",
    "Voucher",
    "VoucherAtom",
    "VoucherDetail",
    "VoucherType",
    "complement",
    "identity",
    "intersect",
    "leaf",
    "subtract",
    "union",
]
