"""Domain package for ledger rules and core models."""

from .constants import DEFAULT_BASE_CURRENCY, DEFAULT_CLIENT_USER, TOLERANCE
from .errors import (
    DangerousQueryError,
    LedgerError,
    MalformedQueryError,
    MissingRateError,
    NamedQueryCycleError,
    NamedQueryDepthError,
    UnboundedQueryWarning,
    UnknownOperatorError,
)
from .models import (
    AggregationMode,
    AggregationNode,
    GatherMode,
    GroupedQuery,
    GroupLevel,
    SubtotalSpec,
    Voucher,
    VoucherDetail,
)
from .policies import guard_query, validate_balance_sign
from .services import (
    build_aggregation,
    compile_filter,
    is_dangerous,
    normalize_date,
    present,
)

__all__ = [
    "AggregationMode",
    "AggregationNode",
    "DEFAULT_BASE_CURRENCY",
    "DEFAULT_CLIENT_USER",
    "DangerousQueryError",
    "GatherMode",
    "GroupLevel",
    "GroupedQuery",
    "LedgerError",
    "MalformedQueryError",
    "MissingRateError",
    "NamedQueryCycleError",
    "NamedQueryDepthError",
    "SubtotalSpec",
    "TOLERANCE",
    "UnboundedQueryWarning",
    "UnknownOperatorError",
    "Voucher",
    "VoucherDetail",
    "build_aggregation",
    "compile_filter",
    "guard_query",
    "is_dangerous",
    "normalize_date",
    "present",
    "validate_balance_sign",
]
