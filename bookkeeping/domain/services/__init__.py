"""Domain services package."""

from .aggregation import (
    aggregate_changed_day,
    aggregate_every_day,
    build_aggregation,
    drop_unchanged,
    matched_entries,
    prune_zero_leaves,
    running_balances,
)
from .dates import date_sort_key, next_bucket, normalize_date
from .fx import convert_amount
from .predicates import (
    CompiledPredicate,
    compile_filter,
    compile_voucher_filter,
    lift_to_vouchers,
)
from .query_algebra import is_dangerous, iter_post_order, resolve_operator
from .traversal import SubtotalVisitor, default_collation, present

__all__ = [
    "CompiledPredicate",
    "SubtotalVisitor",
    "aggregate_changed_day",
    "aggregate_every_day",
    "build_aggregation",
    "compile_filter",
    "compile_voucher_filter",
    "convert_amount",
    "date_sort_key",
    "default_collation",
    "drop_unchanged",
    "is_dangerous",
    "iter_post_order",
    "lift_to_vouchers",
    "matched_entries",
    "next_bucket",
    "normalize_date",
    "present",
    "prune_zero_leaves",
    "resolve_operator",
    "running_balances",
]
