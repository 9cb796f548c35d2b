"""Domain policies package."""

from .ledger_signs import (
    has_expected_sign,
    is_debit_normal,
    is_sign_checked,
    validate_balance_sign,
)
from .query_guard import guard_query

__all__ = [
    "guard_query",
    "has_expected_sign",
    "is_debit_normal",
    "is_sign_checked",
    "validate_balance_sign",
]
