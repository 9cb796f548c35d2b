"""Domain constants for ledger queries and subtotals."""

from bookkeeping.utils.decimal_utils import TOLERANCE

BILLING_CYCLE_DAY = 9
FINANCIAL_CYCLE_DAY = 19
FINANCIAL_CYCLE_THRESHOLD = 20

DEFAULT_BASE_CURRENCY = "CNY"
DEFAULT_CLIENT_USER = "anonymous"
DEFAULT_REPORT_MAX_DEPTH = 32

# Titles in this range are equity/cost accounts and carry no sign rule.
SIGN_CHECK_SKIPPED_TITLES = range(3000, 5000)


__all__ = [
    "TOLERANCE",
    "BILLING_CYCLE_DAY",
    "FINANCIAL_CYCLE_DAY",
    "FINANCIAL_CYCLE_THRESHOLD",
    "DEFAULT_BASE_CURRENCY",
    "DEFAULT_CLIENT_USER",
    "DEFAULT_REPORT_MAX_DEPTH",
    "SIGN_CHECK_SKIPPED_TITLES",
]
