"""Sign conventions of account titles."""

from decimal import Decimal
from logging import Logger

from bookkeeping.domain.constants import SIGN_CHECK_SKIPPED_TITLES
from bookkeeping.utils.decimal_utils import is_non_negative, is_non_positive


def is_debit_normal(title: int) -> bool:
    """Return True for titles whose balance is expected to be non-negative."""
    return title < 2000 or title >= 6400


def is_sign_checked(title: int) -> bool:
    return title not in SIGN_CHECK_SKIPPED_TITLES


def has_expected_sign(title: int, balance: Decimal) -> bool:
    """Return True when a balance respects the title's normal side."""
    if not is_sign_checked(title):
        return True
    if is_debit_normal(title):
        return is_non_negative(balance)
    return is_non_positive(balance)


def validate_balance_sign(title: int, balance: Decimal, logger: Logger) -> bool:
    """Warn when a balance violates the title's sign convention.

    Args:
        title: Account title of the balance.
        balance: Running balance.
        logger: Logger used for warnings.

    Returns:
        bool: Whether the balance has the expected sign.
    """
    if has_expected_sign(title, balance):
        return True
    side = "debit" if is_debit_normal(title) else "credit"
    logger.warning(f"Balance of {side}-normal title {title} has wrong sign: {balance}")
    return False


__all__ = [
    "is_debit_normal",
    "is_sign_checked",
    "has_expected_sign",
    "validate_balance_sign",
]
