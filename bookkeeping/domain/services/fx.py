"""Currency normalization for aggregation inputs."""

from datetime import date
from decimal import Decimal
from logging import Logger

from bookkeeping.domain.errors import MissingRateError
from bookkeeping.utils.decimal_utils import coerce_decimal


def convert_amount(
    amount: Decimal,
    currency: str | None,
    as_of: date | None,
    target_currency: str,
    rate_lookup,
    logger: Logger,
) -> Decimal:
    """Convert an amount into the target currency.

    Args:
        amount: Amount in ``currency``.
        currency: Source currency mnemonic.
        as_of: Rate date.
        target_currency: Currency every amount is expressed in.
        rate_lookup: Object implementing ``RateLookupPort``.
        logger: Logger used for diagnostics.

    Returns:
        Decimal: Converted amount.

    Raises:
        MissingRateError: When no rate lookup is configured or the lookup
            has no rate for the currency and date.
    """
    amount = coerce_decimal(amount)
    source = (currency or "").upper()
    target = target_currency.upper()
    if source == target:
        return amount
    if rate_lookup is None:
        logger.error(
            f"FX conversion requested without rate lookup: {source} -> {target}"
        )
        raise MissingRateError(source, as_of, target)
    converted = rate_lookup.convert(amount, source, as_of, target)
    if converted is None:
        raise MissingRateError(source, as_of, target)
    return coerce_decimal(converted)


__all__ = ["convert_amount"]
