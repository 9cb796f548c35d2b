"""Tests for currency conversion."""

from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from bookkeeping.domain.errors import MissingRateError
from bookkeeping.domain.services.fx import convert_amount


def test_convert_amount_skips_same_currency() -> None:
    """Amounts already in the target currency should pass through."""
    lookup = MagicMock()

    result = convert_amount(Decimal("5"), "cny", None, "CNY", lookup, MagicMock())

    assert result == Decimal("5")
    lookup.convert.assert_not_called()


def test_convert_amount_delegates_to_lookup() -> None:
    """Foreign amounts should be converted by the rate lookup."""
    lookup = MagicMock()
    lookup.convert.return_value = Decimal("36")

    result = convert_amount(
        Decimal("5"), "usd", date(2024, 1, 2), "CNY", lookup, MagicMock()
    )

    assert result == Decimal("36")
    lookup.convert.assert_called_once_with(
        Decimal("5"), "USD", date(2024, 1, 2), "CNY"
    )


def test_convert_amount_without_lookup_raises() -> None:
    """A foreign amount with no lookup should log and raise."""
    logger = MagicMock()

    with pytest.raises(MissingRateError):
        convert_amount(Decimal("5"), "USD", None, "CNY", None, logger)
    logger.error.assert_called_once()
