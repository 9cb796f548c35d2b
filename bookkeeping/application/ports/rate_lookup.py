"""Port for foreign-exchange conversion."""

from datetime import date
from decimal import Decimal
from typing import Protocol


class RateLookupPort(Protocol):
    """FX collaborator; safe for concurrent reads."""

    def convert(
        self,
        amount: Decimal,
        from_currency: str,
        as_of: date | None,
        to_currency: str,
    ) -> Decimal:
        """Convert an amount, raising MissingRateError when no rate exists."""


__all__ = ["RateLookupPort"]
