"""FX rate lookups backed by SQL or an in-memory table."""

from collections.abc import Mapping
from datetime import date
from decimal import Decimal

from sqlalchemy import text

from bookkeeping.application.ports.database import DatabaseEnginePort
from bookkeeping.application.ports.rate_lookup import RateLookupPort
from bookkeeping.domain.errors import MissingRateError
from bookkeeping.infrastructure.logging.logger import get_app_logger
from bookkeeping.utils.decimal_utils import coerce_decimal

SELECT_RATE_SQL = text(
    """
    SELECT rate
    FROM prices
    WHERE currency = :currency AND target = :target
    """
)


class SqlAlchemyRateLookup(RateLookupPort):
    """Latest rate on or before the requested date from the ``prices`` table."""

    def __init__(self, db_port: DatabaseEnginePort, logger=None) -> None:
        self._db_port = db_port
        self._logger = logger or get_app_logger()

    def rate(self, currency: str, as_of: date | None, target: str) -> Decimal:
        """Return the conversion rate from ``currency`` into ``target``.

        Raises:
            MissingRateError: When the table has no applicable rate.
        """
        query = SELECT_RATE_SQL
        params: dict = {"currency": currency, "target": target}
        if as_of:
            query = text(query.text + " AND date <= :as_of")
            params["as_of"] = as_of
        query = text(query.text + " ORDER BY date DESC LIMIT 1")
        engine = self._db_port.get_ledger_engine()
        with engine.connect() as conn:
            row = conn.execute(query, params).first()
        if row is None:
            self._logger.warning(
                f"Missing FX rate for {currency} -> {target} on {as_of}"
            )
            raise MissingRateError(currency, as_of, target)
        return coerce_decimal(row.rate)

    def convert(
        self,
        amount: Decimal,
        from_currency: str,
        as_of: date | None,
        to_currency: str,
    ) -> Decimal:
        if from_currency == to_currency:
            return amount
        return amount * self.rate(from_currency, as_of, to_currency)


class StaticRateLookup(RateLookupPort):
    """Rates keyed by ``(currency, target)`` holding ``{date: rate}`` tables.

    The latest rate on or before the requested date applies; a missing date
    uses the latest rate overall.
    """

    def __init__(self, rates: Mapping[tuple[str, str], Mapping[date, Decimal]]) -> None:
        self._rates = {
            (currency.upper(), target.upper()): dict(table)
            for (currency, target), table in rates.items()
        }

    def rate(self, currency: str, as_of: date | None, target: str) -> Decimal:
        table = self._rates.get((currency.upper(), target.upper()), {})
        candidates = [
            day for day in table if as_of is None or day <= as_of
        ]
        if not candidates:
            raise MissingRateError(currency, as_of, target)
        return coerce_decimal(table[max(candidates)])

    def convert(
        self,
        amount: Decimal,
        from_currency: str,
        as_of: date | None,
        to_currency: str,
    ) -> Decimal:
        if from_currency.upper() == to_currency.upper():
            return amount
        return amount * self.rate(from_currency, as_of, to_currency)


__all__ = ["SqlAlchemyRateLookup", "StaticRateLookup"]
