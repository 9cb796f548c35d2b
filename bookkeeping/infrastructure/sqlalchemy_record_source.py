"""Record source reading vouchers from the ledger SQL database."""

from collections.abc import Callable
from datetime import date, datetime

from sqlalchemy import text

from bookkeeping.application.ports.database import DatabaseEnginePort
from bookkeeping.application.ports.record_source import RecordSourcePort
from bookkeeping.domain.constants import DEFAULT_BASE_CURRENCY
from bookkeeping.domain.models.vouchers import (
    DistributedRecord,
    Voucher,
    VoucherDetail,
    VoucherType,
)
from bookkeeping.infrastructure.logging.logger import get_app_logger
from bookkeeping.utils.decimal_utils import coerce_decimal

SELECT_VOUCHERS_SQL = text(
    """
    SELECT id, date, type, remark
    FROM vouchers
    ORDER BY date, id
    """
)

SELECT_DETAILS_SQL = text(
    """
    SELECT voucher_id, user_name, currency, title, subtitle,
           content, remark, fund
    FROM details
    ORDER BY voucher_id, position
    """
)

SELECT_DISTRIBUTED_SQL = text(
    """
    SELECT id, user_name, name, date, value, remark
    FROM distributed
    ORDER BY date, id
    """
)


def _as_date(value) -> date | None:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def _as_type(value) -> VoucherType:
    if not value:
        return VoucherType.ORDINARY
    return VoucherType(str(value).lower())


def _detail_from_row(row) -> VoucherDetail:
    return VoucherDetail(
        title=int(row.title),
        fund=coerce_decimal(row.fund),
        subtitle=int(row.subtitle) if row.subtitle is not None else None,
        content=row.content,
        remark=row.remark,
        currency=(row.currency or DEFAULT_BASE_CURRENCY).upper(),
        user=row.user_name,
    )


class SqlAlchemyRecordSource(RecordSourcePort):
    """Record source backed by the ``vouchers`` and ``details`` tables.

    The compiled predicate is evaluated in-process on rebuilt vouchers.
    """

    def __init__(self, db_port: DatabaseEnginePort, logger=None) -> None:
        """Initialize the source adapter.

        Args:
            db_port: Port providing access to the ledger engine.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._db_port = db_port
        self._logger = logger or get_app_logger()

    def fetch_vouchers(self, predicate: Callable[[Voucher], bool]) -> list[Voucher]:
        """Return the vouchers accepted by the predicate, ordered by date."""
        engine = self._db_port.get_ledger_engine()
        with engine.connect() as conn:
            voucher_rows = conn.execute(SELECT_VOUCHERS_SQL).all()
            detail_rows = conn.execute(SELECT_DETAILS_SQL).all()

        details: dict[str, list[VoucherDetail]] = {}
        for row in detail_rows:
            details.setdefault(str(row.voucher_id), []).append(_detail_from_row(row))

        vouchers = [
            Voucher(
                id=str(row.id),
                date=_as_date(row.date),
                details=tuple(details.get(str(row.id), ())),
                type=_as_type(row.type),
                remark=row.remark,
            )
            for row in voucher_rows
        ]
        matched = [voucher for voucher in vouchers if predicate(voucher)]
        self._logger.debug(
            f"Fetched {len(vouchers)} vouchers, {len(matched)} matched"
        )
        return matched

    def fetch_distributed(
        self,
        predicate: Callable[[DistributedRecord], bool],
    ) -> list[DistributedRecord]:
        """Return the distributed items accepted by the predicate."""
        engine = self._db_port.get_ledger_engine()
        with engine.connect() as conn:
            rows = conn.execute(SELECT_DISTRIBUTED_SQL).all()
        records = [
            DistributedRecord(
                id=str(row.id),
                name=row.name,
                user=row.user_name,
                date=_as_date(row.date),
                value=coerce_decimal(row.value) if row.value is not None else None,
                remark=row.remark,
            )
            for row in rows
        ]
        return [record for record in records if predicate(record)]


__all__ = ["SqlAlchemyRecordSource"]
