"""Use case to select vouchers matching a compound query."""

from bookkeeping.application.ports.record_source import RecordSourcePort
from bookkeeping.domain.models.query import CompoundQuery
from bookkeeping.domain.models.vouchers import DistributedRecord, Voucher
from bookkeeping.domain.policies.query_guard import guard_query
from bookkeeping.domain.services.predicates import (
    compile_filter,
    compile_voucher_filter,
)
from bookkeeping.infrastructure.logging.logger import get_app_logger


class SelectVouchersUseCase:
    """Select vouchers, or distributed items, from the record source."""

    def __init__(
        self,
        record_source: RecordSourcePort,
        logger=None,
        allow_dangerous: bool = True,
    ) -> None:
        """Initialize the use case.

        Args:
            record_source: Port providing ledger records.
            logger: Optional logger compatible with logging.Logger-like API.
            allow_dangerous: Whether queries without a provable bound run.
        """
        self._record_source = record_source
        self._logger = logger or get_app_logger()
        self._allow_dangerous = allow_dangerous

    def execute(self, query: CompoundQuery | None) -> list[Voucher]:
        """Return the vouchers matching the query.

        Detail-level queries match a voucher when one of its details matches.

        Args:
            query: Voucher-level, detail-level or mixed compound query.

        Returns:
            list[Voucher]: Matching vouchers in storage order.

        Raises:
            DangerousQueryError: When the query is dangerous and the use
                case was built with ``allow_dangerous=False``.
        """
        guard_query(
            query,
            allow_dangerous=self._allow_dangerous,
            logger=self._logger,
        )
        predicate = compile_voucher_filter(query)
        vouchers = self._record_source.fetch_vouchers(predicate)
        self._logger.info(f"Selected {len(vouchers)} vouchers")
        return vouchers

    def execute_distributed(
        self,
        query: CompoundQuery | None,
    ) -> list[DistributedRecord]:
        """Return the assets and amortizations matching the query."""
        guard_query(
            query,
            allow_dangerous=self._allow_dangerous,
            logger=self._logger,
        )
        records = self._record_source.fetch_distributed(compile_filter(query))
        self._logger.info(f"Selected {len(records)} distributed records")
        return records


__all__ = ["SelectVouchersUseCase"]
