"""Use case to compute a grouped subtotal over matching details."""

from bookkeeping.application.ports.rate_lookup import RateLookupPort
from bookkeeping.application.ports.record_source import RecordSourcePort
from bookkeeping.domain.models.query import (
    CompoundQuery,
    VoucherAtom,
    intersect,
    leaf,
)
from bookkeeping.domain.models.subtotal import AggregationNode, GroupedQuery
from bookkeeping.domain.models.vouchers import DetailRecord
from bookkeeping.domain.policies.query_guard import guard_query
from bookkeeping.domain.services.aggregation import (
    build_aggregation,
    matched_entries,
)
from bookkeeping.domain.services.predicates import (
    compile_filter,
    compile_voucher_filter,
)
from bookkeeping.infrastructure.logging.logger import get_app_logger


def voucher_scope(grouped_query: GroupedQuery) -> CompoundQuery | None:
    """Return the voucher query selecting every voucher with a matching detail."""
    details = None
    if grouped_query.details is not None:
        details = leaf(VoucherAtom(details=grouped_query.details))
    if grouped_query.vouchers is None:
        return details
    return intersect(grouped_query.vouchers, details)


class GetSubtotalUseCase:
    """Compile, fetch and aggregate a grouped query."""

    def __init__(
        self,
        record_source: RecordSourcePort,
        rate_lookup: RateLookupPort | None = None,
        logger=None,
        allow_dangerous: bool = True,
    ) -> None:
        self._record_source = record_source
        self._rate_lookup = rate_lookup
        self._logger = logger or get_app_logger()
        self._allow_dangerous = allow_dangerous

    def execute(self, grouped_query: GroupedQuery) -> AggregationNode:
        """Return the subtotal tree of a grouped query.

        Args:
            grouped_query: Detail filter, voucher filter and subtotal request.

        Returns:
            AggregationNode: Root of the subtotal tree.

        Raises:
            MissingRateError: When currency normalization lacks a rate.
        """
        records = self.fetch_records(grouped_query)
        root = build_aggregation(
            grouped_query.subtotal,
            matched_entries(records),
            self._rate_lookup,
            logger=self._logger,
        )
        self._logger.info(
            f"Subtotal computed over {len(records)} details: total={root.fund}"
        )
        return root

    def fetch_records(self, grouped_query: GroupedQuery) -> list[DetailRecord]:
        """Return the details matching the grouped query with their vouchers."""
        scope = voucher_scope(grouped_query)
        guard_query(
            scope,
            allow_dangerous=self._allow_dangerous,
            logger=self._logger,
        )
        vouchers = self._record_source.fetch_vouchers(compile_voucher_filter(scope))
        detail_predicate = compile_filter(grouped_query.details)
        return [
            record
            for voucher in vouchers
            for record in voucher.records()
            if detail_predicate(record)
        ]


__all__ = ["GetSubtotalUseCase", "voucher_scope"]
