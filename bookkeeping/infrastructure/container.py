"""Composition root for wiring infrastructure adapters."""

from collections.abc import Iterable

from bookkeeping.application.ports.database import DatabaseEnginePort
from bookkeeping.application.ports.rate_lookup import RateLookupPort
from bookkeeping.application.ports.record_source import RecordSourcePort
from bookkeeping.application.use_cases.check_ledger import CheckLedgerUseCase
from bookkeeping.application.use_cases.get_subtotal import GetSubtotalUseCase
from bookkeeping.application.use_cases.run_report import RunReportUseCase
from bookkeeping.domain.models.named_query import NamedQuery
from bookkeeping.domain.models.vouchers import Voucher
from bookkeeping.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from bookkeeping.infrastructure.logging.logger import get_app_logger
from bookkeeping.infrastructure.memory_record_source import InMemoryRecordSource
from bookkeeping.infrastructure.named_query_templates import (
    InMemoryNamedQueryLookup,
)
from bookkeeping.infrastructure.rate_lookup import SqlAlchemyRateLookup
from bookkeeping.infrastructure.settings import LedgerSettings
from bookkeeping.infrastructure.sqlalchemy_record_source import (
    SqlAlchemyRecordSource,
)


def build_database_adapter() -> DatabaseEnginePort:
    """Return the database adapter instance."""
    return SqlAlchemyDatabaseEngineAdapter()


def build_record_source(
    db_port: DatabaseEnginePort | None = None,
    settings: LedgerSettings | None = None,
    vouchers: Iterable[Voucher] = (),
) -> RecordSourcePort:
    """Return the configured record source adapter."""
    resolved = settings or LedgerSettings.from_env()
    if resolved.backend == "memory":
        return InMemoryRecordSource(vouchers)
    resolved_db = db_port or build_database_adapter()
    return SqlAlchemyRecordSource(resolved_db, logger=get_app_logger())


def build_rate_lookup(
    db_port: DatabaseEnginePort | None = None,
) -> RateLookupPort:
    """Return the SQL-backed FX rate lookup."""
    resolved_db = db_port or build_database_adapter()
    return SqlAlchemyRateLookup(resolved_db, logger=get_app_logger())


def build_subtotal_use_case(
    record_source: RecordSourcePort | None = None,
    rate_lookup: RateLookupPort | None = None,
) -> GetSubtotalUseCase:
    """Return the subtotal use case wired to the configured adapters."""
    return GetSubtotalUseCase(
        record_source or build_record_source(),
        rate_lookup=rate_lookup,
        logger=get_app_logger(),
    )


def build_report_use_case(
    templates: Iterable[NamedQuery] = (),
    subtotal_use_case: GetSubtotalUseCase | None = None,
    settings: LedgerSettings | None = None,
    title_lookup=None,
) -> RunReportUseCase:
    """Return the report use case with the configured depth guard."""
    resolved = settings or LedgerSettings.from_env()
    return RunReportUseCase(
        subtotal_use_case or build_subtotal_use_case(),
        named_queries=InMemoryNamedQueryLookup(templates),
        logger=get_app_logger(),
        max_depth=resolved.report_max_depth,
        presenter_options={
            "title_lookup": title_lookup,
            "base_currency": resolved.base_currency,
            "client_user": resolved.client_user,
        },
    )


def build_check_ledger_use_case(
    record_source: RecordSourcePort | None = None,
) -> CheckLedgerUseCase:
    """Return the ledger check use case."""
    return CheckLedgerUseCase(
        record_source or build_record_source(),
        logger=get_app_logger(),
    )


__all__ = [
    "build_database_adapter",
    "build_record_source",
    "build_rate_lookup",
    "build_subtotal_use_case",
    "build_report_use_case",
    "build_check_ledger_use_case",
]
