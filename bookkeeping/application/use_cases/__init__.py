"""Application use cases package."""

from .check_ledger import (
    CheckLedgerUseCase,
    LedgerCheckReport,
    SignViolation,
    UnbalancedVoucher,
)
from .get_subtotal import GetSubtotalUseCase
from .run_report import ReportResult, RunReportUseCase
from .select_vouchers import SelectVouchersUseCase

__all__ = [
    "CheckLedgerUseCase",
    "GetSubtotalUseCase",
    "LedgerCheckReport",
    "ReportResult",
    "RunReportUseCase",
    "SelectVouchersUseCase",
    "SignViolation",
    "UnbalancedVoucher",
]
