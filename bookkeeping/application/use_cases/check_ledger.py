"""Use case to check ledger consistency."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

from bookkeeping.application.ports.record_source import RecordSourcePort
from bookkeeping.domain.models.subtotal import (
    AggregationMode,
    AggregationNode,
    GroupLevel,
    SubtotalSpec,
)
from bookkeeping.domain.policies.ledger_signs import (
    is_sign_checked,
    validate_balance_sign,
)
from bookkeeping.domain.services.aggregation import (
    build_aggregation,
    matched_entries,
)
from bookkeeping.domain.services.predicates import compile_filter
from bookkeeping.infrastructure.logging.logger import get_app_logger
from bookkeeping.utils.decimal_utils import coerce_decimal, is_zero

SIGN_CHECK_SPEC = SubtotalSpec(
    levels=(GroupLevel.TITLE, GroupLevel.SUBTITLE, GroupLevel.CONTENT),
    aggregation=AggregationMode.CHANGED_DAY,
)


@dataclass(frozen=True)
class UnbalancedVoucher:
    """Voucher whose details do not sum to zero in one currency."""

    voucher_id: str | None
    date: date | None
    currency: str
    imbalance: Decimal


@dataclass(frozen=True)
class SignViolation:
    """First day a running balance took the wrong sign.

    Attributes:
        title: Account title of the group.
        subtitle: Sub-title of the group.
        content: Content of the group.
        date: Date of the offending reading.
        balance: Running balance on that date.
    """

    title: int
    subtitle: int | None
    content: str | None
    date: date | None
    balance: Decimal


@dataclass(frozen=True)
class LedgerCheckReport:
    unbalanced: list[UnbalancedVoucher] = field(default_factory=list)
    violations: list[SignViolation] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.unbalanced and not self.violations


class CheckLedgerUseCase:
    """Run the balance and sign checks over the whole ledger."""

    def __init__(self, record_source: RecordSourcePort, logger=None) -> None:
        self._record_source = record_source
        self._logger = logger or get_app_logger()

    def execute(self) -> LedgerCheckReport:
        """Run both checks and return their findings."""
        report = LedgerCheckReport(
            unbalanced=self.unbalanced_vouchers(),
            violations=self.sign_violations(),
        )
        self._logger.info(
            f"Ledger check: unbalanced={len(report.unbalanced)}, "
            f"sign_violations={len(report.violations)}"
        )
        return report

    def unbalanced_vouchers(self) -> list[UnbalancedVoucher]:
        """Return one entry per voucher and currency not summing to zero."""
        findings: list[UnbalancedVoucher] = []
        for voucher in self._record_source.fetch_vouchers(compile_filter(None)):
            totals: dict[str, Decimal] = {}
            for detail in voucher.details:
                totals[detail.currency] = totals.get(
                    detail.currency, Decimal("0")
                ) + coerce_decimal(detail.fund)
            for currency, total in totals.items():
                if is_zero(total):
                    continue
                self._logger.warning(
                    f"Voucher {voucher.id} is unbalanced in {currency}: {total}"
                )
                findings.append(
                    UnbalancedVoucher(
                        voucher_id=voucher.id,
                        date=voucher.date,
                        currency=currency,
                        imbalance=total,
                    )
                )
        return findings

    def sign_violations(self) -> list[SignViolation]:
        """Return the first wrong-signed running balance of every group."""
        vouchers = self._record_source.fetch_vouchers(compile_filter(None))
        records = [record for voucher in vouchers for record in voucher.records()]
        root = build_aggregation(
            SIGN_CHECK_SPEC,
            matched_entries(records),
            logger=self._logger,
        )
        findings: list[SignViolation] = []
        for keys, leaf in _iter_leaves(root):
            title, subtitle, content = keys
            if title is None or not is_sign_checked(title):
                continue
            for reading in leaf.series or ():
                if validate_balance_sign(title, reading.fund, self._logger):
                    continue
                findings.append(
                    SignViolation(
                        title=title,
                        subtitle=subtitle,
                        content=content,
                        date=reading.date,
                        balance=reading.fund,
                    )
                )
                break
        return findings


def _iter_leaves(root: AggregationNode):
    stack = [((), root)]
    while stack:
        keys, node = stack.pop()
        if node.is_leaf:
            yield keys, node
            continue
        for child in reversed(list(node.children.values())):
            stack.append((keys + (child.key,), child))


__all__ = [
    "CheckLedgerUseCase",
    "LedgerCheckReport",
    "SignViolation",
    "UnbalancedVoucher",
]
