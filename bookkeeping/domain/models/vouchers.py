"""Domain models for vouchers, their details and distributed items."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from uuid import UUID


class VoucherType(Enum):
    """Kind of accounting voucher."""

    ORDINARY = "ordinary"
    CARRY = "carry"
    ANNUAL_CARRY = "annual_carry"
    DEPRECIATION = "depreciation"
    DEVALUE = "devalue"
    AMORTIZATION = "amortization"
    UNCERTAIN = "uncertain"


@dataclass(frozen=True)
class VoucherDetail:
    """Line item of a voucher.

    Attributes:
        title: Four-digit account title.
        subtitle: Optional two-digit sub-title.
        content: Free-text content tag.
        remark: Free-text remark.
        fund: Signed amount, debit positive.
        currency: Currency mnemonic of the amount.
        user: Owner of the line item.
    """

    title: int
    fund: Decimal
    subtitle: int | None = None
    content: str | None = None
    remark: str | None = None
    currency: str = "CNY"
    user: str | None = None


@dataclass(frozen=True)
class Voucher:
    """Accounting entry grouping balanced details."""

    id: str | None
    date: date | None
    details: tuple[VoucherDetail, ...] = ()
    type: VoucherType = VoucherType.ORDINARY
    remark: str | None = None

    def records(self) -> list["DetailRecord"]:
        """Return one record per detail, bound to this voucher."""
        return [DetailRecord(voucher=self, detail=detail) for detail in self.details]


@dataclass(frozen=True)
class DetailRecord:
    """A detail seen together with its voucher, as grouped by subtotals."""

    voucher: Voucher
    detail: VoucherDetail

    @property
    def voucher_id(self) -> str | None:
        return self.voucher.id

    @property
    def date(self) -> date | None:
        return self.voucher.date

    @property
    def title(self) -> int:
        return self.detail.title

    @property
    def subtitle(self) -> int | None:
        return self.detail.subtitle

    @property
    def content(self) -> str | None:
        return self.detail.content

    @property
    def remark(self) -> str | None:
        return self.detail.remark

    @property
    def currency(self) -> str:
        return self.detail.currency

    @property
    def user(self) -> str | None:
        return self.detail.user

    @property
    def fund(self) -> Decimal:
        return self.detail.fund


@dataclass(frozen=True)
class DistributedRecord:
    """Asset or amortization header; schedules are kept elsewhere."""

    id: UUID | str | None
    name: str | None = None
    user: str | None = None
    date: date | None = None
    value: Decimal | None = None
    remark: str | None = None


__all__ = [
    "VoucherType",
    "VoucherDetail",
    "Voucher",
    "DetailRecord",
    "DistributedRecord",
]
