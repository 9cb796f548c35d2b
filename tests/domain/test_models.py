"""Tests for the voucher domain models."""

from datetime import date
from decimal import Decimal

from bookkeeping.domain.models.vouchers import (
    DistributedRecord,
    Voucher,
    VoucherDetail,
    VoucherType,
)


def test_distributed_record_defaults_to_undated() -> None:
    """Distributed items should only require an id."""
    record = DistributedRecord(id="laptop")

    assert record.date is None
    assert record.value is None
    assert record.name is None


def test_voucher_records_expose_detail_and_voucher_fields() -> None:
    """Each record should pair a detail with its voucher's id and date."""
    voucher = Voucher(
        id="v1",
        date=date(2024, 4, 1),
        details=(VoucherDetail(1001, Decimal("5"), content="cash"),),
    )

    (record,) = voucher.records()

    assert voucher.type is VoucherType.ORDINARY
    assert record.voucher_id == "v1"
    assert record.date == date(2024, 4, 1)
    assert record.content == "cash"
    assert record.currency == "CNY"
