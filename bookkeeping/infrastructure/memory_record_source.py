"""Record source over in-memory vouchers."""

from collections.abc import Callable, Iterable

from bookkeeping.application.ports.record_source import RecordSourcePort
from bookkeeping.domain.models.vouchers import DistributedRecord, Voucher
from bookkeeping.domain.services.dates import date_sort_key


class InMemoryRecordSource(RecordSourcePort):
    """Record source holding vouchers and distributed items in lists."""

    def __init__(
        self,
        vouchers: Iterable[Voucher] = (),
        distributed: Iterable[DistributedRecord] = (),
    ) -> None:
        self._vouchers = sorted(vouchers, key=lambda v: date_sort_key(v.date))
        self._distributed = list(distributed)

    def add(self, voucher: Voucher) -> None:
        self._vouchers.append(voucher)
        self._vouchers.sort(key=lambda v: date_sort_key(v.date))

    def fetch_vouchers(self, predicate: Callable[[Voucher], bool]) -> list[Voucher]:
        return [voucher for voucher in self._vouchers if predicate(voucher)]

    def fetch_distributed(
        self,
        predicate: Callable[[DistributedRecord], bool],
    ) -> list[DistributedRecord]:
        return [record for record in self._distributed if predicate(record)]


__all__ = ["InMemoryRecordSource"]
