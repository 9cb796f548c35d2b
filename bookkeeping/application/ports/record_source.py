"""Port for retrieving ledger records matching a compiled predicate."""

from collections.abc import Callable
from typing import Protocol

from bookkeeping.domain.models.vouchers import DistributedRecord, Voucher


class RecordSourcePort(Protocol):
    """Storage collaborator.

    Implementations either evaluate the predicate in-process or translate
    ``predicate.query`` into a native filter with the same semantics.
    """

    def fetch_vouchers(self, predicate: Callable[[Voucher], bool]) -> list[Voucher]:
        """Return the vouchers accepted by the predicate, ordered by date."""

    def fetch_distributed(
        self,
        predicate: Callable[[DistributedRecord], bool],
    ) -> list[DistributedRecord]:
        """Return the assets and amortizations accepted by the predicate."""


__all__ = ["RecordSourcePort"]
