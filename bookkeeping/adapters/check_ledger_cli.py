"""CLI adapter to check the ledger for unbalanced vouchers and sign errors.

This module wires the CheckLedgerUseCase to the configured record source and
prints one line per finding.
"""

import sys

from bookkeeping.application.use_cases.check_ledger import CheckLedgerUseCase
from bookkeeping.infrastructure.container import build_record_source
from bookkeeping.infrastructure.logging.logger import (
    get_app_logger,
    get_usage_logger,
)


def main() -> int:
    """Run the ledger checks and print the findings.

    Returns:
        int: 0 when the ledger is consistent, 1 otherwise.
    """
    logger = get_app_logger()
    get_usage_logger().info("check_ledger started")
    use_case = CheckLedgerUseCase(build_record_source(), logger=logger)

    report = use_case.execute()

    for item in report.unbalanced:
        print(
            f"Unbalanced voucher {item.voucher_id} ({item.date}): "
            f"{item.currency} {item.imbalance}"
        )
    for item in report.violations:
        subtitle = f"{item.subtitle:02d}" if item.subtitle is not None else ""
        print(
            f"Wrong sign T{item.title:04d}{subtitle} {item.content or ''} "
            f"on {item.date}: {item.balance}"
        )
    print(
        f"Checked ledger: {len(report.unbalanced)} unbalanced vouchers, "
        f"{len(report.violations)} sign violations."
    )
    return 0 if report.ok else 1


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
