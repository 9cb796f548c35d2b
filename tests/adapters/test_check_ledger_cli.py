"""Tests for the check_ledger_cli adapter."""

from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

from bookkeeping.adapters import check_ledger_cli
from bookkeeping.application.use_cases.check_ledger import (
    LedgerCheckReport,
    SignViolation,
    UnbalancedVoucher,
)


def _patch(monkeypatch, report):
    fake_logger = MagicMock()
    fake_source = object()
    fake_use_case = MagicMock()
    fake_use_case.execute.return_value = report

    monkeypatch.setattr(check_ledger_cli, "get_app_logger", lambda: fake_logger)
    monkeypatch.setattr(check_ledger_cli, "get_usage_logger", lambda: MagicMock())
    monkeypatch.setattr(check_ledger_cli, "build_record_source", lambda: fake_source)

    def _fake_use_case(record_source, logger):
        assert record_source is fake_source
        assert logger is fake_logger
        return fake_use_case

    monkeypatch.setattr(check_ledger_cli, "CheckLedgerUseCase", _fake_use_case)
    return fake_use_case


def test_main_prints_findings(monkeypatch, capsys):
    """The CLI should print every finding and fail."""
    report = LedgerCheckReport(
        unbalanced=[UnbalancedVoucher("v9", date(2024, 1, 2), "USD", Decimal("3"))],
        violations=[SignViolation(1001, 2, "cash", date(2024, 1, 3), Decimal("-5"))],
    )
    fake_use_case = _patch(monkeypatch, report)

    exit_code = check_ledger_cli.main()

    fake_use_case.execute.assert_called_once()
    out = capsys.readouterr().out
    assert "Unbalanced voucher v9" in out
    assert "Wrong sign T100102 cash on 2024-01-03: -5" in out
    assert "1 unbalanced vouchers, 1 sign violations" in out
    assert exit_code == 1


def test_main_succeeds_on_clean_ledger(monkeypatch, capsys):
    """A clean ledger should exit with status 0."""
    _patch(monkeypatch, LedgerCheckReport())

    assert check_ledger_cli.main() == 0
    assert "0 unbalanced vouchers" in capsys.readouterr().out
