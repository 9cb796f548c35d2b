"""Settings helpers for infrastructure adapters."""

from dataclasses import dataclass
import os

from bookkeeping.domain.constants import (
    DEFAULT_BASE_CURRENCY,
    DEFAULT_CLIENT_USER,
    DEFAULT_REPORT_MAX_DEPTH,
)
from bookkeeping.infrastructure.logging.logger import get_app_logger

SUPPORTED_BACKENDS = ("sqlalchemy", "memory")


@dataclass(frozen=True)
class LedgerSettings:
    """Settings for the ledger backend and presentation defaults.

    Attributes:
        backend: Record source identifier (sqlalchemy or memory).
        base_currency: Currency listed first and used as home currency.
        client_user: User listed first under user levels.
        report_max_depth: Nesting limit for named-query reports.
    """

    backend: str = "sqlalchemy"
    base_currency: str = DEFAULT_BASE_CURRENCY
    client_user: str = DEFAULT_CLIENT_USER
    report_max_depth: int = DEFAULT_REPORT_MAX_DEPTH

    @classmethod
    def from_env(cls) -> "LedgerSettings":
        """Build settings from environment variables.

        Returns:
            LedgerSettings: Settings sourced from environment variables.

        Raises:
            ValueError: When the backend is unknown or the depth is not a
                positive integer.
        """
        backend = os.getenv("LEDGER_BACKEND", "sqlalchemy").strip().lower()
        if backend not in SUPPORTED_BACKENDS:
            raise ValueError(f"Unsupported ledger backend: {backend}")
        base_currency = (
            os.getenv("LEDGER_BASE_CURRENCY", DEFAULT_BASE_CURRENCY).strip().upper()
            or DEFAULT_BASE_CURRENCY
        )
        client_user = (
            os.getenv("LEDGER_CLIENT_USER", DEFAULT_CLIENT_USER).strip()
            or DEFAULT_CLIENT_USER
        )
        return cls(
            backend=backend,
            base_currency=base_currency,
            client_user=client_user,
            report_max_depth=cls._parse_depth(
                os.getenv("LEDGER_REPORT_MAX_DEPTH")
            ),
        )

    @staticmethod
    def _parse_depth(raw: str | None) -> int:
        if raw is None or not raw.strip():
            return DEFAULT_REPORT_MAX_DEPTH
        try:
            depth = int(raw)
        except ValueError:
            raise ValueError(
                f"LEDGER_REPORT_MAX_DEPTH must be an integer: {raw!r}"
            ) from None
        if depth <= 0:
            get_app_logger().warning(
                f"Ignoring non-positive LEDGER_REPORT_MAX_DEPTH={depth}"
            )
            return DEFAULT_REPORT_MAX_DEPTH
        return depth


__all__ = ["LedgerSettings", "SUPPORTED_BACKENDS"]
