"""Errors and warnings raised by the ledger core.

Callers can filter the advisory warning with the standard ``warnings``
module::

    import warnings
    from bookkeeping.domain.errors import UnboundedQueryWarning

    warnings.filterwarnings("error", category=UnboundedQueryWarning)
"""


class LedgerError(Exception):
    """Base class for all ledger core errors."""


class MalformedQueryError(LedgerError, ValueError):
    """A compound query is structurally invalid.

    The parser is expected to hand over validated trees, so seeing this is
    a programming error on the caller side.
    """


class UnknownOperatorError(LedgerError, ValueError):
    """An operator mark or operator type is not part of the query algebra."""


class MissingRateError(LedgerError, LookupError):
    """No exchange rate is available for a currency on a given date."""

    def __init__(self, currency: str, as_of, target: str | None = None) -> None:
        self.currency = currency
        self.as_of = as_of
        self.target = target
        message = f"Missing FX rate for {currency}"
        if target:
            message += f" to {target}"
        if as_of is not None:
            message += f" on {as_of}"
        super().__init__(message)


class NamedQueryCycleError(LedgerError, ValueError):
    """A named query references itself through its reference chain."""


class NamedQueryDepthError(LedgerError, ValueError):
    """A named query nests deeper than the configured maximum."""


class DangerousQueryError(LedgerError, ValueError):
    """A dangerous query was refused because overrides are disabled."""


class UnboundedQueryWarning(UserWarning):
    """A query has no provable bound and may match the whole ledger."""


__all__ = [
    "LedgerError",
    "MalformedQueryError",
    "UnknownOperatorError",
    "MissingRateError",
    "NamedQueryCycleError",
    "NamedQueryDepthError",
    "DangerousQueryError",
    "UnboundedQueryWarning",
]
