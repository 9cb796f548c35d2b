"""Policy applied to queries that cannot be proven bounded."""

import warnings
from logging import Logger

from bookkeeping.domain.errors import DangerousQueryError, UnboundedQueryWarning
from bookkeeping.domain.models.query import CompoundQuery
from bookkeeping.domain.services.query_algebra import is_dangerous


def guard_query(
    query: CompoundQuery | None,
    *,
    allow_dangerous: bool,
    logger: Logger,
) -> bool:
    """Warn about, or refuse, a dangerous query.

    Args:
        query: Compound query about to be executed.
        allow_dangerous: Whether dangerous queries may run.
        logger: Logger used for warnings.

    Returns:
        bool: Whether the query is dangerous.

    Raises:
        DangerousQueryError: When the query is dangerous and not allowed.
    """
    if not is_dangerous(query):
        return False
    if not allow_dangerous:
        logger.error("Refusing dangerous query without override")
        raise DangerousQueryError("Query has no provable bound")
    logger.warning("Query has no provable bound and may match the whole ledger")
    warnings.warn(
        "Query has no provable bound",
        UnboundedQueryWarning,
        stacklevel=3,
    )
    return True


__all__ = ["guard_query"]
