"""Use case to run weighted named-query reports."""

from dataclasses import dataclass
from decimal import Decimal

from bookkeeping.application.ports.named_query_lookup import NamedQueryLookupPort
from bookkeeping.application.presenters.report import (
    ReportSubtotalPresenter,
    join_path,
    not_null_join,
)
from bookkeeping.application.use_cases.get_subtotal import GetSubtotalUseCase
from bookkeeping.domain.constants import DEFAULT_REPORT_MAX_DEPTH
from bookkeeping.domain.errors import (
    MalformedQueryError,
    NamedQueryCycleError,
    NamedQueryDepthError,
)
from bookkeeping.domain.models.named_query import (
    NamedQuery,
    NamedQueryGroup,
    NamedQueryLeaf,
    NamedQueryReference,
)
from bookkeeping.infrastructure.logging.logger import get_app_logger


@dataclass(frozen=True)
class ReportResult:
    """Weighted report output.

    Attributes:
        total: Sum of every leaf value multiplied by its coefficient chain.
        text: One line per subtotal leaf, empty blocks skipped.
    """

    total: Decimal
    text: str


class RunReportUseCase:
    """Evaluate a named-query tree into a weighted report."""

    def __init__(
        self,
        subtotal_use_case: GetSubtotalUseCase,
        named_queries: NamedQueryLookupPort | None = None,
        logger=None,
        max_depth: int = DEFAULT_REPORT_MAX_DEPTH,
        presenter_options: dict | None = None,
    ) -> None:
        """Initialize the use case.

        Args:
            subtotal_use_case: Use case computing each leaf subtotal.
            named_queries: Port resolving named-query references.
            logger: Optional logger compatible with logging.Logger-like API.
            max_depth: Maximum nesting of groups and references.
            presenter_options: Keyword arguments for the report presenter
                (title lookup, collation, home currency and user).
        """
        self._subtotal = subtotal_use_case
        self._named_queries = named_queries
        self._logger = logger or get_app_logger()
        self._max_depth = max_depth
        self._presenter_options = dict(presenter_options or {})

    def execute(self, query: NamedQuery, path: str = "") -> ReportResult:
        """Return the weighted report of a named query.

        Raises:
            NamedQueryCycleError: When a reference chain revisits a template.
            NamedQueryDepthError: When nesting exceeds ``max_depth``.
        """
        total, text = self._visit(query, path, Decimal("1"), 0, frozenset())
        self._logger.info(f"Report computed: total={total}")
        return ReportResult(total=total, text=text)

    def _visit(
        self,
        query: NamedQuery,
        path: str,
        coefficient: Decimal,
        depth: int,
        chain: frozenset,
    ) -> tuple[Decimal, str]:
        if depth > self._max_depth:
            raise NamedQueryDepthError(
                f"Named query nesting exceeds {self._max_depth} at {path or '/'}"
            )
        if isinstance(query, NamedQueryReference):
            return self._visit_reference(query, path, coefficient, depth, chain)
        if isinstance(query, NamedQueryGroup):
            weight = coefficient * query.coefficient
            group_path = join_path(path, query.name)
            results = [
                self._visit(item, group_path, weight, depth + 1, chain)
                for item in query.items
            ]
            total = sum((value for value, _ in results), Decimal("0"))
            return total, not_null_join(text for _, text in results)
        if isinstance(query, NamedQueryLeaf):
            weight = coefficient * query.coefficient
            node = self._subtotal.execute(query.query)
            presenter = ReportSubtotalPresenter(
                join_path(path, query.name),
                weight,
                **self._presenter_options,
            )
            return presenter.present(node, query.query.subtotal)
        raise MalformedQueryError(f"Unknown named query: {type(query).__name__}")

    def _visit_reference(
        self,
        query: NamedQueryReference,
        path: str,
        coefficient: Decimal,
        depth: int,
        chain: frozenset,
    ) -> tuple[Decimal, str]:
        if query.name in chain:
            raise NamedQueryCycleError(
                f"Named query {query.name!r} references itself"
            )
        if self._named_queries is None:
            raise MalformedQueryError(
                f"Cannot resolve named query {query.name!r} without a lookup"
            )
        template = self._named_queries.get(query.name)
        self._logger.debug(f"Resolved named query reference {query.name}")
        return self._visit(
            template,
            path,
            coefficient * query.coefficient,
            depth + 1,
            chain | {query.name},
        )


__all__ = ["RunReportUseCase", "ReportResult"]
