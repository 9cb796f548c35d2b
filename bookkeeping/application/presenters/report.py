"""Weighted report rendering used by named-query reports."""

from decimal import Decimal

from bookkeeping.application.presenters.labels import format_date, format_key
from bookkeeping.domain.models.subtotal import AggregationNode, GroupLevel
from bookkeeping.domain.services.traversal import SubtotalVisitor

ReportBlock = tuple[Decimal, str]


def not_null_join(blocks) -> str:
    """Join non-empty text blocks with a newline."""
    return "\n".join(block for block in blocks if block)


def format_coefficient(coefficient: Decimal) -> str:
    return f"{coefficient.normalize():f}"


def join_path(*parts: str) -> str:
    return "/".join(part for part in parts if part)


class ReportSubtotalPresenter(SubtotalVisitor[ReportBlock]):
    """Render leaves as ``path\\tvalue\\tcoefficient\\tweighted`` lines.

    Returns the weighted total together with the text block.

    Attributes:
        base_path: Slash-joined named-query path prefixed to every line.
        coefficient: Product of the weights along the named-query chain.
    """

    def __init__(
        self,
        base_path: str,
        coefficient: Decimal = Decimal("1"),
        *,
        title_lookup=None,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self.base_path = base_path
        self.coefficient = coefficient
        self._title_lookup = title_lookup

    def current_path(self) -> str:
        labels = [
            format_key(
                level,
                key,
                title_lookup=self._title_lookup,
                title=self.key_of(GroupLevel.TITLE),
            )
            for level, key in zip(self.levels, self.path)
        ]
        return join_path(self.base_path, *labels)

    def visit_group(
        self,
        node: AggregationNode,
        level: GroupLevel | None,
    ) -> ReportBlock:
        if node.series is not None:
            return self.series_block(node)
        weighted = node.fund * self.coefficient
        if node.is_leaf:
            return weighted, self.leaf_line(self.current_path(), node.fund)
        blocks = list(self.visit_children(node))
        total = sum((value for value, _ in blocks), Decimal("0"))
        return total, not_null_join(text for _, text in blocks)

    def series_block(self, node: AggregationNode) -> ReportBlock:
        """One line per running-balance reading; the weighted readings add up."""
        path = self.current_path()
        interval = self.spec.aggregation_interval
        lines = [
            self.leaf_line(
                join_path(path, format_date(reading.date, interval)),
                reading.fund,
            )
            for reading in node.series
        ]
        weighted = sum(
            (reading.fund * self.coefficient for reading in node.series),
            Decimal("0"),
        )
        return weighted, not_null_join(lines)

    def leaf_line(self, path: str, value: Decimal) -> str:
        return (
            f"{path}\t{value:.2f}\t{format_coefficient(self.coefficient)}"
            f"\t{value * self.coefficient:.2f}"
        )


__all__ = [
    "ReportBlock",
    "ReportSubtotalPresenter",
    "format_coefficient",
    "join_path",
    "not_null_join",
]
