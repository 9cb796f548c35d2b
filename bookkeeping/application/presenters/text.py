"""Tab-separated text rendering of subtotal trees."""

from bookkeeping.application.presenters.labels import (
    format_amount,
    format_date,
    format_key,
)
from bookkeeping.domain.models.subtotal import AggregationNode, GroupLevel
from bookkeeping.domain.services.traversal import SubtotalVisitor


class TextSubtotalPresenter(SubtotalVisitor[str]):
    """Render one line per node, indented by depth.

    Each line is ``<label>\\t<amount>``; running-balance readings of a leaf
    follow it one level deeper.
    """

    def __init__(self, *, title_lookup=None, **kwargs) -> None:
        super().__init__(**kwargs)
        self._title_lookup = title_lookup

    def visit_group(self, node: AggregationNode, level: GroupLevel | None) -> str:
        amount = format_amount(node.fund, self.spec.gather)
        if self.depth == 0:
            lines = [amount]
        else:
            label = format_key(
                level,
                node.key,
                title_lookup=self._title_lookup,
                title=self.key_of(GroupLevel.TITLE),
            )
            lines = [f"{self._indent(self.depth - 1)}{label}\t{amount}"]
        if node.series is not None:
            indent = self._indent(self.depth)
            interval = self.spec.aggregation_interval
            for reading in node.series:
                lines.append(
                    f"{indent}{format_date(reading.date, interval)}\t"
                    f"{format_amount(reading.fund, self.spec.gather)}"
                )
        lines.extend(block for block in self.visit_children(node) if block)
        return "\n".join(lines)

    @staticmethod
    def _indent(depth: int) -> str:
        return "\t" * depth


__all__ = ["TextSubtotalPresenter"]
