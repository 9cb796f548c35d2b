"""Nested-object rendering of subtotal trees."""

import json
from decimal import Decimal
from typing import Any

from bookkeeping.application.presenters.labels import format_date
from bookkeeping.domain.models.subtotal import AggregationNode, GroupLevel
from bookkeeping.domain.services.traversal import SubtotalVisitor

FIELD_NAMES = {
    GroupLevel.TITLE: "title",
    GroupLevel.SUBTITLE: "subtitle",
    GroupLevel.CONTENT: "content",
    GroupLevel.REMARK: "remark",
    GroupLevel.USER: "user",
    GroupLevel.CURRENCY: "currency",
}
SERIES_FIELD = "aggr"


def field_name(level: GroupLevel) -> str:
    """Return the object field holding children grouped by ``level``."""
    if level.is_date:
        return "date"
    return FIELD_NAMES[level]


class StructuredSubtotalPresenter(SubtotalVisitor[dict]):
    """Render every node as ``{"value": fund}`` plus its keyed children."""

    def visit_group(self, node: AggregationNode, level: GroupLevel | None) -> dict:
        result: dict[str, Any] = {"value": self._value(node.fund)}
        if node.series is not None:
            interval = self.spec.aggregation_interval
            result[SERIES_FIELD] = {
                self._date_key(reading.date, interval): {
                    "value": self._value(reading.fund)
                }
                for reading in node.series
            }
        if node.is_leaf or not node.children:
            return result

        child_level = self.level_at(self.depth + 1)
        ordered = self.ordered_children(node, child_level)
        rendered = self.visit_children(node)
        result[field_name(child_level)] = {
            self._key(child_level, child.key): value
            for child, value in zip(ordered, rendered)
        }
        return result

    def _value(self, fund: Decimal):
        if self.spec.gather.is_count:
            return int(fund)
        return fund

    @staticmethod
    def _date_key(value, level: GroupLevel) -> str:
        if value is None:
            return "null"
        return format_date(value, level)

    def _key(self, level: GroupLevel, key) -> str:
        if level.is_date:
            return self._date_key(key, level)
        if key is None:
            return ""
        if level is GroupLevel.TITLE:
            return f"{key:04d}"
        if level is GroupLevel.SUBTITLE:
            return f"{key:02d}"
        return str(key)


def _json_default(value):
    if isinstance(value, Decimal):
        return str(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def render_json(tree: dict, indent: int | None = 2) -> str:
    """Serialize a structured rendering, keeping decimals exact."""
    return json.dumps(tree, default=_json_default, ensure_ascii=False, indent=indent)


__all__ = [
    "StructuredSubtotalPresenter",
    "field_name",
    "render_json",
    "SERIES_FIELD",
]
