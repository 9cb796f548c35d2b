"""Configuration-driven traversal of subtotal trees.

The level of a node is looked up from its depth in the subtotal request, so
a single visitor handles any configured hierarchy.
"""

import unicodedata
from collections.abc import Callable
from typing import Any, Generic, TypeVar

from pypinyin import Style, lazy_pinyin

from bookkeeping.domain.constants import (
    DEFAULT_BASE_CURRENCY,
    DEFAULT_CLIENT_USER,
)
from bookkeeping.domain.models.subtotal import (
    AggregationNode,
    GroupLevel,
    SubtotalSpec,
)
from bookkeeping.domain.services.dates import date_sort_key

T = TypeVar("T")

Collation = Callable[[str], Any]


def default_collation(value: str) -> tuple[tuple[str, ...], str]:
    """zh-CN order: Han characters by tone-numbered pinyin, Latin text
    accent- and case-insensitive, with the raw text as tie breaker.
    """
    decomposed = unicodedata.normalize("NFKD", value)
    folded = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return tuple(lazy_pinyin(folded.casefold(), style=Style.TONE3)), value


class SubtotalVisitor(Generic[T]):
    """Base visitor over an aggregation tree.

    Subclasses override ``visit_group`` (and optionally the per-level
    callbacks, ``visit_root`` or ``visit_leaf``) and call
    ``visit_children`` to descend.

    Attributes:
        collation: Sort key for free-text levels.
        base_currency: Currency listed first under a currency level.
        client_user: User listed first under a user level.
    """

    def __init__(
        self,
        *,
        collation: Collation | None = None,
        base_currency: str = DEFAULT_BASE_CURRENCY,
        client_user: str = DEFAULT_CLIENT_USER,
    ) -> None:
        self.collation = collation or default_collation
        self.base_currency = base_currency
        self.client_user = client_user
        self.spec = SubtotalSpec()
        self.levels: tuple[GroupLevel, ...] = ()
        self.depth = 0
        self.path: list[Any] = []

    def present(self, root: AggregationNode, spec: SubtotalSpec) -> T:
        """Traverse a tree built for ``spec`` and return the rendering."""
        self.spec = spec
        self.levels = spec.resolved_levels
        self.depth = 0
        self.path = []
        return self.visit(root)

    def level_at(self, depth: int) -> GroupLevel | None:
        if depth == 0 or depth > len(self.levels):
            return None
        return self.levels[depth - 1]

    def key_of(self, level: GroupLevel) -> Any:
        """Return the key of the enclosing node grouped by ``level``."""
        for index, item in enumerate(self.levels[: len(self.path)]):
            if item is level:
                return self.path[index]
        return None

    @property
    def level(self) -> GroupLevel | None:
        return self.level_at(self.depth)

    def visit(self, node: AggregationNode) -> T:
        level = self.level
        if node.is_leaf:
            return self.visit_leaf(node, level)
        if level is None:
            return self.visit_root(node)
        if level.is_date:
            return self.visit_date(node, level)
        handler = {
            GroupLevel.TITLE: self.visit_title,
            GroupLevel.SUBTITLE: self.visit_subtitle,
            GroupLevel.CONTENT: self.visit_content,
            GroupLevel.REMARK: self.visit_remark,
            GroupLevel.USER: self.visit_user,
            GroupLevel.CURRENCY: self.visit_currency,
        }[level]
        return handler(node)

    def visit_children(self, node: AggregationNode) -> list[T]:
        """Visit the children of ``node`` in collation order."""
        self.depth += 1
        results: list[T] = []
        try:
            for child in self.ordered_children(node, self.level):
                self.path.append(child.key)
                try:
                    results.append(self.visit(child))
                finally:
                    self.path.pop()
        finally:
            self.depth -= 1
        return results

    def ordered_children(
        self,
        node: AggregationNode,
        level: GroupLevel | None,
    ) -> list[AggregationNode]:
        children = list(node.children.values())
        if level is None:
            return children
        return sorted(children, key=lambda child: self.sort_key(child.key, level))

    def sort_key(self, key: Any, level: GroupLevel) -> tuple:
        if level.is_date:
            return date_sort_key(key)
        if level in (GroupLevel.TITLE, GroupLevel.SUBTITLE):
            return (key is not None, key or 0)
        if key is None:
            return (0, 0, ())
        if level is GroupLevel.CURRENCY:
            home = 0 if key == self.base_currency else 1
            return (1, home, self.collation(key))
        if level is GroupLevel.USER:
            home = 0 if key == self.client_user else 1
            return (1, home, self.collation(key))
        return (1, 0, self.collation(key))

    def visit_root(self, node: AggregationNode) -> T:
        return self.visit_group(node, None)

    def visit_title(self, node: AggregationNode) -> T:
        return self.visit_group(node, GroupLevel.TITLE)

    def visit_subtitle(self, node: AggregationNode) -> T:
        return self.visit_group(node, GroupLevel.SUBTITLE)

    def visit_content(self, node: AggregationNode) -> T:
        return self.visit_group(node, GroupLevel.CONTENT)

    def visit_remark(self, node: AggregationNode) -> T:
        return self.visit_group(node, GroupLevel.REMARK)

    def visit_user(self, node: AggregationNode) -> T:
        return self.visit_group(node, GroupLevel.USER)

    def visit_currency(self, node: AggregationNode) -> T:
        return self.visit_group(node, GroupLevel.CURRENCY)

    def visit_date(self, node: AggregationNode, level: GroupLevel) -> T:
        return self.visit_group(node, level)

    def visit_leaf(self, node: AggregationNode, level: GroupLevel | None) -> T:
        return self.visit_group(node, level)

    def visit_group(self, node: AggregationNode, level: GroupLevel | None) -> T:
        raise NotImplementedError


def present(
    root: AggregationNode,
    spec: SubtotalSpec,
    visitor: SubtotalVisitor[T],
) -> T:
    """Render ``root`` with ``visitor``."""
    return visitor.present(root, spec)


__all__ = ["SubtotalVisitor", "default_collation", "present", "Collation"]
