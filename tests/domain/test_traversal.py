"""Tests for the configuration-driven subtotal visitor."""

from datetime import date
from decimal import Decimal

import pytest

from bookkeeping.domain.models.subtotal import (
    AggregationNode,
    GroupLevel,
    SubtotalSpec,
)
from bookkeeping.domain.services.traversal import (
    SubtotalVisitor,
    default_collation,
    present,
)


class RecordingVisitor(SubtotalVisitor[list]):
    """Visitor returning the flattened (level, key) visit order."""

    def visit_group(self, node, level):
        entries = [] if level is None else [(level, node.key)]
        for child in self.visit_children(node):
            entries.extend(child)
        return entries


def _tree(level_keys):
    root = AggregationNode()
    for keys in level_keys:
        node = root
        for index, key in enumerate(keys):
            node = node.child(key, is_leaf=index == len(keys) - 1)
            node.fund += Decimal("1")
    return root


def _keys_at(visits, level):
    return [key for item_level, key in visits if item_level is level]


def test_titles_and_subtitles_sort_numerically() -> None:
    """Numeric levels should sort ascending with missing keys first."""
    root = _tree([(6602, 2), (1001, 10), (1001, None), (1001, 2)])
    spec = SubtotalSpec(levels=(GroupLevel.TITLE, GroupLevel.SUBTITLE))

    visits = present(root, spec, RecordingVisitor())

    assert _keys_at(visits, GroupLevel.TITLE) == [1001, 6602]
    assert _keys_at(visits, GroupLevel.SUBTITLE) == [None, 2, 10, 2]


def test_home_currency_and_user_sort_first() -> None:
    """The base currency and client user should lead their levels."""
    root = _tree([("EUR", "zoe"), ("USD", "amy"), ("JPY", "me"), ("JPY", "bob")])
    spec = SubtotalSpec(levels=(GroupLevel.CURRENCY, GroupLevel.USER))
    visitor = RecordingVisitor(base_currency="JPY", client_user="me")

    visits = visitor.present(root, spec)

    assert _keys_at(visits, GroupLevel.CURRENCY) == ["JPY", "EUR", "USD"]
    assert _keys_at(visits, GroupLevel.USER)[:2] == ["me", "bob"]


def test_content_uses_injected_collation() -> None:
    """Free-text levels should sort with the configured collation key."""
    root = _tree([("b",), ("A",), ("c",), (None,)])
    spec = SubtotalSpec(levels=(GroupLevel.CONTENT,))

    default_order = _keys_at(
        RecordingVisitor().present(root, spec), GroupLevel.CONTENT
    )
    reversed_order = _keys_at(
        RecordingVisitor(collation=lambda text: -ord(text[0])).present(root, spec),
        GroupLevel.CONTENT,
    )

    assert default_order == [None, "A", "b", "c"]
    assert reversed_order == [None, "c", "b", "A"]


def test_dates_sort_chronologically_with_undated_first() -> None:
    """Date levels should order buckets in time, undated first."""
    root = _tree([(date(2024, 2, 1),), (None,), (date(2024, 1, 1),)])
    spec = SubtotalSpec(levels=(GroupLevel.MONTH,))

    visits = RecordingVisitor().present(root, spec)

    assert _keys_at(visits, GroupLevel.MONTH) == [None, date(2024, 1, 1), date(2024, 2, 1)]


def test_dispatch_follows_configured_levels() -> None:
    """Per-level callbacks should be chosen from the level list."""
    calls = []

    class DispatchVisitor(SubtotalVisitor[None]):
        def visit_title(self, node):
            calls.append(("title", node.key, self.key_of(GroupLevel.TITLE)))
            self.visit_children(node)

        def visit_date(self, node, level):
            calls.append((level.value, node.key, self.key_of(GroupLevel.TITLE)))
            self.visit_children(node)

        def visit_leaf(self, node, level):
            calls.append(("leaf", node.key, self.key_of(GroupLevel.TITLE)))

        def visit_group(self, node, level):
            self.visit_children(node)

    root = _tree([(date(2024, 1, 1), 1001, "x")])
    spec = SubtotalSpec(levels=(GroupLevel.YEAR, GroupLevel.TITLE, GroupLevel.CONTENT))

    DispatchVisitor().present(root, spec)

    assert calls == [
        ("year", date(2024, 1, 1), None),
        ("title", 1001, 1001),
        ("leaf", "x", 1001),
    ]


def test_base_visitor_requires_a_group_callback() -> None:
    """The base visitor should not silently render anything."""
    with pytest.raises(NotImplementedError):
        SubtotalVisitor().present(AggregationNode(), SubtotalSpec(levels=()))


def test_default_collation_ignores_accents_and_case() -> None:
    """Accented and cased variants should sort next to each other."""
    words = ["Zeta", "école", "Eagle", "alpha"]

    assert sorted(words, key=default_collation) == ["alpha", "Eagle", "école", "Zeta"]


def test_content_levels_sort_chinese_by_pinyin() -> None:
    """Han content should follow pinyin order, as in zh-CN collation."""
    root = _tree([("支付宝",), ("现金",), ("银行",), ("cash",)])
    spec = SubtotalSpec(levels=(GroupLevel.CONTENT,))

    visits = RecordingVisitor().present(root, spec)

    assert _keys_at(visits, GroupLevel.CONTENT) == ["cash", "现金", "银行", "支付宝"]
    assert sorted(["支付宝", "现金"], key=default_collation) == ["现金", "支付宝"]
