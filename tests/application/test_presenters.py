"""Tests for the text, structured and report presenters."""

import json
from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

from bookkeeping.application.presenters import (
    ReportSubtotalPresenter,
    StructuredSubtotalPresenter,
    TextSubtotalPresenter,
    format_key,
    not_null_join,
    render_json,
)
from bookkeeping.domain.models.subtotal import (
    AggregationMode,
    GatherMode,
    GroupLevel,
    SubtotalSpec,
)
from bookkeeping.domain.models.vouchers import Voucher, VoucherDetail
from bookkeeping.domain.services.aggregation import (
    build_aggregation,
    matched_entries,
)
from bookkeeping.infrastructure.chart_of_accounts import ChartOfAccounts

SPEC = SubtotalSpec(levels=(GroupLevel.TITLE, GroupLevel.CONTENT))


def _tree(spec=SPEC):
    voucher = Voucher(
        id="v1",
        date=date(2024, 1, 5),
        details=(
            VoucherDetail(6602, Decimal("-150")),
            VoucherDetail(1001, Decimal("50"), content="cash"),
            VoucherDetail(1001, Decimal("100"), content="bank"),
        ),
    )
    return build_aggregation(
        spec,
        matched_entries(voucher.records()),
        logger=MagicMock(),
    )


def test_text_presenter_renders_indented_lines() -> None:
    """Each node should render as label and amount, indented by depth."""
    chart = ChartOfAccounts(titles={1001: "Cash"})
    presenter = TextSubtotalPresenter(title_lookup=chart)

    text = presenter.present(_tree(), SPEC)

    assert text.split("\n") == [
        "0.00",
        "T1001 Cash\t150.00",
        "\tbank\t100.00",
        "\tcash\t50.00",
        "T6602\t-150.00",
        "\t[null]\t-150.00",
    ]


def test_text_presenter_renders_counts_and_series() -> None:
    """Count modes print integers; running series follow their leaf."""
    count_spec = SubtotalSpec(levels=(GroupLevel.TITLE,), gather=GatherMode.COUNT)
    series_spec = SubtotalSpec(
        levels=(GroupLevel.TITLE,),
        aggregation=AggregationMode.CHANGED_DAY,
        aggregation_interval=GroupLevel.MONTH,
    )

    counts = TextSubtotalPresenter().present(_tree(count_spec), count_spec)
    series = TextSubtotalPresenter().present(_tree(series_spec), series_spec)

    assert counts.split("\n") == ["3", "T1001\t2", "T6602\t1"]
    assert series.split("\n")[1:3] == ["T1001\t150.00", "\t2024-01\t150.00"]


def test_structured_presenter_nests_children_by_field() -> None:
    """Nodes should render as value plus children keyed by the next level."""
    tree = StructuredSubtotalPresenter().present(_tree(), SPEC)

    assert tree == {
        "value": Decimal("0"),
        "title": {
            "1001": {
                "value": Decimal("150"),
                "content": {
                    "bank": {"value": Decimal("100")},
                    "cash": {"value": Decimal("50")},
                },
            },
            "6602": {
                "value": Decimal("-150"),
                "content": {"": {"value": Decimal("-150")}},
            },
        },
    }
    assert json.loads(render_json(tree))["title"]["1001"]["value"] == "150"


def test_structured_presenter_renders_series_under_aggr() -> None:
    """Running series should appear under the aggr field."""
    spec = SubtotalSpec(
        levels=(GroupLevel.TITLE,),
        aggregation=AggregationMode.CHANGED_DAY,
    )

    tree = StructuredSubtotalPresenter().present(_tree(spec), spec)

    assert tree["title"]["6602"]["aggr"] == {"2024-01-05": {"value": Decimal("-150")}}


def test_report_presenter_weights_leaves() -> None:
    """Leaf lines should carry path, value, coefficient and weighted value."""
    presenter = ReportSubtotalPresenter("Assets", Decimal("2"))

    total, text = presenter.present(_tree(), SPEC)

    assert total == Decimal("0")
    assert text.split("\n") == [
        "Assets/T1001/bank\t100.00\t2\t200.00",
        "Assets/T1001/cash\t50.00\t2\t100.00",
        "Assets/T6602/[null]\t-150.00\t2\t-300.00",
    ]


def test_report_presenter_emits_one_line_per_reading() -> None:
    """Running-balance leaves should report every dated reading."""
    vouchers = [
        Voucher(id="a", date=date(2024, 1, 1), details=(VoucherDetail(1001, Decimal("100")),)),
        Voucher(id="b", date=date(2024, 1, 3), details=(VoucherDetail(1001, Decimal("50")),)),
    ]
    spec = SubtotalSpec(
        levels=(GroupLevel.TITLE,),
        aggregation=AggregationMode.CHANGED_DAY,
    )
    tree = build_aggregation(
        spec,
        matched_entries(r for v in vouchers for r in v.records()),
        logger=MagicMock(),
    )

    total, text = ReportSubtotalPresenter("r", Decimal("2")).present(tree, spec)

    assert text.split("\n") == [
        "r/T1001/2024-01-01\t100.00\t2\t200.00",
        "r/T1001/2024-01-03\t150.00\t2\t300.00",
    ]
    assert total == Decimal("500")


def test_not_null_join_skips_empty_blocks() -> None:
    """Empty or missing blocks should not produce blank lines."""
    assert not_null_join(["a", "", None, "b"]) == "a\nb"
    assert not_null_join([]) == ""


def test_format_key_labels() -> None:
    """Labels should follow the level conventions."""
    chart = ChartOfAccounts(subtitles={(1001, 1): "Petty"})

    assert format_key(GroupLevel.SUBTITLE, 1, title_lookup=chart, title=1001) == "01 Petty"
    assert format_key(GroupLevel.CURRENCY, "USD") == "@USD"
    assert format_key(GroupLevel.USER, "amy") == "Uamy"
    assert format_key(GroupLevel.YEAR, date(2024, 1, 1)) == "2024"
    assert format_key(GroupLevel.DAY, None) == "[null]"
    assert format_key(None, "ignored") == ""
