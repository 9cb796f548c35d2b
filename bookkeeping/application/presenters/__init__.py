"""Application presenters package."""

from .labels import format_amount, format_key
from .report import ReportSubtotalPresenter, not_null_join
from .structured import StructuredSubtotalPresenter, render_json
from .text import TextSubtotalPresenter

__all__ = [
    "ReportSubtotalPresenter",
    "StructuredSubtotalPresenter",
    "TextSubtotalPresenter",
    "format_amount",
    "format_key",
    "not_null_join",
    "render_json",
]
