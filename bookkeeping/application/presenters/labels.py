"""Display labels for subtotal keys."""

from datetime import date
from decimal import Decimal
from typing import Any

from bookkeeping.domain.models.subtotal import GatherMode, GroupLevel

NULL_LABEL = "[null]"


def format_amount(value: Decimal, gather: GatherMode) -> str:
    """Format a node fund; counts render as integers."""
    if gather.is_count:
        return str(int(value))
    return f"{value:.2f}"


def format_date(value: date | None, level: GroupLevel) -> str:
    if value is None:
        return NULL_LABEL
    if level is GroupLevel.YEAR:
        return value.strftime("%Y")
    if level is GroupLevel.MONTH:
        return value.strftime("%Y-%m")
    return value.isoformat()


def format_key(
    level: GroupLevel | None,
    key: Any,
    *,
    title_lookup=None,
    title: int | None = None,
) -> str:
    """Return the label of a subtotal key.

    Args:
        level: Level the key was grouped by; None for the root.
        key: Group key.
        title_lookup: Optional object implementing ``TitleLookupPort``.
        title: Enclosing title, used to name sub-titles.

    Returns:
        str: Human readable label.
    """
    if level is None:
        return ""
    if level.is_date:
        return format_date(key, level)
    if key is None:
        return NULL_LABEL
    if level is GroupLevel.TITLE:
        label = f"T{key:04d}"
        name = title_lookup.name(key) if title_lookup else None
        return f"{label} {name}" if name else label
    if level is GroupLevel.SUBTITLE:
        label = f"{key:02d}"
        name = None
        if title_lookup and title is not None:
            name = title_lookup.name(title, key)
        return f"{label} {name}" if name else label
    if level is GroupLevel.CURRENCY:
        return f"@{key}"
    if level is GroupLevel.USER:
        return f"U{key}"
    return str(key)


__all__ = ["NULL_LABEL", "format_amount", "format_date", "format_key"]
