"""Calendar bucketing for date grouping levels."""

from datetime import date, datetime, timedelta

from bookkeeping.domain.constants import (
    BILLING_CYCLE_DAY,
    FINANCIAL_CYCLE_DAY,
    FINANCIAL_CYCLE_THRESHOLD,
)
from bookkeeping.domain.errors import MalformedQueryError
from bookkeeping.domain.models.subtotal import GroupLevel


def _as_date(value: date | datetime) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def _shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def normalize_date(
    value: date | datetime | None,
    granularity: GroupLevel,
) -> date | None:
    """Map a timestamp to the start of its bucket.

    Args:
        value: Record date or timestamp; None stays undated.
        granularity: Date grouping level.

    Returns:
        date | None: Bucket date, or None for undated records.
    """
    if value is None:
        return None
    day = _as_date(value)
    if granularity is GroupLevel.DAY:
        return day
    if granularity is GroupLevel.WEEK:
        return day - timedelta(days=day.weekday())
    if granularity is GroupLevel.MONTH:
        return day.replace(day=1)
    if granularity is GroupLevel.YEAR:
        return day.replace(month=1, day=1)
    if granularity is GroupLevel.BILLING_MONTH:
        if day.day == BILLING_CYCLE_DAY:
            return day
        delta = 1 if day.day > BILLING_CYCLE_DAY else -1
        year, month = _shift_month(day.year, day.month, delta)
        return date(year, month, BILLING_CYCLE_DAY)
    if granularity is GroupLevel.FINANCIAL_MONTH:
        if day.day >= FINANCIAL_CYCLE_THRESHOLD:
            year, month = _shift_month(day.year, day.month, 1)
            return date(year, month, FINANCIAL_CYCLE_DAY)
        return day.replace(day=FINANCIAL_CYCLE_DAY)
    raise MalformedQueryError(f"Not a date level: {granularity}")


def next_bucket(bucket: date, granularity: GroupLevel) -> date:
    """Return the bucket following an already normalized bucket."""
    if granularity is GroupLevel.DAY:
        return bucket + timedelta(days=1)
    if granularity is GroupLevel.WEEK:
        return bucket + timedelta(days=7)
    if granularity is GroupLevel.YEAR:
        return bucket.replace(year=bucket.year + 1)
    if granularity in (
        GroupLevel.MONTH,
        GroupLevel.BILLING_MONTH,
        GroupLevel.FINANCIAL_MONTH,
    ):
        year, month = _shift_month(bucket.year, bucket.month, 1)
        return bucket.replace(year=year, month=month)
    raise MalformedQueryError(f"Not a date level: {granularity}")


def date_sort_key(value: date | None) -> tuple[int, date]:
    """Sort key placing undated buckets before every dated one."""
    if value is None:
        return (0, date.min)
    return (1, _as_date(value))


__all__ = ["normalize_date", "next_bucket", "date_sort_key"]
