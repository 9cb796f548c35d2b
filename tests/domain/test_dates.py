"""Tests for the calendar bucketer."""

from datetime import date, datetime, timedelta

import pytest

from bookkeeping.domain.models.subtotal import DATE_LEVELS, GroupLevel
from bookkeeping.domain.services.dates import (
    date_sort_key,
    next_bucket,
    normalize_date,
)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (date(2024, 1, 9), date(2024, 1, 9)),
        (date(2024, 1, 8), date(2023, 12, 9)),
        (date(2024, 12, 9), date(2024, 12, 9)),
        (date(2024, 12, 10), date(2025, 1, 9)),
    ],
)
def test_billing_month_boundaries(value, expected) -> None:
    """Billing months should start on the 9th and roll over years."""
    assert normalize_date(value, GroupLevel.BILLING_MONTH) == expected


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (date(2024, 3, 19), date(2024, 3, 19)),
        (date(2024, 3, 1), date(2024, 3, 19)),
        (date(2024, 3, 20), date(2024, 4, 19)),
        (date(2024, 12, 25), date(2025, 1, 19)),
    ],
)
def test_financial_month_buckets(value, expected) -> None:
    """Financial months should use threshold 20 and target day 19."""
    assert normalize_date(value, GroupLevel.FINANCIAL_MONTH) == expected


def test_calendar_granularities() -> None:
    """Day, week, month and year should map to their bucket start."""
    wednesday = datetime(2024, 1, 3, 15, 30)
    sunday = date(2024, 1, 7)

    assert normalize_date(wednesday, GroupLevel.DAY) == date(2024, 1, 3)
    assert normalize_date(wednesday, GroupLevel.WEEK) == date(2024, 1, 1)
    assert normalize_date(sunday, GroupLevel.WEEK) == date(2024, 1, 1)
    assert normalize_date(date(2024, 1, 8), GroupLevel.WEEK) == date(2024, 1, 8)
    assert normalize_date(wednesday, GroupLevel.MONTH) == date(2024, 1, 1)
    assert normalize_date(date(2024, 7, 31), GroupLevel.YEAR) == date(2024, 1, 1)


def test_undated_stays_undated() -> None:
    """A missing date is its own bucket for every granularity."""
    for level in DATE_LEVELS:
        assert normalize_date(None, level) is None


def test_normalize_is_idempotent() -> None:
    """Normalizing a bucket again should return the same bucket."""
    start = date(2023, 11, 20)
    for offset in range(800):
        day = start + timedelta(days=offset)
        for level in DATE_LEVELS:
            bucket = normalize_date(day, level)
            assert normalize_date(bucket, level) == bucket


def test_next_bucket_steps_one_interval() -> None:
    """next_bucket should advance exactly one bucket."""
    assert next_bucket(date(2024, 2, 28), GroupLevel.DAY) == date(2024, 2, 29)
    assert next_bucket(date(2024, 1, 1), GroupLevel.WEEK) == date(2024, 1, 8)
    assert next_bucket(date(2024, 12, 1), GroupLevel.MONTH) == date(2025, 1, 1)
    assert next_bucket(date(2024, 1, 1), GroupLevel.YEAR) == date(2025, 1, 1)
    assert next_bucket(date(2024, 12, 9), GroupLevel.BILLING_MONTH) == date(2025, 1, 9)
    assert next_bucket(date(2024, 1, 19), GroupLevel.FINANCIAL_MONTH) == date(2024, 2, 19)


def test_date_sort_key_places_undated_first() -> None:
    """Undated buckets should sort before any dated bucket."""
    values = [date(2024, 1, 2), None, date(1, 1, 1)]

    assert sorted(values, key=date_sort_key) == [None, date(1, 1, 1), date(2024, 1, 2)]
