"""Helpers for Decimal normalization and tolerance comparisons."""

from decimal import Decimal

TOLERANCE = Decimal("0.000001")


def coerce_decimal(value) -> Decimal:
    """Normalize numeric values to Decimal.

    Args:
        value: Raw numeric value from SQL or adapters.

    Returns:
        Decimal: Normalized numeric value.
    """
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def is_zero(value, tolerance: Decimal = TOLERANCE) -> bool:
    """Return True when the value's magnitude is below the tolerance."""
    return abs(coerce_decimal(value)) < tolerance


def is_non_negative(value, tolerance: Decimal = TOLERANCE) -> bool:
    """Return True when the value is positive or zero within tolerance."""
    return coerce_decimal(value) > -tolerance


def is_non_positive(value, tolerance: Decimal = TOLERANCE) -> bool:
    """Return True when the value is negative or zero within tolerance."""
    return coerce_decimal(value) < tolerance


__all__ = ["TOLERANCE", "coerce_decimal", "is_zero", "is_non_negative", "is_non_positive"]
