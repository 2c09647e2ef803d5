"""Tests for display magnitude conversion."""

from __future__ import annotations

from decimal import Decimal

import pytest

from analysis.units import KILOBYTE, MEGABYTE, format_magnitude, round_ratio, to_display_magnitude

pytestmark = pytest.mark.unit


def test_to_display_magnitude_converts_bytes_to_kilobytes() -> None:
    """Divide by 1000 and keep two decimal places."""

    assert to_display_magnitude(5000, KILOBYTE) == Decimal("5.00")
    assert to_display_magnitude(12345, KILOBYTE) == Decimal("12.35")
    assert to_display_magnitude(0, KILOBYTE) == Decimal("0.00")


def test_to_display_magnitude_rounds_half_up() -> None:
    """Round exact halves away from zero."""

    assert to_display_magnitude(1005, KILOBYTE) == Decimal("1.01")
    assert to_display_magnitude(1004, KILOBYTE) == Decimal("1.00")


def test_to_display_magnitude_is_monotonic_for_non_negative_inputs() -> None:
    """Larger raw amounts never produce smaller display values."""

    amounts = [0, 1, 4, 5, 499, 500, 999, 1000, 1004, 1005, 123_456, 9_999_999]
    for divisor in (1, KILOBYTE, MEGABYTE):
        converted = [to_display_magnitude(amount, divisor) for amount in amounts]
        assert converted == sorted(converted)


def test_to_display_magnitude_is_idempotent_with_unit_divisor() -> None:
    """Re-converting an already converted value with divisor 1 is a no-op."""

    for amount in (0, 7, 5000, 123_456, 200_000):
        once = to_display_magnitude(amount, KILOBYTE)
        assert to_display_magnitude(once, 1) == once


def test_to_display_magnitude_rejects_invalid_inputs() -> None:
    """Reject non-positive divisors and negative amounts."""

    with pytest.raises(ValueError):
        to_display_magnitude(10, 0)
    with pytest.raises(ValueError):
        to_display_magnitude(-1, KILOBYTE)


def test_format_magnitude_uses_two_decimals() -> None:
    """Render fixed two-decimal strings for kB and MB text."""

    assert format_magnitude(5000, KILOBYTE) == "5.00"
    assert format_magnitude(200_000, MEGABYTE) == "0.20"
    assert format_magnitude(50_000, MEGABYTE) == "0.05"


def test_round_ratio_rounds_to_two_places() -> None:
    """Round provider ratios as they read in decimal."""

    assert round_ratio(1.2345) == Decimal("1.23")
    assert round_ratio(1.005) == Decimal("1.01")
    assert round_ratio(2) == Decimal("2.00")


def test_to_display_magnitude_keeps_large_amounts_exact() -> None:
    """Amounts beyond the default 28-digit context still round to two places."""

    assert to_display_magnitude(10**30, KILOBYTE) == Decimal(10**27)
    assert to_display_magnitude(10**30, KILOBYTE).as_tuple().exponent == -2
    assert format_magnitude(10**30, MEGABYTE) == "1000000000000000000000000.00"
    assert format_magnitude(10**30 + 5_000, MEGABYTE) == "1000000000000000000000000.01"


def test_round_ratio_keeps_large_ratios_exact() -> None:
    """A huge but finite ratio is quantized instead of raising."""

    assert round_ratio(1e30) == Decimal("1E+30")
    assert round_ratio(1e30).as_tuple().exponent == -2


@pytest.mark.parametrize("value", [Decimal("Infinity"), Decimal("NaN")])
def test_to_display_magnitude_rejects_non_finite_amounts(value: Decimal) -> None:
    """Infinite or NaN amounts are a ValueError, not a decimal signal."""

    with pytest.raises(ValueError):
        to_display_magnitude(value, KILOBYTE)


@pytest.mark.parametrize("value", [float("inf"), float("nan"), Decimal("-Infinity")])
def test_round_ratio_rejects_non_finite_ratios(value) -> None:
    """Non-finite ratios raise ValueError."""

    with pytest.raises(ValueError):
        round_ratio(value)
