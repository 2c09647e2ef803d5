"""Display magnitude conversion helpers.

Provider amounts are byte-style integers. Dashboards show them as kB for
experience and MB for audit volumes, always with two decimal places. Decimal
arithmetic keeps the rounding deterministic (half-up) instead of depending on
binary float representation.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Final

KILOBYTE: Final[int] = 1_000
MEGABYTE: Final[int] = 1_000_000
DISPLAY_PLACES: Final[int] = 2
DEFAULT_PRECISION: Final[int] = 28


def to_display_magnitude(amount: int | Decimal, divisor: int, *, places: int = DISPLAY_PLACES) -> Decimal:
    """Convert a raw amount to a scaled display magnitude.

    Args:
        amount: Non-negative raw amount (or an already converted Decimal).
        divisor: Positive scale divisor (e.g. `KILOBYTE`, `MEGABYTE`, or 1).
        places: Decimal places to keep.

    Returns:
        `amount / divisor` quantized to `places` decimal places (half-up).

    Raises:
        ValueError: When `divisor` is not positive or `amount` is negative or
            not finite.
    """

    if divisor <= 0:
        raise ValueError(f"divisor must be positive, got {divisor}.")
    value = _finite_decimal(amount)
    if value < 0:
        raise ValueError(f"amount must be non-negative, got {amount}.")
    with localcontext() as ctx:
        ctx.prec = _precision_for(value, places)
        return (value / Decimal(divisor)).quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)


def format_magnitude(amount: int | Decimal, divisor: int) -> str:
    """Return `amount / divisor` as a fixed two-decimal string (e.g. `"5.00"`)."""

    return f"{to_display_magnitude(amount, divisor):.{DISPLAY_PLACES}f}"


def round_ratio(value: float | Decimal) -> Decimal:
    """Round a provider-supplied ratio to two decimal places (half-up).

    The float is converted through `str` so `1.005` rounds the way it reads.

    Raises:
        ValueError: When the ratio is not finite.
    """

    ratio = _finite_decimal(value if isinstance(value, Decimal) else str(value))
    with localcontext() as ctx:
        ctx.prec = _precision_for(ratio, DISPLAY_PLACES)
        return ratio.quantize(Decimal(1).scaleb(-DISPLAY_PLACES), rounding=ROUND_HALF_UP)


def _finite_decimal(raw: int | str | Decimal) -> Decimal:
    value = Decimal(raw)
    if not value.is_finite():
        raise ValueError(f"expected a finite number, got {raw}.")
    return value


def _precision_for(value: Decimal, places: int) -> int:
    """Digits needed to hold every integer digit of `value` plus `places` decimals."""

    return max(DEFAULT_PRECISION, value.adjusted() + 1 + places + 1)
