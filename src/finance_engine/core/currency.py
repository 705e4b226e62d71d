#!/usr/bin/env python3
"""
Amount Rounding and Formatting Utilities

Monetary values cross the engine boundary as floats rounded to two decimal
places. Rounding goes through Decimal so that half-way cases round up
instead of falling victim to binary representation.

Key Principles:
- Round once, where a monetary value is first computed
- Never re-round a value read from an already rounded result
- Formatting is for display only; calculators return plain numbers
"""

import math
from decimal import ROUND_HALF_UP, Decimal, localcontext

# Display symbols for the currencies pockets may hold
CURRENCY_SYMBOLS = {
    "USD": "$",
    "MXN": "$",
    "COP": "$",
    "EUR": "€",
    "GBP": "£",
}

TWO_PLACES = Decimal("0.01")


def round_half_up(value: float, places: int = 2) -> float:
    """
    Round a float to a fixed number of decimal places, half-up.

    Uses the shortest repr of the float so that 1.005 rounds to 1.01.
    Infinite and NaN values are returned unchanged.

    Args:
        value: Amount to round
        places: Decimal places to keep (default: 2)

    Returns:
        Rounded float

    Examples:
        round_half_up(10459.0834) -> 10459.08
        round_half_up(2.675) -> 2.68
    """
    if not math.isfinite(value):
        return value
    amount = Decimal(repr(value))
    quantum = TWO_PLACES if places == 2 else Decimal(1).scaleb(-places)
    with localcontext() as ctx:
        # Large amounts need more than the default 28 significant digits
        ctx.prec = max(ctx.prec, amount.adjusted() + places + 2)
        return float(amount.quantize(quantum, rounding=ROUND_HALF_UP))


def percent_to_decimal(percent: float | None) -> float:
    """
    Convert a percentage (4.5) to a decimal rate (0.045).

    Missing percentages are treated as zero.
    """
    if not percent:
        return 0.0
    return percent / 100


def format_amount(value: float, currency: str = "USD") -> str:
    """
    Format an amount for display.

    Args:
        value: Amount to format
        currency: ISO currency code (default: USD)

    Returns:
        Formatted string such as "$1,234.56", "-$12.34" or "€99.00 EUR"
    """
    symbol = CURRENCY_SYMBOLS.get(currency, "")
    magnitude = f"{symbol}{abs(round_half_up(value)):,.2f}"
    text = f"-{magnitude}" if value < 0 and round_half_up(value) != 0 else magnitude
    if currency != "USD":
        text = f"{text} {currency}"
    return text


def format_percent(value: float, places: int = 2) -> str:
    """Format a percentage value (4.5 -> "4.50%")."""
    return f"{value:.{places}f}%"
