"""Money rounding and formatting utilities"""

import math


def round_cents(value: float) -> int:
    """Round a fractional cent amount to the nearest cent (half-up)"""
    return int(math.floor(value + 0.5))


def format_cents(cents: int) -> str:
    """Format cents as a dollar string, e.g. 123456 -> '$1,234.56'"""
    sign = "-" if cents < 0 else ""
    return f"{sign}${abs(cents) / 100:,.2f}"


def format_percent(rate: float, digits: int = 1) -> str:
    """Format a decimal rate as a percentage string, e.g. 0.035 -> '3.5%'"""
    return f"{rate * 100:.{digits}f}%"
