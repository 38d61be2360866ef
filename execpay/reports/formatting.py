"""Number formatting helpers for reports and the CLI."""

from decimal import Decimal


def yen(value: int) -> str:
    return f"{value:,} JPY"


def percent(rate: Decimal) -> str:
    return f"{float(rate) * 100:g}%"
