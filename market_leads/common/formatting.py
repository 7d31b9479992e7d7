"""Display formatting for market metrics."""

from __future__ import annotations

import math

NOT_AVAILABLE = "N/A"


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def format_currency(value: float | None) -> str:
    if value is None:
        return NOT_AVAILABLE
    rounded = round_half_up(value)
    sign = "-" if rounded < 0 else ""
    return f"{sign}${abs(rounded):,}"


def format_percent(value: float | None, include_sign: bool = True) -> str:
    if value is None:
        return NOT_AVAILABLE
    sign = "+" if include_sign and value > 0 else ""
    return f"{sign}{value:.1f}%"


def format_number(value: float | None, decimals: int = 0) -> str:
    if value is None:
        return NOT_AVAILABLE
    return f"{value:.{decimals}f}"
