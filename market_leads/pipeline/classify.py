"""Fixed-threshold market classifiers."""

from __future__ import annotations

from market_leads.common.models import MarketType, TrendDirection

SELLER_MAX_MONTHS_OF_SUPPLY = 4
BUYER_MIN_MONTHS_OF_SUPPLY = 6
TREND_THRESHOLD_PERCENT = 2


def determine_market_type(months_of_supply: float | None) -> MarketType:
    if months_of_supply is None:
        return "balanced"
    if months_of_supply < SELLER_MAX_MONTHS_OF_SUPPLY:
        return "seller"
    if months_of_supply > BUYER_MIN_MONTHS_OF_SUPPLY:
        return "buyer"
    return "balanced"


def determine_trend_direction(price_yoy_percent: float | None) -> TrendDirection:
    if price_yoy_percent is None:
        return "stable"
    if price_yoy_percent > TREND_THRESHOLD_PERCENT:
        return "up"
    if price_yoy_percent < -TREND_THRESHOLD_PERCENT:
        return "down"
    return "stable"
