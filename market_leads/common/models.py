"""Data models used across the pipeline."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Literal, Mapping

MarketType = Literal["seller", "buyer", "balanced"]
TrendDirection = Literal["up", "down", "stable"]

# One raw extract line keyed by normalised header name.
RawRecord = Mapping[str, str]


@dataclass(frozen=True)
class RegionMetrics:
    state: str
    state_code: str
    period_end: str
    last_updated: str
    median_sale_price: float | None
    median_sale_price_yoy: float | None
    median_list_price: float | None
    median_list_price_yoy: float | None
    inventory: float | None
    inventory_yoy: float | None
    months_of_supply: float | None
    months_of_supply_yoy: float | None
    median_dom: float | None
    median_dom_yoy: float | None
    homes_sold: float | None
    homes_sold_yoy: float | None
    sold_above_list_pct: float | None
    sold_above_list_yoy: float | None
    price_drops_pct: float | None
    price_drops_yoy: float | None
    market_type: MarketType
    trend_direction: TrendDirection

    def to_dict(self) -> dict[str, Any]:
        payload = asdict(self)
        if payload.get("ai_insight") is None:
            payload.pop("ai_insight", None)
        return payload


@dataclass(frozen=True)
class CountyRecord(RegionMetrics):
    region: str
    slug: str
    ai_insight: str | None = None

    @property
    def key(self) -> str:
        return self.slug


@dataclass(frozen=True)
class ZipcodeRecord(RegionMetrics):
    zipcode: str
    region: str
    city: str
    county: str
    nearby_zips: tuple[str, ...]
    ai_insight: str | None = None

    @property
    def key(self) -> str:
        return self.zipcode

    def to_dict(self) -> dict[str, Any]:
        payload = super().to_dict()
        payload["nearby_zips"] = list(self.nearby_zips)
        return payload


METRIC_FIELDS = (
    "median_sale_price",
    "median_list_price",
    "inventory",
    "months_of_supply",
    "median_dom",
    "homes_sold",
    "sold_above_list_pct",
    "price_drops_pct",
)
