"""Eligibility rules and raw-row to region-record transformation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence

from market_leads.common.fields import parse_number, parse_percent
from market_leads.common.models import CountyRecord, RawRecord, ZipcodeRecord
from market_leads.common.region import create_slug, extract_zip_code, strip_region_suffix, zip_region_key
from market_leads.pipeline.classify import determine_market_type, determine_trend_direction
from market_leads.pipeline.proximity import find_nearby_zips


@dataclass(frozen=True)
class MarketScope:
    """Target jurisdiction and geography table for one market."""

    state_code: str
    region_suffix: str
    property_type: str
    county_zips: dict[str, tuple[str, ...]]

    @classmethod
    def from_config(cls, market_config: dict) -> "MarketScope":
        market = market_config["market"]
        return cls(
            state_code=market["state_code"],
            region_suffix=market["region_suffix"],
            property_type=market["property_type"],
            county_zips={county: tuple(zips) for county, zips in market_config["counties"].items()},
        )

    @property
    def target_counties(self) -> frozenset[str]:
        return frozenset(self.county_zips)

    @property
    def target_zip_regions(self) -> frozenset[str]:
        return frozenset(zip_region_key(z) for zips in self.county_zips.values() for z in zips)

    def county_for_zip(self, zipcode: str) -> str | None:
        clean = extract_zip_code(zipcode)
        for county, zips in self.county_zips.items():
            if clean in zips:
                return county
        return None

    def display_name(self, name: str) -> str:
        return strip_region_suffix(name, self.region_suffix)


def _in_scope(record: RawRecord, scope: MarketScope, regions: frozenset[str]) -> bool:
    return (
        record.get("state_code") == scope.state_code
        and record.get("region") in regions
        and record.get("property_type") == scope.property_type
    )


def county_eligibility(scope: MarketScope):
    regions = scope.target_counties
    return lambda record: _in_scope(record, scope, regions)


def zipcode_eligibility(scope: MarketScope):
    regions = scope.target_zip_regions
    return lambda record: _in_scope(record, scope, regions)


def _metric_fields(data: RawRecord) -> dict[str, Any]:
    months_of_supply = parse_number(data.get("months_of_supply"))
    price_yoy = parse_percent(data.get("median_sale_price_yoy"))
    return {
        "state": data.get("state", ""),
        "state_code": data.get("state_code", ""),
        "period_end": data.get("period_end", ""),
        "last_updated": data.get("last_updated", ""),
        "median_sale_price": parse_number(data.get("median_sale_price")),
        "median_sale_price_yoy": price_yoy,
        "median_list_price": parse_number(data.get("median_list_price")),
        "median_list_price_yoy": parse_percent(data.get("median_list_price_yoy")),
        "inventory": parse_number(data.get("inventory")),
        "inventory_yoy": parse_percent(data.get("inventory_yoy")),
        "months_of_supply": months_of_supply,
        "months_of_supply_yoy": parse_percent(data.get("months_of_supply_yoy")),
        "median_dom": parse_number(data.get("median_dom")),
        "median_dom_yoy": parse_percent(data.get("median_dom_yoy")),
        "homes_sold": parse_number(data.get("homes_sold")),
        "homes_sold_yoy": parse_percent(data.get("homes_sold_yoy")),
        "sold_above_list_pct": parse_percent(data.get("sold_above_list")),
        "sold_above_list_yoy": parse_percent(data.get("sold_above_list_yoy")),
        "price_drops_pct": parse_percent(data.get("price_drops")),
        "price_drops_yoy": parse_percent(data.get("price_drops_yoy")),
        "market_type": determine_market_type(months_of_supply),
        "trend_direction": determine_trend_direction(price_yoy),
    }


def build_county_record(region: str, data: RawRecord, scope: MarketScope) -> CountyRecord:
    display = scope.display_name(region)
    return CountyRecord(region=display, slug=create_slug(display), **_metric_fields(data))


def build_zipcode_record(
    region_key: str,
    data: RawRecord,
    scope: MarketScope,
    all_zips: Sequence[str],
) -> ZipcodeRecord | None:
    """Build a zip record, or ``None`` when the zip has no known county."""
    zipcode = extract_zip_code(region_key)
    county = scope.county_for_zip(zipcode)
    if county is None:
        return None
    return ZipcodeRecord(
        zipcode=zipcode,
        region=zipcode,
        city=data.get("city") or "",
        county=scope.display_name(county),
        nearby_zips=tuple(find_nearby_zips(zipcode, all_zips)),
        **_metric_fields(data),
    )
