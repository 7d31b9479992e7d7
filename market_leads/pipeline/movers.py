"""Featured market selection ("movers and shakers") over zip-code records."""

from __future__ import annotations

from pathlib import Path

from market_leads.common.errors import StageError
from market_leads.common.formatting import round_half_up
from market_leads.common.fs import read_json, write_json
from market_leads.pipeline.process import processed_path

HOT_PRICE_YOY_MIN = 5
FAST_DOM_MAX = 45
COMPETITIVE_INVENTORY_YOY_MAX = -10
QUICK_SALE_DOM_MAX = 30
DEFAULT_LIMIT = 6


def _summary(record: dict) -> dict:
    return {
        "zipcode": record.get("zipcode"),
        "city": record.get("city") or "",
        "county": record.get("county"),
        "median_sale_price": record.get("median_sale_price"),
        "median_sale_price_yoy": record.get("median_sale_price_yoy"),
        "median_dom": record.get("median_dom"),
        "median_dom_yoy": record.get("median_dom_yoy"),
        "inventory": record.get("inventory"),
        "inventory_yoy": record.get("inventory_yoy"),
        "market_type": record.get("market_type"),
        "trend_direction": record.get("trend_direction"),
        "period_end": record.get("period_end"),
        "context_line": market_context_line(record),
    }


def compute_movers_and_shakers(records: list[dict], limit: int = DEFAULT_LIMIT) -> dict[str, list[dict]]:
    """Pick the hottest, fastest and most competitive zip-code markets.

    Records with an absent value for a category's metric never qualify for
    that category. Sorting is stable, so ties keep collection order.
    """
    hot = sorted(
        (r for r in records if r.get("median_sale_price_yoy") is not None and r["median_sale_price_yoy"] > HOT_PRICE_YOY_MIN),
        key=lambda r: -r["median_sale_price_yoy"],
    )
    fast = sorted(
        (r for r in records if r.get("median_dom") is not None and r["median_dom"] < FAST_DOM_MAX),
        key=lambda r: r["median_dom"],
    )
    competitive = sorted(
        (
            r
            for r in records
            if r.get("inventory_yoy") is not None and r["inventory_yoy"] < COMPETITIVE_INVENTORY_YOY_MAX
        ),
        key=lambda r: r["inventory_yoy"],
    )
    return {
        "hot_markets": [_summary(r) for r in hot[:limit]],
        "fast_markets": [_summary(r) for r in fast[:limit]],
        "competitive_markets": [_summary(r) for r in competitive[:limit]],
    }


def market_context_line(record: dict) -> str | None:
    market_type = record.get("market_type")
    median_dom = record.get("median_dom")
    price_yoy = record.get("median_sale_price_yoy")

    if market_type == "seller" and median_dom is not None and median_dom < QUICK_SALE_DOM_MAX:
        return f"Homes here are selling in just {round_half_up(median_dom)} days on average"
    if price_yoy is not None and price_yoy > HOT_PRICE_YOY_MIN:
        return f"Prices are up {price_yoy:.1f}% from last year"
    if market_type == "seller":
        return "Currently a seller's market with strong demand"
    return None


def run_movers(market_config: dict, data_dir: Path, run_id: str, *, limit: int = DEFAULT_LIMIT) -> Path:
    source = processed_path(market_config, data_dir, "zipcode")
    if not source.exists():
        raise StageError(f"Missing processed output: {source}")

    movers = compute_movers_and_shakers(read_json(source), limit=limit)
    out_path = data_dir / "processed" / market_config["output"]["movers_filename"]
    write_json(out_path, {"run_id": run_id, "limit": limit, **movers})
    return out_path
