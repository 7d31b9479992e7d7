"""Market insight enrichment using the Anthropic Messages API.

Fills ``ai_insight`` on every processed county and zip-code record. The
processed collections are rewritten in place; record order and every other
field are left untouched.
"""

from __future__ import annotations

import logging
import os
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Optional

import anthropic

from market_leads.common.errors import ConfigError, StageError
from market_leads.common.formatting import format_currency, format_number, format_percent
from market_leads.common.fs import read_json, write_json
from market_leads.pipeline.process import processed_path

logger = logging.getLogger(__name__)


COUNTY_PROMPT = """You are a real estate market analyst writing for homeowners thinking about selling in {region}, {state_name}.

Using the market data below, write a 2-3 sentence insight that:
1. Calls out the most significant trend for sellers
2. Quotes specific numbers from the data
3. Closes with an actionable takeaway

Market data for {region} (as of {period_end}):
- Median sale price: {median_sale_price} ({median_sale_price_yoy} YoY)
- Active inventory: {inventory} homes ({inventory_yoy} YoY)
- Months of supply: {months_of_supply} months
- Median days on market: {median_dom} days ({median_dom_yoy} YoY)
- Homes sold above list: {sold_above_list_pct}%
- Price drops: {price_drops_pct}%
- Market type: {market_type}'s market

Address homeowners directly in the second person. Be specific with numbers but conversational. Do not use quotes or markdown formatting."""


ZIP_PROMPT = """You are a real estate market analyst writing for homeowners thinking about selling in zip code {location}, {county}, {state_name}.

Using the market data below, write a 2-sentence insight that:
1. States the key market condition
2. Gives one specific, actionable observation for sellers

Market data for {location} (most recent period):
- Median sale price: {median_sale_price} ({median_sale_price_yoy} YoY)
- Active inventory: {inventory} homes
- Months of supply: {months_of_supply} months
- Median days on market: {median_dom} days
- Homes sold above list: {sold_above_list_pct}%
- Market type: {market_type}'s market

Address homeowners directly in the second person. Be concise and specific. Do not use quotes or markdown formatting."""


@dataclass(frozen=True)
class InsightConfig:
    api_key: str
    model: str
    county_max_tokens: int
    zip_max_tokens: int
    delay_seconds: float
    state_name: str

    @classmethod
    def from_market_config(cls, market_config: dict) -> "InsightConfig":
        api_key = os.getenv("ANTHROPIC_API_KEY", "")
        if not api_key:
            raise ConfigError("ANTHROPIC_API_KEY environment variable is not set")
        insights = market_config["insights"]
        market = market_config["market"]
        return cls(
            api_key=api_key,
            model=insights["model"],
            county_max_tokens=int(insights["county_max_tokens"]),
            zip_max_tokens=int(insights["zip_max_tokens"]),
            delay_seconds=float(insights["delay_seconds"]),
            state_name=market.get("state_name") or market["state_code"],
        )


def _prompt_values(record: dict) -> dict[str, str]:
    return {
        "median_sale_price": format_currency(record.get("median_sale_price")),
        "median_sale_price_yoy": format_percent(record.get("median_sale_price_yoy")),
        "inventory": format_number(record.get("inventory")),
        "inventory_yoy": format_percent(record.get("inventory_yoy")),
        "months_of_supply": format_number(record.get("months_of_supply"), 1),
        "median_dom": format_number(record.get("median_dom")),
        "median_dom_yoy": format_percent(record.get("median_dom_yoy")),
        "sold_above_list_pct": format_number(record.get("sold_above_list_pct")),
        "price_drops_pct": format_number(record.get("price_drops_pct")),
        "market_type": record.get("market_type") or "balanced",
    }


def build_county_prompt(record: dict, state_name: str) -> str:
    return COUNTY_PROMPT.format(
        region=record.get("region", ""),
        state_name=state_name,
        period_end=record.get("period_end", ""),
        **_prompt_values(record),
    )


def build_zip_prompt(record: dict, state_name: str) -> str:
    zipcode = record.get("zipcode", "")
    city = record.get("city")
    location = f"{zipcode} ({city})" if city else zipcode
    return ZIP_PROMPT.format(
        location=location,
        county=record.get("county", ""),
        state_name=state_name,
        **_prompt_values(record),
    )


class InsightGenerator:
    """Generates one short market commentary per region record."""

    def __init__(
        self,
        config: InsightConfig,
        client: Optional[Any] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.config = config
        self._client = client
        self._sleep = sleep

    @property
    def client(self) -> anthropic.Anthropic:
        """Lazy-load Anthropic client."""
        if self._client is None:
            self._client = anthropic.Anthropic(api_key=self.config.api_key)
        return self._client

    def _complete(self, prompt: str, max_tokens: int) -> str:
        try:
            message = self.client.messages.create(
                model=self.config.model,
                max_tokens=max_tokens,
                messages=[{"role": "user", "content": prompt}],
            )
        except anthropic.APIError as exc:
            raise StageError(f"Insight request failed: {exc}") from exc

        for block in message.content:
            if getattr(block, "type", None) == "text":
                return block.text.strip()
        return ""

    def county_insight(self, record: dict) -> str:
        return self._complete(build_county_prompt(record, self.config.state_name), self.config.county_max_tokens)

    def zip_insight(self, record: dict) -> str:
        return self._complete(build_zip_prompt(record, self.config.state_name), self.config.zip_max_tokens)

    def enrich(self, records: list[dict], dataset: str) -> list[dict]:
        generate = self.county_insight if dataset == "county" else self.zip_insight
        enriched = []
        for idx, record in enumerate(records):
            if idx > 0 and self.config.delay_seconds > 0:
                self._sleep(self.config.delay_seconds)
            logger.debug("Generating %s insight %d/%d", dataset, idx + 1, len(records))
            enriched.append({**record, "ai_insight": generate(record)})
        return enriched


def run_insights(
    dataset: str,
    market_config: dict,
    data_dir: Path,
    run_id: str,
    generator: InsightGenerator | None = None,
) -> dict:
    path = processed_path(market_config, data_dir, dataset)
    if not path.exists():
        raise StageError(f"Missing processed output: {path}")

    generator = generator or InsightGenerator(InsightConfig.from_market_config(market_config))
    records = read_json(path)
    enriched = generator.enrich(records, dataset)
    write_json(path, enriched)

    return {
        "dataset": dataset,
        "run_id": run_id,
        "path": str(path),
        "rows_in": len(records),
        "rows_out": sum(1 for record in enriched if record.get("ai_insight")),
    }
