"""Minimal strict schemas for YAML config validation."""

from __future__ import annotations

from market_leads.common.errors import ConfigError

INTENTS = ("selling", "buying", "both", "home-value", "browsing")
TIMELINES = ("within-30-days", "1-3-months", "3-6-months", "6-plus-months")
PROPERTY_TYPES = ("single-family", "condo", "townhouse", "multi-family")
IMPORTANT_FACTORS = ("speed", "price", "convenience")
CONTACT_PREFERENCES = ("asap", "morning", "afternoon", "evening")

LEAD_TABLE_ENUMS = {
    "timeline": TIMELINES,
    "intent": INTENTS,
    "property_type": PROPERTY_TYPES,
    "important_factor": IMPORTANT_FACTORS,
    "contact_preference": CONTACT_PREFERENCES,
}


def _assert_required_keys(obj: dict, required: set[str], ctx: str) -> None:
    if not isinstance(obj, dict):
        raise ConfigError(f"{ctx} must be a mapping")
    missing = required - set(obj)
    if missing:
        missing_str = ", ".join(sorted(missing))
        raise ConfigError(f"Missing keys in {ctx}: {missing_str}")


def _assert_no_unknown_keys(obj: dict, known: set[str], ctx: str, allow_unknown: bool) -> None:
    if allow_unknown:
        return
    unknown = set(obj) - known
    if unknown:
        unknown_str = ", ".join(sorted(unknown))
        raise ConfigError(f"Unknown keys in {ctx}: {unknown_str}")


def validate_market_config(cfg: dict, *, allow_unknown: bool = False) -> dict:
    top_required = {"market", "counties", "sources", "output", "progress", "insights"}
    _assert_required_keys(cfg, top_required, "market config")
    _assert_no_unknown_keys(cfg, top_required, "market config", allow_unknown)

    _assert_required_keys(cfg["market"], {"state_code", "region_suffix", "property_type"}, "market")
    _assert_required_keys(cfg["sources"], {"county", "zipcode"}, "sources")
    for dataset in ("county", "zipcode"):
        _assert_required_keys(cfg["sources"][dataset], {"url", "raw_filename"}, f"sources.{dataset}")
    _assert_required_keys(
        cfg["output"],
        {"counties_filename", "zipcodes_filename", "movers_filename"},
        "output",
    )
    _assert_required_keys(cfg["progress"], {"county_every", "zipcode_every"}, "progress")
    _assert_required_keys(cfg["insights"], {"model", "county_max_tokens", "zip_max_tokens", "delay_seconds"}, "insights")

    counties = cfg["counties"]
    if not isinstance(counties, dict) or not counties:
        raise ConfigError("counties must be a non-empty mapping of county name to zip codes")
    for county, zips in counties.items():
        if not isinstance(zips, list) or not all(isinstance(z, str) for z in zips):
            raise ConfigError(f"counties[{county}] must be a list of zip code strings")

    return cfg


def validate_lead_scoring_config(cfg: dict) -> dict:
    _assert_required_keys(cfg, {"tables", "pre_approval", "range_supplied"}, "lead_scoring")
    _assert_required_keys(cfg["tables"], set(LEAD_TABLE_ENUMS), "lead_scoring.tables")
    _assert_required_keys(cfg["pre_approval"], {"approved", "not_approved"}, "lead_scoring.pre_approval")

    for table_name, members in LEAD_TABLE_ENUMS.items():
        table = cfg["tables"][table_name]
        if not isinstance(table, dict):
            raise ConfigError(f"lead_scoring.tables.{table_name} must be a mapping")
        missing = set(members) - set(table)
        extra = set(table) - set(members)
        if missing or extra:
            raise ConfigError(
                f"lead_scoring.tables.{table_name} must cover exactly {', '.join(members)}"
            )
        for key, points in table.items():
            if not isinstance(points, int) or points < 0:
                raise ConfigError(f"lead_scoring.tables.{table_name}.{key} must be a non-negative integer")

    return cfg
