"""Configuration loading and validation."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from market_leads.common.errors import ConfigError
from market_leads.common.fs import read_yaml
from market_leads.common.schema import validate_lead_scoring_config, validate_market_config


@dataclass(frozen=True)
class ConfigBundle:
    market: dict
    lead_scoring: dict


def _deep_merge(base: Any, overlay: Any) -> Any:
    if isinstance(base, dict) and isinstance(overlay, dict):
        merged = dict(base)
        for key, value in overlay.items():
            if key in merged:
                merged[key] = _deep_merge(merged[key], value)
            else:
                merged[key] = value
        return merged
    return overlay


def _load_yaml_with_overlay(path: Path, overlay_path: Path | None) -> dict:
    if not path.exists():
        raise ConfigError(f"Missing config file: {path}")
    base = read_yaml(path)
    if overlay_path is None or not overlay_path.exists():
        return base
    overlay = read_yaml(overlay_path)
    if overlay is None:
        return base
    return _deep_merge(base, overlay)


def load_lead_scoring_config(config_dir: Path, *, overlay_config_dir: Path | None = None) -> dict:
    overlay_path = (overlay_config_dir / "lead_scoring.yml") if overlay_config_dir is not None else None
    return validate_lead_scoring_config(_load_yaml_with_overlay(config_dir / "lead_scoring.yml", overlay_path))


def load_all_configs(
    config_dir: Path,
    *,
    allow_unknown: bool = False,
    overlay_config_dir: Path | None = None,
) -> ConfigBundle:
    def _overlay(name: str) -> Path | None:
        return (overlay_config_dir / name) if overlay_config_dir is not None else None

    market = validate_market_config(
        _load_yaml_with_overlay(config_dir / "market.yml", _overlay("market.yml")),
        allow_unknown=allow_unknown,
    )
    lead_scoring = load_lead_scoring_config(config_dir, overlay_config_dir=overlay_config_dir)
    return ConfigBundle(market=market, lead_scoring=lead_scoring)


def resolve_datasets(target: str) -> list[str]:
    if target == "all":
        return ["county", "zipcode"]
    return [target]
