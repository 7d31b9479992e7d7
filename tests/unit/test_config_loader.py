from pathlib import Path

import pytest

from market_leads.common.config_loader import load_all_configs, load_lead_scoring_config, resolve_datasets
from market_leads.common.errors import ConfigError

CONFIG_DIR = Path(__file__).resolve().parents[2] / "config"


def test_load_all_configs_from_repo_config_dir():
    bundle = load_all_configs(CONFIG_DIR)
    assert bundle.market["market"]["state_code"] == "NJ"
    assert list(bundle.market["counties"]) == [
        "Burlington County, NJ",
        "Mercer County, NJ",
        "Middlesex County, NJ",
    ]
    assert "08054" in bundle.market["counties"]["Burlington County, NJ"]
    assert bundle.lead_scoring["tables"]["timeline"]["within-30-days"] == 40


def test_resolve_datasets():
    assert resolve_datasets("all") == ["county", "zipcode"]
    assert resolve_datasets("zipcode") == ["zipcode"]


def test_load_all_configs_applies_overlay_values(tmp_path: Path):
    overlay = tmp_path / "overlay"
    overlay.mkdir()
    (overlay / "market.yml").write_text(
        """progress:
  county_every: 10
insights:
  delay_seconds: 0
""",
        encoding="utf-8",
    )
    (overlay / "lead_scoring.yml").write_text("range_supplied: 7\n", encoding="utf-8")

    bundle = load_all_configs(CONFIG_DIR, overlay_config_dir=overlay)

    assert bundle.market["progress"]["county_every"] == 10
    assert bundle.market["progress"]["zipcode_every"] == 1000000
    assert bundle.market["insights"]["delay_seconds"] == 0
    assert bundle.market["insights"]["county_max_tokens"] == 200
    assert bundle.lead_scoring["range_supplied"] == 7


def test_load_all_configs_ignores_empty_overlay_file(tmp_path: Path):
    overlay = tmp_path / "overlay"
    overlay.mkdir()
    (overlay / "market.yml").write_text("", encoding="utf-8")

    bundle = load_all_configs(CONFIG_DIR, overlay_config_dir=overlay)

    assert bundle.market["market"]["property_type"] == "All Residential"


def test_load_all_configs_missing_file_raises(tmp_path: Path):
    with pytest.raises(ConfigError):
        load_all_configs(tmp_path)


def test_load_lead_scoring_config_ignores_market_file(tmp_path: Path):
    (tmp_path / "lead_scoring.yml").write_text((CONFIG_DIR / "lead_scoring.yml").read_text(encoding="utf-8"), encoding="utf-8")
    overlay = tmp_path / "overlay"
    overlay.mkdir()
    (overlay / "lead_scoring.yml").write_text("pre_approval:\n  approved: 20\n", encoding="utf-8")

    cfg = load_lead_scoring_config(tmp_path, overlay_config_dir=overlay)

    assert cfg["pre_approval"] == {"approved": 20, "not_approved": 5}
    assert cfg["tables"]["timeline"]["within-30-days"] == 40
