import copy

import pytest

from market_leads.common.errors import ConfigError
from market_leads.common.schema import validate_lead_scoring_config, validate_market_config
from market_leads.leads.scoring import DEFAULT_SCORING_CONFIG

BASE_MARKET = {
    "market": {"state_code": "NJ", "region_suffix": ", NJ", "property_type": "All Residential"},
    "counties": {"Mercer County, NJ": ["08648"]},
    "sources": {
        "county": {"url": "https://example.test/county.tsv000.gz", "raw_filename": "county.tsv"},
        "zipcode": {"url": "https://example.test/zip.tsv000.gz", "raw_filename": "zip.tsv"},
    },
    "output": {
        "counties_filename": "counties.json",
        "zipcodes_filename": "zipcodes.json",
        "movers_filename": "movers.json",
    },
    "progress": {"county_every": 500000, "zipcode_every": 1000000},
    "insights": {"model": "m", "county_max_tokens": 200, "zip_max_tokens": 150, "delay_seconds": 0},
}


def test_validate_market_config_accepts_valid_shape():
    validated = validate_market_config(copy.deepcopy(BASE_MARKET))
    assert validated["market"]["state_code"] == "NJ"


def test_validate_market_config_rejects_unknown_key_by_default():
    bad = copy.deepcopy(BASE_MARKET)
    bad["unexpected"] = True
    with pytest.raises(ConfigError):
        validate_market_config(bad)


def test_validate_market_config_allows_unknown_when_enabled():
    okay = copy.deepcopy(BASE_MARKET)
    okay["extra"] = 1
    validate_market_config(okay, allow_unknown=True)


def test_validate_market_config_rejects_missing_source():
    bad = copy.deepcopy(BASE_MARKET)
    del bad["sources"]["zipcode"]
    with pytest.raises(ConfigError):
        validate_market_config(bad)


def test_validate_market_config_rejects_non_string_zips():
    bad = copy.deepcopy(BASE_MARKET)
    bad["counties"]["Mercer County, NJ"] = [8648]
    with pytest.raises(ConfigError):
        validate_market_config(bad)


def test_validate_lead_scoring_rejects_extra_enum_member():
    bad = copy.deepcopy(DEFAULT_SCORING_CONFIG)
    bad["tables"]["contact_preference"]["weekend"] = 1
    with pytest.raises(ConfigError):
        validate_lead_scoring_config(bad)


def test_validate_lead_scoring_rejects_negative_points():
    bad = copy.deepcopy(DEFAULT_SCORING_CONFIG)
    bad["tables"]["timeline"]["6-plus-months"] = -5
    with pytest.raises(ConfigError):
        validate_lead_scoring_config(bad)
