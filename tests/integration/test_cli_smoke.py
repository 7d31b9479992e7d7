from __future__ import annotations

import shutil
from pathlib import Path

import pytest

from market_leads import cli
from market_leads.cli import parse_args, run_command
from market_leads.common.fs import read_json

FIXTURES = Path(__file__).resolve().parent / "fixtures"
CONFIG_DIR = Path(__file__).resolve().parents[2] / "config"


def _fake_fetch(dataset, market_config, data_dir, run_id):
    target = data_dir / "raw" / market_config["sources"][dataset]["raw_filename"]
    target.parent.mkdir(parents=True, exist_ok=True)
    shutil.copyfile(FIXTURES / target.name, target)
    return {"dataset": dataset, "url": market_config["sources"][dataset]["url"], "path": str(target)}


@pytest.mark.integration
def test_cli_all_generates_expected_artifacts(monkeypatch, tmp_path: Path):
    monkeypatch.setattr(cli, "run_fetch", _fake_fetch)
    data_dir = tmp_path / "data"
    args = parse_args(
        [
            "all",
            "--config-dir",
            str(CONFIG_DIR),
            "--data-dir",
            str(data_dir),
            "--run-date",
            "2024-07-15",
            "--run-id",
            "run-test",
        ]
    )

    exit_code = run_command(args)

    assert exit_code == 0
    assert (data_dir / "processed" / "counties.json").exists()
    assert (data_dir / "processed" / "zipcodes.json").exists()
    assert (data_dir / "out" / "reports" / "county_report.json").exists()
    assert (data_dir / "run_meta" / "run-test.log.jsonl").exists()

    summary = read_json(data_dir / "out" / "reports" / "run_summary.json")
    assert summary["status"] == "success"
    assert summary["totals"]["records"] == 5

    zip_report = read_json(data_dir / "out" / "reports" / "zipcode_report.json")
    assert zip_report["counts"]["records"] == 3
    assert zip_report["quality"]["duplicate_keys"] == 0


@pytest.mark.integration
def test_cli_movers_after_process(monkeypatch, tmp_path: Path):
    monkeypatch.setattr(cli, "run_fetch", _fake_fetch)
    data_dir = tmp_path / "data"
    common = ["--config-dir", str(CONFIG_DIR), "--data-dir", str(data_dir), "--run-id", "run-movers"]

    assert run_command(parse_args(["fetch", "--dataset", "zipcode", *common])) == 0
    assert run_command(parse_args(["process", "--dataset", "zipcode", *common])) == 0
    assert run_command(parse_args(["movers", *common])) == 0

    movers = read_json(data_dir / "processed" / "movers.json")
    assert [m["zipcode"] for m in movers["hot_markets"]] == ["08540", "08016"]
    assert [m["zipcode"] for m in movers["fast_markets"]] == ["08540", "08016"]


@pytest.mark.integration
def test_cli_process_without_raw_extract_is_partial_failure(tmp_path: Path):
    args = parse_args(["process", "--config-dir", str(CONFIG_DIR), "--data-dir", str(tmp_path), "--run-id", "run-x"])
    assert run_command(args) == 10


@pytest.mark.integration
def test_cli_strict_mode_hard_fails(tmp_path: Path):
    args = parse_args(
        ["process", "--strict", "--config-dir", str(CONFIG_DIR), "--data-dir", str(tmp_path), "--run-id", "run-y"]
    )
    assert run_command(args) == 20
