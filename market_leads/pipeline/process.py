"""Process stage: stream raw extracts into normalised region collections."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

from market_leads.common.fs import write_json
from market_leads.common.region import extract_zip_code
from market_leads.pipeline.latest import LatestSelector
from market_leads.pipeline.transform import (
    MarketScope,
    build_county_record,
    build_zipcode_record,
    county_eligibility,
    zipcode_eligibility,
)
from market_leads.pipeline.tsv_reader import ProgressCallback, TsvExtract


def processed_path(market_config: dict, data_dir: Path, dataset: str) -> Path:
    output = market_config["output"]
    filename = output["counties_filename"] if dataset == "county" else output["zipcodes_filename"]
    return data_dir / "processed" / filename


def stats_path(data_dir: Path, dataset: str) -> Path:
    return data_dir / "intermediate" / f"{dataset}_stats.json"


def _stream_latest(
    raw_path: Path,
    eligible: Callable,
    *,
    progress: ProgressCallback | None,
    progress_every: int,
) -> tuple[LatestSelector, int, int, int]:
    extract = TsvExtract(raw_path, progress=progress, progress_every=progress_every)
    selector = LatestSelector()
    rows_in = 0
    eligible_rows = 0
    for record in extract:
        rows_in += 1
        if not eligible(record):
            continue
        eligible_rows += 1
        selector.offer(record["region"], record)
    return selector, extract.lines_read, rows_in, eligible_rows


def _write_outputs(
    dataset: str,
    market_config: dict,
    data_dir: Path,
    run_id: str,
    records: list,
    stats: dict,
) -> dict:
    out_path = processed_path(market_config, data_dir, dataset)
    write_json(out_path, [record.to_dict() for record in records])

    payload = {"dataset": dataset, "run_id": run_id, "path": str(out_path), **stats}
    write_json(stats_path(data_dir, dataset), payload)
    payload["records"] = records
    return payload


def run_process_counties(
    market_config: dict,
    data_dir: Path,
    run_id: str,
    *,
    progress: ProgressCallback | None = None,
) -> dict:
    scope = MarketScope.from_config(market_config)
    raw_path = data_dir / "raw" / market_config["sources"]["county"]["raw_filename"]
    selector, lines_read, rows_in, eligible_rows = _stream_latest(
        raw_path,
        county_eligibility(scope),
        progress=progress,
        progress_every=int(market_config["progress"]["county_every"]),
    )

    records = [build_county_record(region, data, scope) for region, data in selector.items()]

    stats = {
        "lines_read": lines_read,
        "rows_in": rows_in,
        "eligible_rows": eligible_rows,
        "unique_keys": len(selector),
        "rows_out": len(records),
        "dropped_without_county": 0,
    }
    return _write_outputs("county", market_config, data_dir, run_id, records, stats)


def run_process_zipcodes(
    market_config: dict,
    data_dir: Path,
    run_id: str,
    *,
    progress: ProgressCallback | None = None,
) -> dict:
    scope = MarketScope.from_config(market_config)
    raw_path = data_dir / "raw" / market_config["sources"]["zipcode"]["raw_filename"]
    selector, lines_read, rows_in, eligible_rows = _stream_latest(
        raw_path,
        zipcode_eligibility(scope),
        progress=progress,
        progress_every=int(market_config["progress"]["zipcode_every"]),
    )

    all_zips = [extract_zip_code(key) for key in selector.keys()]
    records = []
    dropped = 0
    for region_key, data in selector.items():
        record = build_zipcode_record(region_key, data, scope, all_zips)
        if record is None:
            dropped += 1
            continue
        records.append(record)

    stats = {
        "lines_read": lines_read,
        "rows_in": rows_in,
        "eligible_rows": eligible_rows,
        "unique_keys": len(selector),
        "rows_out": len(records),
        "dropped_without_county": dropped,
    }
    return _write_outputs("zipcode", market_config, data_dir, run_id, records, stats)


def run_process(
    dataset: str,
    market_config: dict,
    data_dir: Path,
    run_id: str,
    *,
    progress: ProgressCallback | None = None,
) -> dict:
    if dataset == "county":
        return run_process_counties(market_config, data_dir, run_id, progress=progress)
    if dataset == "zipcode":
        return run_process_zipcodes(market_config, data_dir, run_id, progress=progress)
    raise ValueError(f"Unknown dataset: {dataset}")
