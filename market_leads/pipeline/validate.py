"""Validation stage and per-dataset quality report generation."""

from __future__ import annotations

from collections import Counter
from pathlib import Path

from market_leads.common.errors import ContractError, StageError
from market_leads.common.fs import read_json, write_json
from market_leads.common.models import METRIC_FIELDS
from market_leads.pipeline.process import processed_path, stats_path

KEY_FIELD_BY_DATASET = {"county": "slug", "zipcode": "zipcode"}
MARKET_TYPES = ("seller", "buyer", "balanced")
TREND_DIRECTIONS = ("up", "down", "stable")


def _read_records(path: Path) -> list[dict]:
    if not path.exists():
        raise StageError(f"Missing processed output: {path}")
    payload = read_json(path)
    if not isinstance(payload, list):
        raise ContractError(f"Processed output is not a list of records: {path}")
    return payload


def _distribution(records: list[dict], field: str, categories: tuple[str, ...]) -> dict[str, int]:
    counts = Counter(record.get(field) for record in records)
    return {category: counts.get(category, 0) for category in categories}


def _compute_fill_rates(records: list[dict], fields: tuple[str, ...]) -> list[dict]:
    total = len(records)
    stats = []
    for field in fields:
        filled = sum(1 for record in records if record.get(field) is not None)
        null = total - filled
        fill_percent = 0.0 if total == 0 else round((filled / total) * 100, 2)
        stats.append({"field": field, "filled": filled, "null": null, "fill_percent": fill_percent})
    return stats


def run_validate(
    dataset: str,
    market_config: dict,
    data_dir: Path,
    run_id: str,
    run_date: str,
) -> Path:
    records = _read_records(processed_path(market_config, data_dir, dataset))
    stats_file = stats_path(data_dir, dataset)
    stats = read_json(stats_file) if stats_file.exists() else {}

    key_field = KEY_FIELD_BY_DATASET[dataset]
    keys = [record.get(key_field) for record in records]
    duplicates = sum(count - 1 for count in Counter(keys).values() if count > 1)
    missing_keys = sum(1 for key in keys if not key)

    warnings: list[str] = []
    errors: list[str] = []

    if duplicates > 0:
        errors.append("DUPLICATE_KEYS_PRESENT")
    if missing_keys > 0:
        errors.append("MISSING_KEYS_PRESENT")
    if not records:
        warnings.append("NO_RECORDS")
    if stats.get("dropped_without_county"):
        warnings.append("RECORDS_DROPPED_WITHOUT_COUNTY")

    if errors:
        raise ContractError(";".join(errors))

    report_payload = {
        "dataset": dataset,
        "run_id": run_id,
        "run_date": run_date,
        "counts": {
            "lines_read": int(stats.get("lines_read", 0)),
            "eligible_rows": int(stats.get("eligible_rows", 0)),
            "unique_keys": int(stats.get("unique_keys", len(records))),
            "records": len(records),
            "dropped_without_county": int(stats.get("dropped_without_county", 0)),
        },
        "market_types": _distribution(records, "market_type", MARKET_TYPES),
        "trend_directions": _distribution(records, "trend_direction", TREND_DIRECTIONS),
        "quality": {
            "duplicate_keys": duplicates,
            "with_insight": sum(1 for record in records if record.get("ai_insight")),
        },
        "metric_fill": _compute_fill_rates(records, METRIC_FIELDS),
        "warnings": warnings,
        "errors": errors,
    }

    report_path = data_dir / "out" / "reports" / f"{dataset}_report.json"
    write_json(report_path, report_payload)
    return report_path
