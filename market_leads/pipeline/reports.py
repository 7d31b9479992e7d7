"""Run report aggregation."""

from __future__ import annotations

from pathlib import Path

from market_leads.common.fs import read_json, write_json


def write_run_summary(data_dir: Path, run_id: str, run_date: str, datasets: list[str]) -> Path:
    dataset_reports = {}
    totals = {
        "lines_read": 0,
        "eligible_rows": 0,
        "records": 0,
        "dropped_without_county": 0,
    }
    warning_count = 0
    error_count = 0

    for dataset in datasets:
        report_path = data_dir / "out" / "reports" / f"{dataset}_report.json"
        if not report_path.exists():
            dataset_reports[dataset] = {"status": "missing_report"}
            error_count += 1
            continue

        report = read_json(report_path)
        dataset_reports[dataset] = {
            "counts": report.get("counts", {}),
            "market_types": report.get("market_types", {}),
            "warnings": report.get("warnings", []),
            "errors": report.get("errors", []),
        }

        counts = report.get("counts", {})
        for key in totals:
            totals[key] += int(counts.get(key, 0))

        warning_count += len(report.get("warnings", []))
        error_count += len(report.get("errors", []))

    status = "success"
    if error_count > 0:
        status = "error"
    elif warning_count > 0:
        status = "partial"

    summary_path = data_dir / "out" / "reports" / "run_summary.json"
    payload = {
        "run_id": run_id,
        "run_date": run_date,
        "status": status,
        "datasets": datasets,
        "totals": totals,
        "warning_count": warning_count,
        "error_count": error_count,
        "dataset_reports": dataset_reports,
    }
    write_json(summary_path, payload)
    return summary_path
