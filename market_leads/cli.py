"""CLI entrypoint for the market data and lead scoring pipeline."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from market_leads.common.config_loader import (
    ConfigBundle,
    load_all_configs,
    load_lead_scoring_config,
    resolve_datasets,
)
from market_leads.common.constants import DATASETS, EXIT_HARD_FAIL, EXIT_PARTIAL, EXIT_SUCCESS, STAGES
from market_leads.common.errors import InputError, PipelineError
from market_leads.common.logging import build_logger, log_event
from market_leads.common.time_utils import generate_run_id, parse_run_date
from market_leads.fetch.redfin import run_fetch
from market_leads.leads.labels import temperature_label
from market_leads.leads.models import QualificationAnswers
from market_leads.leads.scoring import LeadScoringTables, calculate_lead_score
from market_leads.pipeline.insights import run_insights
from market_leads.pipeline.movers import run_movers
from market_leads.pipeline.process import run_process
from market_leads.pipeline.reports import write_run_summary
from market_leads.pipeline.validate import run_validate

STANDALONE_COMMANDS = ("insights", "movers", "score-lead")


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("command", choices=[*STAGES, "all", *STANDALONE_COMMANDS])
    parser.add_argument("--dataset", default="all", choices=[*DATASETS, "all"])
    parser.add_argument("--run-date", default=None)
    parser.add_argument("--run-id", default=None)
    parser.add_argument("--config-dir", default="./config")
    parser.add_argument("--overlay-config-dir", default=None)
    parser.add_argument("--data-dir", default="./data")
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARN", "ERROR"])
    parser.add_argument("--strict", action="store_true")
    parser.add_argument("--answers", default=None, help="JSON qualification answers for score-lead (default: stdin)")
    return parser.parse_args(argv)


def execute_stage(stage: str, dataset: str, bundle: ConfigBundle, data_dir: Path, run_id: str, run_date: str, logger):
    cfg = bundle.market
    if stage == "fetch":
        result = run_fetch(dataset, cfg, data_dir, run_id)
        log_event(
            logger,
            f"fetched {dataset} extract",
            run_id=run_id,
            stage=stage,
            dataset=dataset,
            source=result["url"],
            event="FETCH_DONE",
            status="ok",
        )
    elif stage == "process":

        def _progress(lines_read: int) -> None:
            log_event(
                logger,
                f"processed {lines_read:,} lines",
                run_id=run_id,
                stage=stage,
                dataset=dataset,
                event="PROGRESS",
                status="ok",
                lines_read=lines_read,
            )

        result = run_process(dataset, cfg, data_dir, run_id, progress=_progress)
        log_event(
            logger,
            f"found {result['rows_out']} {dataset} records",
            run_id=run_id,
            stage=stage,
            dataset=dataset,
            event="PROCESS_DONE",
            status="ok",
            lines_read=result["lines_read"],
            rows_in=result["rows_in"],
            rows_out=result["rows_out"],
        )
    elif stage == "validate":
        run_validate(dataset, cfg, data_dir, run_id, run_date)
    elif stage == "insights":
        result = run_insights(dataset, cfg, data_dir, run_id)
        log_event(
            logger,
            f"generated {result['rows_out']} {dataset} insights",
            run_id=run_id,
            stage=stage,
            dataset=dataset,
            event="INSIGHTS_DONE",
            status="ok",
            rows_in=result["rows_in"],
            rows_out=result["rows_out"],
        )
    else:
        raise ValueError(f"Unknown stage: {stage}")


def _read_answers(path: str | None) -> dict:
    if path is None:
        raw = sys.stdin.read()
    else:
        try:
            raw = Path(path).read_text(encoding="utf-8")
        except OSError as exc:
            raise InputError(f"Could not read qualification answers from {path}: {exc.strerror}") from exc
    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise InputError("Qualification answers are not valid JSON") from exc
    if not isinstance(payload, dict):
        raise InputError("Qualification answers must be a JSON object")
    return payload


def score_lead_command(args: argparse.Namespace, lead_scoring_config: dict) -> int:
    tables = LeadScoringTables.from_config(lead_scoring_config)
    try:
        answers = QualificationAnswers.from_mapping(_read_answers(args.answers))
    except InputError as exc:
        print(json.dumps({"error_code": exc.error_code, "message": str(exc)}), file=sys.stderr)
        return EXIT_HARD_FAIL

    result = calculate_lead_score(answers, tables)
    payload = result.to_dict()
    payload["label"] = temperature_label(result.temperature)
    print(json.dumps(payload, indent=2, sort_keys=True))
    return EXIT_SUCCESS


def run_command(args: argparse.Namespace) -> int:
    config_dir = Path(args.config_dir)
    overlay_config_dir = Path(args.overlay_config_dir) if args.overlay_config_dir else None

    if args.command == "score-lead":
        lead_scoring = load_lead_scoring_config(config_dir, overlay_config_dir=overlay_config_dir)
        return score_lead_command(args, lead_scoring)

    bundle = load_all_configs(config_dir, overlay_config_dir=overlay_config_dir)

    run_id = args.run_id or generate_run_id()
    run_date = parse_run_date(args.run_date)
    data_dir = Path(args.data_dir)

    logger = build_logger(run_id, data_dir=data_dir, level=args.log_level)
    datasets = resolve_datasets(args.dataset)

    if args.command == "movers":
        path = run_movers(bundle.market, data_dir, run_id)
        log_event(logger, f"wrote {path.name}", run_id=run_id, stage="movers", event="MOVERS_DONE", status="ok")
        return EXIT_SUCCESS

    if args.command == "all":
        stages = STAGES
    else:
        stages = (args.command,)

    had_partial_failure = False

    for stage in stages:
        log_event(logger, "stage start", run_id=run_id, stage=stage, event="STAGE_START", status="ok")
        for dataset in datasets:
            try:
                execute_stage(stage, dataset, bundle, data_dir, run_id, run_date, logger)
            except PipelineError as exc:
                had_partial_failure = True
                log_event(
                    logger,
                    f"stage failed for dataset {dataset}: {exc}",
                    run_id=run_id,
                    stage=stage,
                    dataset=dataset,
                    event="STAGE_FAIL",
                    status="error",
                    error_code=exc.error_code,
                )
                if exc.error_code in ("CONTRACT_ERROR", "CONFIG_ERROR"):
                    return EXIT_HARD_FAIL
                if args.strict:
                    return EXIT_HARD_FAIL
            except Exception:
                had_partial_failure = True
                logger.exception(
                    f"unexpected failure for dataset {dataset}",
                    extra={
                        "run_id": run_id,
                        "stage": stage,
                        "dataset": dataset,
                        "event": "STAGE_FAIL",
                        "status": "error",
                        "error_code": "UNEXPECTED_ERROR",
                    },
                )
                if args.strict:
                    return EXIT_HARD_FAIL
        log_event(logger, "stage end", run_id=run_id, stage=stage, event="STAGE_END", status="ok")

    if "validate" in stages:
        write_run_summary(data_dir, run_id=run_id, run_date=run_date, datasets=datasets)
    if had_partial_failure:
        return EXIT_PARTIAL
    return EXIT_SUCCESS


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv if argv is not None else sys.argv[1:])
    try:
        return run_command(args)
    except PipelineError:
        return EXIT_HARD_FAIL
    except Exception:
        return EXIT_HARD_FAIL


if __name__ == "__main__":
    raise SystemExit(main())
