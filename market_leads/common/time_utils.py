"""UTC clock helpers for run ids, run dates and log timestamps."""

from __future__ import annotations

from datetime import date, datetime, timezone


def _utc_now() -> datetime:
    return datetime.now(tz=timezone.utc)


def generate_run_id(now: datetime | None = None) -> str:
    stamp = now or _utc_now()
    return stamp.strftime("run-%Y%m%dT%H%M%S%fZ")


def parse_run_date(value: str | None) -> str:
    """Return ``value`` as an ISO date, defaulting to today in UTC."""
    if not value:
        return _utc_now().date().isoformat()
    return date.fromisoformat(value).isoformat()


def utc_timestamp_iso() -> str:
    return _utc_now().isoformat(timespec="milliseconds")
