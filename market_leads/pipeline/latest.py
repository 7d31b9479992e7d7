"""Latest-period selection per natural key."""

from __future__ import annotations

from market_leads.common.models import RawRecord


class LatestSelector:
    """Keep the row with the greatest ``period_end`` seen so far for each key.

    ``period_end`` is an ISO date string, so plain string comparison orders
    it chronologically. Ties keep the row that arrived first. Only one row
    per key is held, however many history rows stream past.
    """

    def __init__(self) -> None:
        self._latest: dict[str, RawRecord] = {}

    def offer(self, key: str, record: RawRecord) -> bool:
        existing = self._latest.get(key)
        if existing is None or record.get("period_end", "") > existing.get("period_end", ""):
            self._latest[key] = record
            return True
        return False

    def __len__(self) -> int:
        return len(self._latest)

    def items(self) -> list[tuple[str, RawRecord]]:
        return list(self._latest.items())

    def keys(self) -> list[str]:
        return list(self._latest)
