"""Streaming reader for tab-separated market-tracker extracts."""

from __future__ import annotations

import gzip
from pathlib import Path
from typing import Callable, Iterator, TextIO

from market_leads.common.errors import StageError
from market_leads.common.fields import normalise_header, strip_quotes
from market_leads.common.models import RawRecord

ProgressCallback = Callable[[int], None]


def _open_text(path: Path) -> TextIO:
    if path.suffix == ".gz":
        return gzip.open(path, "rt", encoding="utf-8", newline="")
    return path.open("r", encoding="utf-8", newline="")


class TsvExtract:
    """Single-pass iterator over an extract that tracks how many lines it read.

    ``lines_read`` includes the header row once one has been read, so a
    0-byte file reports 0 and a header-only file reports 1. ``progress`` is
    called with the running count every ``progress_every`` lines.
    """

    def __init__(
        self,
        path: Path,
        *,
        progress: ProgressCallback | None = None,
        progress_every: int = 500_000,
    ) -> None:
        self.path = path
        self.progress = progress
        self.progress_every = progress_every
        self.lines_read = 0

    def __iter__(self) -> Iterator[RawRecord]:
        if not self.path.exists():
            raise StageError(f"Missing raw extract: {self.path}")

        with _open_text(self.path) as f:
            header_line = f.readline()
            if not header_line:
                return
            headers = [normalise_header(h) for h in header_line.rstrip("\r\n").split("\t")]
            self.lines_read = 1

            for line in f:
                values = [strip_quotes(v) for v in line.rstrip("\r\n").split("\t")]
                yield {header: (values[i] if i < len(values) else "") for i, header in enumerate(headers)}

                self.lines_read += 1
                if (
                    self.progress is not None
                    and self.progress_every > 0
                    and self.lines_read % self.progress_every == 0
                ):
                    self.progress(self.lines_read)


def iter_tsv_records(
    path: Path,
    *,
    progress: ProgressCallback | None = None,
    progress_every: int = 500_000,
) -> Iterator[RawRecord]:
    """Yield one record per data line, keyed by normalised header."""
    return iter(TsvExtract(path, progress=progress, progress_every=progress_every))
