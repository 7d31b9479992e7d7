"""Fetch stage: download and decompress weekly market-tracker extracts."""

from __future__ import annotations

import gzip
import shutil
import zlib
from pathlib import Path
from urllib.parse import urlparse

from market_leads.common.errors import StageError
from market_leads.common.fs import ensure_dir, remove_if_exists
from market_leads.common.http import HttpClient


def _archive_filename(url: str, dataset: str) -> str:
    basename = Path(urlparse(url).path).name
    if basename:
        return basename
    return f"{dataset}_market_tracker.tsv.gz"


def decompress_gzip(archive_path: Path, target_path: Path) -> int:
    ensure_dir(target_path.parent)
    try:
        with gzip.open(archive_path, "rb") as src, target_path.open("wb") as dst:
            shutil.copyfileobj(src, dst, length=1024 * 1024)
    except (OSError, EOFError, zlib.error) as exc:
        remove_if_exists(target_path)
        raise StageError(f"Could not decompress {archive_path}") from exc
    return target_path.stat().st_size


def run_fetch(
    dataset: str,
    market_config: dict,
    data_dir: Path,
    run_id: str,
    http_client: HttpClient | None = None,
) -> dict:
    source = market_config["sources"][dataset]
    raw_dir = data_dir / "raw"
    archive_path = raw_dir / _archive_filename(source["url"], dataset)
    target_path = raw_dir / source["raw_filename"]

    owns_client = http_client is None
    client = http_client or HttpClient()
    try:
        compressed_bytes = client.download(source["url"], archive_path)
    finally:
        if owns_client:
            client.close()

    try:
        decompressed_bytes = decompress_gzip(archive_path, target_path)
    finally:
        remove_if_exists(archive_path)

    return {
        "dataset": dataset,
        "run_id": run_id,
        "url": source["url"],
        "path": str(target_path),
        "compressed_bytes": compressed_bytes,
        "decompressed_bytes": decompressed_bytes,
    }
