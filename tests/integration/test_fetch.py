from __future__ import annotations

import gzip
from pathlib import Path

import pytest

from market_leads.common.errors import StageError
from market_leads.fetch.redfin import run_fetch

MARKET_CONFIG = {
    "sources": {
        "county": {
            "url": "https://example.test/redfin_market_tracker/county_market_tracker.tsv000.gz",
            "raw_filename": "county_market_tracker.tsv",
        },
    },
}


class FakeHttpClient:
    def __init__(self, payload: bytes):
        self.payload = payload
        self.urls: list[str] = []

    def download(self, url: str, target_path: Path) -> int:
        self.urls.append(url)
        target_path.parent.mkdir(parents=True, exist_ok=True)
        target_path.write_bytes(self.payload)
        return len(self.payload)


@pytest.mark.integration
def test_fetch_downloads_and_decompresses_extract(tmp_path: Path):
    content = b'"REGION"\t"PERIOD_END"\n"Mercer County, NJ"\t"2024-06-30"\n'
    client = FakeHttpClient(gzip.compress(content))

    result = run_fetch("county", MARKET_CONFIG, tmp_path, "run-1", http_client=client)

    target = tmp_path / "raw" / "county_market_tracker.tsv"
    assert target.read_bytes() == content
    assert result["decompressed_bytes"] == len(content)
    assert client.urls == [MARKET_CONFIG["sources"]["county"]["url"]]
    assert not (tmp_path / "raw" / "county_market_tracker.tsv000.gz").exists()


@pytest.mark.integration
def test_fetch_rejects_corrupt_archive(tmp_path: Path):
    client = FakeHttpClient(b"not a gzip stream")

    with pytest.raises(StageError):
        run_fetch("county", MARKET_CONFIG, tmp_path, "run-1", http_client=client)

    assert not (tmp_path / "raw" / "county_market_tracker.tsv").exists()
    assert not (tmp_path / "raw" / "county_market_tracker.tsv000.gz").exists()
