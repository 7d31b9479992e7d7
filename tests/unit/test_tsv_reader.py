import gzip
from pathlib import Path

import pytest

from market_leads.common.errors import StageError
from market_leads.pipeline.tsv_reader import TsvExtract, iter_tsv_records


def test_reader_normalises_headers_and_strips_cell_quotes(tmp_path: Path):
    path = tmp_path / "extract.tsv"
    path.write_text(
        '"PERIOD_END"\t"REGION"\t"STATE_CODE"\n'
        '"2024-06-30"\t"Mercer County, NJ"\tNJ\n',
        encoding="utf-8",
    )

    records = list(iter_tsv_records(path))

    assert records == [{"period_end": "2024-06-30", "region": "Mercer County, NJ", "state_code": "NJ"}]


def test_reader_fills_missing_trailing_cells_with_blank(tmp_path: Path):
    path = tmp_path / "extract.tsv"
    path.write_text("a\tb\tc\r\n1\t2\r\n", encoding="utf-8")

    assert list(iter_tsv_records(path)) == [{"a": "1", "b": "2", "c": ""}]


def test_reader_reads_gzip_extracts(tmp_path: Path):
    path = tmp_path / "extract.tsv.gz"
    with gzip.open(path, "wt", encoding="utf-8") as f:
        f.write("region\tperiod_end\nZip Code: 08016\t2024-01-31\n")

    assert list(iter_tsv_records(path)) == [{"region": "Zip Code: 08016", "period_end": "2024-01-31"}]


def test_reader_reports_progress_counting_header_line(tmp_path: Path):
    path = tmp_path / "extract.tsv"
    path.write_text("a\n" + "".join(f"{i}\n" for i in range(9)), encoding="utf-8")
    seen: list[int] = []

    records = list(iter_tsv_records(path, progress=seen.append, progress_every=5))

    assert len(records) == 9
    assert seen == [5, 10]


def test_reader_empty_file_yields_nothing(tmp_path: Path):
    path = tmp_path / "extract.tsv"
    path.write_text("", encoding="utf-8")
    assert list(iter_tsv_records(path)) == []


def test_reader_missing_file_raises_stage_error(tmp_path: Path):
    with pytest.raises(StageError):
        list(iter_tsv_records(tmp_path / "missing.tsv"))


def test_extract_counts_header_only_when_present(tmp_path: Path):
    empty = tmp_path / "empty.tsv"
    empty.write_text("", encoding="utf-8")
    header_only = tmp_path / "header.tsv"
    header_only.write_text('"REGION"\t"PERIOD_END"\n', encoding="utf-8")
    two_rows = tmp_path / "rows.tsv"
    two_rows.write_text("region\tperiod_end\nA\t2024-01-31\nB\t2024-02-29\n", encoding="utf-8")

    counts = []
    for path in (empty, header_only, two_rows):
        extract = TsvExtract(path)
        list(extract)
        counts.append(extract.lines_read)

    assert counts == [0, 1, 3]
