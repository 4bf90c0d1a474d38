import pandas as pd
import pytest

from keen.core.errors import ReadFailure
from keen.core.row_source import FileRowSource, StaticRowSource, clean_record, find_column
from keen.core.series import SeriesPoint
from keen.core.series_engine import SeriesQueryEngine


def test_clean_record_stringifies_headers_and_drops_blanks():
    record = clean_record({"Ticker": "INFY", 2020: 5, 2021.0: float("nan"), "2022": "  ", "Field": "PAT"})
    assert record == {"Ticker": "INFY", "2020": 5, "Field": "PAT"}


def test_static_row_source_returns_copies():
    source = StaticRowSource([{"Ticker": "INFY"}])
    first = source.rows()
    first[0]["Ticker"] = "changed"
    assert source.rows() == [{"Ticker": "INFY"}]


def test_find_column_is_case_insensitive():
    assert find_column({"ticker": "X"}, "Ticker") == "ticker"
    assert find_column({"Ticker": "X"}, "Ticker") == "Ticker"
    assert find_column({"Other": "X"}, "Ticker") is None


def test_csv_rows(csv_file):
    rows = FileRowSource(csv_file).rows()
    assert len(rows) == 3
    assert rows[0]["Ticker"] == "INFY"
    assert set(rows[0]) == {"Ticker", "Field", "2020", "2021", "2022"}
    # blank 2022 cell for INFY/PAT is omitted
    assert "2022" not in rows[1]


def test_csv_end_to_end(csv_file):
    engine = SeriesQueryEngine(FileRowSource(csv_file))
    assert engine.query("infy", "pat") == (SeriesPoint("2020", 19423.0), SeriesPoint("2021", 22146.0))


def test_excel_integer_headers(tmp_path):
    path = tmp_path / "data.xlsx"
    frame = pd.DataFrame([{"Ticker": "TCS", "Field": "SALES", 2021: 191754, 2020: 164177}])
    frame.to_excel(path, index=False)

    engine = SeriesQueryEngine(FileRowSource(path))
    assert [p.year for p in engine.query("TCS", "SALES")] == ["2020", "2021"]


def test_header_only_csv_has_no_rows(tmp_path):
    path = tmp_path / "empty.csv"
    path.write_text("Ticker,Field,2020\n", encoding="utf-8")
    assert FileRowSource(path).rows() == []


def test_zero_byte_csv_has_no_rows(tmp_path):
    path = tmp_path / "empty.csv"
    path.write_text("", encoding="utf-8")
    assert FileRowSource(path).rows() == []


def test_missing_file_is_read_failure(tmp_path):
    with pytest.raises(ReadFailure) as exc_info:
        FileRowSource(tmp_path / "missing.csv").rows()
    assert exc_info.value.status_code == 500
    assert "missing.csv" in exc_info.value.details["path"]
    assert exc_info.value.to_response() == {"error": "Failed to read or process the data file."}


def test_unsupported_suffix_is_read_failure(tmp_path):
    path = tmp_path / "data.json"
    path.write_text("[]", encoding="utf-8")
    with pytest.raises(ReadFailure):
        FileRowSource(path).rows()


def test_file_is_reread_on_every_call(tmp_path):
    path = tmp_path / "data.csv"
    path.write_text("Ticker,Field,2020\nINFY,SALES,1\n", encoding="utf-8")
    source = FileRowSource(path)
    assert source.rows()[0]["2020"] == "1"

    path.write_text("Ticker,Field,2020\nINFY,SALES,2\n", encoding="utf-8")
    assert source.rows()[0]["2020"] == "2"
