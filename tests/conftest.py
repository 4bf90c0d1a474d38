import pytest

from keen.core.row_source import StaticRowSource
from keen.core.series_engine import SeriesQueryEngine


def _sample_rows():
    return [
        {"Ticker": "INFY", "Field": "SALES", "2021": 121641, "2020": 100472, "2022": 146767},
        {"Ticker": "INFY", "Field": "PAT", "2020": 19423, "2021": 22146, "2022": 0},
        {"Ticker": " tcs ", "Field": "Sales", "2020": "164177", "2021": "191754"},
        {"Ticker": "WIPRO", "Field": "EBITDA", "2020": 100, "2021": 150, "2022": 0, "2023": 200},
        {"Ticker": "TECHM", "Field": "PAT", "Notes": "restated", "2021": 5566, "2020": "n/a"},
    ]


SAMPLE_CSV = """Ticker,Field,2020,2021,2022
INFY,SALES,100472,121641,146767
INFY,PAT,19423,22146,
TCS,SALES,164177,191754,225458
"""


@pytest.fixture
def sample_rows():
    return _sample_rows()


@pytest.fixture
def static_engine(sample_rows):
    return SeriesQueryEngine(StaticRowSource(sample_rows), reject_duplicates=False)


@pytest.fixture
def csv_file(tmp_path):
    path = tmp_path / "data.csv"
    path.write_text(SAMPLE_CSV, encoding="utf-8")
    return path
