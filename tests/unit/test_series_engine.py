"""
Tests for the Series Query Engine
"""

import pytest

from keen.core.errors import AmbiguousMatch, EmptyDataset, InvalidRequest, NotFound
from keen.core.row_source import StaticRowSource
from keen.core.series import SeriesPoint
from keen.core.series_engine import SeriesQueryEngine, query


def _years(series):
    return [point.year for point in series]


class TestQuery:
    def test_returns_points_sorted_by_year(self, sample_rows):
        series = query(sample_rows, "INFY", "SALES")
        assert series == (
            SeriesPoint("2020", 100472.0),
            SeriesPoint("2021", 121641.0),
            SeriesPoint("2022", 146767.0),
        )

    @pytest.mark.parametrize("ticker", ["infy", " INFY ", "Infy"])
    def test_ticker_lookup_is_normalized(self, sample_rows, ticker):
        assert query(sample_rows, ticker, "sales") == query(sample_rows, "INFY", "SALES")

    def test_row_side_values_are_normalized(self, sample_rows):
        series = query(sample_rows, "TCS", "SALES")
        assert series == (SeriesPoint("2020", 164177.0), SeriesPoint("2021", 191754.0))

    def test_zero_values_are_kept(self, sample_rows):
        series = query(sample_rows, "INFY", "PAT")
        assert series[-1] == SeriesPoint("2022", 0.0)

    def test_non_year_and_non_numeric_cells_are_skipped(self, sample_rows):
        series = query(sample_rows, "TECHM", "PAT")
        assert series == (SeriesPoint("2021", 5566.0),)

    def test_years_strictly_ascending_and_unique(self, sample_rows):
        for ticker, metric in [("INFY", "SALES"), ("INFY", "PAT"), ("WIPRO", "EBITDA")]:
            years = [int(y) for y in _years(query(sample_rows, ticker, metric))]
            assert years == sorted(set(years))

    def test_only_four_digit_columns_become_points(self):
        rows = [{"Ticker": "X", "Field": "Y", "2020": 1, "20201": 2, "FY21": 3, "202": 4, " 2021": 5}]
        assert _years(query(rows, "x", "y")) == ["2020"]

    def test_row_without_year_columns_gives_empty_series(self):
        rows = [{"Ticker": "X", "Field": "Y"}]
        assert query(rows, "X", "Y") == ()

    @pytest.mark.parametrize(
        "ticker,metric",
        [(None, "SALES"), ("INFY", None), ("", "SALES"), ("INFY", "")],
    )
    def test_missing_arguments(self, sample_rows, ticker, metric):
        with pytest.raises(InvalidRequest):
            query(sample_rows, ticker, metric)

    def test_blank_but_present_arguments_are_looked_up(self, sample_rows):
        with pytest.raises(NotFound):
            query(sample_rows, " ", "SALES")
        with pytest.raises(NotFound):
            query(sample_rows, "INFY", "  ")

    def test_empty_dataset_is_not_not_found(self):
        with pytest.raises(EmptyDataset):
            query([], "INFY", "SALES")

    def test_no_match(self, sample_rows):
        with pytest.raises(NotFound) as exc_info:
            query(sample_rows, "INFY", "EBITDA")
        assert exc_info.value.status_code == 404
        assert exc_info.value.company == "INFY"

    def test_first_match_wins(self):
        rows = [
            {"Ticker": "INFY", "Field": "SALES", "2020": 1},
            {"Ticker": "infy", "Field": "sales", "2020": 2},
        ]
        assert query(rows, "INFY", "SALES") == (SeriesPoint("2020", 1.0),)

    def test_duplicates_can_be_rejected(self):
        rows = [
            {"Ticker": "INFY", "Field": "SALES", "2020": 1},
            {"Ticker": "INFY", "Field": "SALES", "2020": 2},
        ]
        with pytest.raises(AmbiguousMatch) as exc_info:
            query(rows, "INFY", "SALES", reject_duplicates=True)
        assert exc_info.value.details["matches"] == 2

    def test_custom_column_names(self):
        rows = [{"symbol": "INFY", "item": "SALES", "2020": 7}]
        series = query(rows, "INFY", "SALES", ticker_column="Symbol", field_column="Item")
        assert series == (SeriesPoint("2020", 7.0),)


class TestSeriesQueryEngine:
    def test_reads_source_on_every_query(self):
        calls = []

        class CountingSource(StaticRowSource):
            def rows(self):
                calls.append(1)
                return super().rows()

        engine = SeriesQueryEngine(CountingSource([{"Ticker": "A", "Field": "B", "2020": 1}]))
        engine.query("A", "B")
        engine.query("A", "B")
        assert len(calls) == 2

    def test_invalid_request_does_not_read_source(self):
        class ExplodingSource:
            def rows(self):
                raise AssertionError("source should not be read")

        engine = SeriesQueryEngine(ExplodingSource())
        with pytest.raises(InvalidRequest):
            engine.query("INFY", None)

    def test_empty_source(self):
        engine = SeriesQueryEngine(StaticRowSource([]))
        with pytest.raises(EmptyDataset):
            engine.query("INFY", "SALES")

    def test_reject_duplicates_defaults_to_config(self, static_engine):
        assert SeriesQueryEngine(StaticRowSource([])).reject_duplicates is False
        assert static_engine.ticker_column == "Ticker"

    def test_aquery(self, static_engine):
        import asyncio

        series = asyncio.run(static_engine.aquery("wipro", "ebitda"))
        assert [p.value for p in series] == [100.0, 150.0, 0.0, 200.0]
