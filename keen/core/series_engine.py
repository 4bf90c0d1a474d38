"""
Series Query Engine
===================

Turns flat ticker/field rows into an ordered year -> value series.

Lookup is case and whitespace insensitive on both the ticker and the field.
When the dataset holds more than one row for a pair, the first row in source
order wins unless ``reject_duplicates`` is set, in which case the lookup
fails with ``AmbiguousMatch``.
"""

from __future__ import annotations

import asyncio
from typing import Any, Iterable, List, Mapping, Optional, Sequence

from keen.core.config import Config
from keen.core.errors import AmbiguousMatch, EmptyDataset, InvalidRequest, NotFound
from keen.core.normalize import keys_match
from keen.core.row_source import RowSource, find_column
from keen.core.series import Series, SeriesPoint, coerce_cell, is_year_column
from keen.utils.logger import get_logger

log = get_logger(__name__)

DEFAULT_TICKER_COLUMN = "Ticker"
DEFAULT_FIELD_COLUMN = "Field"


def _require(value: Optional[str], field: str) -> str:
    if value is None or value == "":
        raise InvalidRequest(field=field)
    return str(value)


def _cell(record: Mapping[str, Any], column: str) -> Any:
    key = find_column(record, column)
    return record.get(key) if key is not None else None


def project(record: Mapping[str, Any], *, company: Optional[str] = None, metric: Optional[str] = None) -> Series:
    """Project the year columns of one record into an ascending Series.

    Zero values are kept. Cells that are not numbers are skipped with a
    warning.
    """
    points: List[SeriesPoint] = []
    for column, raw in record.items():
        if not is_year_column(column):
            continue
        value = coerce_cell(raw)
        if value is None:
            log.warning(f"Skipping non-numeric cell {company}/{metric}/{column}: {raw!r}")
            continue
        points.append(SeriesPoint(year=column, value=value))
    points.sort(key=lambda point: int(point.year))
    return tuple(points)


def query(
    rows: Sequence[Mapping[str, Any]],
    ticker: Optional[str],
    metric: Optional[str],
    *,
    ticker_column: str = DEFAULT_TICKER_COLUMN,
    field_column: str = DEFAULT_FIELD_COLUMN,
    reject_duplicates: bool = False,
) -> Series:
    """Return the Series for ``(ticker, metric)`` from ``rows``.

    Raises:
        InvalidRequest: ``ticker`` or ``metric`` is empty or missing.
        EmptyDataset: ``rows`` is empty.
        NotFound: no row matches.
        AmbiguousMatch: ``reject_duplicates`` is on and several rows match.
    """
    ticker = _require(ticker, "company")
    metric = _require(metric, "metric")

    if not rows:
        raise EmptyDataset(company=ticker, metric=metric)

    matches = _matching_rows(rows, ticker, metric, ticker_column, field_column)
    target = next(matches, None)
    if target is None:
        log.debug(f"No row for {ticker}/{metric}")
        raise NotFound(company=ticker, metric=metric)

    if reject_duplicates:
        extra = sum(1 for _ in matches)
        if extra:
            raise AmbiguousMatch(company=ticker, metric=metric, matches=extra + 1)

    return project(target, company=ticker, metric=metric)


def _matching_rows(
    rows: Iterable[Mapping[str, Any]],
    ticker: str,
    metric: str,
    ticker_column: str,
    field_column: str,
):
    for row in rows:
        if (
            keys_match(_cell(row, ticker_column), ticker)
            and keys_match(_cell(row, field_column), metric)
        ):
            yield row


class SeriesQueryEngine:
    """Read-only lookups over a row source, re-read on every query."""

    def __init__(
        self,
        source: RowSource,
        *,
        ticker_column: Optional[str] = None,
        field_column: Optional[str] = None,
        reject_duplicates: Optional[bool] = None,
    ) -> None:
        self.source = source
        self.ticker_column = ticker_column or Config.get("dataset", "ticker_column", default=DEFAULT_TICKER_COLUMN)
        self.field_column = field_column or Config.get("dataset", "field_column", default=DEFAULT_FIELD_COLUMN)
        self.reject_duplicates = (
            reject_duplicates
            if reject_duplicates is not None
            else bool(Config.get("dataset", "reject_duplicates", default=False))
        )

    def query(self, ticker: Optional[str], metric: Optional[str]) -> Series:
        # Validate before touching the source so a bad request never costs a read
        _require(ticker, "company")
        _require(metric, "metric")
        rows = self.source.rows()
        return query(
            rows,
            ticker,
            metric,
            ticker_column=self.ticker_column,
            field_column=self.field_column,
            reject_duplicates=self.reject_duplicates,
        )

    async def aquery(self, ticker: Optional[str], metric: Optional[str]) -> Series:
        """Run :meth:`query` in a worker thread; the row source read blocks."""
        return await asyncio.to_thread(self.query, ticker, metric)


__all__ = ["SeriesQueryEngine", "query", "project"]
