"""
Row sources
===========

A row source materialises a tabular dataset as a list of flat records
(column name -> raw cell value). The engine re-reads the source on every
query, so implementations must not cache between calls.

- ``FileRowSource``: first sheet of an Excel workbook or a CSV file, via pandas
- ``StaticRowSource``: in-memory rows, used by tests and the CLI
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Protocol, Union

import pandas as pd

from keen.core.errors import ReadFailure
from keen.core.normalize import keys_match
from keen.utils.logger import get_logger

log = get_logger(__name__)

EXCEL_SUFFIXES = {".xls", ".xlsx", ".xlsm"}
CSV_SUFFIXES = {".csv", ".txt"}


class RowSource(Protocol):
    def rows(self) -> List[Dict[str, Any]]:
        ...


def _column_name(raw: Any) -> str:
    """Spreadsheet readers hand back year headers as ints or floats."""
    if isinstance(raw, float) and raw.is_integer():
        return str(int(raw))
    return str(raw).strip()


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def clean_record(raw: Mapping[Any, Any]) -> Dict[str, Any]:
    """Stringify column names and omit blank cells."""
    record: Dict[str, Any] = {}
    for key, value in raw.items():
        if _is_blank(value):
            continue
        record[_column_name(key)] = value
    return record


class StaticRowSource:
    """Row source over rows already held in memory."""

    def __init__(self, rows: Iterable[Mapping[Any, Any]]):
        self._rows = [dict(row) for row in rows]

    def rows(self) -> List[Dict[str, Any]]:
        return [clean_record(row) for row in self._rows]


class FileRowSource:
    """Reads the first sheet of a workbook (or a CSV file) on every call."""

    def __init__(self, path: Union[str, Path], *, sheet: Union[int, str] = 0):
        self.path = Path(path)
        self.sheet = sheet

    def _read_frame(self) -> pd.DataFrame:
        suffix = self.path.suffix.lower()
        if suffix in CSV_SUFFIXES:
            return pd.read_csv(self.path, dtype=object, skipinitialspace=True)
        if suffix in EXCEL_SUFFIXES:
            return pd.read_excel(self.path, sheet_name=self.sheet)
        raise ValueError(f"Unsupported data file type: {suffix or '<none>'}")

    def rows(self) -> List[Dict[str, Any]]:
        try:
            frame = self._read_frame()
        except pd.errors.EmptyDataError:
            log.warning(f"Data file {self.path} is empty")
            return []
        except Exception as exc:  # noqa: BLE001
            log.error(f"Error processing file {self.path}: {exc}")
            raise ReadFailure(str(exc), path=str(self.path), cause=exc) from exc

        records = [clean_record(row) for row in frame.to_dict(orient="records")]
        # Fully blank lines survive read_csv/read_excel as empty records
        records = [record for record in records if record]
        log.debug(f"Loaded {len(records)} rows from {self.path.name}")
        return records


def find_column(record: Mapping[str, Any], name: str) -> Optional[str]:
    """Return the record key whose normalised form equals ``name``'s."""
    if name in record:
        return name
    for key in record:
        if keys_match(key, name):
            return key
    return None


__all__ = ["RowSource", "StaticRowSource", "FileRowSource", "clean_record", "find_column"]
