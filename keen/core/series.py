"""Series value objects shared by the query engine, the API and the client."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

YEAR_COLUMN_RE = re.compile(r"^\d{4}$")

Record = Mapping[str, Any]


@dataclass(frozen=True)
class SeriesPoint:
    """One (year, value) observation. ``value == 0`` means no data."""

    year: str
    value: float

    @property
    def is_absent(self) -> bool:
        return self.value == 0

    def to_dict(self) -> Dict[str, Any]:
        return {"year": self.year, "value": self.value}

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "SeriesPoint":
        return cls(year=str(payload["year"]), value=float(payload["value"]))


Series = Tuple[SeriesPoint, ...]


def is_year_column(name: Any) -> bool:
    return isinstance(name, str) and bool(YEAR_COLUMN_RE.match(name))


def coerce_cell(raw: Any) -> Optional[float]:
    """Convert a raw year cell to a finite float.

    Returns ``None`` for blank, non-numeric or non-finite cells. Numeric
    strings may carry surrounding whitespace.
    """
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        value = float(raw)
    else:
        text = str(raw).strip()
        if not text:
            return None
        try:
            value = float(text)
        except ValueError:
            return None
    if not math.isfinite(value):
        return None
    return value


def series_from_payload(payload: Iterable[Mapping[str, Any]]) -> Series:
    """Build a Series from the wire representation, keeping ascending years."""
    points = [SeriesPoint.from_dict(item) for item in payload]
    return tuple(sorted(points, key=lambda p: int(p.year)))


def series_to_payload(series: Iterable[SeriesPoint]) -> List[Dict[str, Any]]:
    return [point.to_dict() for point in series]


__all__ = [
    "YEAR_COLUMN_RE",
    "Record",
    "SeriesPoint",
    "Series",
    "is_year_column",
    "coerce_cell",
    "series_from_payload",
    "series_to_payload",
]
