"""
Presentation values derived from a Series.

Everything here is pure: the same inputs always produce the same outputs and
no function raises for numeric input.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Sequence

from keen.core.series import SeriesPoint

_THRESHOLDS = (
    (1e9, "B", 2),
    (1e6, "M", 2),
    (1e3, "K", 1),
)


@dataclass(frozen=True)
class DerivedPoint:
    year: str
    value: float
    percent_change: Optional[float] = None

    @property
    def direction(self) -> str:
        if self.percent_change is None:
            return "neutral"
        return "positive" if self.percent_change >= 0 else "negative"

    def to_dict(self) -> Dict[str, Any]:
        return {"year": self.year, "value": self.value, "percent_change": self.percent_change}


def _non_finite_label(n: float) -> str:
    if math.isnan(n):
        return "NaN"
    return "Infinity" if n > 0 else "-Infinity"


def _plain_number(n: float) -> str:
    if isinstance(n, float) and n.is_integer():
        return str(int(n))
    return str(n)


def _strip_zeros(text: str) -> str:
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def compact_magnitude(n: float) -> str:
    """Abbreviate ``n`` with a K/M/B suffix.

    >>> compact_magnitude(1500000)
    '1.5M'
    >>> compact_magnitude(999)
    '999'
    """
    try:
        if not math.isfinite(n):
            return _non_finite_label(n)
    except OverflowError:
        # ints beyond float range
        return "Infinity" if n > 0 else "-Infinity"
    magnitude = abs(n)
    for threshold, suffix, digits in _THRESHOLDS:
        if magnitude >= threshold:
            return f"{_strip_zeros(f'{n / threshold:.{digits}f}')}{suffix}"
    return _plain_number(n)


def format_value(n: float) -> str:
    """Thousands-separated value for tooltips, at most three decimals."""
    try:
        if not math.isfinite(n):
            return _non_finite_label(n)
    except OverflowError:
        return "Infinity" if n > 0 else "-Infinity"
    return _strip_zeros(f"{n:,.3f}")


def drop_absent(series: Iterable[SeriesPoint]) -> List[SeriesPoint]:
    """Remove zero-valued points, which stand for missing data."""
    return [point for point in series if not point.is_absent]


def percent_change(previous: Optional[float], current: float) -> Optional[float]:
    if previous is None or previous == 0:
        return None
    change = (current - previous) / previous * 100
    return change if math.isfinite(change) else None


def derive_change(series: Iterable[SeriesPoint]) -> List[DerivedPoint]:
    """Attach period-over-period percent change to each visible point.

    Zero points are dropped first so every change refers to the previous
    point the chart actually shows.
    """
    derived: List[DerivedPoint] = []
    previous: Optional[float] = None
    for point in drop_absent(series):
        derived.append(
            DerivedPoint(year=point.year, value=point.value, percent_change=percent_change(previous, point.value))
        )
        previous = point.value
    return derived


def format_change(change: Optional[float]) -> str:
    if change is None:
        return "No change"
    arrow = "▲" if change >= 0 else "▼"
    return f"{arrow} {abs(change):.2f}%"


def tooltip(points: Sequence[DerivedPoint], year: str) -> Optional[Dict[str, str]]:
    """Tooltip content for the hovered ``year``, or ``None`` off the data."""
    for point in points:
        if point.year == year:
            return {
                "year": point.year,
                "value": format_value(point.value),
                "change": format_change(point.percent_change),
                "direction": point.direction,
            }
    return None


__all__ = [
    "DerivedPoint",
    "compact_magnitude",
    "format_value",
    "drop_absent",
    "percent_change",
    "derive_change",
    "format_change",
    "tooltip",
]
