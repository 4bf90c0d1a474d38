"""
Selection state machine
=======================

Tracks the (company, metric, chart mode) the user is looking at. The
selection is an immutable value replaced on every transition; its
``version`` grows by one whenever company or metric changes, and each query
is tagged with the version it was issued for so late responses for an older
selection can be recognised and dropped.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, Sequence, Union

from keen.core.normalize import normalize_key
from keen.utils.logger import get_logger

log = get_logger(__name__)


class ChartMode(str, Enum):
    AREA = "area"
    COMPOSED = "composed"


@dataclass(frozen=True)
class Selection:
    company: str
    metric: str
    chart_mode: ChartMode = ChartMode.AREA
    version: int = 1

    @property
    def is_complete(self) -> bool:
        return bool(normalize_key(self.company)) and bool(normalize_key(self.metric))

    def same_query(self, other: "Selection") -> bool:
        return normalize_key(self.company) == normalize_key(other.company) and normalize_key(
            self.metric
        ) == normalize_key(other.metric)


Dispatch = Callable[[Selection], None]


class SelectionStateMachine:
    """Owns the current Selection and decides when a query must be issued.

    ``dispatch`` is called with the new Selection exactly once per company or
    metric change. Chart mode changes never dispatch.
    """

    def __init__(
        self,
        companies: Sequence[str],
        metrics: Sequence[str],
        dispatch: Dispatch,
        *,
        chart_mode: Union[ChartMode, str] = ChartMode.AREA,
        autostart: bool = True,
    ) -> None:
        if not companies or not metrics:
            raise ValueError("At least one company and one metric are required")
        self._dispatch = dispatch
        self._selection = Selection(company=companies[0], metric=metrics[0], chart_mode=ChartMode(chart_mode))
        self._started = False
        if autostart:
            self.start()

    @property
    def selection(self) -> Selection:
        return self._selection

    @property
    def version(self) -> int:
        return self._selection.version

    def start(self) -> Selection:
        """Issue the query for the initial selection (once)."""
        if not self._started:
            self._started = True
            self._issue(self._selection)
        return self._selection

    def set_company(self, company: str) -> Selection:
        return self._transition(replace(self._selection, company=company))

    def set_metric(self, metric: str) -> Selection:
        return self._transition(replace(self._selection, metric=metric))

    def set_chart_mode(self, chart_mode: Union[ChartMode, str]) -> Selection:
        self._selection = replace(self._selection, chart_mode=ChartMode(chart_mode))
        return self._selection

    def is_current(self, version: int) -> bool:
        return version == self._selection.version

    def accept(self, version: int) -> bool:
        """True when a result issued for ``version`` may be displayed."""
        if self.is_current(version):
            return True
        log.debug(f"Discarding stale result v{version} (current v{self._selection.version})")
        return False

    def _transition(self, candidate: Selection) -> Selection:
        if candidate.same_query(self._selection):
            self._selection = candidate
            return self._selection
        self._selection = replace(candidate, version=self._selection.version + 1)
        if self._started:
            self._issue(self._selection)
        return self._selection

    def _issue(self, selection: Selection) -> None:
        # An incomplete selection still bumps the version so older results are dropped
        if selection.is_complete:
            self._dispatch(selection)


__all__ = ["ChartMode", "Selection", "SelectionStateMachine", "Dispatch"]
