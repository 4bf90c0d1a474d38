"""
Dashboard controller
====================

Glue between the selection state machine, the series endpoint and the chart
description. Every company or metric change starts one fetch tagged with the
selection version; when the fetch completes its result is applied only if
that version is still current. In-flight fetches are never cancelled, a
late response for an older selection is simply dropped.

All mutating methods must be called from inside a running event loop.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Awaitable, Callable, Dict, List, Optional, Tuple, Union

from keen.client.api_client import DEFAULT_ERROR, ClientError
from keen.client.chart import ChartSpec, build_chart
from keen.client.derivation import DerivedPoint, derive_change
from keen.client.selection import ChartMode, Selection, SelectionStateMachine
from keen.core.config import Config
from keen.core.series import Series
from keen.core.universe import Universe
from keen.utils.logger import get_logger

log = get_logger(__name__)

Fetch = Callable[[str, str], Awaitable[Series]]

PLACEHOLDER = "Please select a company and a metric to view the chart."


@dataclass(frozen=True)
class DashboardView:
    selection: Selection
    company_name: str
    metric_description: Optional[str]
    loading: bool
    error: Optional[str]
    points: Tuple[DerivedPoint, ...]

    @property
    def chart(self) -> Optional[ChartSpec]:
        if self.loading or self.error or not self.points:
            return None
        return build_chart(self.points, self.selection.chart_mode)

    @property
    def status(self) -> str:
        if self.loading:
            return "loading"
        if self.error:
            return "error"
        return "chart" if self.points else "placeholder"

    @property
    def message(self) -> Optional[str]:
        if self.loading:
            return "Loading data…"
        if self.error:
            return self.error
        return None if self.points else PLACEHOLDER


class DashboardController:
    def __init__(
        self,
        universe: Universe,
        fetch: Fetch,
        *,
        chart_mode: Union[ChartMode, str, None] = None,
    ) -> None:
        self.universe = universe
        self._fetch = fetch
        self._tasks: Dict[int, asyncio.Task] = {}
        self._points: Tuple[DerivedPoint, ...] = ()
        self._loading = False
        self._error: Optional[str] = None
        self.applied_versions: List[int] = []
        self._machine = SelectionStateMachine(
            universe.tickers,
            universe.metric_names,
            self._schedule,
            chart_mode=chart_mode or Config.get("client", "default_chart_mode", default="area"),
            autostart=False,
        )

    @property
    def selection(self) -> Selection:
        return self._machine.selection

    def start(self) -> None:
        self._machine.start()

    def set_company(self, ticker: str) -> Selection:
        return self._settle(self._machine.set_company(ticker))

    def set_metric(self, metric: str) -> Selection:
        return self._settle(self._machine.set_metric(metric))

    def set_chart_mode(self, mode: Union[ChartMode, str]) -> Selection:
        return self._machine.set_chart_mode(mode)

    async def wait(self) -> None:
        """Wait until every fetch issued so far has finished."""
        while self._tasks:
            await asyncio.gather(*self._tasks.values(), return_exceptions=True)

    @property
    def view(self) -> DashboardView:
        selection = self._machine.selection
        return DashboardView(
            selection=selection,
            company_name=self.universe.company_name(selection.company) or "No company selected",
            metric_description=self.universe.metric_description(selection.metric),
            loading=self._loading,
            error=self._error,
            points=self._points,
        )

    def _settle(self, selection: Selection) -> Selection:
        # Nothing was dispatched for an incomplete selection; show the placeholder
        if not selection.is_complete:
            self._loading = False
            self._error = None
            self._points = ()
        return selection

    def _schedule(self, selection: Selection) -> None:
        self._loading = True
        self._error = None
        self._points = ()
        task = asyncio.get_running_loop().create_task(self._load(selection))
        self._tasks[selection.version] = task
        task.add_done_callback(lambda _: self._tasks.pop(selection.version, None))

    async def _load(self, selection: Selection) -> None:
        try:
            series = await self._fetch(selection.company, selection.metric)
        except ClientError as exc:
            self._apply(selection.version, error=exc.message)
            return
        except Exception as exc:  # noqa: BLE001
            log.error(f"Loading {selection.company}/{selection.metric} failed: {exc}")
            self._apply(selection.version, error=DEFAULT_ERROR)
            return
        self._apply(selection.version, points=tuple(derive_change(series)))

    def _apply(
        self,
        version: int,
        *,
        points: Tuple[DerivedPoint, ...] = (),
        error: Optional[str] = None,
    ) -> None:
        if not self._machine.accept(version):
            return
        self._points = points
        self._error = error
        self._loading = False
        self.applied_versions.append(version)


__all__ = ["DashboardController", "DashboardView", "Fetch", "PLACEHOLDER"]
