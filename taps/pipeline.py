"""Fetch -> parse -> extract pipeline for a single plot request.

Each request owns a ``PlotPipeline`` that only moves forward through
``IDLE -> FETCHING -> PARSING -> READY | FAILED``. Results are handed to the
caller once the pipeline reaches a terminal state; nothing is shared between
requests.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, FrozenSet, List, Optional

from taps.bounds import AxisBounds, compute_bounds
from taps.config import DashboardSettings, PlotPreset
from taps.errors import EmptySeriesError, InvalidTransitionError, TapsError
from taps.fetch import fetch_bytes
from taps.series import Series, extract_series
from taps.sheets import read_sheet

logger = logging.getLogger(__name__)

Fetcher = Callable[..., bytes]


class PlotState(str, Enum):
    IDLE = "idle"
    FETCHING = "fetching"
    PARSING = "parsing"
    READY = "ready"
    FAILED = "failed"


_TRANSITIONS: Dict[PlotState, FrozenSet[PlotState]] = {
    PlotState.IDLE: frozenset({PlotState.FETCHING}),
    PlotState.FETCHING: frozenset({PlotState.PARSING, PlotState.FAILED}),
    PlotState.PARSING: frozenset({PlotState.READY, PlotState.FAILED}),
    PlotState.READY: frozenset(),
    PlotState.FAILED: frozenset(),
}


@dataclass(frozen=True)
class PlotRequest:
    url: str
    sheet_name: str
    name_column: int = 0
    value_column: int = 1
    caption: str = ""
    mark: str = "line"
    strict: bool = False

    @classmethod
    def from_preset(cls, preset: PlotPreset, settings: DashboardSettings) -> "PlotRequest":
        return cls(
            url=settings.workbook_url,
            sheet_name=preset.sheet_name,
            name_column=preset.name_column,
            value_column=preset.value_column,
            caption=preset.caption or preset.label,
            mark=preset.mark,
        )


@dataclass
class PlotResult:
    request: PlotRequest
    state: PlotState
    series: Optional[Series] = None
    bounds: Optional[AxisBounds] = None
    error: Optional[Exception] = None
    history: List[PlotState] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.state is PlotState.READY


class PlotPipeline:
    def __init__(self, request: PlotRequest, *, fetcher: Fetcher = fetch_bytes, timeout: float = 10.0):
        self.request = request
        self.fetcher = fetcher
        self.timeout = timeout
        self.state = PlotState.IDLE
        self.history: List[PlotState] = [PlotState.IDLE]

    def _advance(self, state: PlotState) -> None:
        if state not in _TRANSITIONS[self.state]:
            raise InvalidTransitionError(f"Cannot move from {self.state.value} to {state.value}")
        logger.debug("Plot %r: %s -> %s", self.request.sheet_name, self.state.value, state.value)
        self.state = state
        self.history.append(state)

    def _result(self, **kwargs) -> PlotResult:
        return PlotResult(request=self.request, state=self.state, history=list(self.history), **kwargs)

    def _fail(self, exc: Exception) -> PlotResult:
        self._advance(PlotState.FAILED)
        logger.warning("Plot %r failed: %s", self.request.sheet_name, exc)
        return self._result(error=exc)

    def run(self) -> PlotResult:
        req = self.request
        self._advance(PlotState.FETCHING)
        try:
            payload = self.fetcher(req.url, timeout=self.timeout)
        except TapsError as exc:
            return self._fail(exc)

        self._advance(PlotState.PARSING)
        try:
            rows = read_sheet(payload, req.sheet_name)
            series = extract_series(
                rows, req.name_column, req.value_column, caption=req.caption, strict=req.strict
            )
        except (TapsError, ValueError) as exc:
            return self._fail(exc)

        try:
            bounds: Optional[AxisBounds] = compute_bounds(series)
        except EmptySeriesError:
            logger.info("Sheet %r produced no points; leaving axis bounds unset", req.sheet_name)
            bounds = None

        self._advance(PlotState.READY)
        logger.info("Plot %r ready with %d points", req.sheet_name, len(series))
        return self._result(series=series, bounds=bounds)


def run_plot(request: PlotRequest, *, fetcher: Fetcher = fetch_bytes, timeout: float = 10.0) -> PlotResult:
    return PlotPipeline(request, fetcher=fetcher, timeout=timeout).run()


def run_preset(
    settings: DashboardSettings, key: str, *, fetcher: Fetcher = fetch_bytes
) -> PlotResult:
    preset = settings.preset(key)
    if preset is None:
        raise KeyError(f"Unknown preset {key!r}")
    request = PlotRequest.from_preset(preset, settings)
    return run_plot(request, fetcher=fetcher, timeout=settings.request_timeout)
