from __future__ import annotations

from dataclasses import asdict
from functools import lru_cache
import logging
import math
from typing import Any, Dict, Optional

import numpy as np
import pandas as pd
from fastapi import FastAPI, Query
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from api.schemas import MetaPresetsResponse, MetaSheetsResponse, PlotRequestModel, PresetModel, SeriesResponse
from taps.charts import placeholder_chart, series_chart, to_vega_spec
from taps.config import DashboardSettings, normalize_settings
from taps.errors import FetchError, SheetNotFoundError, WorkbookError
from taps.fetch import fetch_bytes
from taps.pipeline import PlotRequest, PlotResult, run_plot, run_preset
from taps.sheets import list_sheets


app = FastAPI(title="TAPS Sensor Dashboard API", version="0.1.0")
logger = logging.getLogger(__name__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000", "http://127.0.0.1:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

_ERROR_STATUS = (
    (FetchError, 502),
    (SheetNotFoundError, 404),
    (WorkbookError, 422),
    (KeyError, 404),
)


@lru_cache(maxsize=1)
def get_settings() -> DashboardSettings:
    return normalize_settings()


def _json(data: object) -> JSONResponse:
    """Return JSON with safe encoding for pandas/numpy objects."""

    def _safe_float(value: object) -> float | None:
        try:
            out = float(value)  # type: ignore[arg-type]
        except Exception:
            return None
        if math.isnan(out) or math.isinf(out):
            return None
        return out

    return JSONResponse(
        content=jsonable_encoder(
            data,
            custom_encoder={
                np.integer: int,
                float: _safe_float,
                np.floating: _safe_float,
                np.bool_: bool,
                np.ndarray: lambda arr: arr.tolist(),
            },
        )
    )


def _error(exc: BaseException) -> JSONResponse:
    status = 500
    for exc_type, code in _ERROR_STATUS:
        if isinstance(exc, exc_type):
            status = code
            break
    return JSONResponse(status_code=status, content={"error": str(exc), "type": type(exc).__name__})


def _to_request(model: PlotRequestModel, settings: DashboardSettings) -> PlotRequest:
    return PlotRequest(
        url=model.url or settings.workbook_url,
        sheet_name=model.sheet_name,
        name_column=model.name_column,
        value_column=model.value_column,
        caption=model.caption,
        mark=model.mark,
        strict=model.strict,
    )


def _run(request: PlotRequest, settings: DashboardSettings) -> PlotResult:
    return run_plot(request, fetcher=fetch_bytes, timeout=settings.request_timeout)


def _series_payload(result: PlotResult) -> Dict[str, Any]:
    series = result.series
    return SeriesResponse(
        state=result.state.value,
        sheet_name=result.request.sheet_name,
        caption=series.caption if series is not None else result.request.caption,
        points=[p._asdict() for p in series] if series is not None else [],
        bounds=asdict(result.bounds) if result.bounds is not None else None,
    ).model_dump()


def _chart_payload(result: PlotResult, settings: DashboardSettings) -> Dict[str, Any]:
    payload = _series_payload(result)
    chart = series_chart(result.series, result.bounds, mark=result.request.mark, settings=settings)
    payload["chart"] = to_vega_spec(chart)
    return payload


@app.get("/meta/presets")
def meta_presets():
    settings = get_settings()
    presets = [PresetModel(**asdict(p)) for p in settings.presets]
    return _json(MetaPresetsResponse(presets=presets).model_dump())


@app.get("/meta/sheets")
def meta_sheets(url: Optional[str] = Query(default=None)):
    settings = get_settings()
    target = url or settings.workbook_url
    try:
        payload = fetch_bytes(target, timeout=settings.request_timeout)
        return _json(MetaSheetsResponse(url=target, sheets=list_sheets(payload)).model_dump())
    except Exception as exc:
        logger.exception("meta_sheets failed")
        return _error(exc)


@app.post("/series")
def series(request: PlotRequestModel):
    settings = get_settings()
    try:
        result = _run(_to_request(request, settings), settings)
        if not result.ok:
            return _error(result.error)
        return _json(_series_payload(result))
    except Exception as exc:
        logger.exception("series failed")
        return _error(exc)


@app.post("/chart")
def chart(request: PlotRequestModel):
    settings = get_settings()
    try:
        result = _run(_to_request(request, settings), settings)
        if not result.ok:
            return _error(result.error)
        return _json(_chart_payload(result, settings))
    except Exception as exc:
        logger.exception("chart failed")
        return _error(exc)


@app.post("/presets/{key}")
def preset_chart(key: str):
    settings = get_settings()
    try:
        result = run_preset(settings, key, fetcher=fetch_bytes)
        if not result.ok:
            return _error(result.error)
        return _json(_chart_payload(result, settings))
    except Exception as exc:
        logger.exception("preset_chart failed")
        return _error(exc)


@app.get("/placeholder")
def placeholder():
    return _json({"chart": to_vega_spec(placeholder_chart(get_settings()))})


@app.post("/export")
def export_series(request: PlotRequestModel):
    settings = get_settings()
    try:
        result = _run(_to_request(request, settings), settings)
        if not result.ok:
            return _error(result.error)
        export_df = result.series.to_frame() if result.series is not None else pd.DataFrame()
        csv_bytes = export_df.to_csv(index=False).encode("utf-8")
    except Exception as exc:
        logger.exception("export failed")
        return _error(exc)

    filename = f"{request.sheet_name.strip().replace(' ', '_').lower() or 'series'}.csv"
    return Response(content=csv_bytes, media_type="text/csv", headers={"Content-Disposition": f"attachment; filename={filename}"})
