from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple

DEFAULT_BASE_URL = os.getenv("TAPS_DATA_URL", "http://127.0.0.1:8080/data")
DEFAULT_WORKBOOK = os.getenv("TAPS_WORKBOOK", "sensors.xlsx")

MARKS = ("line", "area")


@dataclass(frozen=True)
class PlotPreset:
    key: str
    label: str
    sheet_name: str
    name_column: int = 0
    value_column: int = 1
    caption: str = ""
    mark: str = "line"


DEFAULT_PRESETS: Tuple[PlotPreset, ...] = (
    PlotPreset(
        key="soil_moisture",
        label="Soil Moisture",
        sheet_name="Soil Moisture",
        caption="Soil moisture (%)",
        mark="area",
    ),
    PlotPreset(
        key="air_temperature",
        label="Air Temperature",
        sheet_name="Air Temperature",
        caption="Air temperature (°C)",
    ),
    PlotPreset(
        key="humidity",
        label="Relative Humidity",
        sheet_name="Humidity",
        caption="Relative humidity (%)",
    ),
)


@dataclass(frozen=True)
class DashboardSettings:
    base_url: str = DEFAULT_BASE_URL
    workbook_name: str = DEFAULT_WORKBOOK
    request_timeout: float = 10.0
    fallback_x_range: Tuple[float, float] = (-1.0, 1.0)
    fallback_y_range: Tuple[float, float] = (-0.1, 1.0)
    presets: Tuple[PlotPreset, ...] = field(default_factory=lambda: DEFAULT_PRESETS)

    @property
    def workbook_url(self) -> str:
        return f"{self.base_url.rstrip('/')}/{self.workbook_name.lstrip('/')}"

    def preset(self, key: str) -> Optional[PlotPreset]:
        for p in self.presets:
            if p.key == key:
                return p
        return None


def _as_range(value: object, default: Tuple[float, float]) -> Tuple[float, float]:
    try:
        lo, hi = (float(v) for v in value)  # type: ignore[union-attr]
    except Exception:
        return default
    if lo >= hi:
        return default
    return lo, hi


def _as_index(value: object, default: int) -> int:
    try:
        out = int(value)  # type: ignore[arg-type]
    except Exception:
        return default
    return out if out >= 0 else default


def normalize_preset(raw: dict) -> PlotPreset:
    key = str(raw.get("key") or "").strip()
    sheet_name = str(raw.get("sheet_name") or "").strip()
    if not key or not sheet_name:
        raise ValueError("Preset needs both a key and a sheet_name")
    mark = str(raw.get("mark") or "line").strip().lower()
    if mark not in MARKS:
        mark = "line"
    return PlotPreset(
        key=key,
        label=str(raw.get("label") or key).strip(),
        sheet_name=sheet_name,
        name_column=_as_index(raw.get("name_column"), 0),
        value_column=_as_index(raw.get("value_column"), 1),
        caption=str(raw.get("caption") or "").strip(),
        mark=mark,
    )


def _presets(values: Optional[Iterable[dict]]) -> Tuple[PlotPreset, ...]:
    if not values:
        return DEFAULT_PRESETS
    out: List[PlotPreset] = []
    seen = set()
    for v in values:
        preset = normalize_preset(v)
        if preset.key in seen:
            continue
        seen.add(preset.key)
        out.append(preset)
    return tuple(out)


def normalize_settings(raw: Optional[dict] = None) -> DashboardSettings:
    raw = raw or {}
    base_url = (raw.get("base_url") or DEFAULT_BASE_URL).strip()
    workbook_name = (raw.get("workbook_name") or DEFAULT_WORKBOOK).strip()

    timeout = raw.get("request_timeout", 10.0)
    try:
        timeout = float(timeout)
    except Exception:
        timeout = 10.0
    timeout = max(1.0, min(120.0, timeout))

    return DashboardSettings(
        base_url=base_url,
        workbook_name=workbook_name,
        request_timeout=timeout,
        fallback_x_range=_as_range(raw.get("fallback_x_range"), (-1.0, 1.0)),
        fallback_y_range=_as_range(raw.get("fallback_y_range"), (-0.1, 1.0)),
        presets=_presets(raw.get("presets")),
    )
