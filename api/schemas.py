from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, Field


class PlotRequestModel(BaseModel):
    sheet_name: str
    url: Optional[str] = None
    name_column: int = Field(default=0, ge=0)
    value_column: int = Field(default=1, ge=0)
    caption: str = ""
    mark: Literal["line", "area"] = "line"
    strict: bool = False


class PresetModel(BaseModel):
    key: str
    label: str
    sheet_name: str
    name_column: int
    value_column: int
    caption: str = ""
    mark: str = "line"


class MetaPresetsResponse(BaseModel):
    presets: List[PresetModel]


class MetaSheetsResponse(BaseModel):
    url: str
    sheets: List[str]


class PointModel(BaseModel):
    x: float
    y: float
    x_coerced: bool = True
    y_coerced: bool = True


class BoundsModel(BaseModel):
    min_x: float
    max_x: float
    min_y: float
    max_y: float


class SeriesResponse(BaseModel):
    state: str
    sheet_name: str
    caption: str = ""
    points: List[PointModel] = Field(default_factory=list)
    bounds: Optional[BoundsModel] = None
