"""Pydantic request/response schemas for the Web API."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str
    version: str


class LatLngModel(BaseModel):
    lat: float
    lon: float


class ExportRequest(BaseModel):
    format: str = "igc"
    track: dict[str, Any] | None = None
    trackid: int | None = None


class ViewportModel(BaseModel):
    sw: LatLngModel
    ne: LatLngModel
    width_px: int
    height_px: int


class ReduceRequest(BaseModel):
    track: dict[str, Any]
    viewport: ViewportModel


class ReduceResponse(BaseModel):
    total: int
    points: list[LatLngModel]


class SegmentsRequest(BaseModel):
    track: dict[str, Any]
    metric: Literal["elev", "speed", "vario"] = "elev"


class ColorBandModel(BaseModel):
    start_index: int
    end_index: int
    color: str


class SegmentsResponse(BaseModel):
    metric: str
    min: float
    max: float
    bands: list[ColorBandModel]


class MeasureRequest(BaseModel):
    state: Literal[0, 1, 2] = 0
    waypoints: list[LatLngModel] = []
    pointer: LatLngModel | None = None
    event: Literal["right", "left", "move"]
    lat: float
    lon: float


class MeasurementModel(BaseModel):
    distance_m: float
    legend: str
    type: str | None
    coefficient: float | None
    points: float | None


class MeasureResponse(BaseModel):
    state: int
    waypoints: list[LatLngModel]
    pointer: LatLngModel | None
    measurement: MeasurementModel | None
