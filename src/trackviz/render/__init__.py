"""Rendering support: viewport decimation, colour gradients, cursor helpers."""

from trackviz.render.cursor import (
    PointInfo,
    heading,
    nearest_index,
    point_info,
    position_to_chart_index,
    position_to_track_index,
    track_index_to_position,
)
from trackviz.render.gradient import ColorBand, segment_runs, series_range, value2color
from trackviz.render.viewport import Viewport, ViewportReducer

__all__ = [
    "ColorBand",
    "PointInfo",
    "Viewport",
    "ViewportReducer",
    "heading",
    "nearest_index",
    "point_info",
    "position_to_chart_index",
    "position_to_track_index",
    "segment_runs",
    "series_range",
    "track_index_to_position",
    "value2color",
]
