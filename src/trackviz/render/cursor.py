"""Marker placement helpers for the map/chart front end.

The chart cursor and the animation address the track on a fixed
``0…1000`` scale; the map works with track indices and clicked positions.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from trackviz.scoring.geometry import distance_m
from trackviz.track.models import LatLng, TrackRecord

CURSOR_SCALE = 1000
"""Number of steps of the chart cursor / animation scale."""


@dataclass(frozen=True)
class PointInfo:
    """Metric readout for one chart sample."""

    elev: float
    """Track elevation (m)."""

    elev_gnd: float
    """Ground elevation (m)."""

    height: float
    """Height above ground (m), never negative."""

    vario: float
    """Vertical speed (m/s)."""

    speed: float
    """Ground speed (km/h)."""

    time: str
    """Time of day, ``HH:MM:SS``."""


def nearest_index(record: TrackRecord, point: LatLng) -> int:
    """Return the track index closest to *point* (lowest index on ties)."""
    best_idx = 0
    best_dst = distance_m(record.point(0), point)
    for i in range(1, record.nb_track_pt):
        dst = distance_m(record.point(i), point)
        if dst < best_dst:
            best_idx = i
            best_dst = dst
    return best_idx


def _check_position(pos: float) -> None:
    if not 0 <= pos <= CURSOR_SCALE:
        raise ValueError(f"Cursor position must be in [0, {CURSOR_SCALE}], got {pos}")


def position_to_track_index(record: TrackRecord, pos: float) -> int:
    """Map a cursor position to a track index."""
    _check_position(pos)
    return int(pos * (record.nb_track_pt - 1) / CURSOR_SCALE)


def position_to_chart_index(record: TrackRecord, pos: float) -> int:
    """Map a cursor position to a chart index."""
    _check_position(pos)
    return int(pos * (record.nb_chart_pt - 1) / CURSOR_SCALE)


def track_index_to_position(record: TrackRecord, track_index: int) -> int:
    """Map a track index back to the cursor scale."""
    return int(CURSOR_SCALE * track_index / record.nb_track_pt)


def point_info(record: TrackRecord, chart_index: int) -> PointInfo:
    """Return the metric readout of chart sample *chart_index*."""
    elev = record.elev[chart_index]
    elev_gnd = record.elev_gnd[chart_index]
    return PointInfo(
        elev=elev,
        elev_gnd=elev_gnd,
        height=max(0.0, elev - elev_gnd),
        vario=record.vario[chart_index],
        speed=record.speed[chart_index],
        time=record.time.hms(chart_index),
    )


def heading(record: TrackRecord, track_index: int) -> float:
    """Return the direction of travel at *track_index*, in degrees from north.

    Uses the leg to the next fix; the last fix reuses the previous leg.
    The result is in ``[0, 360)``.
    """
    i = track_index
    if i >= record.nb_track_pt - 1:
        i = record.nb_track_pt - 2
    d_lat = record.lat[i + 1] - record.lat[i]
    d_lon = record.lon[i + 1] - record.lon[i]
    angle = math.degrees(math.atan2(d_lat, d_lon))
    return (90.0 - angle) % 360.0
