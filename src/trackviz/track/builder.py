"""Track builder — decodes a raw JSON track into a :class:`TrackRecord`.

The raw payload uses the field names of the track source (``nbTrackPt``,
``elevGnd``, ``time.label``...).  Two escape hatches short-circuit the
analysis: ``error`` (the source failed to produce a track) and ``kmlUrl``
(the track is only available as an external KML document).
"""

from __future__ import annotations

import dataclasses
import json
import logging
import math
from collections.abc import Mapping, Sequence
from typing import Any

from trackviz.track.errors import InvalidTrack, MalformedInput, UpstreamTrackError
from trackviz.track.models import (
    MIN_TRACK_POINTS,
    ClampBounds,
    FlightDate,
    PassthroughTrack,
    TimeSeries,
    TrackRecord,
)

_logger = logging.getLogger(__name__)

# raw key → record field, for series sampled in the track (dense) space
_TRACK_SERIES: tuple[tuple[str, str], ...] = (
    ("lat", "lat"),
    ("lon", "lon"),
)

# raw key → record field, for series sampled in the chart (coarse) space
_CHART_SERIES: tuple[tuple[str, str], ...] = (
    ("elev",    "elev"),
    ("elevGnd", "elev_gnd"),
    ("speed",   "speed"),
    ("vario",   "vario"),
)


def _decode(raw: Any) -> Mapping[str, Any]:
    if isinstance(raw, (str, bytes, bytearray)):
        try:
            raw = json.loads(raw)
        except ValueError as exc:
            raise MalformedInput(f"Track is not valid JSON: {exc}") from exc
    if not isinstance(raw, Mapping):
        raise MalformedInput(f"Track must be a JSON object, got {type(raw).__name__}")
    return raw


def _count(raw: Mapping[str, Any], key: str) -> int:
    """Return the declared point count *key*; missing counts mean an empty track."""
    value = raw.get(key)
    if value is None:
        raise InvalidTrack(f"Missing {key}")
    return _to_int(value, key)


def _optional_int(raw: Mapping[str, Any], key: str) -> int:
    """Return the integer *key*, 0 when it is absent or empty."""
    value = raw.get(key)
    if value is None or value == "":
        return 0
    return _to_int(value, key)


def _to_int(value: Any, key: str) -> int:
    if isinstance(value, bool):
        raise MalformedInput(f"{key} must be an integer")
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError) as exc:
        raise MalformedInput(f"{key} must be an integer, got {value!r}") from exc


def _numbers(raw: Mapping[str, Any], key: str, size: int) -> tuple[float, ...]:
    values = raw.get(key)
    if not isinstance(values, Sequence) or isinstance(values, (str, bytes)):
        raise MalformedInput(f"{key} must be an array")
    if len(values) < size:
        raise MalformedInput(f"{key} has {len(values)} values, {size} declared")
    try:
        result = tuple(float(v) for v in values[:size])
    except (TypeError, ValueError) as exc:
        raise MalformedInput(f"{key} contains a non-numeric value") from exc
    if not all(math.isfinite(v) for v in result):
        raise MalformedInput(f"{key} contains a non-finite value")
    return result


def _integers(raw: Mapping[str, Any], key: str, size: int) -> tuple[int, ...]:
    return tuple(int(v) for v in _numbers(raw, key, size))


def _time_series(raw: Mapping[str, Any], size: int) -> TimeSeries:
    time = raw.get("time")
    if not isinstance(time, Mapping):
        raise MalformedInput("time must be an object")
    labels = time.get("label", time.get("labels", ()))
    if not isinstance(labels, Sequence) or isinstance(labels, (str, bytes)):
        raise MalformedInput("time.label must be an array")
    return TimeSeries(
        hour=_integers(time, "hour", size),
        min=_integers(time, "min", size),
        sec=_integers(time, "sec", size),
        label=tuple(str(lbl) for lbl in labels),
    )


def _flight_date(raw: Mapping[str, Any]) -> FlightDate:
    date = raw.get("date") or {}
    if not isinstance(date, Mapping):
        raise MalformedInput("date must be an object")
    return FlightDate(
        day=_optional_int(date, "day"),
        month=_optional_int(date, "month"),
        year=_optional_int(date, "year"),
    )


def build(raw: Any) -> TrackRecord | PassthroughTrack:
    """Validate *raw* (a JSON string or decoded object) and build a track.

    Raises
    ------
    UpstreamTrackError
        If the payload carries an ``error`` message.
    InvalidTrack
        If ``nbTrackPt`` or ``nbChartPt`` is missing or below 5, or if there
        are more chart points than track points.  The point count is checked
        before anything else.
    MalformedInput
        If the payload is not an object or a series is missing, too short or
        not numeric.
    """
    data = _decode(raw)

    if data.get("error") is not None:
        raise UpstreamTrackError(str(data["error"]))
    if data.get("kmlUrl") is not None:
        return PassthroughTrack(kml_url=str(data["kmlUrl"]))

    nb_track_pt = _count(data, "nbTrackPt")
    if nb_track_pt < MIN_TRACK_POINTS:
        raise InvalidTrack(
            f"nbTrackPt={nb_track_pt}, at least {MIN_TRACK_POINTS} points required"
        )
    nb_chart_pt = _count(data, "nbChartPt")

    kwargs: dict[str, Any] = {}
    for raw_key, field in _TRACK_SERIES:
        kwargs[field] = _numbers(data, raw_key, nb_track_pt)
    for raw_key, field in _CHART_SERIES:
        kwargs[field] = _numbers(data, raw_key, nb_chart_pt)

    return TrackRecord(
        time=_time_series(data, nb_chart_pt),
        nb_track_pt=nb_track_pt,
        nb_chart_pt=nb_chart_pt,
        nb_chart_lbl=_optional_int(data, "nbChartLbl"),
        date=_flight_date(data),
        pilot=str(data.get("pilot") or ""),
        **kwargs,
    )


def _clamp_series(values: tuple[float, ...], lo: float, hi: float) -> tuple[tuple[float, ...], int]:
    clamped = tuple(min(max(v, lo), hi) for v in values)
    changed = sum(1 for a, b in zip(values, clamped) if a != b)
    return clamped, changed


def clamp(record: TrackRecord, bounds: ClampBounds) -> TrackRecord:
    """Return a copy of *record* with speed, vario and elevation clamped.

    The out-of-range values are discarded; the returned record is the one
    every later stage must use.
    """
    speed, n_speed = _clamp_series(record.speed, 0.0, bounds.max_speed)
    vario, n_vario = _clamp_series(record.vario, -bounds.max_vario, bounds.max_vario)
    elev, n_elev = _clamp_series(record.elev, 0.0, bounds.max_elev)
    if n_speed or n_vario or n_elev:
        _logger.debug(
            "Clamped %d speed, %d vario and %d elevation samples",
            n_speed, n_vario, n_elev,
        )
    return dataclasses.replace(record, speed=speed, vario=vario, elev=elev)


def load(raw: Any, bounds: ClampBounds | None = None) -> TrackRecord | PassthroughTrack:
    """:func:`build` then :func:`clamp` (passthrough tracks are returned as is)."""
    track = build(raw)
    if isinstance(track, PassthroughTrack):
        return track
    return clamp(track, bounds or ClampBounds())
