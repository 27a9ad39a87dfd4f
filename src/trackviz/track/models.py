"""Flight track data models."""

from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple

from trackviz.track.errors import InvalidTrack

MIN_TRACK_POINTS = 5
"""Smallest number of samples (in either index space) a usable track has."""


class LatLng(NamedTuple):
    """A geographic position in decimal degrees."""

    lat: float
    lng: float


@dataclass(frozen=True)
class FlightDate:
    """Flight date as supplied by the track source (no timezone)."""

    day: int = 0
    month: int = 0
    year: int = 0

    def is_known(self) -> bool:
        """Return False for the ``0/0/0`` placeholder date."""
        return (self.day, self.month, self.year) != (0, 0, 0)


@dataclass(frozen=True)
class TimeSeries:
    """Time of day for every chart sample, plus the chart axis labels."""

    hour: tuple[int, ...]
    min: tuple[int, ...]
    sec: tuple[int, ...]
    label: tuple[str, ...] = ()

    def hms(self, index: int) -> str:
        """Return ``HH:MM:SS`` for chart sample *index*."""
        return f"{self.hour[index]:02d}:{self.min[index]:02d}:{self.sec[index]:02d}"

    def seconds(self, index: int) -> int:
        """Return seconds since midnight for chart sample *index*."""
        return self.hour[index] * 3600 + self.min[index] * 60 + self.sec[index]


@dataclass(frozen=True)
class ClampBounds:
    """Upper bounds applied to the chart series at ingestion.

    Speed and elevation are clamped to ``[0, max]``, vario to
    ``[-max_vario, max_vario]``.
    """

    max_speed: float = 80.0
    """Maximum ground speed in km/h."""

    max_vario: float = 10.0
    """Maximum absolute climb/sink rate in m/s."""

    max_elev: float = 9999.0
    """Maximum elevation in metres."""


@dataclass(frozen=True)
class TrackRecord:
    """An immutable, validated flight track.

    Two index spaces co-exist:

    * the *track* (dense) space of ``nb_track_pt`` position fixes
      (``lat``, ``lon``);
    * the *chart* (coarse) space of ``nb_chart_pt`` metric samples
      (``elev``, ``elev_gnd``, ``speed``, ``vario``, ``time``).

    Instances are normally produced by :func:`trackviz.track.builder.build`.
    The constructor re-checks the point counts so an unusable
    record can never reach an encoder.
    """

    lat: tuple[float, ...]
    lon: tuple[float, ...]
    elev: tuple[float, ...]
    elev_gnd: tuple[float, ...]
    speed: tuple[float, ...]
    vario: tuple[float, ...]
    time: TimeSeries
    nb_track_pt: int
    nb_chart_pt: int
    nb_chart_lbl: int = 0
    date: FlightDate = FlightDate()
    pilot: str = ""

    def __post_init__(self) -> None:
        if self.nb_track_pt < MIN_TRACK_POINTS:
            raise InvalidTrack(
                f"nbTrackPt={self.nb_track_pt}, at least {MIN_TRACK_POINTS} points required"
            )
        if self.nb_chart_pt < MIN_TRACK_POINTS:
            raise InvalidTrack(
                f"nbChartPt={self.nb_chart_pt}, at least {MIN_TRACK_POINTS} points required"
            )
        if self.nb_chart_pt > self.nb_track_pt:
            raise InvalidTrack(
                f"nbChartPt={self.nb_chart_pt} exceeds nbTrackPt={self.nb_track_pt}"
            )

    def point(self, index: int) -> LatLng:
        """Return the position fix at track *index*."""
        return LatLng(self.lat[index], self.lon[index])

    def points(self) -> list[LatLng]:
        """Return every position fix in track order."""
        return [LatLng(la, lo) for la, lo in zip(self.lat, self.lon)]

    def series(self, metric: str) -> tuple[float, ...]:
        """Return the chart series named *metric* (``elev``, ``speed``, ...)."""
        if metric not in _CHART_SERIES:
            raise ValueError(f"Unknown metric {metric!r}")
        return getattr(self, metric)


_CHART_SERIES = frozenset({"elev", "elev_gnd", "speed", "vario"})


@dataclass(frozen=True)
class PassthroughTrack:
    """A track only known by an external KML URL.

    No analysis is possible; the URL is forwarded to the rendering side as is.
    """

    kml_url: str
