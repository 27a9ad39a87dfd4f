"""TrackService — wraps ingestion, rendering and export for the Web API."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from trackviz.config import Settings
from trackviz.export.formats import ExportResult, export_track
from trackviz.render.gradient import ColorBand, segment_runs, series_range
from trackviz.render.viewport import Viewport, ViewportReducer
from trackviz.scoring.protocol import (
    MeasurementSession,
    MeasureState,
    click,
    track_pointer,
)
from trackviz.track.builder import load
from trackviz.track.errors import InvalidTrack, TrackError
from trackviz.track.models import LatLng, PassthroughTrack, TrackRecord


class TrackNotFound(TrackError):
    """Raised when a track id does not resolve to a stored track."""


class DirectoryTrackResolver:
    """Resolve track ids to ``<directory>/<id>.json`` files.

    Parameters
    ----------
    directory:
        Folder holding the JSON tracks.
    """

    def __init__(self, directory: str) -> None:
        self.directory = Path(directory)

    def __call__(self, track_id: int) -> bytes:
        path = self.directory / f"{int(track_id)}.json"
        if not path.is_file():
            raise TrackNotFound(f"No track with id {track_id}")
        return path.read_bytes()


class TrackService:
    """Per-request façade over the track engine.

    Parameters
    ----------
    settings:
        Runtime settings.  Defaults to :meth:`Settings.from_env`.
    """

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or Settings.from_env()
        self._resolver = (
            DirectoryTrackResolver(self.settings.track_dir)
            if self.settings.track_dir
            else None
        )

    def record(self, raw: Any) -> TrackRecord:
        """Load and clamp *raw*; passthrough tracks cannot be analysed."""
        track = load(raw, self.settings.bounds)
        if isinstance(track, PassthroughTrack):
            raise InvalidTrack("Track is only available as an external KML document")
        return track

    def export(
        self,
        fmt: str | None,
        track: Any = None,
        track_id: int | None = None,
        base_url: str = "",
    ) -> ExportResult:
        return export_track(
            fmt,
            track,
            track_id,
            resolver=self._resolver,
            settings=self.settings,
            base_url=base_url,
        )

    def reduce(self, raw: Any, viewport: Viewport) -> tuple[int, list[LatLng]]:
        """Return ``(total point count, points to draw)`` for *viewport*."""
        record = self.record(raw)
        return record.nb_track_pt, ViewportReducer().reduce(record.points(), viewport)

    def color_segments(self, raw: Any, metric: str) -> tuple[float, float, list[ColorBand]]:
        """Return ``(min, max, bands)`` of *metric* along the track."""
        record = self.record(raw)
        lo, hi = series_range(record.series(metric))
        return lo, hi, list(segment_runs(record, metric, lo, hi))

    @staticmethod
    def measure_event(
        session: MeasurementSession, event: str, point: LatLng
    ) -> MeasurementSession:
        """Apply a ``right``/``left`` click or a pointer ``move`` to *session*."""
        if event == "move":
            return track_pointer(session, point)
        return click(session, point, event)

    @staticmethod
    def session(state: int, waypoints: list[LatLng], pointer: LatLng | None) -> MeasurementSession:
        return MeasurementSession(MeasureState(state), tuple(waypoints), pointer)
