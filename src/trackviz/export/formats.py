"""Export entry point — format selection, MIME types and download headers."""

from __future__ import annotations

import enum
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from trackviz.config import Settings
from trackviz.export.igc import IgcEncoder
from trackviz.export.kml import LiveKmlEncoder, PlainKmlEncoder
from trackviz.export.kmz import KmzEncoder
from trackviz.track.builder import load
from trackviz.track.errors import TrackError
from trackviz.track.models import PassthroughTrack, TrackRecord

_logger = logging.getLogger(__name__)

TrackResolver = Callable[[int], Any]
"""Looks up a track by id and returns its raw JSON (text, bytes or decoded)."""

NO_CACHE_HEADERS: dict[str, str] = {
    "Cache-Control": "no-cache, must-revalidate",
    "Expires": "Mon, 26 Jul 1997 05:00:00 GMT",
}


class MissingSelector(TrackError):
    """Raised when neither an inline track nor a track id was supplied."""


class ExportFormat(str, enum.Enum):
    KML = "kml"
    KMZ = "kmz"
    KML_LIVE = "kmllive"
    IGC = "igc"

    @classmethod
    def parse(cls, value: str | None) -> ExportFormat:
        """Return the format named *value*; anything unknown falls back to IGC."""
        try:
            return cls((value or "").lower())
        except ValueError:
            return cls.IGC


# format → (media type, download filename)
_MEDIA: dict[ExportFormat, tuple[str, str]] = {
    ExportFormat.KML:      ("application/vnd.google-earth.kml+xml", "track.kml"),
    ExportFormat.KML_LIVE: ("application/vnd.google-earth.kml+xml", "track.kml"),
    ExportFormat.KMZ:      ("application/vnd.google-earth.kmz", "track.kmz"),
    ExportFormat.IGC:      ("text/plain; charset=ISO-8859-1", "track.igc"),
}


@dataclass(frozen=True)
class ExportResult:
    """An encoded export, ready to be sent.

    ``redirect_url`` is set instead of ``content`` for passthrough tracks,
    which are only known by their external URL.
    """

    content: bytes
    media_type: str
    filename: str
    headers: dict[str, str] = field(default_factory=dict)
    redirect_url: str | None = None

    @classmethod
    def redirect(cls, url: str) -> ExportResult:
        return cls(content=b"", media_type="", filename="", redirect_url=url)


def _encode(
    fmt: ExportFormat,
    record: TrackRecord,
    settings: Settings,
    track_id: int | None,
    base_url: str,
) -> bytes:
    if fmt is ExportFormat.KML:
        return PlainKmlEncoder().encode(record).encode("utf-8")
    if fmt is ExportFormat.KMZ:
        return KmzEncoder(settings.legend_width, settings.legend_height).encode(record)
    if fmt is ExportFormat.KML_LIVE:
        if track_id is None:
            raise MissingSelector("Live tracking requires a track id")
        href = settings.base_url or base_url
        return LiveKmlEncoder().encode(record, href, track_id).encode("utf-8")
    return IgcEncoder().encode(record).encode("iso-8859-1", errors="replace")


def export_track(
    fmt: ExportFormat | str | None,
    track: Any = None,
    track_id: int | None = None,
    *,
    resolver: TrackResolver | None = None,
    settings: Settings | None = None,
    base_url: str = "",
) -> ExportResult:
    """Encode a track in the requested format.

    Parameters
    ----------
    fmt:
        ``kml``, ``kmz``, ``kmllive`` or ``igc``; anything else means IGC.
    track:
        Inline raw track (JSON text or decoded object).  Takes precedence
        over *track_id*.
    track_id:
        Identifier passed to *resolver* when no inline track is given.
    resolver:
        Callable returning the raw track for an id.
    settings:
        Clamp bounds and legend size.  Defaults to :meth:`Settings.from_env`.
    base_url:
        URL of the export endpoint, used by live-tracking links when
        ``settings.base_url`` is empty.

    Raises
    ------
    MissingSelector
        If neither *track* nor *track_id* is given (or the id cannot be
        resolved because no resolver is configured).
    InvalidTrack, MalformedInput, UpstreamTrackError
        From :func:`trackviz.track.builder.build`.  Nothing is encoded.
    """
    fmt = fmt if isinstance(fmt, ExportFormat) else ExportFormat.parse(fmt)
    settings = settings or Settings.from_env()

    if track is None:
        if track_id is None:
            raise MissingSelector("Neither a track nor a track id was supplied")
        if resolver is None:
            raise MissingSelector(f"No resolver configured for track id {track_id}")
        track = resolver(track_id)

    loaded = load(track, settings.bounds)
    if isinstance(loaded, PassthroughTrack):
        return ExportResult.redirect(loaded.kml_url)

    content = _encode(fmt, loaded, settings, track_id, base_url)
    media_type, filename = _MEDIA[fmt]
    headers = {
        "Content-Disposition": f'attachment; filename="{filename}"',
        **NO_CACHE_HEADERS,
    }
    _logger.info(
        "Exported %s (%d points, %d bytes)", fmt.value, loaded.nb_track_pt, len(content)
    )
    return ExportResult(content, media_type, filename, headers)
