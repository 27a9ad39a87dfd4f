"""Jinja2 environment for the KML documents."""

from __future__ import annotations

from jinja2 import Environment, PackageLoader, select_autoescape

from trackviz.track.models import TrackRecord
from trackviz.track.resampler import Resampler

environment = Environment(
    loader=PackageLoader("trackviz.export", "templates"),
    autoescape=select_autoescape(["kml", "html"]),
    trim_blocks=True,
    lstrip_blocks=True,
    keep_trailing_newline=True,
)


def render(template: str, **context) -> str:
    return environment.get_template(template).render(**context)


def coordinate(lon: float, lat: float, elev: float) -> str:
    """Format one KML ``lon, lat, alt`` tuple (fixed width)."""
    return "%010.6f, %010.6f, %05d" % (lon, lat, elev)


def folder_context(record: TrackRecord, resampler: Resampler) -> dict:
    """Context shared by every single-folder track document."""
    last = record.nb_track_pt - 1
    return {
        "pilot": record.pilot,
        "look_at": record.point(0),
        "takeoff": coordinate(record.lon[0], record.lat[0], resampler.interpolated_elevation(0)),
        "landing": coordinate(
            record.lon[last], record.lat[last], resampler.interpolated_elevation(last)
        ),
    }
