"""Flight track model, validation and index resampling.

Public API
----------
TrackRecord       - immutable validated track (two index spaces)
PassthroughTrack  - track only known by an external KML URL
build / clamp     - raw JSON → TrackRecord, bound normalisation
load              - build + clamp in one call
Resampler         - track ↔ chart index mapping, interpolated elevation
"""

from trackviz.track.builder import build, clamp, load
from trackviz.track.errors import (
    InvalidTrack,
    MalformedInput,
    TrackError,
    UpstreamTrackError,
)
from trackviz.track.models import (
    ClampBounds,
    FlightDate,
    LatLng,
    PassthroughTrack,
    TimeSeries,
    TrackRecord,
)
from trackviz.track.resampler import Resampler

__all__ = [
    "ClampBounds",
    "FlightDate",
    "InvalidTrack",
    "LatLng",
    "MalformedInput",
    "PassthroughTrack",
    "Resampler",
    "TimeSeries",
    "TrackError",
    "TrackRecord",
    "UpstreamTrackError",
    "build",
    "clamp",
    "load",
]
