"""Track error hierarchy."""


class TrackError(Exception):
    """Base class for every error raised while handling a track."""


class InvalidTrack(TrackError):
    """Raised when a track has too few points to be analysed or exported."""


class MalformedInput(TrackError):
    """Raised when the input payload is structurally invalid."""


class UpstreamTrackError(TrackError):
    """Raised when the payload carries an ``error`` set by the track source."""
