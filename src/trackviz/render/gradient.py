"""Scalar → colour mapping and constant-colour run merging.

Colours are KML ``BBGGRR`` hex strings without the alpha byte.  Across the
``[min, max]`` range the ramp goes through four linear bands, from ``FFxx00``
at the low end to ``00xxFF`` at the high end.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from trackviz.track.models import TrackRecord
from trackviz.track.resampler import Resampler


@dataclass(frozen=True)
class ColorBand:
    """A maximal run of track indices drawn with the same colour.

    ``start_index`` and ``end_index`` are inclusive track (dense) indices.
    """

    start_index: int
    end_index: int
    color: str


def _byte(value: float) -> str:
    """Round *value* (0…255) to the nearest byte, as two uppercase hex digits."""
    b = int(value + 0.5)
    return f"{min(max(b, 0), 0xFF):02X}"


def value2color(value: float, lo: float, hi: float) -> str:
    """Return the ``BBGGRR`` colour of *value* on the ``[lo, hi]`` ramp.

    A degenerate range (``lo == hi``) uses a width of 1.
    """
    span = hi - lo
    x = value - lo
    if span == 0:
        span = 1

    if x >= 2 * span / 3:
        return "00" + _byte(0xFF * 3 * (1 - x / span)) + "FF"
    if x >= span / 2:
        return "00FF" + _byte(0xFF * (6 * x / span - 3))
    if x >= span / 3:
        return _byte(0xFF * (3 - 6 * x / span)) + "FF00"
    return "FF" + _byte(0xFF * 3 * x / span) + "00"


def color_to_rgb(color: str) -> tuple[int, int, int]:
    """Convert a ``BBGGRR`` string to an ``(r, g, b)`` tuple."""
    b = int(color[0:2], 16)
    g = int(color[2:4], 16)
    r = int(color[4:6], 16)
    return r, g, b


def series_range(values: Iterable[float]) -> tuple[float, float]:
    """Return ``(min, max)`` of *values*.

    Raises:
        ValueError: If *values* is empty.
    """
    values = list(values)
    if not values:
        raise ValueError("Cannot compute the range of an empty series")
    return min(values), max(values)


def segment_runs(
    record: TrackRecord,
    metric: str,
    lo: float | None = None,
    hi: float | None = None,
) -> Iterator[ColorBand]:
    """Yield the constant-colour runs of *metric* along the track.

    Every track index is coloured by the chart sample that covers it.  A new
    :class:`ColorBand` starts whenever the colour differs from the previous
    index; the last band ends at the last track index.  The bands are
    contiguous and cover ``[0, nb_track_pt)``.

    Args:
        record: The track.
        metric: Chart series to colour by (``elev``, ``speed``, ``vario``...).
        lo, hi: Colour ramp bounds.  Default to the series range.
    """
    values = record.series(metric)
    if lo is None or hi is None:
        s_lo, s_hi = series_range(values)
        lo = s_lo if lo is None else lo
        hi = s_hi if hi is None else hi

    start = 0
    current: str | None = None
    for track_index, chart_index in Resampler(record).iter_chart_indices():
        color = value2color(values[chart_index], lo, hi)
        if current is None:
            current = color
        elif color != current:
            yield ColorBand(start, track_index - 1, current)
            start = track_index
            current = color

    yield ColorBand(start, record.nb_track_pt - 1, current)
