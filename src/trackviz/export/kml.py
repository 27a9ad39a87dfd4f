"""KML encoders — plain track, colour-graded tracks and live-tracking link."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from trackviz.export.templating import coordinate, folder_context, render
from trackviz.render.gradient import ColorBand, segment_runs, series_range
from trackviz.track.models import TrackRecord
from trackviz.track.resampler import Resampler

PLAIN_LINE_COLOR = "ff00ffff"


@dataclass(frozen=True)
class ColoredMetric:
    """A chart series that can be exported as a colour-graded track."""

    series: str
    """Name of the :class:`TrackRecord` series."""

    unit: str
    """Unit appended to the displayed values."""

    title: str
    """Document title inside the KMZ bundle."""

    filename: str
    """Document name inside the KMZ bundle."""


ALTITUDE = ColoredMetric("elev", "m", "Altitude", "altitude.kml")
SPEED = ColoredMetric("speed", "km/h", "Speed", "speed.kml")
VARIO = ColoredMetric("vario", "m/s", "Vario", "vario.kml")

COLORED_METRICS: tuple[ColoredMetric, ...] = (ALTITUDE, SPEED, VARIO)


def _track_coordinates(record: TrackRecord, resampler: Resampler, start: int, end: int) -> Iterator[str]:
    for i in range(start, end + 1):
        yield coordinate(record.lon[i], record.lat[i], resampler.interpolated_elevation(i))


class PlainKmlEncoder:
    """One line through every position fix plus take-off and landing placemarks."""

    def encode(self, record: TrackRecord) -> str:
        resampler = Resampler(record)
        return render(
            "plain.kml",
            line_color=PLAIN_LINE_COLOR,
            coordinates=_track_coordinates(record, resampler, 0, record.nb_track_pt - 1),
            **folder_context(record, resampler),
        )


@dataclass(frozen=True)
class _Segment:
    name: str
    color: str
    when: str
    coordinates: Iterator[str]


class ColoredKmlEncoder:
    """One timestamped line segment per :class:`ColorBand` of a chart series.

    Args:
        metric: The series to colour the track by.
    """

    def __init__(self, metric: ColoredMetric) -> None:
        self.metric = metric

    def value_range(self, record: TrackRecord) -> tuple[float, float]:
        """Return the ``(min, max)`` of the coloured series."""
        return series_range(record.series(self.metric.series))

    def encode(self, record: TrackRecord) -> str:
        resampler = Resampler(record)
        lo, hi = self.value_range(record)
        bands = segment_runs(record, self.metric.series, lo, hi)
        return render(
            "colored.kml",
            segments=(self._segment(record, resampler, band) for band in bands),
            **folder_context(record, resampler),
        )

    def _segment(self, record: TrackRecord, resampler: Resampler, band: ColorBand) -> _Segment:
        chart_idx = resampler.chart_index(band.start_index)
        time = record.time
        date = record.date
        value = record.series(self.metric.series)[chart_idx]
        # Start on the previous band's last fix so the segments join up.
        first = max(band.start_index - 1, 0)
        last = max(band.end_index, first + 1)
        return _Segment(
            name=f"{time.hms(chart_idx)} - {value:.1f}{self.metric.unit}",
            color=band.color,
            when=(
                f"{date.year:04d}-{date.month:02d}-{date.day:02d}"
                f"T{time.hms(chart_idx)}+00:00"
            ),
            coordinates=_track_coordinates(record, resampler, first, last),
        )


class LiveKmlEncoder:
    """A network link that reloads the KMZ export of a track periodically.

    Args:
        refresh_s: Reload interval in seconds.
    """

    def __init__(self, refresh_s: int = 60) -> None:
        self.refresh_s = refresh_s

    def encode(self, record: TrackRecord, href: str, track_id: int) -> str:
        return render(
            "live.kml",
            pilot=record.pilot,
            href=href,
            track_id=track_id,
            refresh_s=self.refresh_s,
        )
