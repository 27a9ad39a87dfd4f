"""Mapping between the track (dense) and chart (coarse) index spaces.

Position fixes are recorded more often than the derived metrics, so any
consumer working per position fix (3-D placement, KML coordinates, IGC
records) has to look up the metric sample that covers it.
"""

from __future__ import annotations

from collections.abc import Iterator

from trackviz.track.models import TrackRecord


class Resampler:
    """Index conversions for one :class:`TrackRecord`.

    Args:
        record: The track whose two index spaces are being related.
    """

    def __init__(self, record: TrackRecord) -> None:
        self.record = record
        self._chart_span = record.nb_chart_pt - 1
        self._track_span = record.nb_track_pt - 1

    def to_chart_index(self, track_index: int) -> float:
        """Return the (fractional) chart position of *track_index*.

        Not rounded: callers pick truncation or rounding.
        """
        return track_index * self._chart_span / self._track_span

    def chart_index(self, track_index: int) -> int:
        """Return the chart sample covering *track_index* (truncated)."""
        return int(self.to_chart_index(track_index))

    def iter_chart_indices(self) -> Iterator[tuple[int, int]]:
        """Yield ``(track_index, chart_index)`` for every position fix."""
        for i in range(self.record.nb_track_pt):
            yield i, self.chart_index(i)

    def interpolated_elevation(self, track_index: int) -> float:
        """Return the elevation at *track_index*, interpolated between chart samples."""
        elev = self.record.elev
        c = self.to_chart_index(track_index)
        i = int(c + 0.5)
        j = min(i + 1, self.record.nb_chart_pt - 1)
        return elev[i] + (c - i) * (elev[j] - elev[i])

    def chart_value(self, metric: str, track_index: int) -> float:
        """Return the *metric* chart sample covering *track_index*."""
        return self.record.series(metric)[self.chart_index(track_index)]
