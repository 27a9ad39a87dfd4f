"""Viewport-dependent track decimation for on-screen rendering.

Drops position fixes that fall far outside the visible map area or that
would be drawn less than a few pixels away from their neighbour.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass

from trackviz.track.models import LatLng


@dataclass(frozen=True)
class Viewport:
    """The visible map area and its size on screen.

    Args:
        sw: South-west corner.
        ne: North-east corner.
        width_px: Map width in pixels.
        height_px: Map height in pixels.
    """

    sw: LatLng
    ne: LatLng
    width_px: int
    height_px: int

    def __post_init__(self) -> None:
        if self.width_px <= 0 or self.height_px <= 0:
            raise ValueError(
                f"Viewport size must be positive, got {self.width_px}x{self.height_px}"
            )

    @property
    def delta_lat(self) -> float:
        return self.ne.lat - self.sw.lat

    @property
    def delta_lng(self) -> float:
        return self.ne.lng - self.sw.lng

    def buffered(self) -> Viewport:
        """Return the viewport grown by one width/height on every side."""
        return Viewport(
            sw=LatLng(self.sw.lat - self.delta_lat, self.sw.lng - self.delta_lng),
            ne=LatLng(self.ne.lat + self.delta_lat, self.ne.lng + self.delta_lng),
            width_px=self.width_px,
            height_px=self.height_px,
        )

    def contains(self, point: LatLng) -> bool:
        return (
            self.sw.lat <= point.lat <= self.ne.lat
            and self.sw.lng <= point.lng <= self.ne.lng
        )


class ViewportReducer:
    """Reverse greedy decimation of a track for a given viewport.

    Algorithm:
    1. Grow the viewport by one width/height on every side so that points
       just outside the visible area are still drawn while panning.
    2. Derive the minimum steps ``3·Δlat/width`` and ``3·Δlng/height``
       (about three pixels).
    3. Scan from the last point backwards.  The last point is always kept;
       an earlier point is kept if it lies in the grown area and its latitude
       *or* longitude differs from the last kept point by more than the
       matching minimum step.

    Args:
        min_step_px: Minimum separation, in pixels, between kept points.
    """

    def __init__(self, min_step_px: float = 3.0) -> None:
        if min_step_px < 0:
            raise ValueError("min_step_px must be >= 0")
        self.min_step_px = min_step_px

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def iter_reversed(self, points: Sequence[LatLng], viewport: Viewport) -> Iterator[LatLng]:
        """Yield the kept points from the last one to the first one."""
        if not points:
            return

        scroll_area = viewport.buffered()
        min_step_lat = self.min_step_px * viewport.delta_lat / viewport.width_px
        min_step_lng = self.min_step_px * viewport.delta_lng / viewport.height_px

        last = points[-1]
        yield last

        for i in range(len(points) - 2, -1, -1):
            point = points[i]
            if not scroll_area.contains(point):
                continue
            if (abs(point.lat - last.lat) > min_step_lat
                    or abs(point.lng - last.lng) > min_step_lng):
                yield point
                last = point

    def reduce(self, points: Sequence[LatLng], viewport: Viewport) -> list[LatLng]:
        """Return the kept points in track order.

        The last point of *points* is always part of the result.
        """
        kept = list(self.iter_reversed(points, viewport))
        kept.reverse()
        return kept
