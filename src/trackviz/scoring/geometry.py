"""Great-circle distances between waypoints."""

from __future__ import annotations

from collections.abc import Sequence

from geopy.distance import great_circle

from trackviz.track.models import LatLng

EARTH_RADIUS_KM = 6378.137
"""Sphere radius (WGS-84 equatorial) used for every distance."""


def distance_m(a: LatLng, b: LatLng) -> float:
    """Return the great-circle distance between *a* and *b* in metres."""
    return great_circle(tuple(a), tuple(b), radius=EARTH_RADIUS_KM).meters


def leg_lengths(points: Sequence[LatLng]) -> list[float]:
    """Return the length (m) of every leg between consecutive *points*."""
    return [distance_m(points[i], points[i + 1]) for i in range(len(points) - 1)]


def path_length(points: Sequence[LatLng]) -> float:
    """Return the summed leg lengths of *points* in metres (0 for < 2 points)."""
    return sum(leg_lengths(points))


def format_distance(meters: float) -> str:
    """Format a distance for display, switching to kilometres at 1000 m."""
    if meters < 1000:
        return f"{meters:.2f} m"
    return f"{meters / 1000:.2f} km"
