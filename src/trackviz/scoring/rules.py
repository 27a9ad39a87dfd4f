"""Cross-country flight scoring rules (free distance, out-and-return, triangles).

The flight type depends on the number of points and on whether the path
closes, i.e. ends less than :data:`CLOSING_DISTANCE_M` from where it started:

==  ==================  ======  ===========
n   condition           type    coefficient
==  ==================  ======  ===========
2   —                   DL      1.0
3   closed              AR      1.0
3   open                DL1     1.0
4   closed, FAI legs    FAI     1.4
4   closed              TR      1.2
4   open                DL2     1.0
5   closed              QD      —
==  ==================  ======  ===========

A triangle is FAI when every leg is at least :data:`FAI_MIN_LEG_RATIO` of
the total distance.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from trackviz.scoring.geometry import distance_m, format_distance, leg_lengths
from trackviz.track.models import LatLng

CLOSING_DISTANCE_M = 3000.0
FAI_MIN_LEG_RATIO = 0.28


@dataclass(frozen=True)
class FlightScore:
    """Flight type and coefficient for a set of points.

    ``coefficient`` is ``None`` when the type has no scoring constant (QD).
    """

    type: str
    coefficient: float | None

    def points(self, distance_m: float) -> float | None:
        """Return the score for *distance_m*: ``coefficient · km``, 2 decimals."""
        if self.coefficient is None:
            return None
        return round(self.coefficient * distance_m / 1000, 2)


@dataclass(frozen=True)
class Measurement:
    """Distance and scoring of a measured path."""

    points: tuple[LatLng, ...]
    distance_m: float
    score: FlightScore | None

    @property
    def score_points(self) -> float | None:
        return self.score.points(self.distance_m) if self.score else None

    @property
    def legend(self) -> str:
        """Display text: distance, then the flight type and its points if any."""
        text = format_distance(self.distance_m)
        if self.score is None:
            return text
        pts = self.score_points
        if pts is None:
            return f"{text}\n{self.score.type}"
        return f"{text}\n{self.score.type} {pts:.2f} pts"


def classify(points: Sequence[LatLng]) -> FlightScore | None:
    """Return the :class:`FlightScore` of *points*, or ``None`` if unscored."""
    n = len(points)
    if n == 2:
        return FlightScore("DL", 1.0)
    if n not in (3, 4, 5):
        return None

    closed = distance_m(points[0], points[-1]) < CLOSING_DISTANCE_M

    if n == 3:
        return FlightScore("AR", 1.0) if closed else FlightScore("DL1", 1.0)

    if n == 4:
        if not closed:
            return FlightScore("DL2", 1.0)
        legs = leg_lengths(points)
        total = sum(legs)
        if all(leg >= FAI_MIN_LEG_RATIO * total for leg in legs):
            return FlightScore("FAI", 1.4)
        return FlightScore("TR", 1.2)

    return FlightScore("QD", None) if closed else None


def measure(points: Sequence[LatLng]) -> Measurement:
    """Return the path length and scoring of *points*."""
    pts = tuple(points)
    return Measurement(
        points=pts,
        distance_m=sum(leg_lengths(pts)),
        score=classify(pts),
    )
