"""Distance measurement protocol driven by map clicks.

Right clicks cycle through three states::

    IDLE ──right──▶ ACTIVE ──right──▶ FROZEN ──right──▶ IDLE

* ``IDLE → ACTIVE``: the click becomes the first waypoint and the pointer
  starts being tracked.
* ``ACTIVE``: a left click appends a waypoint, pointer moves update the live
  measurement.
* ``ACTIVE → FROZEN``: the path (waypoints + pointer) stops following the
  pointer.
* ``FROZEN → IDLE``: the measurement is cleared.

Sessions are immutable; every transition returns a new one.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, replace

from trackviz.scoring.rules import Measurement, measure
from trackviz.track.models import LatLng

MAX_WAYPOINTS = 5


class MeasureState(enum.IntEnum):
    IDLE = 0
    ACTIVE = 1
    FROZEN = 2


class ClickButton(str, enum.Enum):
    LEFT = "left"
    RIGHT = "right"


@dataclass(frozen=True)
class MeasurementSession:
    """State of one measurement gesture.

    ``pointer`` is the last known pointer position; it closes the measured
    path while the session is active and is kept once it is frozen.
    """

    state: MeasureState = MeasureState.IDLE
    waypoints: tuple[LatLng, ...] = ()
    pointer: LatLng | None = None

    @property
    def path(self) -> tuple[LatLng, ...]:
        """Points being measured: waypoints followed by the pointer."""
        if self.pointer is None:
            return self.waypoints
        return self.waypoints + (self.pointer,)

    def measurement(self) -> Measurement | None:
        """Return the displayed measurement, ``None`` when idle."""
        if self.state is MeasureState.IDLE:
            return None
        return measure(self.path)


def right_click(session: MeasurementSession, point: LatLng) -> MeasurementSession:
    """Advance the session to its next state."""
    if session.state is MeasureState.IDLE:
        return MeasurementSession(MeasureState.ACTIVE, (point,), point)
    if session.state is MeasureState.ACTIVE:
        return replace(session, state=MeasureState.FROZEN, pointer=point)
    return MeasurementSession()


def left_click(session: MeasurementSession, point: LatLng) -> MeasurementSession:
    """Append a waypoint while active; other states are left unchanged.

    Once :data:`MAX_WAYPOINTS` are set, further clicks only move the pointer.
    """
    if session.state is not MeasureState.ACTIVE:
        return session
    if len(session.waypoints) >= MAX_WAYPOINTS:
        return replace(session, pointer=point)
    return replace(session, waypoints=session.waypoints + (point,), pointer=point)


def track_pointer(session: MeasurementSession, point: LatLng) -> MeasurementSession:
    """Follow the pointer while active; frozen and idle sessions ignore it."""
    if session.state is not MeasureState.ACTIVE:
        return session
    return replace(session, pointer=point)


def click(session: MeasurementSession, point: LatLng, button: ClickButton | str) -> MeasurementSession:
    """Dispatch a ``(lat, lon, button)`` click event."""
    button = ClickButton(button)
    if button is ClickButton.RIGHT:
        return right_click(session, point)
    return left_click(session, point)
