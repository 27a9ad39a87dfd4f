"""Distance measurement and cross-country flight scoring."""

from trackviz.scoring.geometry import distance_m, format_distance, leg_lengths, path_length
from trackviz.scoring.protocol import (
    ClickButton,
    MeasurementSession,
    MeasureState,
    click,
    left_click,
    right_click,
    track_pointer,
)
from trackviz.scoring.rules import FlightScore, Measurement, classify, measure

__all__ = [
    "ClickButton",
    "FlightScore",
    "MeasureState",
    "Measurement",
    "MeasurementSession",
    "classify",
    "click",
    "distance_m",
    "format_distance",
    "leg_lengths",
    "left_click",
    "measure",
    "path_length",
    "right_click",
    "track_pointer",
]
