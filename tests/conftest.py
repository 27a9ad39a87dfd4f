"""Shared track fixtures."""

from __future__ import annotations

import pytest

from trackviz.track.builder import build


def make_raw_track(
    n_track: int = 9,
    n_chart: int = 5,
    lat: list[float] | None = None,
    lon: list[float] | None = None,
    elev: list[float] | None = None,
    speed: list[float] | None = None,
    vario: list[float] | None = None,
    pilot: str = "Jane Doe",
) -> dict:
    """Build a raw JSON track: a straight northbound line near Annecy."""
    lat = lat if lat is not None else [45.0 + 0.01 * i for i in range(n_track)]
    lon = lon if lon is not None else [6.0] * n_track
    elev = elev if elev is not None else [100.0 * (i + 1) for i in range(n_chart)]
    return {
        "lat": lat,
        "lon": lon,
        "elev": elev,
        "elevGnd": [50.0] * n_chart,
        "speed": speed if speed is not None else [30.0] * n_chart,
        "vario": vario if vario is not None else [1.5] * n_chart,
        "time": {
            "hour": [10] * n_chart,
            "min": [i for i in range(n_chart)],
            "sec": [30] * n_chart,
            "label": ["10h00", "10h02"],
        },
        "nbTrackPt": n_track,
        "nbChartPt": n_chart,
        "nbChartLbl": 2,
        "date": {"day": 14, "month": 7, "year": 2008},
        "pilot": pilot,
    }


@pytest.fixture
def raw_track() -> dict:
    return make_raw_track()


@pytest.fixture
def record():
    return build(make_raw_track())
