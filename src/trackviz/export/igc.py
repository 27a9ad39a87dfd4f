"""IGC flight-recorder text export.

Layout::

    AXXXXXX
    HFDTEddmmyy
    HFPLTPILOT:<pilot>
    HFDTM100GPSDATUM:WGS-1984
    BhhmmssDDMMmmmNDDDMMmmmEAppppp ggggg      (one per position fix)

Coordinates are written as ``int(deg) + frac(deg) * 60 / 100`` scaled by
1e5, which is what existing consumers of these files expect.
"""

from __future__ import annotations

from trackviz.track.models import TrackRecord
from trackviz.track.resampler import Resampler

MANUFACTURER_RECORD = "AXXXXXX"
DATUM_RECORD = "HFDTM100GPSDATUM:WGS-1984"


def _single_line(text: str) -> str:
    """Join *text* on one line so it cannot start a new IGC record."""
    return " ".join(text.splitlines())


def to_igc_degrees(value: float) -> float:
    """Convert decimal degrees to the ``degrees + minutes/100`` IGC value."""
    degrees = int(value)
    return degrees + (value - degrees) * 60 / 100


class IgcEncoder:
    """Serialize a track as IGC text (one ``B`` record per position fix)."""

    def header(self, record: TrackRecord) -> list[str]:
        date = record.date
        return [
            MANUFACTURER_RECORD,
            f"HFDTE{date.day:02d}{date.month:02d}{date.year % 100:02d}",
            f"HFPLTPILOT:{_single_line(record.pilot)}",
            DATUM_RECORD,
        ]

    def fix(self, record: TrackRecord, track_index: int, chart_index: int) -> str:
        time = record.time
        lat = to_igc_degrees(record.lat[track_index])
        lon = to_igc_degrees(record.lon[track_index])
        elev = record.elev[chart_index]
        return "B%02d%02d%02d%07d%s%08d%sA%05d%05d" % (
            time.hour[chart_index],
            time.min[chart_index],
            time.sec[chart_index],
            int(abs(lat) * 100000),
            "N" if lat > 0 else "S",
            int(abs(lon) * 100000),
            "E" if lon > 0 else "W",
            elev,
            elev,
        )

    def encode(self, record: TrackRecord) -> str:
        lines = self.header(record)
        lines.extend(
            self.fix(record, i, c) for i, c in Resampler(record).iter_chart_indices()
        )
        return "\n".join(lines) + "\n"
