"""KMZ bundle — plain and colour-graded tracks behind one main document.

Archive layout::

    main.kml       network links to the four documents below + legend
    scale.png      colour scale used by the legend
    plain.kml
    altitude.kml
    vario.kml
    speed.kml
"""

from __future__ import annotations

import io
import logging
import zipfile
from dataclasses import dataclass

from trackviz.export.kml import (
    ALTITUDE,
    SPEED,
    VARIO,
    ColoredKmlEncoder,
    PlainKmlEncoder,
)
from trackviz.export.legend import LegendRenderer
from trackviz.export.templating import render
from trackviz.track.models import TrackRecord

_logger = logging.getLogger(__name__)

MAIN_DOCUMENT = "main.kml"
PLAIN_DOCUMENT = "plain.kml"
LEGEND_IMAGE = "scale.png"


@dataclass(frozen=True)
class _Link:
    name: str
    href: str
    visible: bool = False


@dataclass(frozen=True)
class _LegendRow:
    lo: str
    hi: str
    unit: str


def _fmt(value: float) -> str:
    return f"{value:g}"


class KmzEncoder:
    """Build the KMZ archive of a track.

    Args:
        legend_width, legend_height: Size of ``scale.png`` in pixels.
    """

    def __init__(self, legend_width: int = 300, legend_height: int = 30) -> None:
        self.legend = LegendRenderer(legend_width, legend_height)

    def documents(self, record: TrackRecord) -> dict[str, bytes]:
        """Return every archive member, ``main.kml`` first.

        Everything is rendered before the archive is written, so a failure
        never leaves a partial bundle behind.
        """
        altitude = ColoredKmlEncoder(ALTITUDE)
        speed = ColoredKmlEncoder(SPEED)
        vario = ColoredKmlEncoder(VARIO)

        rows = []
        for encoder in (altitude, speed, vario):
            lo, hi = encoder.value_range(record)
            rows.append(_LegendRow(_fmt(lo), _fmt(hi), encoder.metric.unit))

        description = render(
            "legend.html",
            rows=rows,
            image=LEGEND_IMAGE,
            width=self.legend.width,
            height=self.legend.height,
        )
        links = [
            _Link("Plain", PLAIN_DOCUMENT),
            _Link(ALTITUDE.title, ALTITUDE.filename, visible=True),
            _Link(SPEED.title, SPEED.filename),
            _Link(VARIO.title, VARIO.filename),
        ]
        main = render(
            "main.kml",
            pilot=record.pilot,
            look_at=record.point(0),
            description=description,
            links=links,
        )

        return {
            MAIN_DOCUMENT: main.encode("utf-8"),
            LEGEND_IMAGE: self.legend.render(),
            PLAIN_DOCUMENT: PlainKmlEncoder().encode(record).encode("utf-8"),
            ALTITUDE.filename: altitude.encode(record).encode("utf-8"),
            VARIO.filename: vario.encode(record).encode("utf-8"),
            SPEED.filename: speed.encode(record).encode("utf-8"),
        }

    def encode(self, record: TrackRecord) -> bytes:
        """Return the deflated KMZ archive."""
        members = self.documents(record)
        buf = io.BytesIO()
        with zipfile.ZipFile(buf, "w", zipfile.ZIP_DEFLATED) as zf:
            for name, data in members.items():
                zf.writestr(name, data)
        _logger.info(
            "Built KMZ for %r: %d members, %d bytes",
            record.pilot, len(members), buf.tell(),
        )
        return buf.getvalue()
