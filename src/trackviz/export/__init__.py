"""Track export: KML, KMZ bundle, live-tracking KML and IGC.

Public API
----------
export_track        - format selection entry point
ExportFormat        - supported output formats
ExportResult        - encoded bytes + media type + download headers
PlainKmlEncoder     - single-colour KML track
ColoredKmlEncoder   - colour-graded KML track (altitude / speed / vario)
KmzEncoder          - KMZ bundle with legend image
IgcEncoder          - IGC flight-recorder text
"""

from trackviz.export.formats import (
    ExportFormat,
    ExportResult,
    MissingSelector,
    export_track,
)
from trackviz.export.igc import IgcEncoder
from trackviz.export.kml import (
    ALTITUDE,
    COLORED_METRICS,
    SPEED,
    VARIO,
    ColoredKmlEncoder,
    ColoredMetric,
    LiveKmlEncoder,
    PlainKmlEncoder,
)
from trackviz.export.kmz import KmzEncoder
from trackviz.export.legend import LegendRenderer

__all__ = [
    "ALTITUDE",
    "COLORED_METRICS",
    "SPEED",
    "VARIO",
    "ColoredKmlEncoder",
    "ColoredMetric",
    "ExportFormat",
    "ExportResult",
    "IgcEncoder",
    "KmzEncoder",
    "LegendRenderer",
    "LiveKmlEncoder",
    "MissingSelector",
    "PlainKmlEncoder",
    "export_track",
]
