"""Runtime settings, read from ``TRACKVIZ_*`` environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from trackviz.track.models import ClampBounds


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name, "")
    return float(raw) if raw else default


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "")
    return int(raw) if raw else default


@dataclass(frozen=True)
class Settings:
    """Export and ingestion settings.

    Parameters
    ----------
    bounds:
        Clamp bounds applied to every ingested track.
    legend_width, legend_height:
        Size in pixels of the colour scale image bundled in KMZ files.
    base_url:
        Public URL of the export endpoint, used by live-tracking KML links.
        Empty means "derive it from the request".
    track_dir:
        Directory holding ``<trackid>.json`` files for id-based exports.
        Empty disables id lookups.
    """

    bounds: ClampBounds = field(default_factory=ClampBounds)
    legend_width: int = 300
    legend_height: int = 30
    base_url: str = ""
    track_dir: str = ""

    @classmethod
    def from_env(cls) -> Settings:
        """Build settings from the environment, falling back to defaults."""
        return cls(
            bounds=ClampBounds(
                max_speed=_env_float("TRACKVIZ_MAX_SPEED", 80.0),
                max_vario=_env_float("TRACKVIZ_MAX_VARIO", 10.0),
                max_elev=_env_float("TRACKVIZ_MAX_ELEV", 9999.0),
            ),
            legend_width=_env_int("TRACKVIZ_LEGEND_WIDTH", 300),
            legend_height=_env_int("TRACKVIZ_LEGEND_HEIGHT", 30),
            base_url=os.environ.get("TRACKVIZ_BASE_URL", ""),
            track_dir=os.environ.get("TRACKVIZ_TRACK_DIR", ""),
        )
