"""Export a JSON flight track to KML, KMZ or IGC.

Usage:
  python scripts/export_track.py \\
      --input track.json \\
      --format kmz \\
      --output track.kmz

Clamp bounds and legend size come from the TRACKVIZ_* environment variables
(a .env file in the working directory is honoured).
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from trackviz.config import Settings
from trackviz.export.formats import ExportFormat, export_track
from trackviz.track.errors import TrackError


def main() -> None:
    ap = argparse.ArgumentParser(description="Export a JSON flight track")
    ap.add_argument("--input", required=True, help="JSON track file")
    ap.add_argument(
        "--format",
        default="igc",
        choices=[f.value for f in ExportFormat if f is not ExportFormat.KML_LIVE],
        help="Output format",
    )
    ap.add_argument("--output", help="Output file (default: the format's download name)")
    ap.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = ap.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    load_dotenv()

    raw = Path(args.input).read_bytes()
    try:
        result = export_track(args.format, raw, settings=Settings.from_env())
    except TrackError as exc:
        print(f"  [!] {exc}", file=sys.stderr)
        sys.exit(1)

    if result.redirect_url is not None:
        print(f"Track is only available at {result.redirect_url}")
        return

    output = Path(args.output or result.filename)
    output.write_bytes(result.content)
    print(f"{args.format.upper()} → {output} ({len(result.content)} bytes)")


if __name__ == "__main__":
    main()
