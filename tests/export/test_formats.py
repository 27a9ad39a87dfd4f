"""Tests for the export entry point."""

from __future__ import annotations

import io
import json
import zipfile
from unittest.mock import MagicMock

import pytest

from tests.conftest import make_raw_track
from trackviz.config import Settings
from trackviz.export.formats import (
    NO_CACHE_HEADERS,
    ExportFormat,
    MissingSelector,
    export_track,
)
from trackviz.track.errors import InvalidTrack, MalformedInput, UpstreamTrackError
from trackviz.track.models import ClampBounds


@pytest.fixture
def settings() -> Settings:
    return Settings()


class TestExportFormat:
    @pytest.mark.parametrize(
        "value,expected",
        [
            ("kml", ExportFormat.KML),
            ("KMZ", ExportFormat.KMZ),
            ("kmllive", ExportFormat.KML_LIVE),
            ("igc", ExportFormat.IGC),
            ("gpx", ExportFormat.IGC),
            ("", ExportFormat.IGC),
            (None, ExportFormat.IGC),
        ],
    )
    def test_parse(self, value, expected):
        assert ExportFormat.parse(value) is expected


class TestExportTrack:
    @pytest.mark.parametrize(
        "fmt,media_type,filename",
        [
            ("kml", "application/vnd.google-earth.kml+xml", "track.kml"),
            ("kmz", "application/vnd.google-earth.kmz", "track.kmz"),
            ("igc", "text/plain; charset=ISO-8859-1", "track.igc"),
        ],
    )
    def test_media_type_and_headers(self, settings, fmt, media_type, filename):
        result = export_track(fmt, make_raw_track(), settings=settings)
        assert result.media_type == media_type
        assert result.filename == filename
        assert result.headers["Content-Disposition"] == f'attachment; filename="{filename}"'
        for key, value in NO_CACHE_HEADERS.items():
            assert result.headers[key] == value
        assert result.redirect_url is None
        assert result.content

    def test_unknown_format_is_igc(self, settings):
        result = export_track("gpx", make_raw_track(), settings=settings)
        assert result.filename == "track.igc"
        assert result.content.startswith(b"AXXXXXX\n")

    def test_kmz_is_zip(self, settings):
        result = export_track(ExportFormat.KMZ, make_raw_track(), settings=settings)
        assert zipfile.is_zipfile(io.BytesIO(result.content))

    def test_igc_latin1(self, settings):
        result = export_track("igc", make_raw_track(pilot="Jérôme"), settings=settings)
        assert "HFPLTPILOT:Jérôme".encode("iso-8859-1") in result.content

    def test_json_text_track(self, settings):
        result = export_track("kml", json.dumps(make_raw_track()), settings=settings)
        assert result.content.startswith(b"<?xml")

    def test_clamp_applied_before_encoding(self):
        settings = Settings(bounds=ClampBounds(max_elev=300.0))
        result = export_track("igc", make_raw_track(), settings=settings)
        last_fix = result.content.decode("iso-8859-1").splitlines()[-1]
        assert last_fix.endswith("A0030000300")

    def test_missing_selector(self, settings):
        with pytest.raises(MissingSelector):
            export_track("kml", settings=settings)

    def test_track_id_without_resolver(self, settings):
        with pytest.raises(MissingSelector):
            export_track("kml", track_id=7, settings=settings)

    def test_track_id_resolved(self, settings):
        resolver = MagicMock(return_value=make_raw_track())
        result = export_track("kml", track_id=7, resolver=resolver, settings=settings)
        resolver.assert_called_once_with(7)
        assert result.content.startswith(b"<?xml")

    def test_inline_track_wins_over_id(self, settings):
        resolver = MagicMock()
        export_track("igc", make_raw_track(), 7, resolver=resolver, settings=settings)
        resolver.assert_not_called()

    def test_invalid_track_not_encoded(self, settings):
        with pytest.raises(InvalidTrack):
            export_track("kmz", make_raw_track(n_track=4, n_chart=4), settings=settings)

    def test_malformed_track(self, settings):
        with pytest.raises(MalformedInput):
            export_track("kml", "{oops", settings=settings)

    def test_upstream_error(self, settings):
        with pytest.raises(UpstreamTrackError):
            export_track("kml", {"error": "no such flight"}, settings=settings)

    def test_passthrough_redirects(self, settings):
        result = export_track("kmz", {"kmlUrl": "http://example.org/t.kml"}, settings=settings)
        assert result.redirect_url == "http://example.org/t.kml"
        assert result.content == b""


class TestLiveExport:
    def test_requires_track_id(self, settings):
        with pytest.raises(MissingSelector):
            export_track("kmllive", make_raw_track(), settings=settings)

    def test_link_uses_request_url(self, settings):
        resolver = MagicMock(return_value=make_raw_track())
        result = export_track(
            "kmllive",
            track_id=12,
            resolver=resolver,
            settings=settings,
            base_url="http://host/api/export",
        )
        doc = result.content.decode("utf-8")
        assert "<href>http://host/api/export</href>" in doc
        assert "trackid=12&amp;format=kmz" in doc
        assert result.filename == "track.kml"

    def test_configured_base_url_wins(self):
        settings = Settings(base_url="https://tracks.example.org/export")
        resolver = MagicMock(return_value=make_raw_track())
        result = export_track(
            "kmllive", track_id=12, resolver=resolver, settings=settings, base_url="http://host/x"
        )
        assert b"<href>https://tracks.example.org/export</href>" in result.content
