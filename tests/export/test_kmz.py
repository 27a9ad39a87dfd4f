"""Tests for the KMZ bundle and its colour scale image."""

from __future__ import annotations

import io
import xml.etree.ElementTree as ET
import zipfile

import pytest
from PIL import Image

from tests.conftest import make_raw_track
from trackviz.export.kmz import KmzEncoder
from trackviz.export.legend import LegendRenderer
from trackviz.track.builder import build

NS = {"kml": "http://earth.google.com/kml/2.2"}

MEMBERS = ["main.kml", "scale.png", "plain.kml", "altitude.kml", "vario.kml", "speed.kml"]


@pytest.fixture
def archive() -> zipfile.ZipFile:
    record = build(make_raw_track(elev=[100.0, 100.0, 500.0, 500.0, 500.0]))
    return zipfile.ZipFile(io.BytesIO(KmzEncoder().encode(record)))


class TestKmzEncoder:
    def test_members(self, archive):
        assert archive.namelist() == MEMBERS
        assert archive.testzip() is None

    def test_members_deflated(self, archive):
        assert all(info.compress_type == zipfile.ZIP_DEFLATED for info in archive.infolist())

    def test_documents_are_well_formed(self, archive):
        for name in MEMBERS:
            if name.endswith(".kml"):
                ET.fromstring(archive.read(name))

    def test_main_links(self, archive):
        root = ET.fromstring(archive.read("main.kml"))
        links = root.findall(".//kml:NetworkLink", NS)
        assert [ln.find("kml:Link/kml:href", NS).text for ln in links] == [
            "plain.kml",
            "altitude.kml",
            "speed.kml",
            "vario.kml",
        ]
        visible = [ln.find("kml:visibility", NS).text for ln in links]
        assert visible == ["0", "1", "0", "0"]

    def test_legend_description(self, archive):
        root = ET.fromstring(archive.read("main.kml"))
        description = root.find(".//kml:description", NS).text
        assert "scale.png" in description
        assert "500m" in description
        assert "30km/h" in description

    def test_scale_image(self, archive):
        im = Image.open(io.BytesIO(archive.read("scale.png")))
        assert im.format == "PNG"
        assert im.size == (300, 30)

    def test_custom_legend_size(self):
        data = KmzEncoder(legend_width=120, legend_height=10).encode(build(make_raw_track()))
        with zipfile.ZipFile(io.BytesIO(data)) as zf:
            im = Image.open(io.BytesIO(zf.read("scale.png")))
            assert im.size == (120, 10)

    def test_documents_match_archive(self):
        record = build(make_raw_track())
        encoder = KmzEncoder()
        docs = encoder.documents(record)
        with zipfile.ZipFile(io.BytesIO(encoder.encode(record))) as zf:
            assert zf.read("plain.kml") == docs["plain.kml"]


class TestLegendRenderer:
    def test_ramp_ends(self):
        im = LegendRenderer(300, 30).image()
        assert im.getpixel((0, 0)) == (0, 0, 255)
        assert im.getpixel((299, 29)) == (255, 0, 0)
        assert im.getpixel((150, 15))[1] == 255

    def test_columns_are_uniform(self):
        im = LegendRenderer(50, 8).image()
        for x in (0, 17, 49):
            assert len({im.getpixel((x, y)) for y in range(8)}) == 1

    def test_single_column(self):
        im = Image.open(io.BytesIO(LegendRenderer(1, 1).render()))
        assert im.size == (1, 1)

    @pytest.mark.parametrize("size", [(0, 30), (300, 0)])
    def test_invalid_size(self, size):
        with pytest.raises(ValueError):
            LegendRenderer(*size)
