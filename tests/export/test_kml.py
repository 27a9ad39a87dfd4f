"""Tests for the plain, colour-graded and live-tracking KML encoders."""

from __future__ import annotations

import xml.etree.ElementTree as ET

from tests.conftest import make_raw_track
from trackviz.export.kml import (
    ALTITUDE,
    SPEED,
    ColoredKmlEncoder,
    LiveKmlEncoder,
    PlainKmlEncoder,
)
from trackviz.export.templating import coordinate
from trackviz.track.builder import build

NS = {"kml": "http://earth.google.com/kml/2.2"}


def parse(document: str) -> ET.Element:
    return ET.fromstring(document.encode("utf-8"))


def coordinate_lines(placemark: ET.Element) -> list[str]:
    text = placemark.find(".//kml:coordinates", NS).text
    return [ln.strip() for ln in text.strip().splitlines()]


def line_placemarks(root: ET.Element) -> list[ET.Element]:
    return [pm for pm in root.iter("{%s}Placemark" % NS["kml"]) if pm.find("kml:LineString", NS) is not None]


def test_coordinate_format():
    assert coordinate(6.0, 45.0, 100.4) == "006.000000, 045.000000, 00100"
    assert coordinate(-6.5, -45.25, 1234) == "-06.500000, -45.250000, 01234"


class TestPlainKml:
    def test_structure(self):
        root = parse(PlainKmlEncoder().encode(build(make_raw_track())))
        folder = root.find("kml:Folder", NS)
        assert folder.find("kml:name", NS).text == "Jane Doe"
        names = [n.text for n in folder.findall("kml:Placemark/kml:name", NS)]
        assert names == ["Deco", "Atterro"]

    def test_one_coordinate_per_fix(self):
        root = parse(PlainKmlEncoder().encode(build(make_raw_track())))
        (track,) = line_placemarks(root)
        lines = coordinate_lines(track)
        assert len(lines) == 9
        assert lines[0] == "006.000000, 045.000000, 00100"
        # elevation interpolated between chart samples 0 and 1
        assert lines[1] == "006.000000, 045.010000, 00150"
        assert lines[-1] == "006.000000, 045.080000, 00500"

    def test_takeoff_and_landing(self):
        root = parse(PlainKmlEncoder().encode(build(make_raw_track())))
        points = root.findall(".//kml:Point/kml:coordinates", NS)
        assert [p.text.strip() for p in points] == [
            "006.000000, 045.000000, 00100",
            "006.000000, 045.080000, 00500",
        ]

    def test_line_color(self):
        doc = PlainKmlEncoder().encode(build(make_raw_track()))
        assert "<color>ff00ffff</color>" in doc

    def test_pilot_name_escaped(self):
        doc = PlainKmlEncoder().encode(build(make_raw_track(pilot="Tom & <Jerry>")))
        assert "Tom &amp; &lt;Jerry&gt;" in doc
        assert parse(doc).find("kml:Folder/kml:name", NS).text == "Tom & <Jerry>"


class TestColoredKml:
    def encode(self, **kwargs) -> ET.Element:
        record = build(make_raw_track(**kwargs))
        return parse(ColoredKmlEncoder(ALTITUDE).encode(record))

    def test_one_placemark_per_band(self):
        root = self.encode(elev=[100.0, 100.0, 500.0, 500.0, 500.0])
        segments = line_placemarks(root)
        assert [s.find("kml:name", NS).text for s in segments] == [
            "10:00:30 - 100.0m",
            "10:02:30 - 500.0m",
        ]
        assert [s.find(".//kml:color", NS).text for s in segments] == [
            "FFFF0000",
            "FF0000FF",
        ]
        assert [s.find(".//kml:when", NS).text for s in segments] == [
            "2008-07-14T10:00:30+00:00",
            "2008-07-14T10:02:30+00:00",
        ]

    def test_segments_share_a_fix(self):
        root = self.encode(elev=[100.0, 100.0, 500.0, 500.0, 500.0])
        first, second = (coordinate_lines(s) for s in line_placemarks(root))
        assert len(first) == 4
        assert len(second) == 6
        assert first[-1] == second[0]

    def test_constant_series_single_segment(self):
        root = self.encode(elev=[300.0] * 5)
        (segment,) = line_placemarks(root)
        assert len(coordinate_lines(segment)) == 9

    def test_speed_unit(self):
        record = build(make_raw_track())
        doc = ColoredKmlEncoder(SPEED).encode(record)
        assert "10:00:30 - 30.0km/h" in doc

    def test_value_range(self):
        record = build(make_raw_track(elev=[120.0, 800.0, 300.0, 400.0, 500.0]))
        assert ColoredKmlEncoder(ALTITUDE).value_range(record) == (120.0, 800.0)


def test_live_kml():
    record = build(make_raw_track())
    doc = LiveKmlEncoder(refresh_s=30).encode(record, "http://example.org/api/export", 42)
    root = parse(doc)
    link = root.find(".//kml:NetworkLink/kml:Link", NS)
    assert link.find("kml:href", NS).text == "http://example.org/api/export"
    assert link.find("kml:httpQuery", NS).text == "trackid=42&format=kmz"
    assert link.find("kml:refreshInterval", NS).text == "30"
    assert root.find(".//kml:NetworkLink/kml:name", NS).text == "Jane Doe"
