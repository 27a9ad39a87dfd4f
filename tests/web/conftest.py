"""Shared fixtures for web tests."""

from __future__ import annotations

import json

import pytest
from fastapi.testclient import TestClient

from tests.conftest import make_raw_track
from trackviz.web.app import app


@pytest.fixture
def client():
    """FastAPI test client."""
    with TestClient(app) as c:
        yield c


@pytest.fixture
def track_dir(tmp_path, monkeypatch):
    """Directory holding track ``7`` and served through ``TRACKVIZ_TRACK_DIR``."""
    (tmp_path / "7.json").write_text(json.dumps(make_raw_track()), encoding="utf-8")
    monkeypatch.setenv("TRACKVIZ_TRACK_DIR", str(tmp_path))
    return tmp_path


def make_viewport_body(
    south: float = 44.9,
    west: float = 5.9,
    size_deg: float = 0.3,
    px: int = 300,
) -> dict:
    """Build a viewport JSON body."""
    return {
        "sw": {"lat": south, "lon": west},
        "ne": {"lat": south + size_deg, "lon": west + size_deg},
        "width_px": px,
        "height_px": px,
    }
