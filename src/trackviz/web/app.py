"""FastAPI Web application — track export, rendering and measurement API."""

from __future__ import annotations

import logging

from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import RedirectResponse, Response

from trackviz.export.formats import ExportResult, MissingSelector
from trackviz.render.viewport import Viewport
from trackviz.track.errors import TrackError
from trackviz.track.models import LatLng
from trackviz.web.schemas import (
    ColorBandModel,
    ExportRequest,
    HealthResponse,
    LatLngModel,
    MeasurementModel,
    MeasureRequest,
    MeasureResponse,
    ReduceRequest,
    ReduceResponse,
    SegmentsRequest,
    SegmentsResponse,
)
from trackviz.web.service import TrackNotFound, TrackService

load_dotenv()  # loads .env from project root; must run before settings are read

_logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# App setup
# ---------------------------------------------------------------------------

app = FastAPI(title="trackviz", version="0.1.0")


def _service() -> TrackService:
    return TrackService()


def _latlng(m: LatLngModel) -> LatLng:
    return LatLng(m.lat, m.lon)


def _model(p: LatLng) -> LatLngModel:
    return LatLngModel(lat=p.lat, lon=p.lng)


def _rejected(exc: TrackError) -> HTTPException:
    _logger.warning("Rejected track: %s", exc)
    return HTTPException(status_code=422, detail=str(exc))


def _export_response(result: ExportResult) -> Response:
    if result.redirect_url is not None:
        return RedirectResponse(url=result.redirect_url)
    return Response(
        content=result.content,
        media_type=result.media_type,
        headers=result.headers,
    )


def _run_export(request: Request, fmt: str, track, track_id: int | None) -> Response:
    base_url = str(request.url_for("export_get"))
    try:
        result = _service().export(fmt, track, track_id, base_url=base_url)
    except MissingSelector:
        return Response(status_code=204)
    except TrackNotFound as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except TrackError as exc:
        raise _rejected(exc) from exc
    return _export_response(result)


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


@app.get("/health", response_model=HealthResponse)
def health() -> HealthResponse:
    return HealthResponse(status="ok", version="0.1.0")


@app.get("/api/export")
def export_get(
    request: Request,
    format: str = "igc",
    track: str | None = None,
    trackid: int | None = None,
) -> Response:
    """Download a track; ``track`` is the JSON-encoded track, ``trackid`` an id."""
    return _run_export(request, format, track, trackid)


@app.post("/api/export")
def export_post(request: Request, req: ExportRequest) -> Response:
    """Download a track posted as a JSON object."""
    return _run_export(request, req.format, req.track, req.trackid)


@app.post("/api/reduce", response_model=ReduceResponse)
def reduce_track(req: ReduceRequest) -> ReduceResponse:
    """Return the points worth drawing for the given viewport."""
    vp = req.viewport
    try:
        viewport = Viewport(_latlng(vp.sw), _latlng(vp.ne), vp.width_px, vp.height_px)
        total, points = _service().reduce(req.track, viewport)
    except TrackError as exc:
        raise _rejected(exc) from exc
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return ReduceResponse(total=total, points=[_model(p) for p in points])


@app.post("/api/segments", response_model=SegmentsResponse)
def color_segments(req: SegmentsRequest) -> SegmentsResponse:
    """Return the constant-colour runs of a chart series."""
    try:
        lo, hi, bands = _service().color_segments(req.track, req.metric)
    except TrackError as exc:
        raise _rejected(exc) from exc
    return SegmentsResponse(
        metric=req.metric,
        min=lo,
        max=hi,
        bands=[
            ColorBandModel(start_index=b.start_index, end_index=b.end_index, color=b.color)
            for b in bands
        ],
    )


@app.post("/api/measure", response_model=MeasureResponse)
def measure(req: MeasureRequest) -> MeasureResponse:
    """Apply one click/move event to a measurement session."""
    session = TrackService.session(
        req.state,
        [_latlng(w) for w in req.waypoints],
        _latlng(req.pointer) if req.pointer else None,
    )
    session = TrackService.measure_event(session, req.event, LatLng(req.lat, req.lon))

    result = session.measurement()
    measurement = None
    if result is not None:
        measurement = MeasurementModel(
            distance_m=result.distance_m,
            legend=result.legend,
            type=result.score.type if result.score else None,
            coefficient=result.score.coefficient if result.score else None,
            points=result.score_points,
        )
    return MeasureResponse(
        state=int(session.state),
        waypoints=[_model(w) for w in session.waypoints],
        pointer=_model(session.pointer) if session.pointer else None,
        measurement=measurement,
    )
