from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Request
from fastapi.responses import HTMLResponse, JSONResponse

from waste_api.analytics.statistics import compute_route, compute_stats
from waste_api.api.parsing import parse_bin_update, parse_new_bins
from waste_api.api.responses import api_response, bad_request, not_found
from waste_api.models.schemas import HealthResponse, utc_timestamp
from waste_api.models.store import BinStore

router = APIRouter()

INDEX_ENDPOINTS: list[tuple[str, str]] = [
    ("GET /bins", "List all waste bins"),
    ("GET /bins/{id}", "Get a specific bin by ID"),
    ("POST /bins", "Add new waste bins"),
    ("PUT /bins/{id}", "Update a bin's properties"),
    ("DELETE /bins/{id}", "Delete a waste bin"),
    ("POST /bins/collect-sensor-data", "Simulate sensor data collection"),
    ("GET /optimize-route", "Get optimized collection route"),
    ("GET /dashboard/stats", "Get dashboard statistics"),
    ("POST /admin/load-data", "Reload bins from the data file"),
    ("POST /admin/save-data", "Write bins to the data file"),
    ("GET /health", "API health check"),
]


def _store(request: Request) -> BinStore:
    return request.app.state.store


def render_index(title: str, version: str) -> str:
    items = "".join(f"<li><code>{route}</code> - {label}</li>" for route, label in INDEX_ENDPOINTS)
    return (
        "<html>"
        f"<head><title>{title}</title>"
        "<style>"
        "body { font-family: Arial, sans-serif; margin: 40px; line-height: 1.6; }"
        "h1 { color: #2c3e50; }"
        "h2 { color: #3498db; }"
        "code { background: #f4f4f4; padding: 2px 5px; border-radius: 3px; }"
        "ul { list-style-type: none; padding-left: 20px; }"
        "li { margin-bottom: 10px; }"
        "</style></head>"
        "<body>"
        f"<h1>{title}</h1>"
        f"<p>Version {version}</p>"
        "<h2>Available Endpoints:</h2>"
        f"<ul>{items}</ul>"
        "</body></html>"
    )


@router.get("/", response_class=HTMLResponse)
def index(request: Request) -> str:
    api_cfg = request.app.state.config.api
    return render_index(api_cfg.title, api_cfg.version)


@router.get("/health", response_model=HealthResponse)
def health(request: Request) -> HealthResponse:
    return HealthResponse(
        status="ok",
        timestamp=utc_timestamp(),
        version=request.app.state.config.api.version,
    )


@router.get("/bins")
def list_bins(request: Request) -> JSONResponse:
    bins = _store(request).list()
    if not bins:
        return api_response("No bins available", [])
    return api_response(f"Retrieved {len(bins)} bins", bins)


@router.post("/bins")
def create_bins(request: Request, payload: Any = Body(default=None)) -> JSONResponse:
    locations, error = parse_new_bins(payload)
    if error:
        raise bad_request(error)

    created = _store(request).create_many(locations)
    return api_response(f"{len(created)} bins added successfully", created, status_code=201)


@router.post("/bins/collect-sensor-data")
def collect_sensor_data(request: Request) -> JSONResponse:
    updated = _store(request).simulate_sensor_reading()
    if updated is None:
        raise not_found("No bins available")
    return api_response("Sensor data collected and updated", updated)


@router.get("/bins/{bin_id}")
def get_bin(bin_id: int, request: Request) -> JSONResponse:
    item = _store(request).get(bin_id)
    if item is None:
        raise not_found(f"Bin with ID {bin_id} not found")
    return api_response(f"Retrieved bin with ID {bin_id}", item)


@router.put("/bins/{bin_id}")
def update_bin(bin_id: int, request: Request, payload: Any = Body(default=None)) -> JSONResponse:
    changes, error = parse_bin_update(payload)
    if error:
        raise bad_request(error)

    item = _store(request).update(bin_id, changes)
    if item is None:
        raise not_found(f"Bin with ID {bin_id} not found")
    return api_response(f"Bin with ID {bin_id} updated successfully", item)


@router.delete("/bins/{bin_id}")
def delete_bin(bin_id: int, request: Request) -> JSONResponse:
    if not _store(request).delete(bin_id):
        raise not_found(f"Bin with ID {bin_id} not found")
    return api_response(f"Bin with ID {bin_id} deleted successfully")


@router.get("/optimize-route")
def optimize_route(request: Request) -> JSONResponse:
    plan = compute_route(_store(request).list())
    if not plan.route:
        return api_response("No bins need collection right now", plan)
    return api_response(f"Found {plan.bins_to_collect} bins needing collection", plan)


@router.get("/dashboard/stats")
def dashboard_stats(request: Request) -> JSONResponse:
    stats = compute_stats(_store(request).list())
    if stats.total_bins == 0:
        return api_response("No bins available", stats)
    return api_response("Dashboard statistics retrieved successfully", stats)


@router.post("/admin/load-data")
def admin_load_data(request: Request) -> JSONResponse:
    count = _store(request).reload()
    return api_response(f"Successfully loaded {count} bins from file")


@router.post("/admin/save-data")
def admin_save_data(request: Request) -> JSONResponse:
    store = _store(request)
    count = len(store)
    if not store.flush():
        return api_response(f"Failed to save {count} bins to file", success=False)
    return api_response(f"Successfully saved {count} bins to file")
