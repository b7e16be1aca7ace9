from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from waste_api.api.responses import ApiError, api_response, error_response
from waste_api.api.routes import router as api_router
from waste_api.config import load_config
from waste_api.models.persistence import JsonFileGateway
from waste_api.models.store import BinStore
from waste_api.sensors.simulator import build_random_source

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
)

LOGGER = logging.getLogger(__name__)

CORS_HEADERS: dict[str, str] = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
    "Access-Control-Max-Age": "86400",
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    config = load_config()
    gateway = JsonFileGateway(config.storage.data_file)
    store = BinStore(
        gateway,
        rng=build_random_source(config.sensors.seed),
        collection_threshold=config.sensors.collection_threshold,
    )
    if config.storage.load_on_startup:
        store.reload()

    app.state.config = config
    app.state.store = store
    LOGGER.info("Serving %d bins backed by %s", len(store), gateway.data_file)

    yield

    LOGGER.info("Shutting down with %d bins in memory", len(store))


app = FastAPI(
    title="Smart Waste Management API",
    version="1.0.0",
    description="Waste bin registry with route optimization and dashboard statistics",
    lifespan=lifespan,
)


@app.middleware("http")
async def cors_headers(request: Request, call_next) -> Response:
    if request.method == "OPTIONS":
        response: Response = Response(content="", media_type="text/plain")
    else:
        response = await call_next(request)
    response.headers.update(CORS_HEADERS)
    return response


@app.exception_handler(ApiError)
async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    return error_response(exc)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    LOGGER.warning("Rejected %s %s: %s", request.method, request.url.path, errors)
    first = errors[0] if errors else {}
    # A non-numeric bin id never matches a bin route.
    if any(error.get("loc", ())[:1] == ("path",) for error in errors):
        return api_response("Not Found", status_code=404, success=False)
    if first.get("type") == "json_invalid":
        message = "Invalid JSON body"
    else:
        message = f"Error: {first.get('msg', 'invalid request')}"
    return api_response(message, status_code=400, success=False)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return api_response(str(exc.detail), status_code=exc.status_code, success=False)


app.include_router(api_router)


def run() -> None:
    import uvicorn

    config = load_config()
    uvicorn.run(app, host=config.server.host, port=config.server.port)


if __name__ == "__main__":
    run()
