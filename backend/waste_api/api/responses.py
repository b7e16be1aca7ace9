"""Uniform `{success, message, data?}` envelope shared by every JSON endpoint."""
from __future__ import annotations

from typing import Any

from fastapi.responses import JSONResponse
from pydantic import BaseModel


class ApiError(Exception):
    """Raised by route handlers; rendered as a failed envelope."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message


def not_found(message: str) -> ApiError:
    return ApiError(404, message)


def bad_request(message: str) -> ApiError:
    return ApiError(400, message)


def _jsonable(data: Any) -> Any:
    if isinstance(data, BaseModel):
        return data.model_dump(mode="json", by_alias=True)
    if isinstance(data, list):
        return [_jsonable(item) for item in data]
    return data


def envelope(success: bool, message: str, data: Any = None) -> dict[str, Any]:
    body: dict[str, Any] = {"success": success, "message": message}
    if data is not None:
        body["data"] = _jsonable(data)
    return body


def api_response(message: str, data: Any = None, *, status_code: int = 200, success: bool = True) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=envelope(success, message, data))


def error_response(error: ApiError) -> JSONResponse:
    return api_response(error.message, status_code=error.status_code, success=False)
