"""
API error type and its JSON rendering.

Errors leave the service as `{"error": "<message>"}` rather than FastAPI's
default `{"detail": ...}` shape.
"""

from __future__ import annotations

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from . import settings


class ApiError(RuntimeError):
    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message


def bad_request(message: str) -> ApiError:
    return ApiError(status.HTTP_400_BAD_REQUEST, message)


def not_found(message: str) -> ApiError:
    return ApiError(status.HTTP_404_NOT_FOUND, message)


def storage_error(public_message: str, exc: BaseException) -> ApiError:
    """
    Build a 500 for a failed query.

    The underlying error is only passed through when EXPOSE_ERROR_DETAILS is on.
    """
    message = str(exc) if settings.expose_error_details() else public_message
    return ApiError(status.HTTP_500_INTERNAL_SERVER_ERROR, message or public_message)


async def _handle_api_error(_: Request, exc: ApiError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


def install(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, _handle_api_error)
