# This file defines the API error taxonomy and the exception handlers that render it.
# Every failure response carries the same body with request trace fields.
# Store failures keep the underlying message; anything unexpected gets a generic one.

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import Any

from fastapi import FastAPI, HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from src.api.db_access import StoreError

LOGGER = logging.getLogger("api")


class APIError(Exception):
    """Domain error type with structured API details."""

    def __init__(
        self,
        *,
        status_code: int,
        error_code: str,
        message: str,
        details: Any | None = None,
    ) -> None:
        self.status_code = status_code
        self.error_code = error_code
        self.message = message
        self.details = details
        super().__init__(message)


class ValidationFailedError(APIError):
    """Missing or malformed input."""

    def __init__(self, message: str, *, details: Any | None = None) -> None:
        super().__init__(status_code=400, error_code="VALIDATION_ERROR", message=message, details=details)


class UnknownReferenceError(APIError):
    """A referenced row (service type, branch) does not exist."""

    def __init__(self, message: str, *, details: Any | None = None) -> None:
        super().__init__(status_code=400, error_code="INVALID_REFERENCE", message=message, details=details)


class UnauthenticatedError(APIError):
    def __init__(self, message: str = "Access token required") -> None:
        super().__init__(status_code=401, error_code="UNAUTHENTICATED", message=message)


class ForbiddenError(APIError):
    def __init__(self, message: str) -> None:
        super().__init__(status_code=403, error_code="FORBIDDEN", message=message)


class NotFoundError(APIError):
    """The row is absent or not owned by the caller's branch."""

    def __init__(self, message: str) -> None:
        super().__init__(status_code=404, error_code="NOT_FOUND", message=message)


def _request_id(request: Request) -> str:
    return str(getattr(request.state, "request_id", "unknown"))


def _error_body(
    *, request: Request, error_code: str, message: str, details: Any | None = None
) -> dict[str, Any]:
    return {
        "error_code": error_code,
        "message": message,
        "details": jsonable_encoder(details),
        "request_id": _request_id(request),
        "timestamp": datetime.now(tz=UTC).isoformat(),
    }


def register_error_handlers(app: FastAPI) -> None:
    """Register global exception handlers."""

    @app.exception_handler(APIError)
    async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(
                request=request,
                error_code=exc.error_code,
                message=exc.message,
                details=exc.details,
            ),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content=_error_body(
                request=request,
                error_code="VALIDATION_ERROR",
                message="Invalid request parameters.",
                details=exc.errors(),
            ),
        )

    @app.exception_handler(StoreError)
    async def store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
        return JSONResponse(
            status_code=500,
            content=_error_body(
                request=request,
                error_code="STORE_ERROR",
                message=str(exc),
            ),
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(
                request=request,
                error_code="HTTP_ERROR",
                message=str(exc.detail),
            ),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        LOGGER.exception("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
        return JSONResponse(
            status_code=500,
            content=_error_body(
                request=request,
                error_code="INTERNAL_SERVER_ERROR",
                message="The server encountered an unexpected error.",
            ),
        )
