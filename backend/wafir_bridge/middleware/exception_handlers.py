"""Global exception handlers for standardized error responses.

Catches HTTPException, RequestValidationError, and unhandled exceptions
to return a consistent ``{statusCode, error, message}`` JSON body.
"""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any

from fastapi import HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger("wafir_bridge.exception")


def _reason(status_code: int) -> str:
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return "Error"


def build_error_response(
    status_code: int,
    message: str,
    details: list[dict[str, Any]] | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    """Build standardized error response."""
    body: dict[str, Any] = {
        "statusCode": status_code,
        "error": _reason(status_code),
        "message": message,
    }
    if details:
        body["details"] = details
    return JSONResponse(status_code=status_code, content=body, headers=headers)


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Handle FastAPI HTTPException with standardized format."""
    if exc.status_code >= 500:
        logger.error(
            "HTTPException status=%s detail=%s request_id=%s",
            exc.status_code,
            exc.detail,
            getattr(request.state, "request_id", None),
        )

    return build_error_response(
        status_code=exc.status_code,
        message=str(exc.detail),
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Reject malformed requests with 400 and field-level details."""
    details = []
    for error in exc.errors():
        loc = ".".join(str(x) for x in error.get("loc", []))
        details.append(
            {
                "field": loc,
                "message": error.get("msg", "Invalid value"),
                "type": error.get("type", "value_error"),
            }
        )

    message = (
        f"{details[0]['field']}: {details[0]['message']}"
        if details
        else "Invalid request"
    )
    return build_error_response(status_code=400, message=message, details=details)


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unhandled exceptions - returns 500 with minimal info."""
    logger.exception(
        "Unhandled exception request_id=%s path=%s",
        getattr(request.state, "request_id", None),
        request.url.path,
    )

    return build_error_response(
        status_code=500,
        message="An unexpected error occurred. Please try again later.",
    )
