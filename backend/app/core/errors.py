"""Error types surfaced by the planning API and their JSON envelope."""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.config import settings
from app.core.middleware import cors_headers

logger = logging.getLogger(__name__)

AVAILABLE_ENDPOINTS = ["/api/health", "/api/openai/plan"]


class PlannerError(Exception):
    """Base class for errors that terminate a request with an error envelope."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class RequestValidationFailed(PlannerError):
    status_code = status.HTTP_400_BAD_REQUEST


class RateLimitExceeded(PlannerError):
    status_code = status.HTTP_429_TOO_MANY_REQUESTS

    def __init__(self, retry_after_seconds: int | None = None) -> None:
        super().__init__("Too many requests. Please try again later.")
        self.retry_after_seconds = retry_after_seconds


class ConfigurationError(PlannerError):
    """A required server-side setting (such as the model API key) is missing."""


class UpstreamServiceError(PlannerError):
    """The chat-completion provider failed or returned a non-success status."""


class ResponseShapeError(PlannerError):
    """The provider answered but without usable completion content."""


def error_payload(message: str, details: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "success": False,
        "error": message,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
    if details:
        payload["details"] = details
    return payload


def error_response(
    status_code: int,
    message: str,
    details: Optional[Dict[str, Any]] = None,
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=error_payload(message, details), headers=headers)


async def planner_error_handler(request: Request, exc: PlannerError) -> JSONResponse:
    headers = None
    if isinstance(exc, RateLimitExceeded) and exc.retry_after_seconds is not None:
        headers = {"Retry-After": str(exc.retry_after_seconds)}
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    else:
        logger.info("%s %s rejected (%s): %s", request.method, request.url.path, exc.status_code, exc.message)
    return error_response(exc.status_code, exc.message, exc.details, headers=headers)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == status.HTTP_404_NOT_FOUND and exc.detail == "Not Found":
        return error_response(
            exc.status_code,
            "API endpoint not found",
            {"path": request.url.path, "availableEndpoints": AVAILABLE_ENDPOINTS},
        )
    if exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
        return error_response(exc.status_code, "Method not allowed", headers=exc.headers)
    return error_response(exc.status_code, str(exc.detail), headers=exc.headers)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [
        {"loc": list(error.get("loc", ())), "msg": error.get("msg", ""), "type": error.get("type", "")}
        for error in exc.errors()
    ]
    return error_response(status.HTTP_400_BAD_REQUEST, "Validation failed", {"errors": errors})


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    details = None if settings.is_production else {"message": str(exc)}
    # Served outside the middleware stack, so the headers it would add are set here.
    headers = cors_headers(settings.cors_origin)
    request_id = getattr(request.state, "request_id", None)
    if request_id:
        headers["X-Request-Id"] = request_id
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error", details, headers=headers)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(PlannerError, planner_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
