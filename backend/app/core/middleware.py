"""Custom FastAPI middleware."""
from __future__ import annotations

import logging
from time import perf_counter
from typing import Callable, Dict
from uuid import uuid4

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from app.core.context import client_address_ctx_var, request_id_ctx_var

logger = logging.getLogger("app.requests")


def resolve_client_address(request: Request) -> str:
    """Best-effort client address, preferring proxy headers over the socket peer."""
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first
    real_ip = request.headers.get("X-Real-IP")
    if real_ip:
        return real_ip.strip()
    if request.client and request.client.host:
        return request.client.host
    return "unknown"


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Populate request.state.request_id and ensure response header exists."""

    async def dispatch(self, request: Request, call_next: Callable[[Request], Response]) -> Response:  # type: ignore[override]
        request_id = request.headers.get("X-Request-Id") or str(uuid4())
        client_address = resolve_client_address(request)
        request.state.request_id = request_id
        request.state.client_address = client_address
        token = request_id_ctx_var.set(request_id)
        address_token = client_address_ctx_var.set(client_address)

        start = perf_counter()
        try:
            response = await call_next(request)
        finally:
            duration_ms = (perf_counter() - start) * 1000
            client_address_ctx_var.reset(address_token)
            request_id_ctx_var.reset(token)

        logger.info("%s %s - %s - %.0fms", request.method, request.url.path, response.status_code, duration_ms)
        response.headers["X-Request-Id"] = request_id
        return response


def cors_headers(allow_origin: str) -> Dict[str, str]:
    return {
        "Access-Control-Allow-Origin": allow_origin,
        "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
        "Access-Control-Allow-Headers": "Content-Type, Authorization",
        "Access-Control-Allow-Credentials": "true",
    }


class CORSHeadersMiddleware(BaseHTTPMiddleware):
    """Attach fixed CORS headers to every response and answer preflight requests directly."""

    def __init__(self, app: ASGIApp, *, allow_origin: str) -> None:
        super().__init__(app)
        self.headers = cors_headers(allow_origin)

    async def dispatch(self, request: Request, call_next: Callable[[Request], Response]) -> Response:  # type: ignore[override]
        if request.method == "OPTIONS":
            response = Response(status_code=200)
        else:
            response = await call_next(request)
        response.headers.update(self.headers)
        return response
