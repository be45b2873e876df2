from __future__ import annotations

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from starlette.requests import Request

from app.core.config import settings
from app.core.errors import register_exception_handlers
from app.core.middleware import CORSHeadersMiddleware, RequestIDMiddleware, resolve_client_address


def _request(headers=None, client=("127.0.0.1", 5000)) -> Request:
    scope = {
        "type": "http",
        "method": "GET",
        "path": "/",
        "headers": [(name.lower().encode(), value.encode()) for name, value in (headers or {}).items()],
        "client": client,
    }
    return Request(scope)


def test_forwarded_for_first_entry_wins() -> None:
    request = _request({"X-Forwarded-For": " 203.0.113.7 , 10.0.0.1", "X-Real-IP": "198.51.100.4"})

    assert resolve_client_address(request) == "203.0.113.7"


def test_real_ip_used_without_forwarded_for() -> None:
    assert resolve_client_address(_request({"X-Real-IP": " 198.51.100.4 "})) == "198.51.100.4"


@pytest.mark.parametrize(
    "headers, expected",
    [
        ({"X-Forwarded-For": ", 10.0.0.1", "X-Real-IP": "198.51.100.4"}, "198.51.100.4"),
        ({"X-Forwarded-For": ", 10.0.0.1"}, "127.0.0.1"),
    ],
)
def test_blank_forwarded_entry_falls_through(headers, expected) -> None:
    assert resolve_client_address(_request(headers)) == expected


def test_socket_peer_used_without_proxy_headers() -> None:
    assert resolve_client_address(_request(client=("192.0.2.10", 443))) == "192.0.2.10"


def test_unknown_without_any_source() -> None:
    assert resolve_client_address(_request(client=None)) == "unknown"


@pytest.fixture()
def failing_app() -> FastAPI:
    app = FastAPI()
    app.add_middleware(CORSHeadersMiddleware, allow_origin=settings.cors_origin)
    app.add_middleware(RequestIDMiddleware)
    register_exception_handlers(app)

    @app.get("/explode")
    def explode() -> None:
        raise RuntimeError("boom")

    return app


def test_unexpected_error_keeps_cors_and_request_id(failing_app) -> None:
    with TestClient(failing_app, raise_server_exceptions=False) as client:
        response = client.get("/explode", headers={"X-Request-Id": "req-123"})

    assert response.status_code == 500
    body = response.json()
    assert body["success"] is False
    assert body["error"] == "Internal server error"
    assert body["details"] == {"message": "boom"}
    assert response.headers["Access-Control-Allow-Origin"] == settings.cors_origin
    assert response.headers["Access-Control-Allow-Credentials"] == "true"
    assert response.headers["X-Request-Id"] == "req-123"


def test_unexpected_error_hides_message_in_production(failing_app, monkeypatch) -> None:
    monkeypatch.setattr(settings, "environment", "production")

    with TestClient(failing_app, raise_server_exceptions=False) as client:
        response = client.get("/explode")

    assert response.status_code == 500
    assert "details" not in response.json()
    assert response.headers["X-Request-Id"]
