"""HTTP client for the planner API."""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from app.api.schemas.planning import PlanningRequest

logger = logging.getLogger(__name__)

HEALTH_PATH = "/api/health"
PLAN_PATH = "/api/openai/plan"
API_INFO_PATH = "/api"


class PlannerApiError(Exception):
    def __init__(self, status_code: int | None, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.details = details


class PlannerApiClient:
    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        *,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._client = httpx.Client(base_url=base_url, timeout=timeout, transport=transport)

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "PlannerApiClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def health(self) -> Dict[str, Any]:
        return self._request("GET", HEALTH_PATH)

    def api_info(self) -> Dict[str, Any]:
        return self._request("GET", API_INFO_PATH)

    def generate_daily_plan(self, request: PlanningRequest) -> Dict[str, Any]:
        payload = request.model_dump(by_alias=True, exclude_none=True)
        return self._request("POST", PLAN_PATH, json=payload)

    def _request(self, method: str, path: str, **kwargs: Any) -> Dict[str, Any]:
        try:
            response = self._client.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            logger.error("API call to %s failed: %s", path, exc)
            raise PlannerApiError(None, str(exc)) from exc

        if response.is_error:
            try:
                body = response.json()
            except ValueError:
                body = {}
            message = body.get("error") if isinstance(body, dict) else None
            raise PlannerApiError(
                response.status_code,
                message or f"HTTP {response.status_code}: {response.reason_phrase}",
                details=body.get("details") if isinstance(body, dict) else None,
            )
        return response.json()
