"""Daily planning endpoint."""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from time import perf_counter
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Request
from pydantic import ValidationError

from app.api.deps import enforce_rate_limit, get_chat_client
from app.api.schemas.planning import PlanningRequest, PlanningResponse, PlanningResponseData
from app.core.errors import ConfigurationError, PlannerError, RequestValidationFailed
from app.observability.metrics import log_metric
from app.observability.tracing import trace
from app.services.chat_completion import ChatCompletionClient
from app.services.planner_service import generate_daily_plan
from app.services.rate_limiting import RateLimitDecision
from app.services.request_validation import validate_required_fields

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")


@router.post(
    "/openai/plan",
    response_model=PlanningResponse,
    response_model_exclude_none=True,
    tags=["planning"],
    summary="Generate a daily plan from outstanding tasks",
)
def plan_day(
    request: Request,
    body: Dict[str, Any] = Body(...),
    rate_limit: RateLimitDecision = Depends(enforce_rate_limit),
    client: Optional[ChatCompletionClient] = Depends(get_chat_client),
) -> PlanningResponse:
    request_id = getattr(request.state, "request_id", None)
    planning_request = _parse_planning_request(body)

    if client is None:
        raise ConfigurationError("OpenAI API key not configured")

    metadata = {
        "route": "/api/openai/plan",
        "task_count": len(planning_request.incomplete_tasks),
        "custom_prompt": bool(planning_request.custom_system_prompt),
        "rate_limit_remaining": rate_limit.remaining,
    }
    start = perf_counter()
    with trace("planning.generate", metadata=metadata, request_id=request_id):
        try:
            result = generate_daily_plan(planning_request, client)
        except PlannerError:
            log_metric("planning.generate.success", 0)
            raise
        except Exception as exc:
            logger.exception("Planning endpoint error")
            log_metric("planning.generate.success", 0)
            raise PlannerError("Failed to generate plan", details={"message": str(exc)}) from exc

    latency_ms = (perf_counter() - start) * 1000
    log_metric("planning.generate.success", 1, metadata={"task_count": metadata["task_count"]})
    log_metric("planning.generate.fallback", 1 if result.used_fallback else 0)
    log_metric("planning.generate.latency_ms", latency_ms)

    generated_at = datetime.now(timezone.utc).isoformat()
    return PlanningResponse(
        data=PlanningResponseData(
            plan=result.plan,
            input_tasks=list(planning_request.incomplete_tasks),
            generated_at=generated_at,
        ),
        usage=result.usage,
        timestamp=generated_at,
    )


def _parse_planning_request(body: Dict[str, Any]) -> PlanningRequest:
    missing = validate_required_fields(body)
    if missing:
        raise RequestValidationFailed("Missing required fields", details={"missingFields": missing})
    if not isinstance(body.get("incompleteTasks"), list):
        raise RequestValidationFailed("incompleteTasks must be an array")
    try:
        return PlanningRequest.model_validate(body)
    except ValidationError as exc:
        errors = [
            {"loc": list(error["loc"]), "msg": error["msg"], "type": error["type"]}
            for error in exc.errors()
        ]
        raise RequestValidationFailed("Validation failed", details={"errors": errors}) from exc
