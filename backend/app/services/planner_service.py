"""Daily plan generation: prompts in, normalized plan out."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from app.api.schemas.planning import DailyPlan, PlanningRequest, TokenUsage
from app.services.chat_completion import ChatCompletionClient
from app.services.plan_normalizer import normalize_plan
from app.services.planning_prompts import build_prompts

logger = logging.getLogger(__name__)


@dataclass
class PlanningResult:
    plan: DailyPlan
    usage: Optional[TokenUsage]
    used_fallback: bool


def generate_daily_plan(request: PlanningRequest, client: ChatCompletionClient) -> PlanningResult:
    """Ask the model for a plan covering ``request.incomplete_tasks``.

    Upstream failures propagate as ``UpstreamServiceError`` / ``ResponseShapeError``.
    A reply that is not a structured plan is not an error: a deterministic plan is
    synthesized from the task list instead.
    """
    logger.info(
        "Planning request: tasks=%d time=%s custom_prompt=%s context=%s",
        len(request.incomplete_tasks),
        request.current_time,
        bool(request.custom_system_prompt),
        bool(request.user_context),
    )
    prompts = build_prompts(request)
    completion = client.complete(prompts.system, prompts.user)
    plan, used_fallback = normalize_plan(completion.content, request.incomplete_tasks)

    if completion.usage:
        logger.info("Plan generated, tokens used: %d", completion.usage.total_tokens)
    return PlanningResult(plan=plan, usage=completion.usage, used_fallback=used_fallback)
