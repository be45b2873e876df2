"""Turn raw model output into a DailyPlan, synthesizing one when the output is not usable JSON."""
from __future__ import annotations

import json
import logging
from typing import Optional, Sequence

from pydantic import ValidationError

from app.api.schemas.planning import DailyPlan, PlannedTask

logger = logging.getLogger(__name__)

FALLBACK_START_HOUR = 9
FALLBACK_DURATION = "1 hour"
FALLBACK_RECOMMENDATIONS = ["Break tasks into smaller chunks", "Take breaks every hour"]


def format_hour_slot(hour: int) -> str:
    """Render an hour of the day as a 12-hour clock label such as ``9:00 AM``."""
    hour = hour % 24
    suffix = "AM" if hour < 12 else "PM"
    display = hour % 12 or 12
    return f"{display}:00 {suffix}"


def build_fallback_plan(tasks: Sequence[str], raw_response: Optional[str] = None) -> DailyPlan:
    planned = [
        PlannedTask(task=task, time_slot=format_hour_slot(FALLBACK_START_HOUR + index), duration=FALLBACK_DURATION)
        for index, task in enumerate(tasks)
    ]
    return DailyPlan(
        planned_tasks=planned,
        recommendations=list(FALLBACK_RECOMMENDATIONS),
        estimated_duration=f"{len(tasks)} hours",
        raw_response=raw_response,
    )


def strip_code_fence(text: str) -> str:
    text = text.strip()
    if text.startswith("```"):
        lines = text.split("\n")[1:]  # drop ```json
        if lines and lines[-1].strip() == "```":
            lines = lines[:-1]
        text = "\n".join(lines)
    return text


def parse_plan(content: str) -> Optional[DailyPlan]:
    """Return the structured plan encoded in ``content`` or None if it is not one."""
    try:
        payload = json.loads(strip_code_fence(content))
    except (ValueError, RecursionError):
        return None
    if not isinstance(payload, dict):
        return None
    try:
        plan = DailyPlan.model_validate(payload)
    except ValidationError:
        return None
    # rawResponse is reserved for the fallback path.
    return plan.model_copy(update={"raw_response": None})


def normalize_plan(content: str, tasks: Sequence[str]) -> tuple[DailyPlan, bool]:
    """Return ``(plan, used_fallback)`` for the model's text."""
    plan = parse_plan(content)
    if plan is not None:
        return plan, False
    logger.info("Model response was not a structured plan; using fallback for %d tasks", len(tasks))
    return build_fallback_plan(tasks, raw_response=content), True
