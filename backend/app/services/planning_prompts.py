"""Prompt construction for the daily planning assistant.

Everything here is a pure function of the planning request so the exact text sent
to the model can be asserted in tests.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from app.api.schemas.planning import PlanningRequest

DEFAULT_SYSTEM_PROMPT = (
    "You are a helpful personal productivity assistant. Your job is to create actionable, structured daily "
    "plans based on the user's ACTUAL logged tasks and items. CRITICAL: You MUST use and reference the specific "
    "tasks the user has logged. Do not suggest generic activities like \"exercise\" or \"read\" unless they are "
    "explicitly in the user's task list. Consider the current time when planning - if it's already afternoon, "
    "don't suggest morning activities, and never schedule anything before the current time. Be specific and "
    "actionable, referencing the exact tasks the user has captured. If the user has no tasks, only then suggest "
    "general productivity tips.\n\n"
    "RESPONSE FORMAT - respond with a single JSON object and no other text:\n"
    '- "plannedTasks": array of objects {"task": "exact user task", "time": "HH:MM AM/PM", '
    '"duration": "X hours/minutes"}\n'
    '- "recommendations": array of 2-3 short, specific productivity tips\n'
    '- "estimatedDuration": total time estimate for all tasks, as text'
)

NO_TASKS_NOTE = (
    "No incomplete tasks found. Since you have no specific tasks, suggest a productive day structure with "
    "general productivity tips that makes sense for the current time."
)

MORNING_GUIDANCE = (
    "- Morning priorities (most important tasks from your list)",
    "- Afternoon focus areas (remaining tasks)",
    "- Evening wrap-up items",
)
AFTERNOON_GUIDANCE = (
    "- Afternoon priorities (focus on your incomplete tasks)",
    "- Evening wrap-up items",
)
EVENING_GUIDANCE = (
    "- Evening focus (what you can realistically accomplish)",
    "- Tomorrow preparation",
)

SCHEDULING_INSTRUCTIONS = (
    "- Time estimates for each section",
    "- Specific task assignments to each time block",
)

CLOSING_INSTRUCTION = (
    "Provide the plan in a clear, actionable format that directly references your logged tasks. "
    "Use the exact wording of each task and be specific about which tasks go where and when."
)


@dataclass(frozen=True)
class PlanningPrompts:
    system: str
    user: str


def build_system_prompt(custom_system_prompt: Optional[str]) -> str:
    if custom_system_prompt:
        return custom_system_prompt
    return DEFAULT_SYSTEM_PROMPT


def parse_hour(current_time: str) -> int:
    """Return the leading hour of an ``HH:MM`` string; unparseable values count as midnight."""
    head = current_time.strip().split(":", 1)[0]
    try:
        return int(head)
    except ValueError:
        return 0


def time_of_day_guidance(hour: int) -> tuple[str, ...]:
    if hour < 12:
        return MORNING_GUIDANCE
    if hour < 17:
        return AFTERNOON_GUIDANCE
    return EVENING_GUIDANCE


def build_user_prompt(request: PlanningRequest) -> str:
    tasks = request.incomplete_tasks
    lines: List[str] = [
        f"Create a structured daily plan for {request.current_date} starting from {request.current_time} "
        "based on these incomplete tasks:",
        "",
    ]

    if not tasks:
        lines.append(NO_TASKS_NOTE)
    else:
        lines.append(f"You have {len(tasks)} incomplete tasks to work with:")
        lines.extend(f"{index}. {task}" for index, task in enumerate(tasks, start=1))
        lines.append("")
        lines.append("IMPORTANT: Your plan MUST use and reference exactly these tasks. Do not suggest generic activities.")

    lines.append("")
    lines.append("Organize the day into a realistic schedule starting from the current time:")
    lines.extend(time_of_day_guidance(parse_hour(request.current_time)))
    lines.extend(SCHEDULING_INSTRUCTIONS)

    if request.user_context:
        lines.append("")
        lines.append(f"Additional context: {request.user_context}")

    lines.append("")
    lines.append(CLOSING_INSTRUCTION)
    return "\n".join(lines)


def build_prompts(request: PlanningRequest) -> PlanningPrompts:
    return PlanningPrompts(
        system=build_system_prompt(request.custom_system_prompt),
        user=build_user_prompt(request),
    )
