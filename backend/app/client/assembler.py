"""Build planning requests from captured items."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Iterable, List, Optional, Sequence

from app.api.schemas.planning import PlanningRequest

NO_TASKS_CONTEXT = "No incomplete tasks found"


@dataclass
class CapturedItem:
    content: str
    status: str = "active"
    item_type: str = "capture"

    @property
    def is_outstanding(self) -> bool:
        return self.status != "completed" and self.item_type == "capture"


def outstanding_items(items: Iterable[CapturedItem]) -> List[CapturedItem]:
    return [item for item in items if item.is_outstanding]


def assemble_planning_request(
    items: Iterable[CapturedItem],
    *,
    now: Optional[datetime] = None,
    user_context: Optional[str] = None,
    custom_system_prompt: Optional[str] = None,
) -> PlanningRequest:
    """Package the user's outstanding captures and local time into a planning request."""
    now = now or datetime.now()
    tasks = [item.content for item in outstanding_items(items)]
    if not tasks and not user_context:
        user_context = NO_TASKS_CONTEXT
    return PlanningRequest(
        incomplete_tasks=tasks,
        current_date=now.date().isoformat(),
        current_time=now.strftime("%H:%M"),
        user_context=user_context or None,
        custom_system_prompt=custom_system_prompt or None,
    )


def render_offline_plan(items: Sequence[CapturedItem], today: Optional[date] = None, *, ai_unavailable: bool = False) -> str:
    """Plain-text plan used when AI planning is disabled or the API call failed."""
    today = today or date.today()
    pending = [item.content for item in outstanding_items(items)]
    if not pending:
        return "Great! You have a clean slate today. Consider what you'd like to accomplish."

    title = f"Daily Plan ({today.isoformat()})"
    if ai_unavailable:
        title += " - AI Unavailable"
    lines = [f"{title}:", "", "Morning:"]
    lines.extend(f"• {task}" for task in pending[:2])
    lines.extend(["", "Afternoon:"])
    lines.extend(f"• {task}" for task in pending[2:4])
    if len(pending) > 4:
        lines.extend(["", f"Remaining items: {len(pending) - 4} tasks to schedule"])
    return "\n".join(lines)
