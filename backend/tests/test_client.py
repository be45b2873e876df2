from __future__ import annotations

import json
from datetime import date, datetime

import httpx
import pytest

from app.client.api_client import PlannerApiClient, PlannerApiError
from app.client.assembler import (
    NO_TASKS_CONTEXT,
    CapturedItem,
    assemble_planning_request,
    render_offline_plan,
)

ITEMS = [
    CapturedItem(content="Buy milk"),
    CapturedItem(content="Old errand", status="completed"),
    CapturedItem(content="Yesterday's plan", item_type="plan"),
    CapturedItem(content="Write report", status="archived"),
]


def test_assembler_keeps_outstanding_captures_in_order() -> None:
    request = assemble_planning_request(ITEMS, now=datetime(2024, 1, 1, 14, 5))

    assert request.incomplete_tasks == ["Buy milk", "Write report"]
    assert request.current_date == "2024-01-01"
    assert request.current_time == "14:05"
    assert request.user_context is None
    assert request.custom_system_prompt is None


def test_assembler_notes_empty_task_list() -> None:
    request = assemble_planning_request([CapturedItem(content="done", status="completed")], now=datetime(2024, 1, 1, 8, 0))

    assert request.incomplete_tasks == []
    assert request.user_context == NO_TASKS_CONTEXT


def test_assembler_passes_through_context_and_prompt() -> None:
    request = assemble_planning_request(
        ITEMS,
        now=datetime(2024, 1, 1, 8, 0),
        user_context="Gym at 6",
        custom_system_prompt="Be brief.",
    )

    assert request.user_context == "Gym at 6"
    assert request.custom_system_prompt == "Be brief."


def test_offline_plan_splits_morning_and_afternoon() -> None:
    items = [CapturedItem(content=f"Task {i}") for i in range(1, 7)]

    text = render_offline_plan(items, today=date(2024, 1, 1), ai_unavailable=True)

    assert text.startswith("Daily Plan (2024-01-01) - AI Unavailable:")
    assert "Morning:\n• Task 1\n• Task 2" in text
    assert "Afternoon:\n• Task 3\n• Task 4" in text
    assert text.endswith("Remaining items: 2 tasks to schedule")


def test_offline_plan_with_nothing_outstanding() -> None:
    assert render_offline_plan([], today=date(2024, 1, 1)).startswith("Great! You have a clean slate today.")


def test_api_client_posts_camel_case_request() -> None:
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"success": True, "data": {"plan": {"plannedTasks": []}}})

    planning_request = assemble_planning_request(ITEMS, now=datetime(2024, 1, 1, 9, 30))
    with PlannerApiClient("http://planner.test", transport=httpx.MockTransport(handler)) as api:
        result = api.generate_daily_plan(planning_request)

    assert result["success"] is True
    assert seen["path"] == "/api/openai/plan"
    assert seen["body"] == {
        "incompleteTasks": ["Buy milk", "Write report"],
        "currentDate": "2024-01-01",
        "currentTime": "09:30",
    }


def test_api_client_raises_with_envelope_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(429, json={"success": False, "error": "Too many requests. Please try again later."})

    with PlannerApiClient("http://planner.test", transport=httpx.MockTransport(handler)) as api:
        with pytest.raises(PlannerApiError) as exc_info:
            api.health()

    assert exc_info.value.status_code == 429
    assert exc_info.value.message == "Too many requests. Please try again later."


def test_api_client_falls_back_to_status_text() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(502, text="bad gateway")

    with PlannerApiClient("http://planner.test", transport=httpx.MockTransport(handler)) as api:
        with pytest.raises(PlannerApiError) as exc_info:
            api.api_info()

    assert exc_info.value.message == "HTTP 502: Bad Gateway"

