"""Schemas for the daily planning endpoint."""
from __future__ import annotations

from typing import List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, StrictStr
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PlanningRequest(CamelModel):
    incomplete_tasks: List[StrictStr]
    current_date: StrictStr = Field(..., min_length=1)
    current_time: StrictStr = Field(..., min_length=1, description="Local time as HH:MM (24-hour).")
    user_context: Optional[StrictStr] = None
    custom_system_prompt: Optional[StrictStr] = None


class PlannedTask(CamelModel):
    task: str
    time_slot: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("timeSlot", "time", "time_slot"),
        serialization_alias="timeSlot",
        description="Start of the slot, e.g. 9:00 AM.",
    )
    duration: Optional[str] = None


class DailyPlan(CamelModel):
    planned_tasks: List[PlannedTask]
    recommendations: List[str] = Field(default_factory=list)
    estimated_duration: str = ""
    raw_response: Optional[str] = None


class TokenUsage(BaseModel):
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0


class PlanningResponseData(CamelModel):
    plan: DailyPlan
    input_tasks: List[str]
    generated_at: str


class PlanningResponse(BaseModel):
    success: bool = True
    message: str = "Daily plan generated successfully"
    data: PlanningResponseData
    usage: Optional[TokenUsage] = None
    timestamp: str
