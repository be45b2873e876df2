"""Field-presence checks for planning requests."""
from __future__ import annotations

from typing import Any, List, Mapping, Sequence

REQUIRED_PLANNING_FIELDS = ("incompleteTasks", "currentDate", "currentTime")


def validate_required_fields(body: Mapping[str, Any], fields: Sequence[str] = REQUIRED_PLANNING_FIELDS) -> List[str]:
    """Return the names from ``fields`` that are absent, empty, or an empty list, in the given order."""
    missing: List[str] = []
    for field in fields:
        value = body.get(field)
        if value is None or value == "" or (isinstance(value, list) and not value):
            missing.append(field)
    return missing
