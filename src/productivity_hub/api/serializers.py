from __future__ import annotations

from typing import Any, Dict, Optional

from ..domain import StudySpot, Task, TimerSettings
from .models import StudySpotPayload, TaskPayload, TimerSettingsPayload


def serialize_task(task: Optional[Task]) -> Optional[Dict[str, Any]]:
    return TaskPayload.from_domain(task).model_dump() if task else None


def serialize_timer_settings(settings: TimerSettings) -> Dict[str, Any]:
    return TimerSettingsPayload.from_domain(settings).model_dump()


def serialize_spot(spot: Optional[StudySpot]) -> Optional[Dict[str, Any]]:
    return StudySpotPayload.from_domain(spot).model_dump() if spot else None
