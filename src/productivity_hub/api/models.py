from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from ..domain import StudySpot, Task, TimerSettings


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


class TaskPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    user_id: str
    text: str
    completed: bool = Field(default=False)
    created_at: Optional[str] = Field(default=None)
    updated_at: Optional[str] = Field(default=None)

    @classmethod
    def from_domain(cls, task: Task) -> "TaskPayload":
        return cls(
            id=task.id,
            user_id=task.user_id,
            text=task.text,
            completed=task.completed,
            created_at=_iso(task.created_at),
            updated_at=_iso(task.updated_at),
        )


class TimerSettingsPayload(BaseModel):
    id: str = Field(default="")
    user_id: str
    work_duration: int
    short_break_duration: int
    long_break_duration: int
    sessions_until_long_break: int

    @classmethod
    def from_domain(cls, settings: TimerSettings) -> "TimerSettingsPayload":
        return cls(id=settings.id, user_id=settings.user_id, **settings.durations())


class StudySpotPayload(BaseModel):
    id: str
    user_id: str
    name: str
    address: Optional[str] = Field(default=None)
    latitude: float = Field(default=0.0)
    longitude: float = Field(default=0.0)
    has_wifi: bool = Field(default=False)
    has_food: bool = Field(default=False)
    has_drinks: bool = Field(default=False)
    has_charging: bool = Field(default=False)
    notes: Optional[str] = Field(default=None)
    created_at: Optional[str] = Field(default=None)

    @classmethod
    def from_domain(cls, spot: StudySpot) -> "StudySpotPayload":
        return cls(
            id=spot.id,
            user_id=spot.user_id,
            name=spot.name,
            address=spot.address,
            latitude=spot.latitude,
            longitude=spot.longitude,
            has_wifi=spot.has_wifi,
            has_food=spot.has_food,
            has_drinks=spot.has_drinks,
            has_charging=spot.has_charging,
            notes=spot.notes,
            created_at=_iso(spot.created_at),
        )
