"""Domain records for tasks, timer settings and study spots."""

from __future__ import annotations

from .enums import Facet, StorageMode, TimerMode
from .models import LOCAL_OWNER, Filter, SaveSpotResult, StudySpot, Task, TimerSettings, utc_now

__all__ = [
    "LOCAL_OWNER",
    "Facet",
    "Filter",
    "SaveSpotResult",
    "StorageMode",
    "StudySpot",
    "Task",
    "TimerMode",
    "TimerSettings",
    "utc_now",
]
