"""Supabase repositories for owner-scoped tables."""

from __future__ import annotations

from .base import OwnedTableRepository
from .study_spots import StudySpotRepository
from .tasks import TaskRepository
from .timer_settings import TimerSettingsRepository

__all__ = ["OwnedTableRepository", "StudySpotRepository", "TaskRepository", "TimerSettingsRepository"]
