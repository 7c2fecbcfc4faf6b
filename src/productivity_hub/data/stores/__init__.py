"""Dual-mode collections: remote rows when signed in, local slots otherwise."""

from __future__ import annotations

from .base import DualModeStore
from .study_spots import StudySpotStore
from .tasks import TaskStore
from .timer_settings import TimerSettingsStore

__all__ = ["DualModeStore", "StudySpotStore", "TaskStore", "TimerSettingsStore"]
