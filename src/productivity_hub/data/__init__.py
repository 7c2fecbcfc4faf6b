"""Data access layer."""

from __future__ import annotations

from .identity import IdentityProvider, IdentitySubscription
from .local import LocalSlotStorage
from .policy import StoragePolicy
from .stores import DualModeStore, StudySpotStore, TaskStore, TimerSettingsStore
from .supabase import (
    REMOTE_ERRORS,
    SupabaseGateway,
    SupabaseNotInitializedError,
)

__all__ = [
    "REMOTE_ERRORS",
    "DualModeStore",
    "IdentityProvider",
    "IdentitySubscription",
    "LocalSlotStorage",
    "StoragePolicy",
    "StudySpotStore",
    "SupabaseGateway",
    "SupabaseNotInitializedError",
    "TaskStore",
    "TimerSettingsStore",
]
