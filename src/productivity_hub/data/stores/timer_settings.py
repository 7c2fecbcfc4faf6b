from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, List, Optional

from ...domain import TimerSettings
from ..repositories import TimerSettingsRepository
from .base import DualModeStore

logger = logging.getLogger(__name__)


class TimerSettingsStore(DualModeStore[TimerSettings]):
    """Per-owner singleton; the local slot holds one object rather than a list."""

    record_type = TimerSettings
    _repository: TimerSettingsRepository

    def _fetch_remote(self, owner_id: str) -> List[TimerSettings]:
        existing = self._repository.fetch_for_user(owner_id)
        if existing is not None:
            return [existing]
        logger.info("Creating default timer settings for %s", owner_id)
        created = self._repository.insert(TimerSettings(), owner_id)
        return [created] if created is not None else []

    def _decode(self, raw: Any) -> List[TimerSettings]:
        if not isinstance(raw, dict):
            raise ValueError(f"Expected an object in slot {self.slot}, got {type(raw).__name__}")
        return [TimerSettings.from_record(raw)]

    def _encode(self, items: List[TimerSettings]) -> Any:
        return items[0].to_record() if items else None

    def get(self) -> TimerSettings:
        """Current settings, falling back to the defaults when none could be loaded."""

        self._active_mode()
        if self._items:
            return self._items[0]
        return TimerSettings(user_id=self._policy.owner_id())

    def save(self, settings: TimerSettings) -> Optional[TimerSettings]:
        self._active_mode()
        if not self._items:
            return self.add(replace(settings, id=""))
        current = self._items[0]
        return self.update(replace(settings, id=current.id, user_id=current.user_id))
