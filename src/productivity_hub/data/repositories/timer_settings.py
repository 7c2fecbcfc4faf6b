from __future__ import annotations

from typing import Optional

from ...domain import TimerSettings
from .base import OwnedTableRepository


class TimerSettingsRepository(OwnedTableRepository[TimerSettings]):
    model = TimerSettings
    order_column = None

    def fetch_for_user(self, user_id: str) -> Optional[TimerSettings]:
        response = self._table().select("*").eq("user_id", user_id).limit(1).execute()
        rows = self._from_rows(response.data)
        return rows[0] if rows else None

    def update(self, record: TimerSettings) -> Optional[TimerSettings]:
        # One row per owner, so the owner id is the key.
        response = self._table().update(record.to_update()).eq("user_id", record.user_id).execute()
        rows = self._from_rows(response.data)
        return rows[0] if rows else None
