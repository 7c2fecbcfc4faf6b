from __future__ import annotations

from dataclasses import dataclass

from ..domain import LOCAL_OWNER, StorageMode
from .identity import IdentityProvider


@dataclass(slots=True)
class StoragePolicy:
    """Single place that decides whether collections read remote rows or local slots."""

    identity: IdentityProvider

    def mode(self) -> StorageMode:
        return StorageMode.REMOTE if self.identity.current_user_id() else StorageMode.LOCAL

    def owner_id(self) -> str:
        return self.identity.current_user_id() or LOCAL_OWNER
