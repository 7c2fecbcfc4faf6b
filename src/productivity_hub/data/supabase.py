from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from httpx import HTTPError
from postgrest.exceptions import APIError
from supabase import Client, create_client

from ..config.settings import SupabaseSettings


class SupabaseNotInitializedError(RuntimeError):
    """Raised when accessing the Supabase client before initialization."""


# Failures a remote store operation absorbs; anything else propagates.
REMOTE_ERRORS: tuple[type[BaseException], ...] = (
    APIError,
    HTTPError,
    SupabaseNotInitializedError,
)


@dataclass
class SupabaseGateway:
    """Thin wrapper around the Supabase Python client with session awareness.

    A pre-built client may be passed in; otherwise one is created lazily from
    ``settings`` on first use.
    """

    settings: SupabaseSettings
    client: Optional[Client] = None
    _session: Optional[Any] = None

    @property
    def is_configured(self) -> bool:
        return self.client is not None or self.settings.is_configured

    def ensure_client(self) -> Client:
        if self.client is not None:
            return self.client
        if not self.settings.is_configured:
            missing = ", ".join(self.settings.missing_env_vars)
            raise SupabaseNotInitializedError(f"Supabase is not configured; set {missing}.")
        self.client = create_client(self.settings.url, self.settings.anon_key)
        return self.client

    def set_session(self, session: Any) -> None:
        self._session = session

    def clear_session(self) -> None:
        self._session = None

    def optional_session(self) -> Optional[Any]:
        return self._session

    def table(self, name: str):
        return self.ensure_client().table(name)
