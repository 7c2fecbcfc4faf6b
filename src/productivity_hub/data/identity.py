"""Session observation on top of the Supabase auth client."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from httpx import HTTPError
from supabase import AuthError

from .supabase import SupabaseGateway, SupabaseNotInitializedError

logger = logging.getLogger(__name__)

SessionListener = Callable[[Optional[Any]], None]


@dataclass
class IdentitySubscription:
    """Handle returned by :meth:`IdentityProvider.subscribe`; call ``unsubscribe`` on teardown."""

    _channel: Optional[Any] = None
    active: bool = True

    def unsubscribe(self) -> None:
        if not self.active:
            return
        self.active = False
        if self._channel is not None:
            self._channel.unsubscribe()
            self._channel = None


@dataclass
class IdentityProvider:
    gateway: SupabaseGateway
    _subscriptions: list[IdentitySubscription] = field(default_factory=list)

    def current_session(self) -> Optional[Any]:
        return self.gateway.optional_session()

    def current_user_id(self) -> Optional[str]:
        session = self.current_session()
        identifier = getattr(getattr(session, "user", None), "id", None)
        return str(identifier) if identifier else None

    def current_email(self) -> Optional[str]:
        return getattr(getattr(self.current_session(), "user", None), "email", None)

    def _observe(self, session: Optional[Any]) -> None:
        if session is None:
            self.gateway.clear_session()
        else:
            self.gateway.set_session(session)

    def refresh(self) -> Optional[Any]:
        """Fetch the current session once. A failed fetch leaves the session empty."""

        if not self.gateway.is_configured:
            self._observe(None)
            return None
        try:
            session = self.gateway.ensure_client().auth.get_session()
        except (AuthError, HTTPError, SupabaseNotInitializedError):
            logger.exception("Failed to fetch the current session")
            session = None
        self._observe(session)
        return session

    def subscribe(self, listener: SessionListener) -> IdentitySubscription:
        """Deliver session changes to ``listener``, starting with an eager fetch."""

        subscription = IdentitySubscription()
        if self.gateway.is_configured:

            def _on_change(event: Any, session: Optional[Any]) -> None:
                if not subscription.active:
                    return
                logger.debug("Auth state changed: %s", event)
                self._observe(session)
                listener(session)

            try:
                subscription._channel = self.gateway.ensure_client().auth.on_auth_state_change(_on_change)
            except SupabaseNotInitializedError:
                logger.exception("Could not subscribe to auth state changes")
        else:
            logger.info("Supabase is not configured; sessions stay empty and storage stays local")

        self._subscriptions = [item for item in self._subscriptions if item.active]
        self._subscriptions.append(subscription)
        listener(self.refresh())
        return subscription

    def close(self) -> None:
        for subscription in self._subscriptions:
            subscription.unsubscribe()
        self._subscriptions.clear()
