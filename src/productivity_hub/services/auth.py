from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from httpx import HTTPError
from supabase import AuthError

from ..data import IdentityProvider, SupabaseGateway, SupabaseNotInitializedError

logger = logging.getLogger(__name__)

SIGN_UP_MESSAGE = "Check your email for the confirmation link!"
_AUTH_ERRORS = (AuthError, HTTPError, SupabaseNotInitializedError)


@dataclass(slots=True)
class AuthResult:
    ok: bool
    message: str = ""


@dataclass(slots=True)
class AuthService:
    gateway: SupabaseGateway
    identity: IdentityProvider

    def _client(self):
        return self.gateway.ensure_client()

    def sign_up(self, email: str, password: str, *, redirect_to: Optional[str] = None) -> AuthResult:
        if not email.strip() or not password:
            return AuthResult(ok=False, message="Email and password are required.")
        credentials: dict = {"email": email, "password": password}
        if redirect_to:
            credentials["options"] = {"email_redirect_to": redirect_to}
        try:
            self._client().auth.sign_up(credentials)
        except _AUTH_ERRORS as exc:
            logger.info("Sign up failed for %s: %s", email, exc)
            return AuthResult(ok=False, message=str(exc) or "An error occurred during sign up.")
        return AuthResult(ok=True, message=SIGN_UP_MESSAGE)

    def sign_in(self, email: str, password: str) -> AuthResult:
        if not email.strip() or not password:
            return AuthResult(ok=False, message="Email and password are required.")
        try:
            response = self._client().auth.sign_in_with_password({"email": email, "password": password})
        except _AUTH_ERRORS as exc:
            logger.info("Sign in failed for %s: %s", email, exc)
            return AuthResult(ok=False, message=str(exc) or "An error occurred during sign in.")
        session = getattr(response, "session", None)
        if session is not None:
            self.gateway.set_session(session)
        return AuthResult(ok=True)

    def sign_out(self) -> AuthResult:
        try:
            self._client().auth.sign_out()
        except _AUTH_ERRORS as exc:
            logger.warning("Sign out failed: %s", exc)
            return AuthResult(ok=False, message=str(exc))
        finally:
            self.gateway.clear_session()
        return AuthResult(ok=True)

    def current_email(self) -> Optional[str]:
        return self.identity.current_email()
