from __future__ import annotations

from typing import Any, Dict, Optional

from .registry import register_api
from .state import api_state


@register_api(
    "sign_up",
    description="Create an account with email and password; a confirmation email is sent.",
    category="accounts",
    tags=("auth",),
)
def sign_up(email: str, password: str, redirect_to: Optional[str] = None) -> Dict[str, Any]:
    context = api_state.ensure_started()
    result = context.auth.sign_up(email, password, redirect_to=redirect_to)
    return {"ok": result.ok, "message": result.message}


@register_api(
    "sign_in",
    description="Sign in with email and password; collections switch to cloud storage.",
    category="accounts",
    tags=("auth",),
)
def sign_in(email: str, password: str) -> Dict[str, Any]:
    context = api_state.ensure_started()
    result = context.auth.sign_in(email, password)
    return {"ok": result.ok, "message": result.message, "storage": context.policy.mode().value}


@register_api(
    "sign_out",
    description="Sign out; collections switch back to storage on this device.",
    category="accounts",
    tags=("auth",),
)
def sign_out() -> Dict[str, Any]:
    context = api_state.ensure_started()
    result = context.auth.sign_out()
    return {"ok": result.ok, "message": result.message, "storage": context.policy.mode().value}


@register_api(
    "current_user",
    description="The signed-in user's id and email, if any.",
    category="accounts",
    tags=("auth", "read"),
)
def current_user() -> Dict[str, Any]:
    context = api_state.ensure_started()
    user_id = context.identity.current_user_id()
    if not user_id:
        return {"user": None}
    return {"user": {"id": user_id, "email": context.identity.current_email()}}
