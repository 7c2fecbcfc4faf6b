from __future__ import annotations

from typing import Any, Dict, Optional

from .registry import register_api
from .serializers import serialize_timer_settings
from .state import api_state


@register_api(
    "timer_status",
    description="Current pomodoro mode, remaining time and completed work sessions.",
    category="timer",
    tags=("read",),
)
def timer_status() -> Dict[str, Any]:
    context = api_state.ensure_started()
    return {"timer": context.timer.snapshot()}


@register_api(
    "toggle_timer",
    description="Start the countdown if paused, pause it if running.",
    category="timer",
    tags=("control",),
)
def toggle_timer() -> Dict[str, Any]:
    context = api_state.ensure_started()
    context.timer.toggle()
    return {"timer": context.timer.snapshot()}


@register_api(
    "reset_timer",
    description="Stop the countdown and restore the full duration of the current mode.",
    category="timer",
    tags=("control",),
)
def reset_timer() -> Dict[str, Any]:
    context = api_state.ensure_started()
    context.timer.reset()
    return {"timer": context.timer.snapshot()}


@register_api(
    "get_timer_settings",
    description="Durations (seconds) and the number of work sessions before a long break.",
    category="timer",
    tags=("settings", "read"),
)
def get_timer_settings() -> Dict[str, Any]:
    context = api_state.ensure_started()
    return {"settings": serialize_timer_settings(context.timer_settings.get())}


@register_api(
    "update_timer_settings",
    description="Change timer durations (seconds); omitted values keep their current setting.",
    category="timer",
    tags=("settings", "write"),
)
def update_timer_settings(
    work_duration: Optional[int] = None,
    short_break_duration: Optional[int] = None,
    long_break_duration: Optional[int] = None,
    sessions_until_long_break: Optional[int] = None,
) -> Dict[str, Any]:
    context = api_state.ensure_started()
    saved = context.update_timer_settings(
        work_duration=work_duration,
        short_break_duration=short_break_duration,
        long_break_duration=long_break_duration,
        sessions_until_long_break=sessions_until_long_break,
    )
    return {
        "saved": saved is not None,
        "settings": serialize_timer_settings(saved or context.timer_settings.get()),
        "timer": context.timer.snapshot(),
    }
