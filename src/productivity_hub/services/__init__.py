"""Application services orchestrating data access and domain logic."""

from __future__ import annotations

from .auth import AuthResult, AuthService
from .context import ServiceContext
from .maps import MapSearch, RemoteMapsKeyProvider, StaticMapsKeyProvider, build_search_query
from .spots import SpotFinder
from .timer import IntervalTicker, PomodoroTimer, TerminalBellNotifier, format_time
from .todo import TodoService

__all__ = [
    "AuthResult",
    "AuthService",
    "IntervalTicker",
    "MapSearch",
    "PomodoroTimer",
    "RemoteMapsKeyProvider",
    "ServiceContext",
    "SpotFinder",
    "StaticMapsKeyProvider",
    "TerminalBellNotifier",
    "TodoService",
    "build_search_query",
    "format_time",
]
