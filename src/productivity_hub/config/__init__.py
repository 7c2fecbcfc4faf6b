"""Configuration models and helpers."""

from __future__ import annotations

from .settings import (
    APP_NAME,
    AppSettings,
    LocalStorageSettings,
    MapsSettings,
    ServerSettings,
    StorageSettings,
    SupabaseSettings,
    get_settings,
)

__all__ = [
    "APP_NAME",
    "AppSettings",
    "LocalStorageSettings",
    "MapsSettings",
    "ServerSettings",
    "StorageSettings",
    "SupabaseSettings",
    "get_settings",
]
