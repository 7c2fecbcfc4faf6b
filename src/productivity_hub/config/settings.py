from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from platformdirs import user_data_dir

load_dotenv()

APP_NAME = "Productivity Hub"
APP_AUTHOR = "ProductivityHub"


@dataclass(frozen=True)
class SupabaseSettings:
    url: Optional[str]
    anon_key: Optional[str]

    @property
    def is_configured(self) -> bool:
        return bool(self.url and self.anon_key)

    @property
    def missing_env_vars(self) -> list[str]:
        missing = []
        if not self.url:
            missing.append("SUPABASE_URL")
        if not self.anon_key:
            missing.append("SUPABASE_ANON_KEY")
        return missing


@dataclass(frozen=True)
class StorageSettings:
    tasks_table: str
    timer_settings_table: str
    study_spots_table: str


@dataclass(frozen=True)
class LocalStorageSettings:
    data_dir: Path
    tasks_slot: str
    timer_settings_slot: str
    spots_slot: str


@dataclass(frozen=True)
class MapsSettings:
    api_key: Optional[str]
    embed_base_url: str
    default_query: str
    region: str
    key_endpoint: Optional[str]


@dataclass(frozen=True)
class ServerSettings:
    host: str
    port: int
    mcp_port: int


@dataclass(frozen=True)
class AppSettings:
    supabase: SupabaseSettings
    storage: StorageSettings
    local: LocalStorageSettings
    maps: MapsSettings
    server: ServerSettings


def _int_from_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    supabase = SupabaseSettings(
        url=os.getenv("SUPABASE_URL"),
        anon_key=os.getenv("SUPABASE_ANON_KEY"),
    )

    storage = StorageSettings(
        tasks_table=os.getenv("SUPABASE_TASKS_TABLE", "tasks"),
        timer_settings_table=os.getenv("SUPABASE_TIMER_SETTINGS_TABLE", "pomodoro_settings"),
        study_spots_table=os.getenv("SUPABASE_STUDY_SPOTS_TABLE", "study_spots"),
    )

    local = LocalStorageSettings(
        data_dir=Path(os.getenv("HUB_DATA_DIR") or user_data_dir(APP_NAME, APP_AUTHOR)),
        tasks_slot="productivityHubTasks",
        timer_settings_slot="productivityHubPomodoroSettings",
        spots_slot="productivityHubFavoriteSpots",
    )

    maps = MapsSettings(
        api_key=os.getenv("GOOGLE_MAPS_API_KEY"),
        embed_base_url="https://www.google.com/maps/embed/v1",
        default_query="study spots",
        region=os.getenv("HUB_MAPS_REGION", "singapore"),
        key_endpoint=os.getenv("HUB_MAPS_KEY_ENDPOINT"),
    )

    server = ServerSettings(
        host=os.getenv("HUB_API_HOST", "127.0.0.1"),
        port=_int_from_env("HUB_API_PORT", 8000),
        mcp_port=_int_from_env("HUB_MCP_PORT", 8765),
    )

    return AppSettings(supabase=supabase, storage=storage, local=local, maps=maps, server=server)
