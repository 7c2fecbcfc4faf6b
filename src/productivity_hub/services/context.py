from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from supabase import Client

from ..config import AppSettings, get_settings
from ..data import (
    IdentityProvider,
    IdentitySubscription,
    LocalSlotStorage,
    StoragePolicy,
    StudySpotStore,
    SupabaseGateway,
    TaskStore,
    TimerSettingsStore,
)
from ..data.repositories import StudySpotRepository, TaskRepository, TimerSettingsRepository
from ..domain import TimerSettings
from .auth import AuthService
from .maps import MapsKeyProvider, MapSearch, RemoteMapsKeyProvider, StaticMapsKeyProvider
from .spots import SpotFinder
from .timer import Notifier, PomodoroTimer, Ticker
from .todo import TodoService

logger = logging.getLogger(__name__)


@dataclass
class ServiceContext:
    """Aggregate root wiring settings, the Supabase gateway, stores and services.

    Collaborators that touch the outside world (Supabase client, maps key
    source, ticker, notifier) can be passed in; defaults are built from
    settings.
    """

    settings: AppSettings = field(default_factory=get_settings)
    client: Optional[Client] = None
    maps_keys: Optional[MapsKeyProvider] = None
    ticker: Optional[Ticker] = None
    notifier: Optional[Notifier] = None

    gateway: SupabaseGateway = field(init=False)
    identity: IdentityProvider = field(init=False)
    policy: StoragePolicy = field(init=False)
    local: LocalSlotStorage = field(init=False)
    tasks: TaskStore = field(init=False)
    timer_settings: TimerSettingsStore = field(init=False)
    spots: StudySpotStore = field(init=False)
    auth: AuthService = field(init=False)
    todo: TodoService = field(init=False)
    finder: SpotFinder = field(init=False)
    timer: PomodoroTimer = field(init=False)
    _subscription: Optional[IdentitySubscription] = field(init=False, default=None)

    def __post_init__(self) -> None:
        storage = self.settings.storage
        slots = self.settings.local

        self.gateway = SupabaseGateway(self.settings.supabase, client=self.client)
        self.identity = IdentityProvider(self.gateway)
        self.policy = StoragePolicy(self.identity)
        self.local = LocalSlotStorage(slots.data_dir)

        self.tasks = TaskStore(
            policy=self.policy,
            repository=TaskRepository(self.gateway, storage.tasks_table),
            local=self.local,
            slot=slots.tasks_slot,
        )
        self.timer_settings = TimerSettingsStore(
            policy=self.policy,
            repository=TimerSettingsRepository(self.gateway, storage.timer_settings_table),
            local=self.local,
            slot=slots.timer_settings_slot,
        )
        self.spots = StudySpotStore(
            policy=self.policy,
            repository=StudySpotRepository(self.gateway, storage.study_spots_table),
            local=self.local,
            slot=slots.spots_slot,
        )

        self.auth = AuthService(self.gateway, self.identity)
        self.todo = TodoService(self.tasks)
        self.finder = SpotFinder(
            store=self.spots,
            maps=MapSearch(self.settings.maps, self.maps_keys or self._default_maps_keys()),
            policy=self.policy,
        )
        self.timer = PomodoroTimer(ticker=self.ticker, notifier=self.notifier)

    def _default_maps_keys(self) -> MapsKeyProvider:
        maps = self.settings.maps
        if maps.key_endpoint:
            return RemoteMapsKeyProvider(maps.key_endpoint)
        return StaticMapsKeyProvider(maps.api_key)

    @property
    def started(self) -> bool:
        return self._subscription is not None and self._subscription.active

    def start(self) -> None:
        if self.started:
            return
        self._subscription = self.identity.subscribe(self._on_session_changed)

    def _on_session_changed(self, session: Optional[Any]) -> None:
        logger.info("Using %s storage", self.policy.mode().value)
        self.reload()

    def reload(self) -> None:
        self.tasks.reload()
        self.spots.reload()
        self.timer_settings.reload()
        self.timer.apply_settings(self.timer_settings.get())

    def update_timer_settings(self, **changes: Any) -> Optional[TimerSettings]:
        current = self.timer_settings.get()
        merged = {**current.durations(), **{key: value for key, value in changes.items() if value is not None}}
        saved = self.timer_settings.save(TimerSettings(**merged))
        if saved is not None:
            self.timer.apply_settings(saved)
        return saved

    def close(self) -> None:
        self.identity.close()
        self._subscription = None
        self.timer.close()
