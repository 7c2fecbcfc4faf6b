from __future__ import annotations

from datetime import datetime, timedelta, timezone
from pathlib import Path
from types import SimpleNamespace
from typing import Any, Callable, Dict, List, Optional
from uuid import uuid4

import pytest
from postgrest.exceptions import APIError
from supabase import AuthError

from productivity_hub.api import api_state
from productivity_hub.config import (
    AppSettings,
    LocalStorageSettings,
    MapsSettings,
    ServerSettings,
    StorageSettings,
    SupabaseSettings,
)
from productivity_hub.domain import TimerMode
from productivity_hub.services import ServiceContext, StaticMapsKeyProvider

_EPOCH = datetime(2024, 1, 1, tzinfo=timezone.utc)


# ---- Fake Supabase client ----


class FakeAuthError(AuthError):
    def __init__(self, message: str) -> None:
        Exception.__init__(self, message)
        self.message = message


class FakeQuery:
    def __init__(self, client: "FakeSupabaseClient", table: str) -> None:
        self._client = client
        self._table = table
        self._op = "select"
        self._payload: Any = None
        self._filters: list[tuple[str, Any]] = []
        self._order: Optional[tuple[str, bool]] = None
        self._limit: Optional[int] = None

    def select(self, *_columns: str) -> "FakeQuery":
        return self

    def insert(self, payload: Any) -> "FakeQuery":
        self._op, self._payload = "insert", payload
        return self

    def update(self, payload: Dict[str, Any]) -> "FakeQuery":
        self._op, self._payload = "update", payload
        return self

    def delete(self) -> "FakeQuery":
        self._op = "delete"
        return self

    def eq(self, column: str, value: Any) -> "FakeQuery":
        self._filters.append((column, value))
        return self

    def order(self, column: str, desc: bool = False) -> "FakeQuery":
        self._order = (column, desc)
        return self

    def limit(self, count: int) -> "FakeQuery":
        self._limit = count
        return self

    def _matches(self, row: Dict[str, Any]) -> bool:
        return all(row.get(column) == value for column, value in self._filters)

    def execute(self) -> SimpleNamespace:
        self._client.calls.append((self._table, self._op))
        if self._client.fail:
            raise APIError({"message": "service unavailable", "code": "503"})
        rows = self._client.tables.setdefault(self._table, [])

        if self._op == "insert":
            payloads = self._payload if isinstance(self._payload, list) else [self._payload]
            created = [self._client.new_row(payload) for payload in payloads]
            rows.extend(created)
            return SimpleNamespace(data=[dict(row) for row in created])

        matched = [row for row in rows if self._matches(row)]
        if self._op == "update":
            for row in matched:
                row.update(self._payload)
            return SimpleNamespace(data=[dict(row) for row in matched])
        if self._op == "delete":
            self._client.tables[self._table] = [row for row in rows if not self._matches(row)]
            return SimpleNamespace(data=[dict(row) for row in matched])

        if self._order:
            column, desc = self._order
            matched = sorted(matched, key=lambda row: row.get(column) or "", reverse=desc)
        if self._limit is not None:
            matched = matched[: self._limit]
        return SimpleNamespace(data=[dict(row) for row in matched])


class FakeAuthSubscription:
    def __init__(self, auth: "FakeAuth", callback: Callable[..., None]) -> None:
        self._auth = auth
        self._callback = callback
        self.unsubscribed = False

    def unsubscribe(self) -> None:
        self.unsubscribed = True
        if self._callback in self._auth.listeners:
            self._auth.listeners.remove(self._callback)


class FakeAuth:
    def __init__(self) -> None:
        self.session: Optional[SimpleNamespace] = None
        self.listeners: List[Callable[..., None]] = []
        self.subscriptions: List[FakeAuthSubscription] = []
        self.get_session_calls = 0
        self.fail_get_session = False
        self.password = "correct-horse"
        self.sign_ups: List[Dict[str, Any]] = []

    def get_session(self) -> Optional[SimpleNamespace]:
        self.get_session_calls += 1
        if self.fail_get_session:
            raise FakeAuthError("session lookup failed")
        return self.session

    def on_auth_state_change(self, callback: Callable[..., None]) -> FakeAuthSubscription:
        self.listeners.append(callback)
        subscription = FakeAuthSubscription(self, callback)
        self.subscriptions.append(subscription)
        return subscription

    def emit(self, event: str, session: Optional[SimpleNamespace]) -> None:
        self.session = session
        for listener in list(self.listeners):
            listener(event, session)

    def sign_in_with_password(self, credentials: Dict[str, str]) -> SimpleNamespace:
        if credentials["password"] != self.password:
            raise FakeAuthError("Invalid login credentials")
        session = make_session(email=credentials["email"])
        self.emit("SIGNED_IN", session)
        return SimpleNamespace(session=session, user=session.user)

    def sign_up(self, credentials: Dict[str, Any]) -> SimpleNamespace:
        self.sign_ups.append(credentials)
        return SimpleNamespace(session=None, user=None)

    def sign_out(self) -> None:
        self.emit("SIGNED_OUT", None)


class FakeSupabaseClient:
    def __init__(self) -> None:
        self.tables: Dict[str, List[Dict[str, Any]]] = {}
        self.calls: List[tuple[str, str]] = []
        self.fail = False
        self.auth = FakeAuth()
        self._clock = 0

    def new_row(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        self._clock += 1
        stamp = (_EPOCH + timedelta(seconds=self._clock)).isoformat()
        return {"id": str(uuid4()), "created_at": stamp, "updated_at": stamp, **payload}

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)


def make_session(user_id: str = "user-1", email: str = "student@example.com") -> SimpleNamespace:
    return SimpleNamespace(user=SimpleNamespace(id=user_id, email=email), access_token="token")


# ---- Fake timer ports ----


class FakeTicker:
    def __init__(self) -> None:
        self.running = False
        self.callback: Optional[Callable[[], None]] = None
        self.starts = 0
        self.stops = 0

    def start(self, callback: Callable[[], None]) -> None:
        self.running = True
        self.callback = callback
        self.starts += 1

    def stop(self) -> None:
        self.running = False
        self.stops += 1

    def fire(self, count: int = 1) -> None:
        for _ in range(count):
            if not self.running or self.callback is None:
                return
            self.callback()


class RecordingNotifier:
    def __init__(self, fail: bool = False) -> None:
        self.modes: List[TimerMode] = []
        self.fail = fail

    def notify(self, mode: TimerMode) -> None:
        self.modes.append(mode)
        if self.fail:
            raise OSError("no audio device")


# ---- Fixtures ----


@pytest.fixture
def settings(tmp_path: Path) -> AppSettings:
    return AppSettings(
        supabase=SupabaseSettings(url=None, anon_key=None),
        storage=StorageSettings(
            tasks_table="tasks",
            timer_settings_table="pomodoro_settings",
            study_spots_table="study_spots",
        ),
        local=LocalStorageSettings(
            data_dir=tmp_path / "data",
            tasks_slot="productivityHubTasks",
            timer_settings_slot="productivityHubPomodoroSettings",
            spots_slot="productivityHubFavoriteSpots",
        ),
        maps=MapsSettings(
            api_key="test-maps-key",
            embed_base_url="https://www.google.com/maps/embed/v1",
            default_query="study spots",
            region="singapore",
            key_endpoint=None,
        ),
        server=ServerSettings(host="127.0.0.1", port=8000, mcp_port=8765),
    )


@pytest.fixture
def fake_client() -> FakeSupabaseClient:
    return FakeSupabaseClient()


@pytest.fixture
def ticker() -> FakeTicker:
    return FakeTicker()


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def local_context(settings, ticker, notifier):
    """Context with no Supabase configuration: every collection stays on this device."""

    context = ServiceContext(
        settings=settings,
        maps_keys=StaticMapsKeyProvider(settings.maps.api_key),
        ticker=ticker,
        notifier=notifier,
    )
    context.start()
    yield context
    context.close()


@pytest.fixture
def remote_context(settings, fake_client, ticker, notifier):
    """Context wired to the in-memory Supabase fake, initially signed out."""

    context = ServiceContext(
        settings=settings,
        client=fake_client,
        maps_keys=StaticMapsKeyProvider(settings.maps.api_key),
        ticker=ticker,
        notifier=notifier,
    )
    context.start()
    yield context
    context.close()


@pytest.fixture
def signed_in(remote_context, fake_client):
    fake_client.auth.emit("SIGNED_IN", make_session())
    return remote_context


@pytest.fixture
def api_context(remote_context):
    api_state.use(remote_context)
    yield remote_context
    api_state.shutdown()
