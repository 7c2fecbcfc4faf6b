from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from .enums import Facet

LOCAL_OWNER = "local"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _parse_datetime(value: Any) -> Optional[datetime]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, str):
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    raise ValueError(f"Unsupported datetime value: {value!r}")


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


@dataclass(slots=True)
class Task:
    text: str
    completed: bool = False
    id: str = ""
    user_id: str = LOCAL_OWNER
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "Task":
        return cls(
            id=str(record["id"]),
            user_id=str(record.get("user_id") or LOCAL_OWNER),
            text=str(record["text"]),
            completed=bool(record.get("completed", False)),
            created_at=_parse_datetime(record.get("created_at")),
            updated_at=_parse_datetime(record.get("updated_at")),
        )

    def to_record(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "text": self.text,
            "completed": self.completed,
            "created_at": _iso(self.created_at),
            "updated_at": _iso(self.updated_at),
        }

    def to_insert(self, owner_id: str) -> Dict[str, Any]:
        return {"user_id": owner_id, "text": self.text, "completed": self.completed}

    def to_update(self) -> Dict[str, Any]:
        return {"text": self.text, "completed": self.completed, "updated_at": _iso(self.updated_at or utc_now())}


@dataclass(slots=True)
class TimerSettings:
    work_duration: int = 25 * 60
    short_break_duration: int = 5 * 60
    long_break_duration: int = 15 * 60
    sessions_until_long_break: int = 4
    id: str = ""
    user_id: str = LOCAL_OWNER
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self) -> None:
        for name in ("work_duration", "short_break_duration", "long_break_duration"):
            if int(getattr(self, name)) <= 0:
                raise ValueError(f"{name} must be a positive number of seconds")
        if int(self.sessions_until_long_break) < 1:
            raise ValueError("sessions_until_long_break must be at least 1")

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "TimerSettings":
        defaults = cls()
        return cls(
            id=str(record.get("id") or ""),
            user_id=str(record.get("user_id") or LOCAL_OWNER),
            work_duration=int(record.get("work_duration", defaults.work_duration)),
            short_break_duration=int(record.get("short_break_duration", defaults.short_break_duration)),
            long_break_duration=int(record.get("long_break_duration", defaults.long_break_duration)),
            sessions_until_long_break=int(
                record.get("sessions_until_long_break", defaults.sessions_until_long_break)
            ),
            created_at=_parse_datetime(record.get("created_at")),
            updated_at=_parse_datetime(record.get("updated_at")),
        )

    def durations(self) -> Dict[str, int]:
        return {
            "work_duration": self.work_duration,
            "short_break_duration": self.short_break_duration,
            "long_break_duration": self.long_break_duration,
            "sessions_until_long_break": self.sessions_until_long_break,
        }

    def to_record(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "user_id": self.user_id,
            **self.durations(),
            "created_at": _iso(self.created_at),
            "updated_at": _iso(self.updated_at),
        }

    def to_insert(self, owner_id: str) -> Dict[str, Any]:
        return {"user_id": owner_id, **self.durations()}

    def to_update(self) -> Dict[str, Any]:
        return {**self.durations(), "updated_at": _iso(self.updated_at or utc_now())}


@dataclass(slots=True)
class StudySpot:
    name: str
    address: Optional[str] = None
    latitude: float = 0.0
    longitude: float = 0.0
    has_wifi: bool = False
    has_food: bool = False
    has_drinks: bool = False
    has_charging: bool = False
    notes: Optional[str] = None
    id: str = ""
    user_id: str = LOCAL_OWNER
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "StudySpot":
        return cls(
            id=str(record["id"]),
            user_id=str(record.get("user_id") or LOCAL_OWNER),
            name=str(record["name"]),
            address=record.get("address"),
            latitude=float(record.get("latitude") or 0.0),
            longitude=float(record.get("longitude") or 0.0),
            has_wifi=bool(record.get("has_wifi", False)),
            has_food=bool(record.get("has_food", False)),
            has_drinks=bool(record.get("has_drinks", False)),
            has_charging=bool(record.get("has_charging", False)),
            notes=record.get("notes"),
            created_at=_parse_datetime(record.get("created_at")),
            updated_at=_parse_datetime(record.get("updated_at")),
        )

    def _fields(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "address": self.address,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "has_wifi": self.has_wifi,
            "has_food": self.has_food,
            "has_drinks": self.has_drinks,
            "has_charging": self.has_charging,
            "notes": self.notes,
        }

    def to_record(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "user_id": self.user_id,
            **self._fields(),
            "created_at": _iso(self.created_at),
            "updated_at": _iso(self.updated_at),
        }

    def to_insert(self, owner_id: str) -> Dict[str, Any]:
        return {"user_id": owner_id, **self._fields()}

    def to_update(self) -> Dict[str, Any]:
        return {**self._fields(), "updated_at": _iso(self.updated_at or utc_now())}


@dataclass(slots=True)
class Filter:
    wifi: bool = False
    food: bool = False
    drinks: bool = False
    charging: bool = False

    def is_enabled(self, facet: Facet) -> bool:
        return bool(getattr(self, facet.value))

    def toggle(self, facet: Facet) -> bool:
        value = not self.is_enabled(facet)
        setattr(self, facet.value, value)
        return value

    def enabled(self) -> list[Facet]:
        return [facet for facet in Facet if self.is_enabled(facet)]

    def as_dict(self) -> Dict[str, bool]:
        return {facet.value: self.is_enabled(facet) for facet in Facet}


@dataclass(slots=True)
class SaveSpotResult:
    saved: bool
    message: str
    spot: Optional[StudySpot] = field(default=None)
