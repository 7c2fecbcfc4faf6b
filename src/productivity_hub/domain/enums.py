from __future__ import annotations

from enum import Enum


class TimerMode(str, Enum):
    WORK = "work"
    SHORT_BREAK = "shortBreak"
    LONG_BREAK = "longBreak"

    @property
    def label(self) -> str:
        return {
            TimerMode.WORK: "Work",
            TimerMode.SHORT_BREAK: "Short Break",
            TimerMode.LONG_BREAK: "Long Break",
        }[self]


class Facet(str, Enum):
    """Amenity toggles; declaration order is the order keywords are appended."""

    WIFI = "wifi"
    FOOD = "food"
    DRINKS = "drinks"
    CHARGING = "charging"

    @property
    def keyword(self) -> str:
        return _FACET_KEYWORDS[self]


_FACET_KEYWORDS = {
    Facet.WIFI: "wifi",
    Facet.FOOD: "food",
    Facet.DRINKS: "coffee",
    Facet.CHARGING: "power outlets",
}


class StorageMode(str, Enum):
    LOCAL = "local"
    REMOTE = "remote"
