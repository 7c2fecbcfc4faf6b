from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import orjson

_SLOT_NAME = re.compile(r"^[A-Za-z0-9_.-]+$")


@dataclass
class LocalSlotStorage:
    """Device-local key-value slots, one JSON document per slot under ``directory``."""

    directory: Path

    def _path(self, slot: str) -> Path:
        if not _SLOT_NAME.match(slot):
            raise ValueError(f"Invalid slot name: {slot!r}")
        return self.directory / f"{slot}.json"

    def exists(self, slot: str) -> bool:
        return self._path(slot).exists()

    def read(self, slot: str) -> Optional[Any]:
        """Return the decoded slot, or ``None`` when it was never written.

        Raises ``orjson.JSONDecodeError`` for a corrupt document.
        """

        path = self._path(slot)
        if not path.exists():
            return None
        raw = path.read_bytes()
        if not raw.strip():
            return None
        return orjson.loads(raw)

    def write(self, slot: str, value: Any) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        payload = orjson.dumps(value, option=orjson.OPT_INDENT_2)
        self._path(slot).write_bytes(payload + b"\n")
