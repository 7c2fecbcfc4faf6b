from __future__ import annotations

import logging
from typing import Any, ClassVar, Generic, List, Optional, TypeVar
from uuid import uuid4

import orjson

from ...domain import LOCAL_OWNER, StorageMode, utc_now
from ..local import LocalSlotStorage
from ..policy import StoragePolicy
from ..repositories import OwnedTableRepository
from ..supabase import REMOTE_ERRORS

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT")

# Raised while decoding a slot whose contents do not describe the collection.
SNAPSHOT_ERRORS = (orjson.JSONDecodeError, KeyError, TypeError, ValueError)


class DualModeStore(Generic[RecordT]):
    """A collection that targets remote rows when signed in and a local slot otherwise.

    The backend is chosen by ``policy`` on every call. When the chosen backend
    differs from the one the in-memory view was loaded from, the view is
    reloaded from the new backend first; records are never copied across.

    Remote failures are logged and the call returns ``None``/``False`` without
    touching the in-memory view. Local mutations are written through to the
    slot as a full snapshot.
    """

    record_type: ClassVar[Any]
    newest_first: ClassVar[bool] = False

    def __init__(
        self,
        *,
        policy: StoragePolicy,
        repository: OwnedTableRepository[RecordT],
        local: LocalSlotStorage,
        slot: str,
    ) -> None:
        self._policy = policy
        self._repository = repository
        self._local = local
        self._slot = slot
        self._items: List[RecordT] = []
        self._mode: Optional[StorageMode] = None

    @property
    def mode(self) -> Optional[StorageMode]:
        return self._mode

    @property
    def slot(self) -> str:
        return self._slot

    # Loading -----------------------------------------------------------------

    def reload(self) -> List[RecordT]:
        mode = self._policy.mode()
        if mode is StorageMode.REMOTE:
            owner_id = self._policy.owner_id()
            try:
                items = self._fetch_remote(owner_id)
            except REMOTE_ERRORS:
                logger.exception("Failed to load %s for %s", self._repository.table_name, owner_id)
                if self._mode is not mode:
                    self._items = []
                    self._mode = mode
                return self.list()
        else:
            items = self._load_local()
        self._items = list(items)
        self._mode = mode
        return self.list()

    def _fetch_remote(self, owner_id: str) -> List[RecordT]:
        return self._repository.list_for_user(owner_id)

    def _load_local(self) -> List[RecordT]:
        try:
            raw = self._local.read(self._slot)
            return [] if raw is None else self._decode(raw)
        except SNAPSHOT_ERRORS:
            logger.warning("Failed to parse saved %s; starting empty", self._slot, exc_info=True)
            return []

    def _decode(self, raw: Any) -> List[RecordT]:
        if not isinstance(raw, list):
            raise ValueError(f"Expected a list in slot {self._slot}, got {type(raw).__name__}")
        return [self.record_type.from_record(item) for item in raw]

    def _encode(self, items: List[RecordT]) -> Any:
        return [item.to_record() for item in items]

    def _persist(self) -> None:
        self._local.write(self._slot, self._encode(self._items))

    def _active_mode(self) -> StorageMode:
        mode = self._policy.mode()
        if mode is not self._mode:
            self.reload()
        return mode

    # Queries -----------------------------------------------------------------

    def list(self) -> List[RecordT]:
        self._active_mode()
        return list(self._items)

    def find(self, record_id: str) -> Optional[RecordT]:
        self._active_mode()
        index = self._index_of(record_id)
        return self._items[index] if index is not None else None

    def _index_of(self, record_id: str) -> Optional[int]:
        for index, item in enumerate(self._items):
            if item.id == record_id:
                return index
        return None

    def _place(self, record: RecordT) -> None:
        if self.newest_first:
            self._items.insert(0, record)
        else:
            self._items.append(record)

    # Mutations ---------------------------------------------------------------

    def add(self, record: RecordT) -> Optional[RecordT]:
        if self._active_mode() is StorageMode.REMOTE:
            owner_id = self._policy.owner_id()
            try:
                saved = self._repository.insert(record, owner_id)
            except REMOTE_ERRORS:
                logger.exception("Error adding to %s", self._repository.table_name)
                return None
            if saved is None:
                logger.warning("Insert into %s returned no rows", self._repository.table_name)
                return None
            self._place(saved)
            return saved

        now = utc_now()
        record.id = str(uuid4())
        record.user_id = LOCAL_OWNER
        record.created_at = now
        record.updated_at = now
        self._place(record)
        self._persist()
        return record

    def update(self, record: RecordT) -> Optional[RecordT]:
        mode = self._active_mode()
        index = self._index_of(record.id)
        if index is None:
            logger.debug("No %s record with id %s to update", self._slot, record.id)
            return None
        record.updated_at = utc_now()

        if mode is StorageMode.REMOTE:
            record.user_id = self._policy.owner_id()
            try:
                saved = self._repository.update(record)
            except REMOTE_ERRORS:
                logger.exception("Error updating %s %s", self._repository.table_name, record.id)
                return None
            self._items[index] = saved or record
            return self._items[index]

        self._items[index] = record
        self._persist()
        return record

    def remove(self, record_id: str) -> bool:
        mode = self._active_mode()
        index = self._index_of(record_id)
        if index is None:
            return False

        if mode is StorageMode.REMOTE:
            try:
                self._repository.delete(record_id, self._policy.owner_id())
            except REMOTE_ERRORS:
                logger.exception("Error removing %s %s", self._repository.table_name, record_id)
                return False
            del self._items[index]
            return True

        del self._items[index]
        self._persist()
        return True
