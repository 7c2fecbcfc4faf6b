from __future__ import annotations

from typing import Any, ClassVar, Dict, Generic, List, Optional, TypeVar

from ..supabase import SupabaseGateway

RecordT = TypeVar("RecordT")


class OwnedTableRepository(Generic[RecordT]):
    """Row access for a table whose rows are scoped by a ``user_id`` column."""

    model: ClassVar[Any]
    order_column: ClassVar[Optional[str]] = "created_at"
    descending: ClassVar[bool] = False

    def __init__(self, gateway: SupabaseGateway, table_name: str) -> None:
        self.gateway = gateway
        self.table_name = table_name

    def _table(self):
        return self.gateway.table(self.table_name)

    def _from_rows(self, rows: Optional[List[Dict[str, Any]]]) -> List[RecordT]:
        return [self.model.from_record(row) for row in rows or []]

    def list_for_user(self, user_id: str) -> List[RecordT]:
        query = self._table().select("*").eq("user_id", user_id)
        if self.order_column:
            query = query.order(self.order_column, desc=self.descending)
        response = query.execute()
        return self._from_rows(response.data)

    def insert(self, record: RecordT, user_id: str) -> Optional[RecordT]:
        response = self._table().insert(record.to_insert(user_id)).execute()
        rows = self._from_rows(response.data)
        return rows[0] if rows else None

    def update(self, record: RecordT) -> Optional[RecordT]:
        response = (
            self._table()
            .update(record.to_update())
            .eq("id", record.id)
            .eq("user_id", record.user_id)
            .execute()
        )
        rows = self._from_rows(response.data)
        return rows[0] if rows else None

    def delete(self, record_id: str, user_id: str) -> bool:
        response = self._table().delete().eq("id", record_id).eq("user_id", user_id).execute()
        deleted = response.data or []
        return bool(deleted)
