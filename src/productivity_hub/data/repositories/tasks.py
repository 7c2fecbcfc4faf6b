from __future__ import annotations

from ...domain import Task
from .base import OwnedTableRepository


class TaskRepository(OwnedTableRepository[Task]):
    model = Task
    order_column = "created_at"
    descending = True
