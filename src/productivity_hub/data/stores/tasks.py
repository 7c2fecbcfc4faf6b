from __future__ import annotations

from ...domain import Task
from .base import DualModeStore


class TaskStore(DualModeStore[Task]):
    record_type = Task
    newest_first = True
