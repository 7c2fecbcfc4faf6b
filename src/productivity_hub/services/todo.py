from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import List, Optional

from ..data.stores import TaskStore
from ..domain import Task

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class TodoService:
    store: TaskStore

    def list_tasks(self) -> List[Task]:
        return self.store.list()

    def add_task(self, text: str) -> Optional[Task]:
        if not text.strip():
            return None
        return self.store.add(Task(text=text))

    def toggle_task(self, task_id: str) -> Optional[Task]:
        task = self.store.find(task_id)
        if task is None:
            logger.debug("Cannot toggle unknown task %s", task_id)
            return None
        return self.store.update(replace(task, completed=not task.completed))

    def remove_task(self, task_id: str) -> bool:
        return self.store.remove(task_id)
