from __future__ import annotations

from typing import Any, Dict

from .registry import register_api
from .serializers import serialize_task
from .state import api_state


@register_api(
    "list_tasks",
    description="List to-do items from the active storage (cloud when signed in, this device otherwise).",
    category="tasks",
    tags=("list", "task"),
)
def list_tasks() -> Dict[str, Any]:
    context = api_state.ensure_started()
    tasks = context.todo.list_tasks()
    return {"tasks": [serialize_task(task) for task in tasks], "storage": context.tasks.mode.value}


@register_api(
    "add_task",
    description="Add a to-do item. Blank text is ignored.",
    category="tasks",
    tags=("create", "task"),
)
def add_task(text: str) -> Dict[str, Any]:
    context = api_state.ensure_started()
    return {"task": serialize_task(context.todo.add_task(text))}


@register_api(
    "toggle_task",
    description="Flip the completed flag of a to-do item.",
    category="tasks",
    tags=("update", "complete"),
)
def toggle_task(task_id: str) -> Dict[str, Any]:
    context = api_state.ensure_started()
    return {"task": serialize_task(context.todo.toggle_task(task_id))}


@register_api(
    "remove_task",
    description="Delete a to-do item by its identifier.",
    category="tasks",
    tags=("delete",),
)
def remove_task(task_id: str) -> Dict[str, Any]:
    context = api_state.ensure_started()
    return {"deleted": context.todo.remove_task(task_id), "task_id": task_id}
