"""Client-side mirror of the task list.

The mirror owns the local ordered list. Every mutation performs the server
round trip first and only then applies the matching reducer, using the values
from the server's response. A failed call is logged, leaves the list as it
was, and is re-raised to the caller.
"""

from __future__ import annotations

import logging
from typing import Callable, List, Optional, TypeVar

from tasklist.app.core.errors import NotFound, TaskListError
from tasklist.app.schemas import TaskOut
from tasklist.client.api import TaskApiClient
from tasklist.client.reducers import add_task, edit_task, remove_task, toggle_complete_task

logger = logging.getLogger(__name__)

T = TypeVar("T")


class TaskListMirror:
    def __init__(self, api: TaskApiClient) -> None:
        self.api = api
        self._tasks: List[TaskOut] = []

    @property
    def tasks(self) -> List[TaskOut]:
        return list(self._tasks)

    def find(self, task_id: int) -> Optional[TaskOut]:
        for task in self._tasks:
            if task.id == task_id:
                return task
        return None

    def _call(self, op: str, task_id: Optional[int], fn: Callable[[], T]) -> T:
        try:
            return fn()
        except TaskListError as exc:
            logger.warning(
                "%s failed, mirror unchanged: %s",
                op,
                exc.message,
                extra={"op": op, "task": task_id if task_id is not None else "-"},
            )
            raise

    def refresh(self) -> List[TaskOut]:
        self._tasks = self._call("list", None, self.api.list_tasks)
        return self.tasks

    def add(self, title: str) -> TaskOut:
        created = self._call("create", None, lambda: self.api.create_task(title))
        self._tasks = add_task(self._tasks, created)
        return created

    def rename(self, task_id: int, title: str) -> TaskOut:
        updated = self._call(
            "update", task_id, lambda: self.api.update_task(task_id, title=title)
        )
        self._tasks = edit_task(self._tasks, task_id, updated.title)
        return updated

    def toggle(self, task_id: int) -> TaskOut:
        current = self.find(task_id)
        if current is None:
            raise NotFound(f"task {task_id} is not in the local list")
        updated = self._call(
            "update",
            task_id,
            lambda: self.api.update_task(task_id, completed=not current.completed),
        )
        if updated.completed != current.completed:
            self._tasks = toggle_complete_task(self._tasks, task_id)
        return updated

    def remove(self, task_id: int) -> None:
        self._call("delete", task_id, lambda: self.api.delete_task(task_id))
        self._tasks = remove_task(self._tasks, task_id)
