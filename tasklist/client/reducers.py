"""Pure reducers that reconcile the client's task list with server results.

Each function returns a new list and never mutates its input or performs I/O.
Callers apply them only after the matching server call has succeeded, passing
values taken from the server's response.
"""

from __future__ import annotations

from typing import List, Sequence

from tasklist.app.schemas import TaskOut


def add_task(tasks: Sequence[TaskOut], new_task: TaskOut) -> List[TaskOut]:
    """Append a task the server has already accepted (it carries its id)."""
    return [*tasks, new_task]


def remove_task(tasks: Sequence[TaskOut], task_id: int) -> List[TaskOut]:
    """Drop the first task with ``task_id``; unchanged copy if absent."""
    result = list(tasks)
    for index, task in enumerate(result):
        if task.id == task_id:
            del result[index]
            break
    return result


def edit_task(tasks: Sequence[TaskOut], task_id: int, new_title: str) -> List[TaskOut]:
    """Replace the title of ``task_id``, leaving ``completed`` alone."""
    return [
        task.model_copy(update={"title": new_title}) if task.id == task_id else task
        for task in tasks
    ]


def toggle_complete_task(tasks: Sequence[TaskOut], task_id: int) -> List[TaskOut]:
    return [
        task.model_copy(update={"completed": not task.completed}) if task.id == task_id else task
        for task in tasks
    ]
