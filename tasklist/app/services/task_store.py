"""Task store service: create/list/update/delete over the task repository.

Owns id allocation and the partial-update merge rules. Request bodies arrive
as raw JSON values and are validated here into ``TaskCreate`` / ``TaskUpdate``
before anything touches storage.
"""

from __future__ import annotations

import logging
import time
from typing import Any, List, Optional

from pydantic import ValidationError

from tasklist.app.core.errors import InvalidArgument, NotFound
from tasklist.app.schemas import TaskCreate, TaskOut, TaskUpdate, parse_task_id
from tasklist.app.utils.timing import log_op_timing
from tasklist.ports.task_repository import ITaskRepository

logger = logging.getLogger(__name__)


def _first_error(exc: ValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "invalid request body"
    err = errors[0]
    field = ".".join(str(part) for part in err.get("loc", ())) or "body"
    msg = str(err.get("msg", "invalid value")).removeprefix("Value error, ")
    return f"{field}: {msg}"


def _require_object(body: Any) -> dict:
    if not isinstance(body, dict):
        raise InvalidArgument("request body must be a JSON object")
    return body


def _task_id(value: Any) -> int:
    try:
        return parse_task_id(value)
    except ValueError as exc:
        raise InvalidArgument(str(exc)) from exc


class TaskStore:
    def __init__(self, repo: ITaskRepository, id_policy: str = "sequence") -> None:
        if id_policy not in ("sequence", "max_plus_one"):
            raise ValueError(f"unknown id policy: {id_policy}")
        self.repo = repo
        self.id_policy = id_policy

    def _next_id(self) -> Optional[int]:
        if self.id_policy == "sequence":
            return None
        # read-then-write: two concurrent creates can pick the same id and
        # the second insert then fails with StorageError
        return (self.repo.max_id() or 0) + 1

    def list_tasks(self) -> List[TaskOut]:
        start = time.perf_counter()
        tasks = [TaskOut.model_validate(t) for t in self.repo.list()]
        log_op_timing(logger, op="list", start_time=start, count=len(tasks))
        return tasks

    def get_task(self, task_id: Any) -> TaskOut:
        tid = _task_id(task_id)
        task = self.repo.get(tid)
        if task is None:
            raise NotFound(f"task {tid} not found")
        return TaskOut.model_validate(task)

    def create_task(self, body: Any) -> TaskOut:
        start = time.perf_counter()
        try:
            payload = TaskCreate.model_validate(_require_object(body))
        except ValidationError as exc:
            raise InvalidArgument(_first_error(exc)) from exc

        task = self.repo.create(payload.title, task_id=self._next_id())
        created = TaskOut.model_validate(task)
        logger.info(
            "created task_id=%s policy=%s",
            created.id,
            self.id_policy,
            extra={"op": "create", "task": created.id},
        )
        log_op_timing(logger, op="create", start_time=start, task_id=created.id)
        return created

    def update_task(self, body: Any, task_id: Any = None) -> TaskOut:
        """Merge the supplied, well-typed fields of ``body`` into a stored task.

        The id comes from the path when given, otherwise from ``body["id"]``.
        A ``completed`` that is not a JSON boolean is ignored, as is a blank title.
        """

        start = time.perf_counter()
        try:
            update = TaskUpdate.model_validate(_require_object(body))
        except ValidationError as exc:
            raise InvalidArgument(_first_error(exc)) from exc

        tid = _task_id(task_id) if task_id is not None else update.id
        if tid is None:
            raise InvalidArgument("id is required")
        if update.id is not None and update.id != tid:
            raise InvalidArgument(f"body id {update.id} does not match path id {tid}")

        task = self.repo.update(tid, update.patch())
        if task is None:
            raise NotFound(f"task {tid} not found")
        log_op_timing(logger, op="update", start_time=start, task_id=tid)
        return TaskOut.model_validate(task)

    def delete_task(self, task_id: Any) -> None:
        start = time.perf_counter()
        tid = _task_id(task_id)
        if not self.repo.delete(tid):
            raise NotFound(f"task {tid} not found")
        log_op_timing(logger, op="delete", start_time=start, task_id=tid)
