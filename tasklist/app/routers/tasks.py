from __future__ import annotations

import logging
from typing import Any, List

from fastapi import APIRouter, Body, Depends, HTTPException, Response

from tasklist.app.config import get_settings
from tasklist.app.core.errors import TaskListError
from tasklist.app.deps import get_task_store
from tasklist.app.schemas import TaskOut
from tasklist.app.services.task_store import TaskStore

logger = logging.getLogger(__name__)

SUPPORTED_METHODS = ("GET", "POST", "PUT", "DELETE")

api_router = APIRouter(prefix=get_settings().api_prefix, tags=["tasks"])


def _http_error(exc: TaskListError, op: str, task_id: str = "-") -> HTTPException:
    extra = {"op": op, "task": task_id}
    if exc.status_code >= 500:
        logger.error("%s failed: %s", op, exc.message, extra=extra)
    else:
        logger.info("%s rejected: %s", op, exc.message, extra=extra)
    return HTTPException(status_code=exc.status_code, detail=exc.message)


@api_router.get("/tasks", response_model=List[TaskOut])
def list_tasks(store: TaskStore = Depends(get_task_store)):
    """Return every task in insertion order."""

    try:
        return store.list_tasks()
    except TaskListError as exc:
        raise _http_error(exc, "list") from exc


@api_router.get("/tasks/{task_id}", response_model=TaskOut)
def get_task(task_id: str, store: TaskStore = Depends(get_task_store)):
    try:
        return store.get_task(task_id)
    except TaskListError as exc:
        raise _http_error(exc, "get", task_id) from exc


@api_router.post("/tasks", response_model=TaskOut, status_code=201)
def create_task(body: Any = Body(None), store: TaskStore = Depends(get_task_store)):
    """Create a task from ``{"title": ...}``; the store assigns the id."""

    try:
        return store.create_task(body)
    except TaskListError as exc:
        raise _http_error(exc, "create") from exc


@api_router.put("/tasks", response_model=TaskOut)
def update_task_from_body(body: Any = Body(None), store: TaskStore = Depends(get_task_store)):
    """Partial update addressed by ``{"id": ...}`` in the body."""

    try:
        return store.update_task(body)
    except TaskListError as exc:
        raise _http_error(exc, "update") from exc


@api_router.put("/tasks/{task_id}", response_model=TaskOut)
def update_task(task_id: str, body: Any = Body(None), store: TaskStore = Depends(get_task_store)):
    try:
        return store.update_task(body, task_id=task_id)
    except TaskListError as exc:
        raise _http_error(exc, "update", task_id) from exc


@api_router.delete("/tasks/{task_id}", status_code=204)
def delete_task(task_id: str, store: TaskStore = Depends(get_task_store)) -> Response:
    try:
        store.delete_task(task_id)
    except TaskListError as exc:
        raise _http_error(exc, "delete", task_id) from exc
    return Response(status_code=204)
