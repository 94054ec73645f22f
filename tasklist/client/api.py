"""HTTP client for the task list API.

Thin wrapper over ``httpx.Client`` that maps error responses back onto the
task list error kinds. No retries: failures surface to the caller at once.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx

from tasklist.app.core.errors import StorageError, error_for_status
from tasklist.app.schemas import TaskOut
from tasklist.client import config

logger = logging.getLogger(__name__)


def _error_detail(response: httpx.Response) -> str:
    try:
        data = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(data, dict) and data.get("detail"):
        return str(data["detail"])
    return response.reason_phrase


class TaskApiClient:
    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        client: Optional[httpx.Client] = None,
    ) -> None:
        self._client = client or httpx.Client(
            base_url=base_url or config.TASKLIST_API_BASE,
            timeout=timeout if timeout is not None else config.TASKLIST_HTTP_TIMEOUT,
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "TaskApiClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        try:
            response = self._client.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            logger.error("%s %s transport error: %s", method, path, exc)
            raise StorageError(f"request failed: {exc}", cause=exc) from exc
        if response.is_error:
            raise error_for_status(response.status_code, _error_detail(response))
        return response

    def list_tasks(self) -> List[TaskOut]:
        data = self._request("GET", "/tasks").json()
        return [TaskOut.model_validate(item) for item in data]

    def create_task(self, title: str) -> TaskOut:
        data = self._request("POST", "/tasks", json={"title": title}).json()
        return TaskOut.model_validate(data)

    def update_task(
        self,
        task_id: int,
        title: Optional[str] = None,
        completed: Optional[bool] = None,
    ) -> TaskOut:
        """Send only the fields given; the server merges them into the stored task."""

        payload: Dict[str, Any] = {"id": task_id}
        if title is not None:
            payload["title"] = title
        if completed is not None:
            payload["completed"] = completed
        data = self._request("PUT", f"/tasks/{task_id}", json=payload).json()
        return TaskOut.model_validate(data)

    def delete_task(self, task_id: int) -> None:
        self._request("DELETE", f"/tasks/{task_id}")
