"""Port interface for task persistence (repository boundary)."""

from __future__ import annotations

from typing import Any, Optional, Protocol, runtime_checkable


@runtime_checkable
class ITaskRepository(Protocol):
    """Task repository abstraction for create/get/list/update/delete operations."""

    def create(self, title: str, task_id: Optional[int] = None) -> Any:
        """Persist a new task and return the stored entity.

        When ``task_id`` is None the storage layer allocates the id.
        """

    def get(self, task_id: int) -> Optional[Any]:
        """Return a task by id or None when missing."""

    def list(self) -> list[Any]:
        """Return every task in insertion order."""

    def update(self, task_id: int, patch: dict[str, Any]) -> Optional[Any]:
        """Merge ``patch`` into the stored task; None when the id is unknown."""

    def delete(self, task_id: int) -> bool:
        """Remove a task; False when the id is unknown."""

    def max_id(self) -> Optional[int]:
        """Return the largest stored id, or None on an empty table."""
