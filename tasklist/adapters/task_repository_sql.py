"""SQLAlchemy-backed task repository."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from tasklist.app.core.errors import StorageError
from tasklist.app.models import Task
from tasklist.ports.task_repository import ITaskRepository

logger = logging.getLogger(__name__)


class SQLAlchemyTaskRepository(ITaskRepository):
    def __init__(self, session: Session):
        self.session = session

    def _fail(self, action: str, exc: SQLAlchemyError) -> StorageError:
        self.session.rollback()
        logger.error("storage failure during %s: %s", action, exc)
        return StorageError(f"storage error during {action}", cause=exc)

    def get(self, task_id: int) -> Optional[Task]:
        try:
            return self.session.query(Task).filter(Task.id == task_id).first()
        except SQLAlchemyError as exc:
            raise self._fail("get", exc) from exc

    def list(self) -> List[Task]:
        try:
            return self.session.query(Task).order_by(Task.id.asc()).all()
        except SQLAlchemyError as exc:
            raise self._fail("list", exc) from exc

    def create(self, title: str, task_id: Optional[int] = None) -> Task:
        task = Task(title=title, completed=False)
        if task_id is not None:
            task.id = task_id
        try:
            self.session.add(task)
            self.session.commit()
            self.session.refresh(task)
        except SQLAlchemyError as exc:
            raise self._fail("create", exc) from exc
        return task

    def update(self, task_id: int, patch: Dict[str, Any]) -> Optional[Task]:
        task = self.get(task_id)
        if task is None:
            return None
        if not patch:
            return task
        try:
            for key, value in patch.items():
                if hasattr(task, key):
                    setattr(task, key, value)
            self.session.commit()
            self.session.refresh(task)
        except SQLAlchemyError as exc:
            raise self._fail("update", exc) from exc
        return task

    def delete(self, task_id: int) -> bool:
        task = self.get(task_id)
        if task is None:
            return False
        try:
            self.session.delete(task)
            self.session.commit()
        except SQLAlchemyError as exc:
            raise self._fail("delete", exc) from exc
        return True

    def max_id(self) -> Optional[int]:
        try:
            return self.session.query(func.max(Task.id)).scalar()
        except SQLAlchemyError as exc:
            raise self._fail("max_id", exc) from exc
