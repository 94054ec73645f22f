"""Dependency providers wiring the task store to a database session."""

from __future__ import annotations

import logging

from fastapi import Depends
from sqlalchemy.orm import Session

from tasklist.adapters.task_repository_sql import SQLAlchemyTaskRepository
from tasklist.app.config import get_settings
from tasklist.app.db import get_db
from tasklist.app.services.task_store import TaskStore
from tasklist.ports.task_repository import ITaskRepository

logger = logging.getLogger(__name__)


def get_task_repository(db: Session = Depends(get_db)) -> ITaskRepository:
    """Return the task repository bound to the request's session."""
    return SQLAlchemyTaskRepository(db)


def get_task_store(repo: ITaskRepository = Depends(get_task_repository)) -> TaskStore:
    """Return the task store using the configured id policy."""
    policy = get_settings().task_id_policy
    logger.debug("TaskStore id_policy=%s", policy)
    return TaskStore(repo, id_policy=policy)
