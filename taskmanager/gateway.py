"""
Persistence gateway for tasks.

``TaskGateway`` is the only component that talks to the database. It is
constructed with an explicit SQLAlchemy session (the application factory
passes Flask-SQLAlchemy's scoped ``db.session``) so that handlers never
reach for a global connection and tests can hand in a replacement.

Every operation is a single-row statement followed by a commit. Database
failures roll the session back and surface as ``StorageError``; there are
no retries.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .errors import StorageError, TaskNotFoundError
from .models import Task, utcnow

logger = logging.getLogger(__name__)


class TaskGateway:
    """
    CRUD access to the ``tasks`` table.

    Args:
        session: SQLAlchemy session (or scoped session) used for every call.
        soft_delete: When true, ``delete`` stamps ``deleted_at`` and the row
            is hidden from reads; otherwise the row is removed.
    """

    def __init__(self, session: Session, soft_delete: bool = True) -> None:
        self._session = session
        self.soft_delete = soft_delete

    @contextmanager
    def _storage_errors(self, action: str) -> Iterator[None]:
        """Roll back and re-raise database failures as ``StorageError``."""
        try:
            yield
        except SQLAlchemyError as exc:
            self._session.rollback()
            logger.error("Storage failure while trying to %s: %s", action, exc)
            raise StorageError(f"Failed to {action}") from exc

    def create(self, task: Task) -> Task:
        """Insert a new task and return it with its assigned id."""
        with self._storage_errors("create task"):
            self._session.add(task)
            self._session.commit()
        logger.info("Created task %s", task.id)
        return task

    def get_by_id(self, task_id: int) -> Task:
        """
        Load a live task.

        Raises:
            TaskNotFoundError: No row has this id, or it was soft-deleted.
            StorageError: The lookup itself failed.
        """
        with self._storage_errors("fetch task"):
            task = self._session.get(Task, task_id)
        if task is None or task.is_deleted:
            raise TaskNotFoundError(task_id)
        return task

    def list(self, completed: bool | None = None) -> list[Task]:
        """Return all live tasks ordered by id, optionally filtered by completion."""
        stmt = select(Task).where(Task.deleted_at.is_(None))
        if completed is not None:
            stmt = stmt.where(Task.completed == completed)
        stmt = stmt.order_by(Task.id.asc())

        with self._storage_errors("list tasks"):
            tasks = list(self._session.scalars(stmt).all())
        return tasks

    def update(self, task: Task) -> Task:
        """Persist in-place changes made to a task loaded through this gateway."""
        with self._storage_errors("update task"):
            self._session.add(task)
            self._session.commit()
        logger.info("Updated task %s", task.id)
        return task

    def delete(self, task_id: int) -> None:
        """
        Delete a task by id.

        Raises:
            TaskNotFoundError: The task does not exist or is already deleted.
            StorageError: The delete failed.
        """
        task = self.get_by_id(task_id)
        with self._storage_errors("delete task"):
            if self.soft_delete:
                task.deleted_at = utcnow()
            else:
                self._session.delete(task)
            self._session.commit()
        logger.info("Deleted task %s (soft=%s)", task_id, self.soft_delete)
