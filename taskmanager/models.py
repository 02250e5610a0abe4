"""
Database models for the Task Manager service.

This module defines the SQLAlchemy model for the single managed
resource. It maps to the ``tasks`` table.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from . import db


TITLE_MAX_LENGTH = 200


def utcnow() -> datetime:
    """Return the current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


class Task(db.Model):
    """
    Task model representing a to-do item.

    Attributes:
        id: Unique identifier for the task.
        title: Short title describing the task.
        description: Optional longer description.
        completed: Whether the task is done.
        created_at: Timestamp when the task was created.
        updated_at: Timestamp when the task was last modified.
        deleted_at: Soft-delete marker; ``None`` while the task is live.
    """

    __tablename__ = "tasks"

    id: int = db.Column(db.Integer, primary_key=True)
    title: str = db.Column(db.String(TITLE_MAX_LENGTH), nullable=False)
    description: str | None = db.Column(db.Text, nullable=True)
    completed: bool = db.Column(db.Boolean, nullable=False, default=False)
    created_at: datetime = db.Column(
        db.DateTime(timezone=True),
        nullable=False,
        default=utcnow
    )
    updated_at: datetime = db.Column(
        db.DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow
    )
    deleted_at: datetime | None = db.Column(db.DateTime(timezone=True), nullable=True, index=True)

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    @staticmethod
    def _to_utc_iso(value: datetime | None) -> str | None:
        """
        Convert datetime to an ISO-8601 UTC string.

        SQLite returns naive datetime values even when timezone-aware
        columns are declared, so naive values are treated as UTC.
        """
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        else:
            value = value.astimezone(timezone.utc)
        return value.isoformat()

    def to_dict(self) -> dict[str, Any]:
        """
        Convert the task to its JSON representation.

        Returns:
            Dictionary containing all task fields.
        """
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "completed": bool(self.completed),
            "created_at": self._to_utc_iso(self.created_at),
            "updated_at": self._to_utc_iso(self.updated_at),
            "deleted_at": self._to_utc_iso(self.deleted_at),
        }

    def __repr__(self) -> str:
        """Return string representation of the task."""
        return f"<Task {self.id}: {self.title}>"
