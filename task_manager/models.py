"""
Database models for the Task Manager application.

This module defines the SQLAlchemy model backing the task store. Field
presence and the status enumeration are enforced at the schema level;
input validation happens earlier, in the controller.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any

from task_manager import db


def utcnow() -> datetime:
    """Return the current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


class TaskStatus(str, Enum):
    """Enumeration of possible task statuses."""

    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"

    @classmethod
    def values(cls) -> list[str]:
        """Return the wire values of every status, in lifecycle order."""
        return [status.value for status in cls]


class Task(db.Model):
    """
    Task model representing a unit of work.

    Attributes:
        id: Unique identifier, assigned on insert and never changed.
        title: Short title describing the task.
        description: Detailed description of the task.
        status: Current status (pending, in-progress, completed).
        created_at: Timestamp when the task was created.
        updated_at: Timestamp when the task was last modified.
    """

    __tablename__ = "tasks"

    id: int = db.Column(db.Integer, primary_key=True)
    title: str = db.Column(db.Text, nullable=False)
    description: str = db.Column(db.Text, nullable=False)
    status: str = db.Column(
        db.Enum(
            *TaskStatus.values(),
            name="task_status",
            native_enum=False,
            validate_strings=True,
        ),
        nullable=False,
        default=TaskStatus.PENDING.value
    )
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

    @staticmethod
    def _to_utc_iso(value: datetime | None) -> str | None:
        """
        Convert datetime to an ISO-8601 UTC string.

        SQLite commonly returns naive datetime values even when timezone-aware
        columns are declared. For API contracts, always normalize to UTC.
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
        Convert the task to its JSON wire representation.

        Returns:
            Dictionary containing all task fields.
        """
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "status": self.status,
            "createdAt": self._to_utc_iso(self.created_at),
            "updatedAt": self._to_utc_iso(self.updated_at),
        }

    def __repr__(self) -> str:
        """Return string representation of the task."""
        return f"<Task {self.id}: {self.title}>"
