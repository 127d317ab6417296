"""
Task controller: validation and store operations.

Each function takes plain Python values (already pulled out of the HTTP
request by the router), validates them against the task invariants and
performs the matching store operation. Failures are raised as
``ValidationError`` or ``NotFoundError``; the error handlers registered
on the app turn those into JSON responses.

Functions must be called inside an application context.
"""

import logging
from typing import Any

from sqlalchemy import or_, select

from task_manager import db
from task_manager.errors import NotFoundError, ValidationError
from task_manager.models import Task, TaskStatus, utcnow

logger = logging.getLogger(__name__)


# Text fields a client may set; id and timestamps are system-maintained
TEXT_FIELDS = ("title", "description")

# Largest id the INTEGER primary key can hold
MAX_TASK_ID = 2**63 - 1


# -----------------------------------------------------------------------------
# Validation Helpers
# -----------------------------------------------------------------------------

def _clean_text(field: str, value: Any) -> str:
    """
    Validate a required text field and return it trimmed.

    Raises:
        ValidationError: If the value is missing, not a string, or blank.
    """
    if value is None or not isinstance(value, str) or not value.strip():
        raise ValidationError(f"'{field}' is required and must be non-empty text")
    return value.strip()


def _clean_status(value: Any) -> str:
    """
    Validate a status value.

    Raises:
        ValidationError: If the value is not one of the enumerated statuses.
    """
    valid_statuses = TaskStatus.values()
    if value not in valid_statuses:
        raise ValidationError(f"Invalid status. Must be one of: {valid_statuses}")
    return value


def _escape_like(term: str) -> str:
    """Escape LIKE wildcards so the search term matches literally."""
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _get_task_or_raise(task_id: int) -> Task:
    """Fetch a task by id or raise ``NotFoundError``."""
    if task_id > MAX_TASK_ID:
        raise NotFoundError(f"Task {task_id} not found")
    task = db.session.get(Task, task_id)
    if task is None:
        raise NotFoundError(f"Task {task_id} not found")
    return task


# -----------------------------------------------------------------------------
# Operations
# -----------------------------------------------------------------------------

def create_task(title: Any, description: Any, status: Any = None) -> Task:
    """
    Validate and persist a new task.

    Args:
        title: Task title (required, non-blank).
        description: Task description (required, non-blank).
        status: Optional status; defaults to pending when omitted.

    Returns:
        The persisted Task with its generated id and timestamps.

    Raises:
        ValidationError: If any field violates the task invariants.
    """
    task = Task(
        title=_clean_text("title", title),
        description=_clean_text("description", description),
        status=TaskStatus.PENDING.value if status is None else _clean_status(status),
    )
    db.session.add(task)
    db.session.commit()

    logger.info("Created task with ID: %s", task.id)
    return task


def get_all_tasks(search: str | None = None, status: str | None = None) -> list[Task]:
    """
    List tasks in creation order, optionally filtered.

    Args:
        search: Case-insensitive substring matched against title or description.
        status: Exact status to restrict to.

    Returns:
        Matching tasks; every task when no filter is given.
    """
    stmt = select(Task)

    if search and search.strip():
        pattern = f"%{_escape_like(search.strip())}%"
        stmt = stmt.where(or_(
            Task.title.ilike(pattern, escape="\\"),
            Task.description.ilike(pattern, escape="\\"),
        ))

    if status:
        # No task can carry a status outside the enumeration
        if status not in TaskStatus.values():
            logger.info("Found 0 tasks (unknown status %r)", status)
            return []
        stmt = stmt.where(Task.status == status)

    stmt = stmt.order_by(Task.id.asc())
    tasks = list(db.session.scalars(stmt).all())
    logger.info("Found %d tasks", len(tasks))
    return tasks


def get_task_by_id(task_id: int) -> Task:
    """
    Return a single task.

    Raises:
        NotFoundError: If no task has this id.
    """
    return _get_task_or_raise(task_id)


def update_task(task_id: int, fields: Any) -> Task:
    """
    Merge the provided fields into an existing task.

    Only ``title``, ``description`` and ``status`` are updatable; other keys
    are ignored. All provided fields are validated before anything is
    written, so a rejected update leaves the task untouched.

    Args:
        task_id: Id of the task to update.
        fields: Mapping of field names to new values.

    Returns:
        The updated Task.

    Raises:
        NotFoundError: If no task has this id.
        ValidationError: If the payload is not an object or a field is invalid.
    """
    task = _get_task_or_raise(task_id)

    if not isinstance(fields, dict):
        raise ValidationError("Request body must be a JSON object")

    changes: dict[str, str] = {}
    for field in TEXT_FIELDS:
        if field in fields:
            changes[field] = _clean_text(field, fields[field])
    if "status" in fields:
        changes["status"] = _clean_status(fields["status"])

    for field, value in changes.items():
        setattr(task, field, value)
    task.updated_at = utcnow()
    db.session.commit()

    logger.info("Updated task %s (%s)", task_id, ", ".join(changes) or "no fields")
    return task


def delete_task(task_id: int) -> dict[str, str]:
    """
    Permanently remove a task.

    Returns:
        A confirmation message; the deleted task is not returned.

    Raises:
        NotFoundError: If no task has this id.
    """
    task = _get_task_or_raise(task_id)

    db.session.delete(task)
    db.session.commit()

    logger.info("Deleted task %s", task_id)
    return {"message": "Task deleted successfully"}


def update_task_status(task_id: int, status: Any) -> Task:
    """
    Change only the status of a task.

    Setting the status a task already has is not an error.

    Raises:
        NotFoundError: If no task has this id.
        ValidationError: If the status is missing or not enumerated.
    """
    task = _get_task_or_raise(task_id)

    task.status = _clean_status(status)
    task.updated_at = utcnow()
    db.session.commit()

    logger.info("Updated task %s status to %s", task_id, status)
    return task
