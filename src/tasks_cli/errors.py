# src/tasks_cli/errors.py

"""
Error kinds raised by the task store.

sqlite3 errors raised while executing a statement are NOT wrapped here;
they propagate unchanged to the caller.
"""

from __future__ import annotations


class TaskError(Exception):
    """Base class for all task-store errors."""


class StorageUnavailable(TaskError):
    """The database file could not be opened or the schema could not be created."""


class NotFound(TaskError, LookupError):
    """An operation targeted a task id that does not exist."""

    def __init__(self, task_id: int) -> None:
        super().__init__(f"task {task_id} not found")
        self.task_id = task_id


class InvalidArgument(TaskError, ValueError):
    """Malformed input (e.g. unknown status value)."""


class ConstraintViolation(TaskError, ValueError):
    """A value violates a task invariant (e.g. empty name)."""
