# src/tasks_cli/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from enum import IntEnum
from typing import Any

from ..errors import ConstraintViolation, InvalidArgument


class TaskStatus(IntEnum):
    """
    Task lifecycle status.

    Notes:
    - the integer code is what the CLI accepts (0/1/2),
    - the label is what gets displayed and written to the `status` column.
    """

    TODO = 0
    IN_PROGRESS = 1
    DONE = 2

    @property
    def label(self) -> str:
        return _LABELS[self]

    def __str__(self) -> str:
        return self.label

    def next(self) -> TaskStatus:
        if self is TaskStatus.DONE:
            return TaskStatus.TODO
        return TaskStatus(self + 1)

    def prev(self) -> TaskStatus:
        if self is TaskStatus.TODO:
            return TaskStatus.DONE
        return TaskStatus(self - 1)

    @classmethod
    def from_code(cls, code: int) -> TaskStatus:
        # Out-of-range codes fall back to TODO.
        try:
            return cls(int(code))
        except ValueError:
            return cls.TODO

    @classmethod
    def from_label(cls, label: str) -> TaskStatus:
        key = label.strip().lower().replace("_", " ").replace("-", " ")
        for status, text in _LABELS.items():
            if text == key:
                return status
        raise InvalidArgument(f"invalid status {label!r} (expected one of: {', '.join(_LABELS.values())})")

    @classmethod
    def from_db(cls, raw: str | None) -> TaskStatus:
        if not raw:
            return cls.TODO
        try:
            return cls.from_label(raw)
        except InvalidArgument:
            return cls.TODO

    @classmethod
    def parse(cls, value: str | int) -> TaskStatus:
        """Accept either a numeric code ("1") or a label ("in progress")."""
        if isinstance(value, TaskStatus):
            return value
        if isinstance(value, int):
            return cls.from_code(value)
        text = str(value).strip()
        if text.lstrip("-").isdigit():
            return cls.from_code(int(text))
        return cls.from_label(text)


_LABELS: dict[TaskStatus, str] = {
    TaskStatus.TODO: "todo",
    TaskStatus.IN_PROGRESS: "in progress",
    TaskStatus.DONE: "done",
}

# Marker for "field not supplied" in TaskUpdate.
UNSET: Any = object()


@dataclass(frozen=True, slots=True)
class Task:
    id: int
    name: str
    project: str
    status: TaskStatus
    created: datetime


@dataclass(frozen=True, slots=True)
class TaskUpdate:
    """
    Sparse update request.

    A field left as UNSET is not touched; any supplied value replaces the stored
    one, so `project=""` explicitly clears the project.
    """

    name: str | Any = UNSET
    project: str | Any = UNSET
    status: TaskStatus | Any = UNSET

    def is_empty(self) -> bool:
        return self.name is UNSET and self.project is UNSET and self.status is UNSET

    def validate(self) -> None:
        if self.name is not UNSET:
            require_name(self.name)
        if self.status is not UNSET and not isinstance(self.status, TaskStatus):
            raise InvalidArgument(f"invalid status {self.status!r}")


@dataclass(frozen=True, slots=True)
class TaskFilter:
    """Equality constraints for listing; None/"" mean "don't filter"."""

    status: TaskStatus | None = None
    project: str = ""


def require_name(name: str | None) -> str:
    if name is None or not str(name).strip():
        raise ConstraintViolation("task name must not be empty")
    return name


def merge_task(task: Task, update: TaskUpdate) -> Task:
    """Apply `update` onto `task`; id and created are never changed."""
    update.validate()
    changes: dict[str, Any] = {}
    if update.name is not UNSET:
        changes["name"] = update.name
    if update.project is not UNSET:
        changes["project"] = update.project or ""
    if update.status is not UNSET:
        changes["status"] = update.status
    return replace(task, **changes) if changes else task
