"""
Task subsystem.

Components:
- task_models.py: data structures (Task, TaskStatus, TaskUpdate, TaskFilter) + merge rule
- task_store.py: SQLite-backed storage + filtered query builder
"""

from .task_models import UNSET, Task, TaskFilter, TaskStatus, TaskUpdate, merge_task
from .task_store import TaskStore, build_tasks_query

__all__ = [
    "UNSET",
    "Task",
    "TaskFilter",
    "TaskStatus",
    "TaskStore",
    "TaskUpdate",
    "build_tasks_query",
    "merge_task",
]
