# src/tasks_cli/cli/commands.py

from __future__ import annotations

import contextlib
import logging
import sqlite3
from collections.abc import Iterator
from typing import Any

import click

from ..config import Settings, ensure_data_dir
from ..errors import InvalidArgument, TaskError
from ..tasks.task_models import UNSET, TaskFilter, TaskStatus, TaskUpdate
from ..tasks.task_store import TaskStore
from .render import render_tasks

logger = logging.getLogger(__name__)


class StatusParamType(click.ParamType):
    """
    Status given as a code (0/1/2) or a label ("todo", "in progress", "done").

    With coerce=True an out-of-range code silently becomes `todo`;
    otherwise it is rejected.
    """

    name = "status"

    def __init__(self, *, coerce: bool) -> None:
        self.coerce = coerce

    def convert(
        self,
        value: Any,
        param: click.Parameter | None,
        ctx: click.Context | None,
    ) -> TaskStatus:
        if isinstance(value, TaskStatus):
            return value
        text = str(value).strip()
        try:
            if not self.coerce and text.lstrip("-").isdigit() and int(text) not in {s.value for s in TaskStatus}:
                raise InvalidArgument(f"invalid status code {text}")
            return TaskStatus.parse(text)
        except InvalidArgument as exc:
            self.fail(str(exc), param, ctx)


@contextlib.contextmanager
def open_store(settings: Settings) -> Iterator[TaskStore]:
    """Open the store for one command; any failure is reported as a CLI error."""
    try:
        ensure_data_dir(settings.data_dir)
        with TaskStore.open(
            settings.data_dir,
            filename=settings.db_filename,
            timeout=settings.db_timeout,
        ) as store:
            yield store
    except (TaskError, sqlite3.Error, OSError) as exc:
        logger.debug("Command failed: %s", exc, exc_info=True)
        raise click.ClickException(str(exc)) from exc


@click.command("add")
@click.argument("name")
@click.option("--project", "-p", default="", help="Specify a project for your task.")
@click.pass_obj
def add_cmd(settings: Settings, name: str, project: str) -> None:
    """Add a new task with an optional project name."""
    with open_store(settings) as store:
        task_id = store.insert(name, project)
    click.echo(f"Added task {task_id}")


@click.command("list")
@click.option("--project", "-p", default="", help="Only tasks in this project.")
@click.option("--status", "-s", type=StatusParamType(coerce=False), default=None, help="Only tasks with this status.")
@click.pass_obj
def list_cmd(settings: Settings, project: str, status: TaskStatus | None) -> None:
    """List all your tasks."""
    with open_store(settings) as store:
        tasks = store.get_tasks(TaskFilter(status=status, project=project))

    if not tasks:
        click.echo("No tasks found")
        return
    click.echo(render_tasks(tasks))


@click.command("update")
@click.argument("task_id", metavar="ID", type=int)
@click.option("--name", "-n", default=None, help="New name for the task.")
@click.option("--project", "-p", default=None, help="New project (empty string clears it).")
@click.option("--status", "-s", type=StatusParamType(coerce=True), default=None, help="New status.")
@click.pass_obj
def update_cmd(
    settings: Settings,
    task_id: int,
    name: str | None,
    project: str | None,
    status: TaskStatus | None,
) -> None:
    """Update a task by ID."""
    changes = TaskUpdate(
        name=UNSET if name is None else name,
        project=UNSET if project is None else project,
        status=UNSET if status is None else status,
    )
    with open_store(settings) as store:
        task = store.update(task_id, changes)
    click.echo(f"Updated task {task.id}")


@click.command("delete")
@click.argument("task_id", metavar="ID", type=int)
@click.pass_obj
def delete_cmd(settings: Settings, task_id: int) -> None:
    """Delete a task by ID."""
    with open_store(settings) as store:
        store.delete(task_id)


@click.command("where")
@click.pass_obj
def where_cmd(settings: Settings) -> None:
    """Show where your tasks are stored."""
    try:
        ensure_data_dir(settings.data_dir)
    except OSError as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(str(settings.data_dir))


COMMANDS: tuple[click.Command, ...] = (
    add_cmd,
    list_cmd,
    update_cmd,
    delete_cmd,
    where_cmd,
)
