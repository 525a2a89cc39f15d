# src/tasks_cli/cli/render.py

from __future__ import annotations

from collections.abc import Sequence

import click
from tabulate import tabulate

from ..tasks.task_models import Task

HEADERS = ["ID", "Name", "Project", "Status", "Created At"]
CREATED_FORMAT = "%d/%m/%Y"

HEADER_COLOR = 212
STRIPE_COLOR = 246


def task_rows(tasks: Sequence[Task]) -> list[list[str]]:
    return [
        [
            str(t.id),
            t.name,
            t.project,
            t.status.label,
            t.created.astimezone().strftime(CREATED_FORMAT),
        ]
        for t in tasks
    ]


def render_tasks(tasks: Sequence[Task]) -> str:
    """
    Render tasks as a plain table. Header is bold/colored and every second
    row is dimmed; click.echo strips the colors when not writing to a terminal.
    """
    headers = [click.style(h, fg=HEADER_COLOR, bold=True) for h in HEADERS]
    rows = []
    for i, row in enumerate(task_rows(tasks), start=1):
        if i % 2 == 0:
            row = [click.style(cell, fg=STRIPE_COLOR) for cell in row]
        rows.append(row)
    return tabulate(rows, headers=headers, tablefmt="simple", disable_numparse=True)
