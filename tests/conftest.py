# tests/conftest.py

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest

from tasks_cli.config import Settings
from tasks_cli.tasks.task_store import TaskStore


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    """
    Settings pointing at a per-test data dir.

    Built directly rather than from the environment, to keep tests isolated
    from the developer's real task database.
    """
    return Settings(
        app_name="tasks",
        log_level="WARNING",
        log_to_file=False,
        data_dir=tmp_path / "data",
        db_filename="tasks.db",
        db_timeout=1.0,
    )


@pytest.fixture()
def store(tmp_path: Path) -> Iterator[TaskStore]:
    with TaskStore(tmp_path) as s:
        yield s
