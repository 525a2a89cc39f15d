# tests/test_cli.py

from __future__ import annotations

from pathlib import Path

import click
import pytest
from click.testing import CliRunner

from tasks_cli.cli.commands import COMMANDS
from tasks_cli.cli.main import build_cli
from tasks_cli.config import Settings
from tasks_cli.tasks.task_models import TaskStatus
from tasks_cli.tasks.task_store import TaskStore


@pytest.fixture()
def cli() -> click.Group:
    return build_cli(COMMANDS)


@pytest.fixture()
def run(cli: click.Group, settings: Settings):
    runner = CliRunner()

    def _run(*args: str):
        return runner.invoke(cli, list(args), obj=settings)

    return _run


def test_build_cli_uses_only_given_commands() -> None:
    group = build_cli([c for c in COMMANDS if c.name == "where"])
    assert sorted(group.commands) == ["where"]
    assert sorted(build_cli(COMMANDS).commands) == ["add", "delete", "list", "update", "where"]


def test_where_prints_and_creates_data_dir(run, settings: Settings) -> None:
    result = run("where")
    assert result.exit_code == 0, result.output
    assert result.output.strip() == str(settings.data_dir)
    assert settings.data_dir.is_dir()


def test_add_then_list(run, settings: Settings) -> None:
    assert run("add", "Buy milk").exit_code == 0
    result = run("add", "Write report", "--project", "Work")
    assert result.exit_code == 0, result.output
    assert result.output.strip() == "Added task 2"

    result = run("list")
    assert result.exit_code == 0, result.output
    assert "Created At" in result.output
    assert "Buy milk" in result.output
    assert "Write report" in result.output
    assert "\x1b[" not in result.output

    result = run("list", "-p", "Work")
    assert "Write report" in result.output
    assert "Buy milk" not in result.output


def test_list_status_filter_accepts_code_and_label(run) -> None:
    run("add", "a")
    run("add", "b")
    assert run("update", "2", "-s", "done").exit_code == 0

    by_label = run("list", "--status", "todo")
    by_code = run("list", "--status", "0")
    for result in (by_label, by_code):
        assert result.exit_code == 0, result.output
        assert " a " in f" {result.output} "
        assert "done" not in result.output

    assert "No tasks found" in run("list", "-s", "in progress").output


def test_list_rejects_out_of_range_status(run) -> None:
    result = run("list", "--status", "7")
    assert result.exit_code == 2
    assert "invalid status" in result.output


def test_list_empty(run) -> None:
    result = run("list")
    assert result.exit_code == 0
    assert result.output.strip() == "No tasks found"


def test_update_is_sparse(run, settings: Settings) -> None:
    run("add", "Write report", "-p", "Work")
    assert run("update", "1", "--status", "1").exit_code == 0
    assert run("update", "1", "--name", "Write summary").exit_code == 0

    with TaskStore(settings.data_dir) as store:
        task = store.get_task(1)
    assert task.name == "Write summary"
    assert task.project == "Work"
    assert task.status is TaskStatus.IN_PROGRESS


def test_update_out_of_range_status_becomes_todo(run, settings: Settings) -> None:
    run("add", "Write report")
    run("update", "1", "-s", "done")
    assert run("update", "1", "-s", "9").exit_code == 0

    with TaskStore(settings.data_dir) as store:
        assert store.get_task(1).status is TaskStatus.TODO


def test_update_clears_project_with_empty_string(run, settings: Settings) -> None:
    run("add", "Write report", "-p", "Work")
    assert run("update", "1", "--project", "").exit_code == 0

    with TaskStore(settings.data_dir) as store:
        assert store.get_task(1).project == ""


def test_update_missing_task_fails(run) -> None:
    result = run("update", "99", "--name", "x")
    assert result.exit_code == 1
    assert "Error: task 99 not found" in result.output


def test_add_empty_name_fails(run) -> None:
    result = run("add", "")
    assert result.exit_code == 1
    assert "name must not be empty" in result.output


def test_delete_is_idempotent(run, settings: Settings) -> None:
    run("add", "Buy milk")
    assert run("delete", "1").exit_code == 0
    assert run("delete", "1").exit_code == 0

    with TaskStore(settings.data_dir) as store:
        assert store.get_tasks() == []


def test_malformed_id_is_rejected(run) -> None:
    result = run("delete", "abc")
    assert result.exit_code == 2
    assert "abc" in result.output


def test_unopenable_store_reports_error(run, settings: Settings) -> None:
    settings.data_dir.mkdir(parents=True)
    (settings.data_dir / "tasks.db").write_bytes(b"garbage, not sqlite\n" * 64)

    result = run("list")
    assert result.exit_code == 1
    assert result.output.startswith("Error:")


def test_unwritable_log_dir_reports_error(cli: click.Group, tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("a regular file, not a directory")
    settings = Settings(
        app_name="tasks",
        log_level="WARNING",
        log_to_file=True,
        data_dir=blocker / "data",
        db_filename="tasks.db",
        db_timeout=1.0,
    )

    result = CliRunner().invoke(cli, ["where"], obj=settings)
    assert result.exit_code == 1
    assert result.output.startswith("Error:")
    assert "log file" in result.output
