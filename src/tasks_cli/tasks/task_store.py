# src/tasks_cli/tasks/task_store.py

from __future__ import annotations

import logging
import sqlite3
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from ..errors import NotFound, StorageUnavailable
from .task_models import Task, TaskFilter, TaskStatus, TaskUpdate, merge_task, require_name

logger = logging.getLogger(__name__)

DEFAULT_DB_FILENAME = "tasks.db"

_COLUMNS = "id, name, project, status, created"


def build_tasks_query(opts: TaskFilter) -> tuple[str, list[Any]]:
    """
    Build the listing query for `opts`.

    Predicates are ANDed in a fixed order: status, then project. The status
    parameter is the stored label, so it compares like for like with the column.
    """
    sql = f"SELECT {_COLUMNS} FROM tasks"
    where: list[str] = []
    params: list[Any] = []

    if opts.status is not None:
        where.append("status = ?")
        params.append(TaskStatus(opts.status).label)

    if opts.project:
        where.append("project = ?")
        params.append(opts.project)

    if where:
        sql += " WHERE " + " AND ".join(where)
    return sql, params


def _encode_created(ts: datetime) -> str:
    return ts.isoformat()


def _decode_created(raw: Any) -> datetime:
    if isinstance(raw, datetime):
        ts = raw
    else:
        ts = datetime.fromisoformat(str(raw))
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=UTC)
    return ts


class TaskStore:
    """
    SQLite task store.

    One store owns one connection for its whole lifetime; use it as a context
    manager (or call close()) so the handle is always released:

        with TaskStore(data_dir) as store:
            store.insert("Buy milk")

    The table is created on open when the catalog (sqlite_master) says it is
    missing. There are no migrations beyond that.
    """

    def __init__(
        self,
        data_dir: str | Path,
        *,
        filename: str = DEFAULT_DB_FILENAME,
        timeout: float = 5.0,
    ) -> None:
        self._db_path = Path(data_dir) / filename
        self._conn: sqlite3.Connection | None = None

        try:
            conn = sqlite3.connect(str(self._db_path), timeout=timeout)
        except sqlite3.Error as exc:
            raise StorageUnavailable(f"cannot open database {self._db_path}: {exc}") from exc

        conn.row_factory = sqlite3.Row
        self._conn = conn
        try:
            self._ensure_schema()
            total = self.count_tasks()
        except sqlite3.Error as exc:
            self.close()
            raise StorageUnavailable(f"cannot initialize database {self._db_path}: {exc}") from exc

        logger.debug("TaskStore ready db=%s total=%s", self._db_path, total)

    @classmethod
    def open(cls, data_dir: str | Path, **kwargs: Any) -> TaskStore:
        return cls(data_dir, **kwargs)

    @property
    def db_path(self) -> Path:
        return self._db_path

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    def __enter__(self) -> TaskStore:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # ---- low-level helpers ----

    @property
    def conn(self) -> sqlite3.Connection:
        if self._conn is None:
            raise StorageUnavailable("task store is closed")
        return self._conn

    def _table_exists(self) -> bool:
        cur = self.conn.execute(
            "SELECT 1 FROM sqlite_master WHERE type = 'table' AND name = 'tasks'"
        )
        return cur.fetchone() is not None

    def _ensure_schema(self) -> None:
        if self._table_exists():
            return
        self.conn.execute(
            """
            CREATE TABLE tasks (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                name TEXT NOT NULL,
                project TEXT,
                status TEXT,
                created DATETIME
            )
            """
        )
        self.conn.commit()
        logger.info("TaskStore created table tasks in %s", self._db_path)

    @staticmethod
    def _row_to_task(row: sqlite3.Row) -> Task:
        return Task(
            id=int(row["id"]),
            name=str(row["name"]),
            project=str(row["project"] or ""),
            status=TaskStatus.from_db(row["status"]),
            created=_decode_created(row["created"]),
        )

    # ---- public API ----

    def count_tasks(self) -> int:
        (n,) = self.conn.execute("SELECT COUNT(*) FROM tasks").fetchone()
        return int(n)

    def insert(self, name: str, project: str = "") -> int:
        """Insert a new `todo` task and return its id."""
        require_name(name)
        created = datetime.now(UTC)

        cur = self.conn.execute(
            "INSERT INTO tasks(name, project, status, created) VALUES (?, ?, ?, ?)",
            (name, project or "", TaskStatus.TODO.label, _encode_created(created)),
        )
        self.conn.commit()
        task_id = cur.lastrowid
        if task_id is None:
            raise RuntimeError("SQLite did not return lastrowid for tasks insert")
        logger.debug("Task added id=%s project=%r", task_id, project)
        return int(task_id)

    def delete(self, task_id: int) -> None:
        cur = self.conn.execute("DELETE FROM tasks WHERE id = ?", (int(task_id),))
        self.conn.commit()
        logger.debug("Task delete id=%s rows=%s", task_id, cur.rowcount)

    def get_task(self, task_id: int) -> Task:
        row = self.conn.execute(
            f"SELECT {_COLUMNS} FROM tasks WHERE id = ?", (int(task_id),)
        ).fetchone()
        if row is None:
            raise NotFound(task_id)
        return self._row_to_task(row)

    def get_tasks(self, opts: TaskFilter | None = None) -> list[Task]:
        sql, params = build_tasks_query(opts or TaskFilter())
        logger.debug("get_tasks sql=%s params=%s", sql, params)
        rows = self.conn.execute(sql, params).fetchall()
        return [self._row_to_task(r) for r in rows]

    def update(self, task_id: int, changes: TaskUpdate) -> Task:
        """
        Merge `changes` onto the stored task and persist name/project/status.

        Returns the merged task. Raises NotFound if the id does not exist.
        """
        current = self.get_task(task_id)
        merged = merge_task(current, changes)

        self.conn.execute(
            "UPDATE tasks SET name = ?, project = ?, status = ? WHERE id = ?",
            (merged.name, merged.project, merged.status.label, merged.id),
        )
        self.conn.commit()
        logger.debug("Task updated id=%s status=%s", merged.id, merged.status.label)
        return merged
