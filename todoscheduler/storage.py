"""SQLite storage for scheduler tasks."""

from __future__ import annotations

import os
import sqlite3
from dataclasses import asdict, dataclass
from typing import Any

NOT_FOUND_MESSAGE = "Задача не найдена"

_SCHEMA = """
CREATE TABLE scheduler (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    date CHAR(8) NOT NULL DEFAULT '',
    title VARCHAR(64) NOT NULL DEFAULT '',
    comment TEXT NOT NULL DEFAULT '',
    repeat VARCHAR(64) NOT NULL DEFAULT ''
);
CREATE INDEX date_idx ON scheduler (date);
"""

_COLUMNS = "id, date, title, comment, repeat"


class TaskNotFoundError(LookupError):
    """Raised when no task has the requested id."""

    def __init__(self, message: str = NOT_FOUND_MESSAGE) -> None:
        super().__init__(message)


def _parse_id(value: Any) -> int:
    if value is None or value == "":
        return 0
    if isinstance(value, bool):
        raise ValueError("id must be an integer")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and value.lstrip("+-").isdigit():
        return int(value)
    raise ValueError(f"invalid id {value!r}")


@dataclass
class Task:
    """A scheduled task."""

    id: int = 0
    date: str = ""
    title: str = ""
    comment: str = ""
    repeat: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Return the task as a JSON-ready mapping."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Any) -> Task:
        """Build a task from a decoded JSON object; unknown keys are ignored."""
        if not isinstance(data, dict):
            raise ValueError("task must be a JSON object")
        fields: dict[str, Any] = {"id": _parse_id(data.get("id"))}
        for name in ("date", "title", "comment", "repeat"):
            value = data.get(name)
            if value is None:
                value = ""
            if not isinstance(value, str):
                raise ValueError(f"field {name!r} must be a string")
            fields[name] = value
        return cls(**fields)


class TaskStore:
    """Tasks kept in an SQLite file; the schema is created on first use."""

    def __init__(self, path: str | os.PathLike[str]) -> None:
        path_str = os.fspath(path)
        install = path_str == ":memory:" or not os.path.exists(path_str)
        self._conn = sqlite3.connect(path_str, check_same_thread=False)
        if install:
            self._conn.executescript(_SCHEMA)
            self._conn.commit()

    def _execute(self, query: str, params: tuple[Any, ...] = ()) -> sqlite3.Cursor:
        with self._conn:
            return self._conn.execute(query, params)

    def _require_changed(self, cursor: sqlite3.Cursor) -> None:
        if cursor.rowcount == 0:
            raise TaskNotFoundError()

    def add(self, task: Task) -> int:
        """Insert a task and return its new id."""
        cursor = self._execute(
            "INSERT INTO scheduler (date, title, comment, repeat) VALUES (?, ?, ?, ?)",
            (task.date, task.title, task.comment, task.repeat),
        )
        return int(cursor.lastrowid)

    def all(self) -> list[Task]:
        """Return every task."""
        rows = self._conn.execute(f"SELECT {_COLUMNS} FROM scheduler").fetchall()
        return [Task(*row) for row in rows]

    def get(self, task_id: int | str) -> Task:
        """Return the task with the given id."""
        row = self._conn.execute(
            f"SELECT {_COLUMNS} FROM scheduler WHERE id = ?", (task_id,)
        ).fetchone()
        if row is None:
            raise TaskNotFoundError()
        return Task(*row)

    def update(self, task: Task) -> None:
        """Overwrite all fields of an existing task."""
        cursor = self._execute(
            "UPDATE scheduler SET date = ?, title = ?, comment = ?, repeat = ? WHERE id = ?",
            (task.date, task.title, task.comment, task.repeat, task.id),
        )
        self._require_changed(cursor)

    def delete(self, task_id: int | str) -> None:
        """Remove a task."""
        cursor = self._execute("DELETE FROM scheduler WHERE id = ?", (task_id,))
        self._require_changed(cursor)

    def update_date(self, task_id: int | str, date: str) -> None:
        """Set a new date on a task."""
        cursor = self._execute(
            "UPDATE scheduler SET date = ? WHERE id = ?", (date, task_id)
        )
        self._require_changed(cursor)

    def upcoming(self, limit: int) -> list[Task]:
        """Return up to ``limit`` tasks ordered by date."""
        rows = self._conn.execute(
            f"SELECT {_COLUMNS} FROM scheduler ORDER BY date LIMIT ?", (limit,)
        ).fetchall()
        return [Task(*row) for row in rows]

    def close(self) -> None:
        """Close the database connection."""
        self._conn.close()

    def __enter__(self) -> TaskStore:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()