"""
SQLite implementation of the ``Storage`` capability.

Each operation opens its own connection, commits before returning and
closes the connection, so every single‑record write is atomic.  The
database path is given to the constructor; nothing is kept at module
level.  ``sqlite3`` errors are translated into the storage error
hierarchy: UNIQUE violations become ``DuplicateRecordError``, foreign
key violations ``IntegrityViolationError`` and anything else
``StorageError``.

Note that ``":memory:"`` is not usable here because every connection
would see a fresh, empty database.  Use a file path.
"""

import logging
import sqlite3
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Callable, Dict, FrozenSet, Iterator, List, Optional, TypeVar

from ..core.db import apply_migrations, get_connection
from ..schemas.member import ProjectMemberRead
from ..schemas.project import ProjectRead
from ..schemas.task import TaskRead
from ..schemas.user import UserInDB
from .base import (
    DuplicateRecordError,
    IntegrityViolationError,
    RecordNotFoundError,
    Storage,
    StorageError,
)


logger = logging.getLogger(__name__)

T = TypeVar("T")

_USER_COLUMNS: FrozenSet[str] = frozenset({"username", "password"})
_PROJECT_COLUMNS: FrozenSet[str] = frozenset({"name", "description", "owner_id", "status"})
_TASK_COLUMNS: FrozenSet[str] = frozenset({"title", "description", "status", "project_id", "assignee_id"})
_MEMBER_COLUMNS: FrozenSet[str] = frozenset({"project_id", "user_id"})

_PROJECT_SELECT = "SELECT id, name, description, owner_id, status, created_at FROM projects"
_TASK_SELECT = "SELECT id, title, description, status, project_id, assignee_id, created_at FROM tasks"
_MEMBER_SELECT = "SELECT id, project_id, user_id FROM project_members"


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _user_from_row(row: sqlite3.Row) -> UserInDB:
    return UserInDB(id=row["id"], username=row["username"], password=row["password"])


def _project_from_row(row: sqlite3.Row) -> ProjectRead:
    return ProjectRead(
        id=row["id"],
        name=row["name"],
        description=row["description"],
        owner_id=row["owner_id"],
        status=row["status"],
        created_at=row["created_at"],
    )


def _task_from_row(row: sqlite3.Row) -> TaskRead:
    return TaskRead(
        id=row["id"],
        title=row["title"],
        description=row["description"],
        status=row["status"],
        project_id=row["project_id"],
        assignee_id=row["assignee_id"],
        created_at=row["created_at"],
    )


def _member_from_row(row: sqlite3.Row) -> ProjectMemberRead:
    return ProjectMemberRead(id=row["id"], project_id=row["project_id"], user_id=row["user_id"])


def _translate_integrity_error(exc: sqlite3.IntegrityError) -> StorageError:
    message = str(exc)
    if "UNIQUE" in message:
        return DuplicateRecordError(message)
    return IntegrityViolationError(message)


class SQLiteStorage(Storage):
    """Record storage backed by a single SQLite database file."""

    def __init__(self, db_path: str) -> None:
        self.db_path = db_path

    @contextmanager
    def _cursor(self) -> Iterator[sqlite3.Cursor]:
        """Yield a cursor, committing on success and always closing."""
        try:
            conn = get_connection(self.db_path)
        except sqlite3.Error as exc:
            raise StorageError(f"Cannot open database {self.db_path}: {exc}") from exc
        try:
            yield conn.cursor()
            conn.commit()
        except sqlite3.IntegrityError as exc:
            conn.rollback()
            raise _translate_integrity_error(exc) from exc
        except sqlite3.Error as exc:
            conn.rollback()
            logger.error("SQLite error on %s: %s", self.db_path, exc)
            raise StorageError(str(exc)) from exc
        finally:
            conn.close()

    def init_schema(self) -> None:
        try:
            conn = get_connection(self.db_path)
        except sqlite3.Error as exc:
            raise StorageError(f"Cannot open database {self.db_path}: {exc}") from exc
        try:
            version = apply_migrations(conn)
        except sqlite3.Error as exc:
            raise StorageError(str(exc)) from exc
        finally:
            conn.close()
        logger.info("Database %s at schema version %s", self.db_path, version)

    # ------------------------------------------------------------------
    # Generic helpers
    # ------------------------------------------------------------------
    # sqlite3 raises OverflowError when binding an int outside the signed
    # 64-bit range.  No rowid can hold such a value, so lookups treat it
    # as "no match".
    def _fetch_one(self, sql: str, params: tuple, loader: Callable[[sqlite3.Row], T]) -> Optional[T]:
        try:
            with self._cursor() as cursor:
                row = cursor.execute(sql, params).fetchone()
        except OverflowError:
            return None
        return loader(row) if row else None

    def _fetch_all(self, sql: str, params: tuple, loader: Callable[[sqlite3.Row], T]) -> List[T]:
        try:
            with self._cursor() as cursor:
                rows = cursor.execute(sql, params).fetchall()
        except OverflowError:
            return []
        return [loader(row) for row in rows]

    def _update(
        self,
        table: str,
        allowed: FrozenSet[str],
        record_id: int,
        fields: Dict[str, Any],
        select_sql: str,
        loader: Callable[[sqlite3.Row], T],
    ) -> T:
        unknown = set(fields) - allowed
        if unknown:
            raise ValueError(f"Unknown {table} field(s): {', '.join(sorted(unknown))}")
        with self._cursor() as cursor:
            if fields:
                assignments = ", ".join(f"{key} = ?" for key in fields)
                cursor.execute(
                    f"UPDATE {table} SET {assignments} WHERE id = ?",
                    (*fields.values(), record_id),
                )
            row = cursor.execute(f"{select_sql} WHERE id = ?", (record_id,)).fetchone()
            if not row:
                raise RecordNotFoundError(f"{table} record {record_id} not found")
        return loader(row)

    def _delete(self, table: str, record_id: int) -> None:
        try:
            with self._cursor() as cursor:
                cursor.execute(f"DELETE FROM {table} WHERE id = ?", (record_id,))
        except OverflowError:
            logger.debug("Ignoring delete of out-of-range %s id %s", table, record_id)

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------
    def get_user(self, user_id: int) -> Optional[UserInDB]:
        return self._fetch_one(
            "SELECT id, username, password FROM users WHERE id = ?", (user_id,), _user_from_row
        )

    def find_user_by_username(self, username: str) -> Optional[UserInDB]:
        return self._fetch_one(
            "SELECT id, username, password FROM users WHERE username = ?", (username,), _user_from_row
        )

    def insert_user(self, username: str, password: str) -> UserInDB:
        with self._cursor() as cursor:
            cursor.execute("INSERT INTO users (username, password) VALUES (?, ?)", (username, password))
            user_id = cursor.lastrowid
        return UserInDB(id=user_id, username=username, password=password)

    def update_user(self, user_id: int, fields: Dict[str, Any]) -> UserInDB:
        return self._update(
            "users", _USER_COLUMNS, user_id, fields, "SELECT id, username, password FROM users", _user_from_row
        )

    def delete_user(self, user_id: int) -> None:
        self._delete("users", user_id)

    # ------------------------------------------------------------------
    # Projects
    # ------------------------------------------------------------------
    def get_project(self, project_id: int) -> Optional[ProjectRead]:
        return self._fetch_one(f"{_PROJECT_SELECT} WHERE id = ?", (project_id,), _project_from_row)

    def insert_project(
        self,
        name: str,
        owner_id: int,
        description: Optional[str] = None,
        status: str = "active",
    ) -> ProjectRead:
        created_at = _now()
        with self._cursor() as cursor:
            cursor.execute(
                "INSERT INTO projects (name, description, owner_id, status, created_at) VALUES (?, ?, ?, ?, ?)",
                (name, description, owner_id, status, created_at),
            )
            project_id = cursor.lastrowid
        return ProjectRead(
            id=project_id,
            name=name,
            description=description,
            owner_id=owner_id,
            status=status,
            created_at=created_at,
        )

    def update_project(self, project_id: int, fields: Dict[str, Any]) -> ProjectRead:
        return self._update("projects", _PROJECT_COLUMNS, project_id, fields, _PROJECT_SELECT, _project_from_row)

    def delete_project(self, project_id: int) -> None:
        self._delete("projects", project_id)

    def find_projects_by_owner(self, user_id: int) -> List[ProjectRead]:
        return self._fetch_all(f"{_PROJECT_SELECT} WHERE owner_id = ?", (user_id,), _project_from_row)

    def find_projects_by_member_user_id(self, user_id: int) -> List[ProjectRead]:
        return self._fetch_all(
            """
            SELECT p.id, p.name, p.description, p.owner_id, p.status, p.created_at
            FROM projects p
            JOIN project_members m ON m.project_id = p.id
            WHERE m.user_id = ?
            """,
            (user_id,),
            _project_from_row,
        )

    # ------------------------------------------------------------------
    # Tasks
    # ------------------------------------------------------------------
    def get_task(self, task_id: int) -> Optional[TaskRead]:
        return self._fetch_one(f"{_TASK_SELECT} WHERE id = ?", (task_id,), _task_from_row)

    def insert_task(
        self,
        project_id: int,
        title: str,
        description: Optional[str] = None,
        status: str = "todo",
        assignee_id: Optional[int] = None,
    ) -> TaskRead:
        created_at = _now()
        with self._cursor() as cursor:
            cursor.execute(
                """
                INSERT INTO tasks (title, description, status, project_id, assignee_id, created_at)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (title, description, status, project_id, assignee_id, created_at),
            )
            task_id = cursor.lastrowid
        return TaskRead(
            id=task_id,
            title=title,
            description=description,
            status=status,
            project_id=project_id,
            assignee_id=assignee_id,
            created_at=created_at,
        )

    def update_task(self, task_id: int, fields: Dict[str, Any]) -> TaskRead:
        return self._update("tasks", _TASK_COLUMNS, task_id, fields, _TASK_SELECT, _task_from_row)

    def delete_task(self, task_id: int) -> None:
        self._delete("tasks", task_id)

    def find_tasks_by_project(self, project_id: int) -> List[TaskRead]:
        return self._fetch_all(f"{_TASK_SELECT} WHERE project_id = ?", (project_id,), _task_from_row)

    # ------------------------------------------------------------------
    # Project members
    # ------------------------------------------------------------------
    def get_membership(self, membership_id: int) -> Optional[ProjectMemberRead]:
        return self._fetch_one(f"{_MEMBER_SELECT} WHERE id = ?", (membership_id,), _member_from_row)

    def insert_membership(self, project_id: int, user_id: int) -> ProjectMemberRead:
        with self._cursor() as cursor:
            cursor.execute(
                "INSERT INTO project_members (project_id, user_id) VALUES (?, ?)",
                (project_id, user_id),
            )
            membership_id = cursor.lastrowid
        return ProjectMemberRead(id=membership_id, project_id=project_id, user_id=user_id)

    def update_membership(self, membership_id: int, fields: Dict[str, Any]) -> ProjectMemberRead:
        return self._update(
            "project_members", _MEMBER_COLUMNS, membership_id, fields, _MEMBER_SELECT, _member_from_row
        )

    def delete_membership(self, membership_id: int) -> None:
        self._delete("project_members", membership_id)

    def find_memberships_by_project(self, project_id: int) -> List[ProjectMemberRead]:
        return self._fetch_all(f"{_MEMBER_SELECT} WHERE project_id = ?", (project_id,), _member_from_row)

    def find_membership(self, project_id: int, user_id: int) -> Optional[ProjectMemberRead]:
        return self._fetch_one(
            f"{_MEMBER_SELECT} WHERE project_id = ? AND user_id = ?",
            (project_id, user_id),
            _member_from_row,
        )
