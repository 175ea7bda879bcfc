"""
SQLite connection helpers and a simple migration system.

This module provides functions for resolving the database path,
opening connections with foreign keys enforced and applying
migrations.  It holds no module‑level connection: callers (the
``SQLiteStorage`` backend) pass the database path explicitly.

The migration mechanism stores applied migration versions in the
``migrations`` table and executes new migrations in order.
"""

import os
import sqlite3
from pathlib import Path
from typing import List, Tuple


MIGRATIONS: List[Tuple[int, str]] = [
    # Migration 1: Initial schema
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS users (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            username TEXT NOT NULL UNIQUE,
            password TEXT NOT NULL
        );

        CREATE TABLE IF NOT EXISTS projects (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL,
            description TEXT,
            owner_id INTEGER NOT NULL,
            status TEXT NOT NULL DEFAULT 'active',
            created_at TIMESTAMP NOT NULL,
            FOREIGN KEY(owner_id) REFERENCES users(id)
        );

        CREATE TABLE IF NOT EXISTS tasks (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            title TEXT NOT NULL,
            description TEXT,
            status TEXT NOT NULL DEFAULT 'todo',
            project_id INTEGER NOT NULL,
            assignee_id INTEGER,
            created_at TIMESTAMP NOT NULL,
            FOREIGN KEY(project_id) REFERENCES projects(id) ON DELETE CASCADE,
            FOREIGN KEY(assignee_id) REFERENCES users(id) ON DELETE SET NULL
        );

        -- The owner is never stored here; ownership lives on projects.owner_id.
        CREATE TABLE IF NOT EXISTS project_members (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            project_id INTEGER NOT NULL,
            user_id INTEGER NOT NULL,
            UNIQUE(project_id, user_id),
            FOREIGN KEY(project_id) REFERENCES projects(id) ON DELETE CASCADE,
            FOREIGN KEY(user_id) REFERENCES users(id) ON DELETE CASCADE
        );
        """,
    ),
    # Migration 2: indices for the per-user and per-project lookups
    (
        2,
        """
        CREATE INDEX IF NOT EXISTS idx_projects_owner_id ON projects(owner_id);
        CREATE INDEX IF NOT EXISTS idx_tasks_project_id ON tasks(project_id);
        CREATE INDEX IF NOT EXISTS idx_project_members_user_id ON project_members(user_id);
        """,
    ),
]


def resolve_database_path(database_url: str) -> str:
    """Compute the path to the SQLite database file.

    If ``database_url`` is an absolute path, use it directly.
    Otherwise resolve it relative to the package root.
    """
    if os.path.isabs(database_url):
        return database_url
    base_dir = Path(__file__).resolve().parent.parent.parent  # taskboard_api/
    return str((base_dir / database_url).resolve())


def get_connection(db_path: str) -> sqlite3.Connection:
    """Create and return a new SQLite connection.

    Rows are returned as ``sqlite3.Row`` objects keyed by column
    name.  Foreign key enforcement is switched on for the lifetime of
    the connection, since SQLite disables it by default.
    """
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


def apply_migrations(conn: sqlite3.Connection) -> int:
    """Apply pending migrations and return the resulting schema version.

    Creates the ``migrations`` table if it does not exist, checks the
    current schema version, and applies any newer entries of
    ``MIGRATIONS``.  To change the schema, append a migration with an
    incremented version number.
    """
    cursor = conn.cursor()
    cursor.execute("CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)")
    cursor.execute("SELECT MAX(version) AS version FROM migrations")
    row = cursor.fetchone()
    current_version = row["version"] if row and row["version"] is not None else 0

    for version, sql in MIGRATIONS:
        if version > current_version:
            cursor.executescript(sql)
            cursor.execute("INSERT INTO migrations (version) VALUES (?)", (version,))
            current_version = version
    conn.commit()
    return current_version
