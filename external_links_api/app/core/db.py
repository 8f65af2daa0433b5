"""
SQLite database integration and simple migration system.

This module provides functions for obtaining a database connection
(``get_connection``), running a unit of work inside one transaction
(``transaction``) and applying migrations on application start
(``init_db``).  It uses SQLite as a lightweight embedded database; to
switch to another DBMS you would replace connection logic and adapt
SQL syntax in the repositories accordingly.

The migration mechanism stores applied migration versions in the
``migrations`` table and executes new migrations in order.
"""

import logging
import os
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from .config import settings

logger = logging.getLogger(__name__)


def get_database_path() -> str:
    """Compute the path to the SQLite database file.

    If ``settings.database_url`` is an absolute path, use it directly.
    Otherwise resolve it relative to the project root.
    """
    db_url = settings.database_url
    if os.path.isabs(db_url):
        return db_url
    base_dir = Path(__file__).resolve().parent.parent.parent  # external_links_api/
    return str((base_dir / db_url).resolve())


def get_connection() -> sqlite3.Connection:
    """Create and return a new SQLite connection.

    Rows are returned as ``sqlite3.Row`` so columns can be accessed by
    name.  Foreign key enforcement is switched on for the lifetime of
    the connection; SQLite leaves it off by default.
    """
    conn = sqlite3.connect(get_database_path())
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


@contextmanager
def get_cursor() -> Iterator[sqlite3.Cursor]:
    """Context manager that yields a cursor and closes the connection on exit."""
    conn = get_connection()
    try:
        yield conn.cursor()
        conn.commit()
    finally:
        conn.close()


@contextmanager
def transaction() -> Iterator[sqlite3.Connection]:
    """Yield a connection whose statements are committed as one unit.

    The transaction is committed when the block exits normally and
    rolled back when it raises, so a multi‑step write either lands
    completely or not at all.  The connection is always closed.
    """
    conn = get_connection()
    try:
        yield conn
        conn.commit()
    except BaseException:
        conn.rollback()
        raise
    finally:
        conn.close()


MIGRATIONS: list[tuple[int, str]] = [
    # Migration 1: link tables
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS external_link_monitoring_tool (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL,
            icon TEXT,
            active INTEGER NOT NULL DEFAULT 1,
            created_on TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            created_by INTEGER,
            updated_on TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            updated_by INTEGER
        );

        CREATE TABLE IF NOT EXISTS external_link (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            external_link_monitoring_tool_id INTEGER NOT NULL,
            name TEXT NOT NULL,
            url TEXT NOT NULL,
            active INTEGER NOT NULL DEFAULT 1,
            created_on TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            created_by INTEGER,
            updated_on TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            updated_by INTEGER,
            FOREIGN KEY(external_link_monitoring_tool_id) REFERENCES external_link_monitoring_tool(id)
        );

        CREATE TABLE IF NOT EXISTS external_link_cluster_mapping (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            external_link_id INTEGER NOT NULL,
            cluster_id INTEGER NOT NULL,
            active INTEGER NOT NULL DEFAULT 1,
            created_on TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            created_by INTEGER,
            updated_on TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            updated_by INTEGER,
            FOREIGN KEY(external_link_id) REFERENCES external_link(id)
        );
        """,
    ),
    # Migration 2: lookup indices for listing and reconciliation
    (
        2,
        """
        CREATE INDEX IF NOT EXISTS idx_external_link_cluster_mapping_link
            ON external_link_cluster_mapping(external_link_id);
        CREATE INDEX IF NOT EXISTS idx_external_link_cluster_mapping_cluster
            ON external_link_cluster_mapping(cluster_id, active);
        """,
    ),
]

# Default monitoring tool catalogue; ids are stable so clients may
# hard‑code them.
DEFAULT_MONITORING_TOOLS: list[tuple[int, str, str]] = [
    (1, "Grafana", "grafana"),
    (2, "Kibana", "kibana"),
    (3, "Newrelic", "newrelic"),
    (4, "Coralogix", "coralogix"),
    (5, "Datadog", "datadog"),
    (6, "Loki", "loki"),
    (7, "Cloudwatch", "cloudwatch"),
    (8, "Swagger", "swagger"),
    (9, "Jaeger", "jaeger"),
    (10, "Other", "other"),
]


def init_db() -> None:
    """Initialise the database and apply pending migrations.

    Creates the ``migrations`` table if it does not exist, checks the
    current schema version, and applies any new migrations defined in
    ``MIGRATIONS``.  If you add a new migration, append it with an
    incremented version number.
    """
    with get_cursor() as cursor:
        cursor.execute(
            "CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)"
        )
        cursor.execute("SELECT MAX(version) as version FROM migrations")
        row = cursor.fetchone()
        current_version = row["version"] if row and row["version"] is not None else 0

        for version, sql in MIGRATIONS:
            if version > current_version:
                cursor.executescript(sql)
                cursor.execute(
                    "INSERT INTO migrations (version) VALUES (?)", (version,)
                )
                logger.info("Applied migration %s", version)
                current_version = version

        cursor.executemany(
            "INSERT OR IGNORE INTO external_link_monitoring_tool (id, name, icon, active) VALUES (?, ?, ?, 1)",
            DEFAULT_MONITORING_TOOLS,
        )
