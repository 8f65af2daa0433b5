"""
SQLite implementations of the link repositories.

Each repository wraps a connection handed in by the caller.  All
queries use parameterized statements.  Boolean ``active`` flags are
stored as 0/1 integers and converted on the way in and out.
"""

from __future__ import annotations

import sqlite3
from typing import List, Optional

from external_links_api.app.models import (
    ExternalLink,
    ExternalLinkClusterMapping,
    MonitoringTool,
)


class SQLiteExternalLinkMonitoringToolRepository:
    def __init__(self, conn: sqlite3.Connection) -> None:
        self.conn = conn

    def find_all_active(self) -> List[MonitoringTool]:
        rows = self.conn.execute(
            "SELECT * FROM external_link_monitoring_tool WHERE active = 1 ORDER BY id ASC"
        ).fetchall()
        return [self._row_to_tool(row) for row in rows]

    @staticmethod
    def _row_to_tool(row: sqlite3.Row) -> MonitoringTool:
        return MonitoringTool(
            id=row["id"],
            name=row["name"],
            icon=row["icon"],
            active=bool(row["active"]),
            created_on=row["created_on"],
            created_by=row["created_by"],
            updated_on=row["updated_on"],
            updated_by=row["updated_by"],
        )


class SQLiteExternalLinkRepository:
    def __init__(self, conn: sqlite3.Connection) -> None:
        self.conn = conn

    def save(self, link: ExternalLink) -> ExternalLink:
        cursor = self.conn.execute(
            """
            INSERT INTO external_link (
                external_link_monitoring_tool_id, name, url, active,
                created_on, created_by, updated_on, updated_by
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                link.monitoring_tool_id,
                link.name,
                link.url,
                int(link.active),
                link.created_on,
                link.created_by,
                link.updated_on,
                link.updated_by,
            ),
        )
        link.id = cursor.lastrowid
        return link

    def update(self, link: ExternalLink) -> None:
        self.conn.execute(
            """
            UPDATE external_link
            SET external_link_monitoring_tool_id = ?, name = ?, url = ?, active = ?,
                updated_on = ?, updated_by = ?
            WHERE id = ?
            """,
            (
                link.monitoring_tool_id,
                link.name,
                link.url,
                int(link.active),
                link.updated_on,
                link.updated_by,
                link.id,
            ),
        )

    def find_one(self, link_id: int) -> Optional[ExternalLink]:
        row = self.conn.execute(
            "SELECT * FROM external_link WHERE id = ? AND active = 1",
            (link_id,),
        ).fetchone()
        if not row:
            return None
        return self._row_to_link(row)

    def find_all_active(self) -> List[ExternalLink]:
        rows = self.conn.execute(
            "SELECT * FROM external_link WHERE active = 1 ORDER BY id ASC"
        ).fetchall()
        return [self._row_to_link(row) for row in rows]

    @staticmethod
    def _row_to_link(row: sqlite3.Row) -> ExternalLink:
        return ExternalLink(
            id=row["id"],
            name=row["name"],
            url=row["url"],
            active=bool(row["active"]),
            monitoring_tool_id=row["external_link_monitoring_tool_id"],
            created_on=row["created_on"],
            created_by=row["created_by"],
            updated_on=row["updated_on"],
            updated_by=row["updated_by"],
        )


class SQLiteExternalLinkClusterMappingRepository:
    def __init__(self, conn: sqlite3.Connection) -> None:
        self.conn = conn

    def save(self, mapping: ExternalLinkClusterMapping) -> ExternalLinkClusterMapping:
        cursor = self.conn.execute(
            """
            INSERT INTO external_link_cluster_mapping (
                external_link_id, cluster_id, active,
                created_on, created_by, updated_on, updated_by
            ) VALUES (?, ?, ?, ?, ?, ?, ?)
            """,
            (
                mapping.external_link_id,
                mapping.cluster_id,
                int(mapping.active),
                mapping.created_on,
                mapping.created_by,
                mapping.updated_on,
                mapping.updated_by,
            ),
        )
        mapping.id = cursor.lastrowid
        return mapping

    def update(self, mapping: ExternalLinkClusterMapping) -> None:
        self.conn.execute(
            """
            UPDATE external_link_cluster_mapping
            SET active = ?, updated_on = ?, updated_by = ?
            WHERE id = ?
            """,
            (int(mapping.active), mapping.updated_on, mapping.updated_by, mapping.id),
        )

    def find_all_active(self) -> List[ExternalLinkClusterMapping]:
        rows = self.conn.execute(
            """
            SELECT m.* FROM external_link_cluster_mapping m
            JOIN external_link l ON l.id = m.external_link_id
            WHERE m.active = 1 AND l.active = 1
            ORDER BY m.id ASC
            """
        ).fetchall()
        return [self._row_to_mapping(row) for row in rows]

    def find_all_by_external_link_id(self, link_id: int) -> List[ExternalLinkClusterMapping]:
        rows = self.conn.execute(
            "SELECT * FROM external_link_cluster_mapping WHERE external_link_id = ? ORDER BY id ASC",
            (link_id,),
        ).fetchall()
        return [self._row_to_mapping(row) for row in rows]

    def find_all_active_by_external_link_id(self, link_id: int) -> List[ExternalLinkClusterMapping]:
        rows = self.conn.execute(
            """
            SELECT * FROM external_link_cluster_mapping
            WHERE external_link_id = ? AND active = 1
            ORDER BY id ASC
            """,
            (link_id,),
        ).fetchall()
        return [self._row_to_mapping(row) for row in rows]

    @staticmethod
    def _row_to_mapping(row: sqlite3.Row) -> ExternalLinkClusterMapping:
        return ExternalLinkClusterMapping(
            id=row["id"],
            external_link_id=row["external_link_id"],
            cluster_id=row["cluster_id"],
            active=bool(row["active"]),
            created_on=row["created_on"],
            created_by=row["created_by"],
            updated_on=row["updated_on"],
            updated_by=row["updated_by"],
        )
