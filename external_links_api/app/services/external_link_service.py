"""
Service layer for external links.

An external link is a named URL (typically a monitoring dashboard)
tagged with a monitoring tool and shown for a set of clusters.  The
link‑to‑cluster association lives in its own table and is never
hard‑deleted: removing a cluster from a link, or deleting the link,
flips the ``active`` flag so that history is preserved.

Every write runs inside one transaction (see ``core.db.transaction``):
if any step fails the whole operation is rolled back and a
``PersistenceError`` is raised, so callers never see a half‑applied
create or update.
"""

from __future__ import annotations

import logging
import sqlite3
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple

from external_links_api.app.core.db import get_connection, transaction
from external_links_api.app.core.exceptions import LinkNotFoundError, PersistenceError
from external_links_api.app.models import ExternalLink, ExternalLinkClusterMapping
from external_links_api.app.repositories import (
    ExternalLinkClusterMappingRepository,
    ExternalLinkMonitoringToolRepository,
    ExternalLinkRepository,
    SQLiteExternalLinkClusterMappingRepository,
    SQLiteExternalLinkMonitoringToolRepository,
    SQLiteExternalLinkRepository,
)
from external_links_api.app.schemas.external_link import (
    ExternalLinkApiResponse,
    ExternalLinkDto,
    ExternalLinkMonitoringToolDto,
)

logger = logging.getLogger(__name__)

Repositories = Tuple[
    ExternalLinkMonitoringToolRepository,
    ExternalLinkRepository,
    ExternalLinkClusterMappingRepository,
]


def _now() -> str:
    # Same layout as SQLite's CURRENT_TIMESTAMP so both sort together.
    return datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S")


def _distinct(cluster_ids: Iterable[int]) -> List[int]:
    """Drop repeated cluster ids, keeping first-seen order."""
    seen: Dict[int, None] = {}
    for cluster_id in cluster_ids:
        seen.setdefault(cluster_id, None)
    return list(seen)


@contextmanager
def _store_call(message: str, data: Any = None) -> Iterator[None]:
    """Translate store failures into ``PersistenceError`` with a fixed message."""
    try:
        yield
    except sqlite3.Error as exc:
        logger.error("%s: data=%s err=%s", message, data, exc)
        raise PersistenceError(message) from exc


class ExternalLinkService:
    """Create, list, update and soft‑delete external links."""

    @staticmethod
    def _repositories(conn: sqlite3.Connection) -> Repositories:
        return (
            SQLiteExternalLinkMonitoringToolRepository(conn),
            SQLiteExternalLinkRepository(conn),
            SQLiteExternalLinkClusterMappingRepository(conn),
        )

    @classmethod
    @contextmanager
    def _unit_of_work(cls, message: str) -> Iterator[Repositories]:
        with _store_call(message):
            with transaction() as conn:
                yield cls._repositories(conn)

    @classmethod
    async def create(
        cls, requests: List[ExternalLinkDto], user_id: Optional[int]
    ) -> ExternalLinkApiResponse:
        """Insert every requested link and one active mapping per cluster.

        The ``active`` flag of the request is ignored: new links are
        always active.  The batch is all‑or‑nothing.
        """
        logger.debug("external link create request: %s", requests)
        now = _now()
        with cls._unit_of_work("external link failed to create in db") as (_, links, mappings):
            for request in requests:
                link = ExternalLink(
                    name=request.name,
                    url=request.url,
                    active=True,
                    monitoring_tool_id=request.monitoring_tool_id,
                    created_on=now,
                    created_by=user_id,
                    updated_on=now,
                    updated_by=user_id,
                )
                with _store_call("external link failed to create in db", link):
                    links.save(link)

                for cluster_id in _distinct(request.cluster_ids):
                    mapping = ExternalLinkClusterMapping(
                        external_link_id=link.id,
                        cluster_id=cluster_id,
                        active=True,
                        created_on=now,
                        created_by=user_id,
                        updated_on=now,
                        updated_by=user_id,
                    )
                    with _store_call("cluster id failed to create in db", mapping):
                        mappings.save(mapping)
                logger.info("Created external link %s for clusters %s", link.id, request.cluster_ids)
        return ExternalLinkApiResponse(success=True)

    @classmethod
    async def get_all_active_tools(cls) -> List[ExternalLinkMonitoringToolDto]:
        logger.debug("fetch all monitoring tools from db")
        conn = get_connection()
        try:
            tools_repo, _, _ = cls._repositories(conn)
            with _store_call("failed to fetch monitoring tools"):
                tools = tools_repo.find_all_active()
            return [
                ExternalLinkMonitoringToolDto(id=tool.id, name=tool.name, icon=tool.icon)
                for tool in tools
            ]
        finally:
            conn.close()

    @classmethod
    async def fetch_all_active_links(cls, cluster_id: int = 0) -> List[ExternalLinkDto]:
        """Return active links, optionally narrowed to one cluster.

        ``cluster_id == 0`` returns every active link.  Otherwise only
        links with an active mapping to ``cluster_id`` are returned.
        Links without any active mapping are global and are included
        in both cases with an empty ``clusterIds`` list.  Results are
        ordered by link id.
        """
        logger.debug("fetch all links from db, cluster_id=%s", cluster_id)
        conn = get_connection()
        try:
            _, links_repo, mappings_repo = cls._repositories(conn)
            with _store_call("failed to fetch external links"):
                links = links_repo.find_all_active()
                mappings = mappings_repo.find_all_active()
        finally:
            conn.close()

        cluster_ids_by_link: Dict[int, List[int]] = {}
        for mapping in mappings:
            cluster_ids = cluster_ids_by_link.setdefault(mapping.external_link_id, [])
            if mapping.cluster_id not in cluster_ids:
                cluster_ids.append(mapping.cluster_id)

        response: List[ExternalLinkDto] = []
        for link in links:
            cluster_ids = cluster_ids_by_link.get(link.id)
            if cluster_ids is None:
                response.append(cls._to_dto(link, []))
            elif cluster_id == 0 or cluster_id in cluster_ids:
                response.append(cls._to_dto(link, cluster_ids))
        return response

    @classmethod
    async def update(cls, request: ExternalLinkDto, user_id: Optional[int]) -> ExternalLinkApiResponse:
        """Overwrite a link and reconcile its cluster mappings.

        Every active mapping of the link is first marked inactive.
        Then, for each requested cluster, the existing row for that
        cluster is reactivated or a new row is inserted.  Clusters
        dropped from the request keep their (now inactive) rows.

        Raises ``LinkNotFoundError`` when the link does not exist or
        was deleted; nothing is written in that case.
        """
        logger.debug("link update request: %s", request)
        now = _now()
        with cls._unit_of_work("external link failed to update in db") as (_, links, mappings):
            link = links.find_one(request.id)
            if link is None:
                logger.error("No matching entry found for update, id=%s", request.id)
                raise LinkNotFoundError(request.id)

            link.name = request.name
            link.url = request.url
            link.active = True
            link.monitoring_tool_id = request.monitoring_tool_id
            link.touch(user_id, now)
            with _store_call("external link failed to update in db", link):
                links.update(link)

            existing: Dict[int, ExternalLinkClusterMapping] = {}
            for mapping in mappings.find_all_by_external_link_id(link.id):
                if mapping.active:
                    mapping.active = False
                    mapping.touch(user_id, now)
                    with _store_call("error in updating clusters to inactive", mapping):
                        mappings.update(mapping)
                existing[mapping.cluster_id] = mapping

            for cluster_id in _distinct(request.cluster_ids):
                mapping = existing.get(cluster_id)
                with _store_call("cluster id failed to create in db", cluster_id):
                    if mapping is not None:
                        mapping.active = True
                        mapping.touch(user_id, now)
                        mappings.update(mapping)
                    else:
                        mappings.save(
                            ExternalLinkClusterMapping(
                                external_link_id=link.id,
                                cluster_id=cluster_id,
                                active=True,
                                created_on=now,
                                created_by=user_id,
                                updated_on=now,
                                updated_by=user_id,
                            )
                        )
            logger.info("Updated external link %s, clusters %s", link.id, request.cluster_ids)
        return ExternalLinkApiResponse(success=True)

    @classmethod
    async def delete_link(cls, link_id: int, user_id: Optional[int]) -> ExternalLinkApiResponse:
        """Soft‑delete a link and all of its active cluster mappings."""
        logger.debug("link delete request: %s", link_id)
        now = _now()
        with cls._unit_of_work("external link failed to delete in db") as (_, links, mappings):
            link = links.find_one(link_id)
            if link is None:
                logger.error("No matching entry found for delete, id=%s", link_id)
                raise LinkNotFoundError(link_id)

            for mapping in mappings.find_all_active_by_external_link_id(link_id):
                mapping.active = False
                mapping.touch(user_id, now)
                with _store_call("error in deleting clusters", mapping):
                    mappings.update(mapping)

            link.active = False
            link.touch(user_id, now)
            with _store_call("error in deleting link", link):
                links.update(link)
            logger.info("Deleted external link %s", link_id)
        return ExternalLinkApiResponse(success=True)

    @staticmethod
    def _to_dto(link: ExternalLink, cluster_ids: List[int]) -> ExternalLinkDto:
        return ExternalLinkDto(
            id=link.id,
            name=link.name,
            url=link.url,
            active=link.active,
            monitoring_tool_id=link.monitoring_tool_id,
            cluster_ids=list(cluster_ids),
            updated_on=link.updated_on,
        )
