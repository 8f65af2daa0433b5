"""
External link endpoints for API v1.

These routes let dashboards list the links configured for a cluster
and let administrators create, update and soft‑delete links.  Reading
requires any authenticated caller; writing requires role 1 or 2.
Errors raised by the service are rendered by the handlers registered
in ``main``.
"""

from typing import List

from fastapi import APIRouter, Depends, Path, Query

from external_links_api.app.core.security import get_current_user, require_roles
from external_links_api.app.schemas.external_link import (
    ExternalLinkApiResponse,
    ExternalLinkDto,
    ExternalLinkMonitoringToolDto,
    ExternalLinkUpdateDto,
    MAX_ID,
)
from external_links_api.app.services.external_link_service import ExternalLinkService

router = APIRouter()


@router.post("", response_model=ExternalLinkApiResponse)
async def create_external_links(
    links: List[ExternalLinkDto],
    current_user: dict = Depends(require_roles(1, 2)),
) -> ExternalLinkApiResponse:
    """Create one or more links with their cluster mappings (admin only)."""
    return await ExternalLinkService.create(links, current_user.get("user_id"))


@router.get("/tools", response_model=List[ExternalLinkMonitoringToolDto])
async def get_external_links_tools(
    current_user: dict = Depends(get_current_user),
) -> List[ExternalLinkMonitoringToolDto]:
    """List the active monitoring tools a link can be tagged with."""
    return await ExternalLinkService.get_all_active_tools()


@router.get("", response_model=List[ExternalLinkDto])
async def get_external_links(
    cluster_id: int = Query(0, alias="clusterId", ge=0, le=MAX_ID, description="Cluster to filter by; 0 returns all links"),
    current_user: dict = Depends(get_current_user),
) -> List[ExternalLinkDto]:
    """List active links.

    Links that are not mapped to any cluster are always included
    with an empty ``clusterIds`` list.
    """
    return await ExternalLinkService.fetch_all_active_links(cluster_id)


@router.put("", response_model=ExternalLinkApiResponse)
async def update_external_link(
    link: ExternalLinkUpdateDto,
    current_user: dict = Depends(require_roles(1, 2)),
) -> ExternalLinkApiResponse:
    """Update a link and reconcile its cluster set (admin only)."""
    return await ExternalLinkService.update(link, current_user.get("user_id"))


@router.delete("/{link_id}", response_model=ExternalLinkApiResponse)
async def delete_external_link(
    link_id: int = Path(..., ge=1, le=MAX_ID),
    current_user: dict = Depends(require_roles(1, 2)),
) -> ExternalLinkApiResponse:
    """Soft‑delete a link and its cluster mappings (admin only)."""
    return await ExternalLinkService.delete_link(link_id, current_user.get("user_id"))
