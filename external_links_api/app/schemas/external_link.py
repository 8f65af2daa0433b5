"""
Pydantic schemas for external links and monitoring tools.

JSON keys follow the camelCase names used by the dashboard clients
(``monitoringToolId``, ``clusterIds``, ``updatedOn``); the Python
attributes use snake_case and either spelling is accepted on input.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Largest value SQLite can store in an INTEGER column.
MAX_ID = 2**63 - 1


class ExternalLinkMonitoringToolDto(BaseModel):
    """Public projection of a monitoring tool."""

    id: int
    name: str
    icon: Optional[str] = None


class ExternalLinkDto(BaseModel):
    """An external link together with the clusters it is shown for.

    Used both as request body for creation and as listing item.  An
    empty ``clusterIds`` list makes the link global: it is shown for
    every cluster.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: int = Field(0, ge=0, le=MAX_ID, description="Link id; ignored on create")
    name: str = Field(..., min_length=1, description="Display name of the link")
    url: str = Field(..., min_length=1, description="Target URL, may contain placeholders")
    active: bool = True
    monitoring_tool_id: int = Field(..., alias="monitoringToolId", ge=1, le=MAX_ID)
    cluster_ids: List[int] = Field(default_factory=list, alias="clusterIds")
    updated_on: Optional[str] = Field(None, alias="updatedOn")

    @field_validator("cluster_ids")
    @classmethod
    def validate_cluster_ids(cls, v: List[int]) -> List[int]:
        for cluster_id in v:
            if cluster_id <= 0 or cluster_id > MAX_ID:
                raise ValueError("Cluster ids must be positive integers within the storage range")
        return v


class ExternalLinkUpdateDto(ExternalLinkDto):
    """Body of an update: same as ``ExternalLinkDto`` but ``id`` is mandatory."""

    id: int = Field(..., ge=1, le=MAX_ID, description="Id of the link to update")


class ExternalLinkApiResponse(BaseModel):
    success: bool
