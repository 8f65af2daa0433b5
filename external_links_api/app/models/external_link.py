from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass
class AuditFields:
    created_on: Optional[str] = None
    created_by: Optional[int] = None
    updated_on: Optional[str] = None
    updated_by: Optional[int] = None

    def touch(self, user_id: Optional[int], now: str) -> None:
        """Stamp the update columns with the acting user and time."""
        self.updated_on = now
        self.updated_by = user_id


@dataclass
class MonitoringTool(AuditFields):
    id: int = 0
    name: str = ""
    icon: Optional[str] = None
    active: bool = True


@dataclass
class ExternalLink(AuditFields):
    id: int = 0
    name: str = ""
    url: str = ""
    active: bool = True
    monitoring_tool_id: int = 0


@dataclass
class ExternalLinkClusterMapping(AuditFields):
    """Association of one link with one cluster, independently activatable."""

    id: int = 0
    external_link_id: int = 0
    cluster_id: int = 0
    active: bool = True
