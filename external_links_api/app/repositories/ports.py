from typing import List, Optional, Protocol

from external_links_api.app.models import (
    ExternalLink,
    ExternalLinkClusterMapping,
    MonitoringTool,
)


class ExternalLinkMonitoringToolRepository(Protocol):
    def find_all_active(self) -> List[MonitoringTool]:
        ...


class ExternalLinkRepository(Protocol):
    def save(self, link: ExternalLink) -> ExternalLink:
        """Insert ``link`` and fill in its generated id."""
        ...

    def update(self, link: ExternalLink) -> None:
        ...

    def find_one(self, link_id: int) -> Optional[ExternalLink]:
        """Return the active link with ``link_id`` or ``None``."""
        ...

    def find_all_active(self) -> List[ExternalLink]:
        ...


class ExternalLinkClusterMappingRepository(Protocol):
    def save(self, mapping: ExternalLinkClusterMapping) -> ExternalLinkClusterMapping:
        ...

    def update(self, mapping: ExternalLinkClusterMapping) -> None:
        ...

    def find_all_active(self) -> List[ExternalLinkClusterMapping]:
        """Active mappings whose link is active as well."""
        ...

    def find_all_by_external_link_id(self, link_id: int) -> List[ExternalLinkClusterMapping]:
        """Every mapping row of a link, active or not."""
        ...

    def find_all_active_by_external_link_id(self, link_id: int) -> List[ExternalLinkClusterMapping]:
        ...
