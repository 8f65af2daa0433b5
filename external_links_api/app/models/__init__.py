"""
Plain records mirroring rows of the link tables.

Repositories return and accept these dataclasses; they are kept
separate from the Pydantic schemas so that the API representation
can evolve independently of the storage layout.
"""

from .external_link import (  # noqa: F401
    ExternalLink,
    ExternalLinkClusterMapping,
    MonitoringTool,
)
