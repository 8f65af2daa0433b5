"""
Repository layer for the link tables.

``ports`` declares the interfaces the service depends on; ``sqlite``
implements them on top of a single ``sqlite3.Connection``.  The
SQLite repositories never commit: the caller owns the transaction and
decides when the unit of work is complete.
"""

from .ports import (  # noqa: F401
    ExternalLinkClusterMappingRepository,
    ExternalLinkMonitoringToolRepository,
    ExternalLinkRepository,
)
from .sqlite import (  # noqa: F401
    SQLiteExternalLinkClusterMappingRepository,
    SQLiteExternalLinkMonitoringToolRepository,
    SQLiteExternalLinkRepository,
)
