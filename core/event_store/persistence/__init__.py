"""
Folio Event Store Persistence public API.
"""

from core.event_store.persistence.repository import (
    DjangoEventStore,
    get_stream_version,
)

__all__ = ["DjangoEventStore", "get_stream_version"]
