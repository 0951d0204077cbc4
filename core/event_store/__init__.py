"""
Folio Event Store - Public API
==============================
Backend-neutral names only. The Django backend lives in
core.event_store.persistence and needs configured settings.
"""

from core.event_store.codec import EventCodec
from core.event_store.contracts import (
    NO_STREAM,
    AppendResult,
    EventStore,
    ReadStreamResult,
)
from core.event_store.errors import (
    ConcurrencyConflict,
    EventStoreError,
    UnknownEventType,
)
from core.event_store.memory import InMemoryEventStore

__all__ = [
    "NO_STREAM",
    "AppendResult",
    "EventStore",
    "ReadStreamResult",
    "EventCodec",
    "EventStoreError",
    "ConcurrencyConflict",
    "UnknownEventType",
    "InMemoryEventStore",
]
