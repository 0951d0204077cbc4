"""
Folio Event Store - Errors
==========================
Store-level failures. ConcurrencyConflict is the only one a
caller is expected to recover from (by re-reading and re-deciding).
"""

from __future__ import annotations

from typing import Optional


class EventStoreError(Exception):
    """Base error for event store operations."""
    pass


class ConcurrencyConflict(EventStoreError):
    """The stream advanced between read and append (stale read)."""

    def __init__(
        self,
        stream_id: str,
        expected_version: Optional[int],
        actual_version: Optional[int],
    ):
        self.stream_id = stream_id
        self.expected_version = expected_version
        self.actual_version = actual_version
        super().__init__(
            f"Concurrency conflict on stream '{stream_id}': "
            f"expected version {expected_version}, "
            f"actual version {actual_version}."
        )


class UnknownEventType(EventStoreError):
    """Stored event type has no registered event class."""

    def __init__(self, event_type: str):
        self.event_type = event_type
        super().__init__(f"No event class registered for '{event_type}'.")
