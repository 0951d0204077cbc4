"""
Folio Event Store - In-Memory Backend
=====================================
Process-local stream store for development and tests.
Same contract and conflict semantics as the Django backend.
Events are kept as the (frozen) objects that were appended.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Dict, List, Optional, Sequence

from core.event_store.contracts import (
    NO_STREAM,
    AppendResult,
    ReadStreamResult,
    ensure_stream_id,
)
from core.event_store.errors import ConcurrencyConflict

logger = logging.getLogger("folio.event_store")


class InMemoryEventStore:
    def __init__(self):
        self._streams: Dict[str, List[Any]] = {}
        self._lock = threading.Lock()

    def read_stream(self, stream_id: str) -> ReadStreamResult:
        ensure_stream_id(stream_id)
        with self._lock:
            events = tuple(self._streams.get(stream_id, ()))
        return ReadStreamResult(
            stream_id=stream_id,
            events=events,
            current_version=len(events),
        )

    def append_to_stream(
        self,
        stream_id: str,
        events: Sequence[Any],
        expected_version: Optional[int] = None,
    ) -> AppendResult:
        ensure_stream_id(stream_id)
        events = list(events)
        if not events:
            raise ValueError("Cannot append an empty batch of events.")

        with self._lock:
            stream = self._streams.get(stream_id, [])
            current_version = len(stream)
            if expected_version is not None and expected_version != current_version:
                raise ConcurrencyConflict(
                    stream_id, expected_version, current_version
                )
            self._streams[stream_id] = stream + events
            next_version = current_version + len(events)

        logger.debug(
            f"Appended {len(events)} event(s) to {stream_id} "
            f"(version {current_version} -> {next_version})"
        )
        return AppendResult(
            stream_id=stream_id,
            next_expected_version=next_version,
            created_new_stream=current_version == NO_STREAM,
        )

    def stream_ids(self) -> tuple[str, ...]:
        with self._lock:
            return tuple(self._streams)

    def truncate(self) -> None:
        with self._lock:
            self._streams.clear()
