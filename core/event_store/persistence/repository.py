"""
Folio Event Store - Django Persistence Repository
=================================================
Stream store backed by the StoredEvent table.

Write flow:
    1. Encode events through the codec
    2. Inside one transaction, read the stream head
    3. Compare with expected_version (stale read -> conflict)
    4. Insert rows at head+1, head+2, ...
    5. A unique-constraint race also surfaces as a conflict

This repository does NOT:
- Retry on conflict (the command handler owns retries)
- Interpret payload meaning
- Swallow errors
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from django.db import IntegrityError, transaction
from django.db.models import Max

from core.event_store.codec import EventCodec
from core.event_store.contracts import (
    NO_STREAM,
    AppendResult,
    ReadStreamResult,
    ensure_stream_id,
)
from core.event_store.errors import ConcurrencyConflict
from core.event_store.models import StoredEvent

logger = logging.getLogger("folio.event_store")


def get_stream_version(stream_id: str) -> int:
    head = StoredEvent.objects.filter(stream_id=stream_id).aggregate(
        head=Max("stream_position")
    )["head"]
    return head or NO_STREAM


class DjangoEventStore:
    def __init__(self, codec: EventCodec):
        self._codec = codec

    def read_stream(self, stream_id: str) -> ReadStreamResult:
        ensure_stream_id(stream_id)
        rows = (
            StoredEvent.objects.filter(stream_id=stream_id)
            .order_by("stream_position")
            .values_list("event_type", "payload", "stream_position")
        )
        events = []
        current_version = NO_STREAM
        for event_type, payload, position in rows:
            events.append(self._codec.decode(event_type, payload))
            current_version = position
        return ReadStreamResult(
            stream_id=stream_id,
            events=tuple(events),
            current_version=current_version,
        )

    def append_to_stream(
        self,
        stream_id: str,
        events: Sequence[Any],
        expected_version: Optional[int] = None,
    ) -> AppendResult:
        ensure_stream_id(stream_id)
        encoded = [self._codec.encode(event) for event in events]
        if not encoded:
            raise ValueError("Cannot append an empty batch of events.")

        try:
            with transaction.atomic():
                current_version = get_stream_version(stream_id)
                if (
                    expected_version is not None
                    and expected_version != current_version
                ):
                    raise ConcurrencyConflict(
                        stream_id, expected_version, current_version
                    )
                for offset, (event_type, payload) in enumerate(encoded, start=1):
                    StoredEvent.objects.create(
                        stream_id=stream_id,
                        stream_position=current_version + offset,
                        event_type=event_type,
                        payload=payload,
                    )
        except IntegrityError as exc:
            raise ConcurrencyConflict(
                stream_id, expected_version, None
            ) from exc

        next_version = current_version + len(encoded)
        logger.debug(
            f"Persisted {len(encoded)} event(s) to {stream_id} "
            f"(version {current_version} -> {next_version})"
        )
        return AppendResult(
            stream_id=stream_id,
            next_expected_version=next_version,
            created_new_stream=current_version == NO_STREAM,
        )
