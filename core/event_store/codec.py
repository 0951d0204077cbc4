"""
Folio Event Store - Event Codec
===============================
Maps event classes to (event_type, payload) pairs and back.

Every registered class must expose:
    EVENT_TYPE            class attribute
    to_payload()          -> dict (JSON-safe)
    from_payload(payload) classmethod
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, Tuple

from core.event_store.errors import UnknownEventType


class EventCodec:
    def __init__(self, event_classes: Iterable[type]):
        self._classes: Dict[str, type] = {}
        for event_class in event_classes:
            event_type = getattr(event_class, "EVENT_TYPE", None)
            if not event_type:
                raise ValueError(
                    f"{event_class.__name__} has no EVENT_TYPE."
                )
            if event_type in self._classes:
                raise ValueError(f"Duplicate event type '{event_type}'.")
            self._classes[event_type] = event_class

    @property
    def event_types(self) -> frozenset:
        return frozenset(self._classes)

    def encode(self, event: Any) -> Tuple[str, dict]:
        event_type = getattr(event, "EVENT_TYPE", None)
        if event_type not in self._classes:
            raise UnknownEventType(str(event_type))
        return event_type, event.to_payload()

    def decode(self, event_type: str, payload: dict) -> Any:
        event_class = self._classes.get(event_type)
        if event_class is None:
            raise UnknownEventType(event_type)
        return event_class.from_payload(payload)
