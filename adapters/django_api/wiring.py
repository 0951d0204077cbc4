"""
Folio Django Adapter Wiring
===========================
Constructs HttpApiDependencies from Django settings.

This module is adapter-only glue:
- picks the event store backend (memory | django)
- picks the stay existence oracle
- no decision logic, no replay logic
"""

from __future__ import annotations

import logging
import threading

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

from core.commands.handler import DEFAULT_MAX_ATTEMPTS
from core.event_store.contracts import EventStore
from core.event_store.memory import InMemoryEventStore
from core.http_api.dependencies import HttpApiDependencies
from core.time.clock import SystemClock
from core.time.dates import parse_date_from_utc_yyyymmdd
from engines.guest_stay.events import GUEST_STAY_EVENT_CODEC
from engines.guest_stay.services import (
    GuestStayService,
    InMemoryStayRegistry,
    PermissiveStayRegistry,
    StayRegistry,
)

logger = logging.getLogger("folio.http_api")

EVENT_STORE_MEMORY = "memory"
EVENT_STORE_DJANGO = "django"

_DEPENDENCIES_LOCK = threading.Lock()
_DEPENDENCIES: HttpApiDependencies | None = None


def _build_event_store() -> EventStore:
    backend = getattr(settings, "GUEST_STAY_EVENT_STORE", EVENT_STORE_MEMORY)
    if backend == EVENT_STORE_MEMORY:
        return InMemoryEventStore()
    if backend == EVENT_STORE_DJANGO:
        from core.event_store.persistence import DjangoEventStore

        return DjangoEventStore(GUEST_STAY_EVENT_CODEC)
    raise ImproperlyConfigured(
        f"GUEST_STAY_EVENT_STORE must be '{EVENT_STORE_MEMORY}' or "
        f"'{EVENT_STORE_DJANGO}', got '{backend}'."
    )


def _build_stay_registry() -> StayRegistry:
    if not getattr(settings, "GUEST_STAY_REQUIRE_KNOWN_STAY", False):
        return PermissiveStayRegistry()
    known = getattr(settings, "GUEST_STAY_KNOWN_STAYS", ())
    return InMemoryStayRegistry(
        (guest_id, room_id, parse_date_from_utc_yyyymmdd(day))
        for guest_id, room_id, day in known
    )


def _create_dependencies() -> HttpApiDependencies:
    max_attempts = getattr(
        settings, "GUEST_STAY_MAX_APPEND_ATTEMPTS", DEFAULT_MAX_ATTEMPTS
    )
    event_store = _build_event_store()
    service = GuestStayService(
        event_store=event_store,
        stay_registry=_build_stay_registry(),
        clock=SystemClock(),
        max_attempts=max_attempts,
    )
    logger.info(
        f"Guest stay API wired: store={type(event_store).__name__}, "
        f"max_attempts={max_attempts}"
    )
    return HttpApiDependencies(
        guest_stay_service=service,
        base_path=getattr(settings, "GUEST_STAY_API_BASE_PATH", ""),
    )


def build_dependencies() -> HttpApiDependencies:
    """
    Lazy singleton wiring for adapter runtime.
    """
    global _DEPENDENCIES
    with _DEPENDENCIES_LOCK:
        if _DEPENDENCIES is None:
            _DEPENDENCIES = _create_dependencies()
        return _DEPENDENCIES


def set_dependencies(dependencies: HttpApiDependencies | None) -> None:
    """Replace the wired dependencies (tests). None forces a rebuild."""
    global _DEPENDENCIES
    with _DEPENDENCIES_LOCK:
        _DEPENDENCIES = dependencies


def reset_dependencies() -> None:
    set_dependencies(None)
