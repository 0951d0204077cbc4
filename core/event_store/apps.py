"""
Folio Core - Event Store App Configuration
==========================================
The immutable vault of truth for guest stay accounts.

This app:
- Persists immutable events per stream
- Enforces optimistic concurrency on append

This app does NOT:
- Interpret event meaning
- Write business state
- Make decisions
"""

from django.apps import AppConfig


class EventStoreConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "core.event_store"
    label = "event_store"
    verbose_name = "Folio Event Store"
