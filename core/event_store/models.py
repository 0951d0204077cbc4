"""
Folio Event Store - Stored Event Model
======================================
One row per event, addressed by (stream_id, stream_position).
stream_position is 1-based; the stream version is its max.

RULES:
- Insert only. No updates, no deletes after persistence.
- (stream_id, stream_position) is unique. A concurrent writer
  that read the same version collides here and loses.
- Payload is JSON; the event class decides its shape.

This file contains NO business logic.
"""

import uuid

from django.db import models


class StoredEvent(models.Model):
    # ── Identity ──────────────────────────────────────────────
    event_id = models.UUIDField(
        unique=True,
        default=uuid.uuid4,
        editable=False,
        help_text="Unique event identifier.",
    )

    event_type = models.CharField(
        max_length=255,
        help_text="Namespaced, versioned type (e.g. hotel.guest_stay.checked_in.v1).",
    )

    # ── Stream addressing ─────────────────────────────────────
    stream_id = models.CharField(
        max_length=512,
        help_text="Aggregate stream, e.g. a guest stay account id.",
    )

    stream_position = models.PositiveIntegerField(
        help_text="1-based position of this event inside its stream.",
    )

    # ── Payload & Temporal ────────────────────────────────────
    payload = models.JSONField()

    recorded_at = models.DateTimeField(
        auto_now_add=True,
        help_text="When the store persisted this event.",
    )

    class Meta:
        db_table = "folio_event_store"
        ordering = ["stream_id", "stream_position"]
        constraints = [
            models.UniqueConstraint(
                fields=("stream_id", "stream_position"),
                name="uq_evt_stream_position",
            ),
        ]
        indexes = [
            models.Index(fields=["event_type"], name="idx_evt_type"),
        ]

    # ══════════════════════════════════════════════════════════
    # IMMUTABILITY GUARDS
    # ══════════════════════════════════════════════════════════

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise PermissionError(
                "Events are immutable. Cannot update a persisted event."
            )
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise PermissionError("Events are never deleted.")

    def __str__(self):
        return f"[{self.event_type}] {self.stream_id}#{self.stream_position}"
