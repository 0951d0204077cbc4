"""
Tests for the Django-backed event store.

Runs against the configured test database; the same contract
as the in-memory backend, plus row immutability.
"""

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from core.event_store import ConcurrencyConflict
from core.event_store.models import StoredEvent
from core.event_store.persistence import DjangoEventStore, get_stream_version, repository
from core.time.clock import FixedClock
from engines.guest_stay.errors import AlreadyClosed
from engines.guest_stay.events import (
    GUEST_STAY_EVENT_CODEC,
    ChargeRecorded,
    GuestCheckedOut,
    GuestCheckoutFailed,
    PaymentRecorded,
)
from engines.guest_stay.services import GuestStayService, PermissiveStayRegistry

pytestmark = pytest.mark.django_db(transaction=True)

NOW = datetime(2025, 5, 20, 10, 0, tzinfo=timezone.utc)
STREAM = "guest_stay_account-g-9-r-4-2025-05-20"


def make_store():
    return DjangoEventStore(GUEST_STAY_EVENT_CODEC)


class TestDjangoEventStore:
    def test_empty_stream(self):
        read = make_store().read_stream(STREAM)
        assert read.events == ()
        assert read.current_version == 0
        assert get_stream_version(STREAM) == 0

    def test_append_and_read_back_decoded_events(self):
        store = make_store()
        events = [
            ChargeRecorded(STREAM, Decimal("42.10"), NOW),
            PaymentRecorded(STREAM, Decimal("2.10"), NOW),
        ]

        result = store.append_to_stream(STREAM, events, expected_version=0)

        assert result.created_new_stream
        assert result.next_expected_version == 2
        read = store.read_stream(STREAM)
        assert read.events == tuple(events)
        assert read.current_version == 2

    def test_rows_are_positioned_and_typed(self):
        store = make_store()
        store.append_to_stream(STREAM, [ChargeRecorded(STREAM, Decimal("5"), NOW)])
        store.append_to_stream(STREAM, [GuestCheckedOut(STREAM, NOW)])

        rows = list(
            StoredEvent.objects.filter(stream_id=STREAM)
            .order_by("stream_position")
            .values_list("stream_position", "event_type")
        )
        assert rows == [
            (1, "hotel.guest_stay.charge_recorded.v1"),
            (2, "hotel.guest_stay.checked_out.v1"),
        ]

    def test_stale_expected_version_conflicts(self):
        store = make_store()
        store.append_to_stream(STREAM, [ChargeRecorded(STREAM, Decimal("5"), NOW)])

        with pytest.raises(ConcurrencyConflict) as exc_info:
            store.append_to_stream(
                STREAM,
                [PaymentRecorded(STREAM, Decimal("5"), NOW)],
                expected_version=0,
            )

        assert exc_info.value.actual_version == 1
        assert StoredEvent.objects.filter(stream_id=STREAM).count() == 1

    def test_empty_batch_rejected(self):
        with pytest.raises(ValueError):
            make_store().append_to_stream(STREAM, [])

    def test_position_race_surfaces_as_conflict(self, monkeypatch):
        store = make_store()
        store.append_to_stream(STREAM, [ChargeRecorded(STREAM, Decimal("5"), NOW)])

        # A writer that read the head before the row above landed.
        monkeypatch.setattr(repository, "get_stream_version", lambda stream_id: 0)

        with pytest.raises(ConcurrencyConflict) as exc_info:
            store.append_to_stream(
                STREAM,
                [PaymentRecorded(STREAM, Decimal("5"), NOW)],
                expected_version=0,
            )

        assert exc_info.value.stream_id == STREAM
        assert StoredEvent.objects.filter(stream_id=STREAM).count() == 1


class TestStoredEventImmutability:
    def _one_row(self):
        make_store().append_to_stream(STREAM, [ChargeRecorded(STREAM, Decimal("1"), NOW)])
        return StoredEvent.objects.get(stream_id=STREAM)

    def test_update_refused(self):
        row = self._one_row()
        row.event_type = "tampered"
        with pytest.raises(PermissionError, match="immutable"):
            row.save()

    def test_delete_refused(self):
        row = self._one_row()
        with pytest.raises(PermissionError):
            row.delete()
        assert StoredEvent.objects.filter(stream_id=STREAM).exists()


class TestGuestStayOverDjangoStore:
    def _service(self):
        return GuestStayService(
            event_store=make_store(),
            stay_registry=PermissiveStayRegistry(),
            clock=FixedClock(NOW),
        )

    def test_settled_stay_checks_out(self):
        service = self._service()
        account = service.check_in("g9", "r4").guest_stay_account_id
        service.record_charge(account, Decimal("100.00"))
        service.record_payment(account, Decimal("100.00"))

        assert service.check_out(account).checked_out
        assert service.get_open_account(account) is None
        with pytest.raises(AlreadyClosed):
            service.record_payment(account, Decimal("1.00"))
        assert get_stream_version(account) == 4

    def test_unsettled_stay_records_rejection(self):
        service = self._service()
        account = service.check_in("g9", "r4").guest_stay_account_id
        service.record_charge(account, Decimal("50.00"))

        result = service.check_out(account)

        assert isinstance(result.event, GuestCheckoutFailed)
        assert service.get_open_account(account).balance == Decimal("50.00")
        assert list(
            StoredEvent.objects.filter(stream_id=account)
            .order_by("stream_position")
            .values_list("event_type", flat=True)
        ) == [
            "hotel.guest_stay.checked_in.v1",
            "hotel.guest_stay.charge_recorded.v1",
            "hotel.guest_stay.checkout_failed.v1",
        ]
