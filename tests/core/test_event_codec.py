"""
Tests for EventCodec and the guest stay event registry.
"""

from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

from core.event_store import EventCodec, UnknownEventType
from engines.guest_stay.events import (
    GUEST_STAY_EVENT_CODEC,
    GUEST_STAY_EVENT_TYPES,
    ChargeRecorded,
    GuestCheckedIn,
    GuestCheckoutFailed,
)

NOW = datetime(2025, 4, 2, 15, 45, tzinfo=timezone.utc)
ACCOUNT = "guest_stay_account-g-r-2025-04-02"


class Untyped:
    pass


class TestEventCodecRegistry:
    def test_guest_stay_types_registered(self):
        assert GUEST_STAY_EVENT_CODEC.event_types == frozenset(GUEST_STAY_EVENT_TYPES)

    def test_class_without_event_type_rejected(self):
        with pytest.raises(ValueError, match="no EVENT_TYPE"):
            EventCodec([Untyped])

    def test_duplicate_type_rejected(self):
        with pytest.raises(ValueError, match="Duplicate"):
            EventCodec([ChargeRecorded, ChargeRecorded])

    def test_unregistered_event_cannot_be_encoded(self):
        codec = EventCodec([ChargeRecorded])
        event = GuestCheckoutFailed(ACCOUNT, "balance not settled", NOW)
        with pytest.raises(UnknownEventType):
            codec.encode(event)

    def test_unknown_type_cannot_be_decoded(self):
        with pytest.raises(UnknownEventType) as exc_info:
            GUEST_STAY_EVENT_CODEC.decode("hotel.guest_stay.teleported.v1", {})
        assert exc_info.value.event_type == "hotel.guest_stay.teleported.v1"


class TestGuestStayPayloads:
    def test_amount_is_stored_as_exact_string(self):
        event_type, payload = GUEST_STAY_EVENT_CODEC.encode(
            ChargeRecorded(ACCOUNT, Decimal("19.90"), NOW)
        )
        assert event_type == "hotel.guest_stay.charge_recorded.v1"
        assert payload["amount"] == "19.90"
        assert payload["recorded_at"] == "2025-04-02T15:45:00+00:00"

    def test_check_in_survives_encoding(self):
        event = GuestCheckedIn(
            guest_stay_account_id=ACCOUNT,
            guest_id="g",
            room_id="r",
            check_in_date=date(2025, 4, 2),
            checked_in_at=NOW,
        )
        event_type, payload = GUEST_STAY_EVENT_CODEC.encode(event)
        assert payload["check_in_date"] == "2025-04-02"
        assert GUEST_STAY_EVENT_CODEC.decode(event_type, payload) == event
