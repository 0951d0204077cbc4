"""
Guest Stay Engine - Service Tests
=================================
GuestStayService over the in-memory store with a fixed clock.
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

from core.event_store import ConcurrencyConflict, InMemoryEventStore
from core.time.clock import FixedClock
from engines.guest_stay.errors import AlreadyClosed, AlreadyOpened, NotOpen, UnknownGuestStay
from engines.guest_stay.events import (
    ChargeRecorded,
    GuestCheckedIn,
    GuestCheckedOut,
    GuestCheckoutFailed,
    PaymentRecorded,
)
from engines.guest_stay.services import (
    GuestStayService,
    InMemoryStayRegistry,
    PermissiveStayRegistry,
)
from engines.guest_stay.state import CheckedOut, Opened

NOW = datetime(2026, 3, 10, 9, 0, tzinfo=timezone.utc)
DAY = date(2026, 3, 10)
GUEST = "guest1"
ROOM = "room12"
ACCOUNT = "guest_stay_account-guest1-room12-2026-03-10"


class RacingEventStore:
    """
    Wraps a real store. Before each of the first `races` appends,
    another writer lands an event on the same stream, so the
    caller's expected version is stale.
    """

    def __init__(self, inner, racing_event, races=1):
        self.inner = inner
        self.racing_event = racing_event
        self.races = races
        self.appends = 0

    def read_stream(self, stream_id):
        return self.inner.read_stream(stream_id)

    def append_to_stream(self, stream_id, events, expected_version=None):
        self.appends += 1
        if self.races > 0:
            self.races -= 1
            self.inner.append_to_stream(stream_id, [self.racing_event])
        return self.inner.append_to_stream(
            stream_id, events, expected_version=expected_version
        )


def make_service(store=None, registry=None, max_attempts=3):
    return GuestStayService(
        event_store=store if store is not None else InMemoryEventStore(),
        stay_registry=registry or InMemoryStayRegistry([(GUEST, ROOM, DAY)]),
        clock=FixedClock(NOW),
        max_attempts=max_attempts,
    )


# ══════════════════════════════════════════════════════════════
# CHECK IN
# ══════════════════════════════════════════════════════════════

class TestServiceCheckIn:
    def test_check_in_opens_account(self):
        service = make_service()
        result = service.check_in(GUEST, ROOM)

        assert result.guest_stay_account_id == ACCOUNT
        assert result.check_in_date == DAY
        assert isinstance(result.handled.last_event, GuestCheckedIn)
        assert result.handled.next_expected_version == 1
        assert service.get_open_account(ACCOUNT) == Opened(balance=Decimal("0"))

    def test_unknown_stay_refused_without_event(self):
        store = InMemoryEventStore()
        service = make_service(store=store, registry=InMemoryStayRegistry())

        with pytest.raises(UnknownGuestStay) as exc_info:
            service.check_in(GUEST, ROOM)

        assert exc_info.value.day == DAY
        assert store.stream_ids() == ()

    def test_registry_can_learn_stays(self):
        registry = InMemoryStayRegistry()
        registry.register(GUEST, ROOM, DAY)
        service = make_service(registry=registry)
        assert service.check_in(GUEST, ROOM).guest_stay_account_id == ACCOUNT

    def test_permissive_registry_accepts_anything(self):
        service = make_service(registry=PermissiveStayRegistry())
        result = service.check_in("walkin", "suite1")
        assert result.guest_stay_account_id.startswith("guest_stay_account-walkin-suite1-")

    def test_second_check_in_same_day_rejected(self):
        service = make_service()
        service.check_in(GUEST, ROOM)
        with pytest.raises(AlreadyOpened):
            service.check_in(GUEST, ROOM)
        assert service.event_store.read_stream(ACCOUNT).current_version == 1


# ══════════════════════════════════════════════════════════════
# CHARGES, PAYMENTS, CHECK OUT
# ══════════════════════════════════════════════════════════════

class TestServiceFolio:
    def test_charge_and_payment_update_balance(self):
        service = make_service()
        service.check_in(GUEST, ROOM)

        charged = service.record_charge(ACCOUNT, Decimal("120.00"))
        assert isinstance(charged.last_event, ChargeRecorded)
        assert charged.new_state == Opened(balance=Decimal("120.00"))

        paid = service.record_payment(ACCOUNT, Decimal("20.00"))
        assert isinstance(paid.last_event, PaymentRecorded)
        assert service.get_open_account(ACCOUNT).balance == Decimal("100.00")

    def test_charge_without_check_in_refused(self):
        store = InMemoryEventStore()
        service = make_service(store=store)
        with pytest.raises(NotOpen):
            service.record_charge(ACCOUNT, Decimal("10"))
        assert store.read_stream(ACCOUNT).current_version == 0

    def test_settled_checkout(self):
        service = make_service()
        service.check_in(GUEST, ROOM)
        service.record_charge(ACCOUNT, Decimal("100"))
        service.record_payment(ACCOUNT, Decimal("100"))

        result = service.check_out(ACCOUNT)

        assert result.checked_out
        assert isinstance(result.event, GuestCheckedOut)
        assert result.handled.new_state == CheckedOut()
        assert service.get_open_account(ACCOUNT) is None

    def test_unsettled_checkout_is_recorded(self):
        service = make_service()
        service.check_in(GUEST, ROOM)
        service.record_charge(ACCOUNT, Decimal("50"))

        result = service.check_out(ACCOUNT)

        assert not result.checked_out
        assert isinstance(result.event, GuestCheckoutFailed)
        assert service.event_store.read_stream(ACCOUNT).current_version == 3
        assert service.get_open_account(ACCOUNT).balance == Decimal("50")

    def test_closed_account_refuses_payment(self):
        service = make_service()
        service.check_in(GUEST, ROOM)
        service.check_out(ACCOUNT)
        with pytest.raises(AlreadyClosed):
            service.record_payment(ACCOUNT, Decimal("10"))

    def test_unknown_account_reads_as_none(self):
        assert make_service().get_open_account("guest_stay_account-x-y-2026-01-01") is None


# ══════════════════════════════════════════════════════════════
# CONCURRENCY
# ══════════════════════════════════════════════════════════════

class TestServiceConcurrency:
    def _opened_store(self):
        store = InMemoryEventStore()
        make_service(store=store).check_in(GUEST, ROOM)
        return store

    def test_stale_checkout_decides_again_on_fresh_state(self):
        store = self._opened_store()
        late_charge = ChargeRecorded(ACCOUNT, Decimal("15"), NOW)
        racing = RacingEventStore(store, late_charge, races=1)
        service = make_service(store=racing)

        result = service.check_out(ACCOUNT)

        assert result.handled.attempts == 2
        assert isinstance(result.event, GuestCheckoutFailed)
        assert service.get_open_account(ACCOUNT).balance == Decimal("15")

    def test_conflict_raised_once_attempts_exhausted(self):
        store = self._opened_store()
        late_charge = ChargeRecorded(ACCOUNT, Decimal("1"), NOW)
        racing = RacingEventStore(store, late_charge, races=5)
        service = make_service(store=racing, max_attempts=2)

        with pytest.raises(ConcurrencyConflict):
            service.record_payment(ACCOUNT, Decimal("1"))

        assert racing.appends == 2
        assert store.read_stream(ACCOUNT).current_version == 3
