"""
Tests for CommandHandler - read, decide, append with bounded retry.
"""

from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

from core.commands import CommandHandler, InvalidDecision
from core.event_store import ConcurrencyConflict, InMemoryEventStore
from core.replay import aggregate_stream, replay_events
from engines.guest_stay.errors import NotOpen
from engines.guest_stay.events import ChargeRecorded, GuestCheckedIn, PaymentRecorded
from engines.guest_stay.state import NotOpened, Opened, evolve, initial_state

NOW = datetime(2025, 7, 1, 8, 0, tzinfo=timezone.utc)
STREAM = "guest_stay_account-g-r-2025-07-01"


class ConflictingStore:
    """Raises ConcurrencyConflict for the first `conflicts` appends."""

    def __init__(self, conflicts):
        self.inner = InMemoryEventStore()
        self.conflicts = conflicts
        self.reads = 0
        self.appends = 0

    def read_stream(self, stream_id):
        self.reads += 1
        return self.inner.read_stream(stream_id)

    def append_to_stream(self, stream_id, events, expected_version=None):
        self.appends += 1
        if self.conflicts > 0:
            self.conflicts -= 1
            raise ConcurrencyConflict(stream_id, expected_version, expected_version + 1)
        return self.inner.append_to_stream(stream_id, events, expected_version)


def charge(amount):
    return ChargeRecorded(STREAM, Decimal(amount), NOW)


def make_handler(max_attempts=3):
    return CommandHandler(evolve, initial_state, max_attempts=max_attempts)


def counting(decision):
    calls = []

    def decide(state):
        calls.append(state)
        return decision(state)

    return decide, calls


class TestCommandHandlerHappyPath:
    def test_single_event_is_appended_and_folded(self):
        store = InMemoryEventStore()
        store.append_to_stream(STREAM, [charge("1")])

        result = make_handler().handle(store, STREAM, lambda state: charge("5"))

        assert result.new_events == (charge("5"),)
        assert result.last_event == charge("5")
        assert result.next_expected_version == 2
        assert result.attempts == 1

    def test_decide_sees_replayed_state(self):
        store = InMemoryEventStore()
        seen = []
        make_handler().handle(store, STREAM, lambda state: seen.append(state) or charge("1"))
        assert seen == [NotOpened()]

    def test_sequence_of_events_is_one_batch(self):
        store = InMemoryEventStore()
        result = make_handler().handle(
            store, STREAM, lambda state: [charge("3"), PaymentRecorded(STREAM, Decimal("1"), NOW)]
        )
        assert len(result.new_events) == 2
        assert store.read_stream(STREAM).current_version == 2

    def test_empty_decision_appends_nothing(self):
        store = InMemoryEventStore()
        result = make_handler().handle(store, STREAM, lambda state: [])
        assert result.new_events == ()
        assert result.last_event is None
        assert store.stream_ids() == ()

    @pytest.mark.parametrize("bad", [None, "ChargeRecorded", b"x", {"amount": 1}])
    def test_non_event_decision_rejected(self, bad):
        with pytest.raises(InvalidDecision):
            make_handler().handle(InMemoryEventStore(), STREAM, lambda state: bad)


class TestCommandHandlerFoldBeforeAppend:
    def test_batch_evolve_rejects_is_not_stored(self):
        def strict_evolve(state, event):
            if event == "unfoldable":
                raise ArithmeticError("cannot apply")
            return state

        store = InMemoryEventStore()
        handler = CommandHandler(strict_evolve, lambda: 0)

        with pytest.raises(ArithmeticError):
            handler.handle(store, STREAM, lambda state: ["ok", "unfoldable"])

        assert store.read_stream(STREAM).current_version == 0

    def test_stream_stays_readable_after_rejected_batch(self):
        store = InMemoryEventStore()
        opened = GuestCheckedIn(STREAM, "g", "r", date(2025, 7, 1), NOW)
        store.append_to_stream(STREAM, [opened])

        def exploding_evolve(state, event):
            if isinstance(event, ChargeRecorded):
                raise ArithmeticError("overflow")
            return evolve(state, event)

        handler = CommandHandler(exploding_evolve, initial_state)
        with pytest.raises(ArithmeticError):
            handler.handle(store, STREAM, lambda state: charge("5"))

        result = aggregate_stream(store, STREAM, evolve=evolve, initial_state=initial_state)
        assert result.state == Opened(balance=Decimal("0"))
        assert result.current_version == 1


class TestCommandHandlerRetry:
    def test_conflict_is_retried_from_a_fresh_read(self):
        store = ConflictingStore(conflicts=2)
        decide, calls = counting(lambda state: charge("10"))

        result = make_handler(max_attempts=3).handle(store, STREAM, decide)

        assert result.attempts == 3
        assert len(calls) == 3
        assert store.reads == 3
        assert store.inner.read_stream(STREAM).current_version == 1

    def test_exhausted_attempts_reraise_last_conflict(self):
        store = ConflictingStore(conflicts=10)
        with pytest.raises(ConcurrencyConflict):
            make_handler(max_attempts=3).handle(store, STREAM, lambda state: charge("10"))
        assert store.appends == 3
        assert store.inner.stream_ids() == ()

    def test_decider_errors_are_not_retried(self):
        store = ConflictingStore(conflicts=0)

        def refuse(state):
            raise NotOpen(STREAM)

        decide, calls = counting(refuse)
        with pytest.raises(NotOpen):
            make_handler().handle(store, STREAM, decide)
        assert len(calls) == 1
        assert store.appends == 0

    @pytest.mark.parametrize("attempts", [0, -1, "3"])
    def test_max_attempts_must_be_positive(self, attempts):
        with pytest.raises(ValueError, match="max_attempts"):
            CommandHandler(evolve, initial_state, max_attempts=attempts)


class TestReplay:
    def test_replay_events_folds_from_initial_state(self):
        opened = GuestCheckedIn(STREAM, "g", "r", date(2025, 7, 1), NOW)
        state = replay_events([opened, charge("8"), charge("2")], evolve, initial_state)
        assert state == Opened(balance=Decimal("10"))

    def test_aggregate_stream_missing_is_none(self):
        result = aggregate_stream(
            InMemoryEventStore(), STREAM, evolve=evolve, initial_state=initial_state
        )
        assert result is None

    def test_aggregate_stream_reports_version(self):
        store = InMemoryEventStore()
        store.append_to_stream(STREAM, [charge("1"), charge("2")])
        result = aggregate_stream(store, STREAM, evolve=evolve, initial_state=initial_state)
        assert result.current_version == 2
        assert result.state == NotOpened()
