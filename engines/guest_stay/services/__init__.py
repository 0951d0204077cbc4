"""Guest Stay Engine - Service (read, decide, append)"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional, Protocol, Tuple

from core.commands.handler import CommandHandler, CommandHandlerResult
from core.event_store.contracts import EventStore
from core.replay.stream_replayer import aggregate_stream
from core.time.clock import Clock
from core.time.dates import to_utc_date
from engines.guest_stay.account_id import to_guest_stay_account_id
from engines.guest_stay.commands import CheckIn, CheckOut, RecordCharge, RecordPayment
from engines.guest_stay.decider import check_in, check_out, record_charge, record_payment
from engines.guest_stay.errors import UnknownGuestStay
from engines.guest_stay.events import GuestCheckedOut
from engines.guest_stay.state import Opened, evolve, initial_state

logger = logging.getLogger("folio.guest_stay")


# ══════════════════════════════════════════════════════════════
# EXISTENCE ORACLE (reservation system boundary)
# ══════════════════════════════════════════════════════════════

class StayRegistry(Protocol):
    def exists(self, guest_id: str, room_id: str, day: date) -> bool:
        ...  # pragma: no cover


class InMemoryStayRegistry:
    """Known (guest, room, day) stays, e.g. loaded from reservations."""

    def __init__(self, stays: Iterable[Tuple[str, str, date]] = ()):
        self._stays = set(stays)

    def register(self, guest_id: str, room_id: str, day: date) -> None:
        self._stays.add((guest_id, room_id, day))

    def exists(self, guest_id: str, room_id: str, day: date) -> bool:
        return (guest_id, room_id, day) in self._stays


class PermissiveStayRegistry:
    """Dev oracle: every stay exists."""

    def exists(self, guest_id: str, room_id: str, day: date) -> bool:
        return True


# ══════════════════════════════════════════════════════════════
# RESULTS
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class CheckInResult:
    guest_stay_account_id: str
    check_in_date: date
    handled: CommandHandlerResult


@dataclass(frozen=True)
class CheckOutResult:
    handled: CommandHandlerResult

    @property
    def checked_out(self) -> bool:
        return isinstance(self.handled.last_event, GuestCheckedOut)

    @property
    def event(self):
        return self.handled.last_event


# ══════════════════════════════════════════════════════════════
# SERVICE
# ══════════════════════════════════════════════════════════════

class GuestStayService:
    """
    Glue between the pure decider and its collaborators.

    Inputs are assumed valid (validated at the HTTP boundary).
    Decider errors propagate unchanged; store conflicts are
    retried by the command handler and re-raised when exhausted.
    """

    def __init__(
        self,
        *,
        event_store: EventStore,
        stay_registry: StayRegistry,
        clock: Clock,
        max_attempts: int = 3,
    ):
        self._store = event_store
        self._stays = stay_registry
        self._clock = clock
        self._handler = CommandHandler(
            evolve, initial_state, max_attempts=max_attempts
        )

    @property
    def event_store(self) -> EventStore:
        return self._store

    @property
    def stay_registry(self) -> StayRegistry:
        return self._stays

    def check_in(self, guest_id: str, room_id: str) -> CheckInResult:
        now = self._clock.now_utc()
        day = to_utc_date(now)

        if not self._stays.exists(guest_id, room_id, day):
            logger.info(
                f"Check-in refused: no stay for guest {guest_id} "
                f"room {room_id} on {day}"
            )
            raise UnknownGuestStay(guest_id, room_id, day)

        account_id = to_guest_stay_account_id(guest_id, room_id, day)
        command = CheckIn(guest_id=guest_id, room_id=room_id, now=now)
        handled = self._handler.handle(
            self._store, account_id, lambda state: check_in(command, state)
        )
        return CheckInResult(
            guest_stay_account_id=account_id,
            check_in_date=day,
            handled=handled,
        )

    def record_charge(self, account_id: str, amount: Decimal) -> CommandHandlerResult:
        command = RecordCharge(
            guest_stay_account_id=account_id,
            amount=amount,
            now=self._clock.now_utc(),
        )
        return self._handler.handle(
            self._store, account_id, lambda state: record_charge(command, state)
        )

    def record_payment(self, account_id: str, amount: Decimal) -> CommandHandlerResult:
        command = RecordPayment(
            guest_stay_account_id=account_id,
            amount=amount,
            now=self._clock.now_utc(),
        )
        return self._handler.handle(
            self._store, account_id, lambda state: record_payment(command, state)
        )

    def check_out(self, account_id: str) -> CheckOutResult:
        command = CheckOut(guest_stay_account_id=account_id, now=self._clock.now_utc())
        result = CheckOutResult(
            handled=self._handler.handle(
                self._store, account_id, lambda state: check_out(command, state)
            )
        )
        if not result.checked_out:
            logger.info(f"Checkout rejected for {account_id}: {result.event.reason}")
        return result

    def get_open_account(self, account_id: str) -> Optional[Opened]:
        """Current state if the account is open, else None."""
        result = aggregate_stream(
            self._store, account_id, evolve=evolve, initial_state=initial_state
        )
        if result is None or not isinstance(result.state, Opened):
            return None
        return result.state
