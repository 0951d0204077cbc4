"""
Guest Stay Engine - Decider
===========================
One pure decision function per command:

    (command, state) -> event        success
    (command, state) -> raise        precondition failure, no event

No I/O, no clock reads, no balance mutation. Time comes in on
the command (`now`); state changes only through evolve().

The one real rule lives in check_out(): a guest may leave only
when the folio nets to exactly zero. Otherwise the refusal is
itself recorded as GuestCheckoutFailed.
"""

from __future__ import annotations

from core.time.dates import to_utc_date
from engines.guest_stay.account_id import to_guest_stay_account_id
from engines.guest_stay.commands import CheckIn, CheckOut, RecordCharge, RecordPayment
from engines.guest_stay.errors import AlreadyClosed, AlreadyOpened, NotOpen
from engines.guest_stay.events import (
    BALANCE_NOT_SETTLED,
    ChargeRecorded,
    GuestCheckedIn,
    GuestCheckedOut,
    GuestCheckoutFailed,
    PaymentRecorded,
)
from engines.guest_stay.state import (
    CheckedOut,
    GuestStayAccountState,
    NotOpened,
    Opened,
)


def _require_opened(account_id: str, state: GuestStayAccountState) -> Opened:
    if isinstance(state, Opened):
        return state
    if isinstance(state, CheckedOut):
        raise AlreadyClosed(account_id)
    if isinstance(state, NotOpened):
        raise NotOpen(account_id)
    raise TypeError(f"Not a guest stay state: {type(state).__name__}")


def check_in(command: CheckIn, state: GuestStayAccountState) -> GuestCheckedIn:
    day = to_utc_date(command.now)
    account_id = to_guest_stay_account_id(command.guest_id, command.room_id, day)

    if isinstance(state, Opened):
        raise AlreadyOpened(account_id)
    if isinstance(state, CheckedOut):
        raise AlreadyClosed(account_id)
    if not isinstance(state, NotOpened):
        raise TypeError(f"Not a guest stay state: {type(state).__name__}")

    return GuestCheckedIn(
        guest_stay_account_id=account_id,
        guest_id=command.guest_id,
        room_id=command.room_id,
        check_in_date=day,
        checked_in_at=command.now,
    )


def record_charge(command: RecordCharge, state: GuestStayAccountState) -> ChargeRecorded:
    _require_opened(command.guest_stay_account_id, state)
    return ChargeRecorded(
        guest_stay_account_id=command.guest_stay_account_id,
        amount=command.amount,
        recorded_at=command.now,
    )


def record_payment(command: RecordPayment, state: GuestStayAccountState) -> PaymentRecorded:
    _require_opened(command.guest_stay_account_id, state)
    return PaymentRecorded(
        guest_stay_account_id=command.guest_stay_account_id,
        amount=command.amount,
        recorded_at=command.now,
    )


def check_out(
    command: CheckOut, state: GuestStayAccountState
) -> GuestCheckedOut | GuestCheckoutFailed:
    opened = _require_opened(command.guest_stay_account_id, state)

    if opened.balance != 0:
        return GuestCheckoutFailed(
            guest_stay_account_id=command.guest_stay_account_id,
            reason=BALANCE_NOT_SETTLED,
            attempted_at=command.now,
        )

    return GuestCheckedOut(
        guest_stay_account_id=command.guest_stay_account_id,
        checked_out_at=command.now,
    )


_DECISIONS = {
    CheckIn:       check_in,
    RecordCharge:  record_charge,
    RecordPayment: record_payment,
    CheckOut:      check_out,
}


def decide(command, state: GuestStayAccountState):
    """Route a command to its decision function."""
    decision = _DECISIONS.get(type(command))
    if decision is None:
        raise TypeError(f"Unknown guest stay command: {type(command).__name__}")
    return decision(command, state)
