"""
Guest Stay Engine - Account State
=================================
State is never stored. It is rebuilt on every read by folding
the account's events through evolve(), starting at initial_state().

    NotOpened --GuestCheckedIn--> Opened(balance=0)
    Opened    --ChargeRecorded--> Opened(balance + amount)
    Opened    --PaymentRecorded-> Opened(balance - amount)
    Opened    --GuestCheckedOut-> CheckedOut   (terminal)
    Opened    --GuestCheckoutFailed-> Opened   (unchanged)
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from decimal import Decimal
from typing import ClassVar, Union

from engines.guest_stay.events import (
    ChargeRecorded,
    GuestCheckedIn,
    GuestCheckedOut,
    GuestCheckoutFailed,
    PaymentRecorded,
)

NOT_OPENED  = "NotOpened"
OPENED      = "Opened"
CHECKED_OUT = "CheckedOut"


@dataclass(frozen=True)
class NotOpened:
    status: ClassVar[str] = NOT_OPENED


@dataclass(frozen=True)
class Opened:
    balance: Decimal = Decimal("0")

    status: ClassVar[str] = OPENED

    def to_dict(self) -> dict:
        return {"status": self.status, "balance": str(self.balance)}


@dataclass(frozen=True)
class CheckedOut:
    status: ClassVar[str] = CHECKED_OUT


GuestStayAccountState = Union[NotOpened, Opened, CheckedOut]

_EVENT_CLASSES = (
    GuestCheckedIn, ChargeRecorded, PaymentRecorded,
    GuestCheckedOut, GuestCheckoutFailed,
)


def initial_state() -> GuestStayAccountState:
    return NotOpened()


def evolve(state: GuestStayAccountState, event) -> GuestStayAccountState:
    """
    Apply one event. Pure and total over legal histories.

    An event that does not apply to the current state (for example
    a second GuestCheckedIn on an Opened account) leaves the state
    as it was. Anything that is not a guest stay event or state
    raises TypeError.
    """
    if not isinstance(event, _EVENT_CLASSES):
        raise TypeError(f"Not a guest stay event: {type(event).__name__}")

    if isinstance(state, NotOpened):
        if isinstance(event, GuestCheckedIn):
            return Opened(balance=Decimal("0"))
        return state

    if isinstance(state, Opened):
        if isinstance(event, ChargeRecorded):
            return replace(state, balance=state.balance + event.amount)
        if isinstance(event, PaymentRecorded):
            return replace(state, balance=state.balance - event.amount)
        if isinstance(event, GuestCheckedOut):
            return CheckedOut()
        # GuestCheckoutFailed is recorded for audit only.
        return state

    if isinstance(state, CheckedOut):
        return state

    raise TypeError(f"Not a guest stay state: {type(state).__name__}")
