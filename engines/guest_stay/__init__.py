"""
Guest Stay Engine
=================
Event-sourced folio for one guest stay: check in, record charges
and payments, check out only when the balance is settled.

Pure core:  state.initial_state, state.evolve, decider.*
Boundary:   services.GuestStayService
"""

from engines.guest_stay.account_id import to_guest_stay_account_id
from engines.guest_stay.decider import (
    check_in,
    check_out,
    decide,
    record_charge,
    record_payment,
)
from engines.guest_stay.state import (
    CheckedOut,
    GuestStayAccountState,
    NotOpened,
    Opened,
    evolve,
    initial_state,
)

__all__ = [
    "to_guest_stay_account_id",
    "initial_state",
    "evolve",
    "check_in",
    "record_charge",
    "record_payment",
    "check_out",
    "decide",
    "NotOpened",
    "Opened",
    "CheckedOut",
    "GuestStayAccountState",
]
