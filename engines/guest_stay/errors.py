"""
Guest Stay Engine - Errors
==========================
Precondition failures: the command does not fit the account's
current state. No event is produced.

A checkout refused for an unsettled balance is NOT an error;
it is a GuestCheckoutFailed event.

    GuestStayError
    ├── PreconditionError
    │   ├── NotOpen
    │   │   └── AlreadyClosed
    │   └── AlreadyOpened
    └── UnknownGuestStay
"""

from __future__ import annotations


class GuestStayError(Exception):
    """Base error for the guest stay engine."""
    pass


class PreconditionError(GuestStayError):
    """Command invoked against a state that does not permit it."""

    code = "PRECONDITION_FAILED"

    def __init__(self, guest_stay_account_id: str, message: str):
        self.guest_stay_account_id = guest_stay_account_id
        super().__init__(message)


class NotOpen(PreconditionError):
    code = "GUEST_STAY_NOT_OPEN"

    def __init__(self, guest_stay_account_id: str, message: str | None = None):
        super().__init__(
            guest_stay_account_id,
            message or f"Guest stay account '{guest_stay_account_id}' is not open.",
        )


class AlreadyClosed(NotOpen):
    """Account is checked out. Terminal: every command is refused."""

    code = "GUEST_STAY_ALREADY_CLOSED"

    def __init__(self, guest_stay_account_id: str):
        super().__init__(
            guest_stay_account_id,
            f"Guest stay account '{guest_stay_account_id}' is already checked out.",
        )


class AlreadyOpened(PreconditionError):
    code = "GUEST_STAY_ALREADY_OPENED"

    def __init__(self, guest_stay_account_id: str):
        super().__init__(
            guest_stay_account_id,
            f"Guest stay account '{guest_stay_account_id}' is already checked in.",
        )


class UnknownGuestStay(GuestStayError):
    """Reservation system has no such stay; check-in is refused."""

    code = "GUEST_STAY_UNKNOWN"

    def __init__(self, guest_id: str, room_id: str, day):
        self.guest_id = guest_id
        self.room_id = room_id
        self.day = day
        super().__init__(
            f"No stay found for guest '{guest_id}' in room '{room_id}' on {day}."
        )
