"""
Guest Stay Engine - Account Identity
====================================
A guest stay account is addressed by (guest, room, check-in day).
The id is computed, never stored on its own: the same triple always
resolves to the same stream.

Parts are joined with '-'. A '-' (or '%') inside a guest or room id
is percent-escaped, so ("a-b", "c") and ("a", "b-c") stay distinct.
"""

from __future__ import annotations

from datetime import date, datetime

from core.time.dates import format_date_to_utc_yyyymmdd

ACCOUNT_ID_PREFIX = "guest_stay_account"
SEPARATOR = "-"


def _escape(part: str) -> str:
    return part.replace("%", "%25").replace(SEPARATOR, "%2D")


def to_guest_stay_account_id(
    guest_id: str,
    room_id: str,
    day: date | datetime,
) -> str:
    """
    guest_stay_account-{guest_id}-{room_id}-{YYYY-MM-DD}

    A timestamp is collapsed to its UTC calendar day first, so any
    moment of the check-in day maps to the same account.
    """
    if not guest_id or not isinstance(guest_id, str):
        raise ValueError("guest_id must be a non-empty string.")
    if not room_id or not isinstance(room_id, str):
        raise ValueError("room_id must be a non-empty string.")
    return SEPARATOR.join((
        ACCOUNT_ID_PREFIX,
        _escape(guest_id),
        _escape(room_id),
        format_date_to_utc_yyyymmdd(day),
    ))
