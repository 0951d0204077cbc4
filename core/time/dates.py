"""
Folio Core Time - Calendar Day Helpers
======================================
A guest stay is keyed by the UTC calendar day of check-in.
The wire form of that day is always YYYY-MM-DD.
"""

from __future__ import annotations

import re
from datetime import date, datetime, timezone

from core.validation.errors import ValidationError

_YYYY_MM_DD = re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII)


def to_utc_date(value: datetime | date) -> date:
    """Collapse a timestamp to its UTC calendar day. Dates pass through."""
    if isinstance(value, datetime):
        if value.tzinfo is None:
            raise ValueError("Timestamp must be timezone-aware.")
        return value.astimezone(timezone.utc).date()
    if isinstance(value, date):
        return value
    raise TypeError(f"Expected date or datetime, got {type(value).__name__}.")


def format_date_to_utc_yyyymmdd(value: datetime | date) -> str:
    return to_utc_date(value).isoformat()


def parse_date_from_utc_yyyymmdd(value: str) -> date:
    """
    Parse a strict YYYY-MM-DD string.

    Raises ValidationError on any other shape or on an
    impossible calendar day (e.g. 2025-02-30).
    """
    if not isinstance(value, str) or not _YYYY_MM_DD.fullmatch(value):
        raise ValidationError(
            f"Date '{value}' must be in YYYY-MM-DD form.",
            field="date",
        )
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise ValidationError(
            f"Date '{value}' is not a valid calendar date.",
            field="date",
        ) from exc
