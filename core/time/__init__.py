"""
Folio Core Time - Public API
============================
Explicit clock protocol and calendar-day helpers.
Rule: NO datetime.now() in decision logic.
"""

from core.time.clock import (
    Clock,
    FixedClock,
    SystemClock,
)
from core.time.dates import (
    format_date_to_utc_yyyymmdd,
    parse_date_from_utc_yyyymmdd,
    to_utc_date,
)

__all__ = [
    "Clock",
    "FixedClock",
    "SystemClock",
    "to_utc_date",
    "format_date_to_utc_yyyymmdd",
    "parse_date_from_utc_yyyymmdd",
]
