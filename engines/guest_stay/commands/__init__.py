"""Guest Stay Engine - Request Commands"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal


def _require_aware(now: datetime) -> None:
    if not isinstance(now, datetime) or now.tzinfo is None:
        raise ValueError("now must be a timezone-aware datetime.")


def _require_positive(amount: Decimal) -> None:
    if not isinstance(amount, Decimal) or not amount.is_finite() or amount <= 0:
        raise ValueError("amount must be a positive Decimal.")


@dataclass(frozen=True)
class CheckIn:
    guest_id: str
    room_id:  str
    now:      datetime

    def __post_init__(self):
        if not self.guest_id: raise ValueError("guest_id must be non-empty.")
        if not self.room_id:  raise ValueError("room_id must be non-empty.")
        _require_aware(self.now)


@dataclass(frozen=True)
class RecordCharge:
    guest_stay_account_id: str
    amount:                Decimal
    now:                   datetime

    def __post_init__(self):
        if not self.guest_stay_account_id:
            raise ValueError("guest_stay_account_id must be non-empty.")
        _require_positive(self.amount)
        _require_aware(self.now)


@dataclass(frozen=True)
class RecordPayment:
    guest_stay_account_id: str
    amount:                Decimal
    now:                   datetime

    def __post_init__(self):
        if not self.guest_stay_account_id:
            raise ValueError("guest_stay_account_id must be non-empty.")
        _require_positive(self.amount)
        _require_aware(self.now)


@dataclass(frozen=True)
class CheckOut:
    guest_stay_account_id: str
    now:                   datetime

    def __post_init__(self):
        if not self.guest_stay_account_id:
            raise ValueError("guest_stay_account_id must be non-empty.")
        _require_aware(self.now)

