"""
Guest Stay Engine - Event Types
===============================
Engine: guest_stay
Scope:  One guest's folio for one stay, from check-in until the
        balance is settled and the guest checks out.

Events are immutable facts. GuestCheckoutFailed is a fact too:
a refused checkout is recorded, it does not move money.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import ClassVar

from core.event_store.codec import EventCodec

GUEST_CHECKED_IN_V1       = "hotel.guest_stay.checked_in.v1"
CHARGE_RECORDED_V1        = "hotel.guest_stay.charge_recorded.v1"
PAYMENT_RECORDED_V1       = "hotel.guest_stay.payment_recorded.v1"
GUEST_CHECKED_OUT_V1      = "hotel.guest_stay.checked_out.v1"
GUEST_CHECKOUT_FAILED_V1  = "hotel.guest_stay.checkout_failed.v1"

GUEST_STAY_EVENT_TYPES = (
    GUEST_CHECKED_IN_V1, CHARGE_RECORDED_V1, PAYMENT_RECORDED_V1,
    GUEST_CHECKED_OUT_V1, GUEST_CHECKOUT_FAILED_V1,
)

BALANCE_NOT_SETTLED = "balance not settled"


def _ts(value: str) -> datetime:
    return datetime.fromisoformat(value)


@dataclass(frozen=True)
class GuestCheckedIn:
    EVENT_TYPE: ClassVar[str] = GUEST_CHECKED_IN_V1

    guest_stay_account_id: str
    guest_id: str
    room_id: str
    check_in_date: date
    checked_in_at: datetime

    def to_payload(self) -> dict:
        return {
            "guest_stay_account_id": self.guest_stay_account_id,
            "guest_id":              self.guest_id,
            "room_id":               self.room_id,
            "check_in_date":         self.check_in_date.isoformat(),
            "checked_in_at":         self.checked_in_at.isoformat(),
        }

    @classmethod
    def from_payload(cls, p: dict) -> "GuestCheckedIn":
        return cls(
            guest_stay_account_id=p["guest_stay_account_id"],
            guest_id=p["guest_id"],
            room_id=p["room_id"],
            check_in_date=date.fromisoformat(p["check_in_date"]),
            checked_in_at=_ts(p["checked_in_at"]),
        )


@dataclass(frozen=True)
class ChargeRecorded:
    EVENT_TYPE: ClassVar[str] = CHARGE_RECORDED_V1

    guest_stay_account_id: str
    amount: Decimal
    recorded_at: datetime

    def to_payload(self) -> dict:
        return {
            "guest_stay_account_id": self.guest_stay_account_id,
            "amount":                str(self.amount),
            "recorded_at":           self.recorded_at.isoformat(),
        }

    @classmethod
    def from_payload(cls, p: dict) -> "ChargeRecorded":
        return cls(
            guest_stay_account_id=p["guest_stay_account_id"],
            amount=Decimal(p["amount"]),
            recorded_at=_ts(p["recorded_at"]),
        )


@dataclass(frozen=True)
class PaymentRecorded:
    EVENT_TYPE: ClassVar[str] = PAYMENT_RECORDED_V1

    guest_stay_account_id: str
    amount: Decimal
    recorded_at: datetime

    def to_payload(self) -> dict:
        return {
            "guest_stay_account_id": self.guest_stay_account_id,
            "amount":                str(self.amount),
            "recorded_at":           self.recorded_at.isoformat(),
        }

    @classmethod
    def from_payload(cls, p: dict) -> "PaymentRecorded":
        return cls(
            guest_stay_account_id=p["guest_stay_account_id"],
            amount=Decimal(p["amount"]),
            recorded_at=_ts(p["recorded_at"]),
        )


@dataclass(frozen=True)
class GuestCheckedOut:
    EVENT_TYPE: ClassVar[str] = GUEST_CHECKED_OUT_V1

    guest_stay_account_id: str
    checked_out_at: datetime

    def to_payload(self) -> dict:
        return {
            "guest_stay_account_id": self.guest_stay_account_id,
            "checked_out_at":        self.checked_out_at.isoformat(),
        }

    @classmethod
    def from_payload(cls, p: dict) -> "GuestCheckedOut":
        return cls(
            guest_stay_account_id=p["guest_stay_account_id"],
            checked_out_at=_ts(p["checked_out_at"]),
        )


@dataclass(frozen=True)
class GuestCheckoutFailed:
    EVENT_TYPE: ClassVar[str] = GUEST_CHECKOUT_FAILED_V1

    guest_stay_account_id: str
    reason: str
    attempted_at: datetime

    def to_payload(self) -> dict:
        return {
            "guest_stay_account_id": self.guest_stay_account_id,
            "reason":                self.reason,
            "attempted_at":          self.attempted_at.isoformat(),
        }

    @classmethod
    def from_payload(cls, p: dict) -> "GuestCheckoutFailed":
        return cls(
            guest_stay_account_id=p["guest_stay_account_id"],
            reason=p["reason"],
            attempted_at=_ts(p["attempted_at"]),
        )


GUEST_STAY_EVENT_CLASSES = (
    GuestCheckedIn, ChargeRecorded, PaymentRecorded,
    GuestCheckedOut, GuestCheckoutFailed,
)

GUEST_STAY_EVENT_CODEC = EventCodec(GUEST_STAY_EVENT_CLASSES)
