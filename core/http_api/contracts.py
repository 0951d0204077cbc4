"""
Folio HTTP API - Contracts
==========================
Framework-agnostic request/response DTOs for guest stay endpoints.
Construction validates; a contract that exists is well-formed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Any, Optional

from core.time.dates import parse_date_from_utc_yyyymmdd
from core.validation import (
    MAX_ID_LENGTH,
    ValidationError,
    assert_not_empty_string,
    assert_positive_amount,
)
from engines.guest_stay.account_id import to_guest_stay_account_id


@dataclass(frozen=True)
class CheckInHttpRequest:
    guest_id: str
    room_id: str

    def __post_init__(self):
        assert_not_empty_string(self.guest_id, "guest_id", MAX_ID_LENGTH)
        assert_not_empty_string(self.room_id, "room_id", MAX_ID_LENGTH)


@dataclass(frozen=True)
class GuestStayHttpRequest:
    guest_id: str
    room_id: str
    check_in_date: date

    def __post_init__(self):
        assert_not_empty_string(self.guest_id, "guest_id", MAX_ID_LENGTH)
        assert_not_empty_string(self.room_id, "room_id", MAX_ID_LENGTH)
        if not isinstance(self.check_in_date, date):
            raise ValidationError("check_in_date must be a date.", field="check_in_date")

    @classmethod
    def from_path(cls, guest_id: Any, room_id: Any, check_in_date: Any) -> "GuestStayHttpRequest":
        return cls(
            guest_id=guest_id,
            room_id=room_id,
            check_in_date=parse_date_from_utc_yyyymmdd(
                assert_not_empty_string(check_in_date, "check_in_date")
            ),
        )

    @property
    def guest_stay_account_id(self) -> str:
        return to_guest_stay_account_id(self.guest_id, self.room_id, self.check_in_date)


@dataclass(frozen=True)
class RecordAmountHttpRequest:
    stay: GuestStayHttpRequest
    amount: Decimal

    def __post_init__(self):
        if not isinstance(self.stay, GuestStayHttpRequest):
            raise ValidationError("stay must be GuestStayHttpRequest.")
        if not isinstance(self.amount, Decimal):
            raise ValidationError("amount must be Decimal.", field="amount")

    @classmethod
    def from_raw(cls, stay: GuestStayHttpRequest, amount: Any) -> "RecordAmountHttpRequest":
        return cls(stay=stay, amount=assert_positive_amount(amount, "amount"))


@dataclass(frozen=True)
class HttpApiErrorBody:
    code: str
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "details": dict(self.details),
        }


@dataclass(frozen=True)
class HttpApiResponse:
    ok: bool
    data: Any = None
    error: Optional[HttpApiErrorBody] = None

    def to_dict(self) -> dict[str, Any]:
        if self.ok:
            return {"ok": True, "data": self.data}
        if self.error is None:
            raise ValueError("error must be set when ok is False.")
        return {"ok": False, "error": self.error.to_dict()}


@dataclass(frozen=True)
class HttpApiResult:
    """Transport-neutral outcome: status, optional JSON body, headers."""

    status_code: int
    body: Optional[dict[str, Any]] = None
    headers: dict[str, str] = field(default_factory=dict)
