"""
Folio HTTP API - Error Mapping
==============================
Stable transport mapping for boundary, decider and store failures.

    ValidationError      -> 400 INVALID_REQUEST
    UnknownGuestStay     -> 403 GUEST_STAY_UNKNOWN
    NotOpen/AlreadyClosed-> 403
    AlreadyOpened        -> 409
    ConcurrencyConflict  -> 412 CONCURRENCY_CONFLICT
"""

from __future__ import annotations

from typing import Any, Optional

from core.event_store.errors import ConcurrencyConflict
from core.http_api.contracts import HttpApiErrorBody, HttpApiResponse, HttpApiResult
from core.validation import ValidationError
from engines.guest_stay.errors import (
    AlreadyOpened,
    GuestStayError,
    NotOpen,
    PreconditionError,
    UnknownGuestStay,
)

INVALID_REQUEST = "INVALID_REQUEST"
NOT_FOUND = "NOT_FOUND"
CHECKOUT_REJECTED = "CHECKOUT_REJECTED"
CONCURRENCY_CONFLICT = "CONCURRENCY_CONFLICT"
METHOD_NOT_ALLOWED = "METHOD_NOT_ALLOWED"


def error_response(
    *,
    code: str,
    message: str,
    details: Optional[dict[str, Any]] = None,
) -> dict[str, Any]:
    return HttpApiResponse(
        ok=False,
        error=HttpApiErrorBody(
            code=code,
            message=message,
            details=details or {},
        ),
    ).to_dict()


def success_response(data: Any) -> dict[str, Any]:
    return HttpApiResponse(ok=True, data=data).to_dict()


def error_result(
    status_code: int,
    *,
    code: str,
    message: str,
    details: Optional[dict[str, Any]] = None,
) -> HttpApiResult:
    return HttpApiResult(
        status_code=status_code,
        body=error_response(code=code, message=message, details=details),
    )


def map_exception(exc: Exception) -> Optional[HttpApiResult]:
    """Known failures -> result. Unknown exceptions -> None (caller re-raises)."""
    if isinstance(exc, ValidationError):
        details = {"field": exc.field} if exc.field else {}
        return error_result(400, code=INVALID_REQUEST, message=str(exc), details=details)

    if isinstance(exc, UnknownGuestStay):
        return error_result(403, code=exc.code, message=str(exc))

    if isinstance(exc, AlreadyOpened):
        return error_result(
            409,
            code=exc.code,
            message=str(exc),
            details={"guest_stay_account_id": exc.guest_stay_account_id},
        )

    if isinstance(exc, (NotOpen, PreconditionError)):
        return error_result(
            403,
            code=exc.code,
            message=str(exc),
            details={"guest_stay_account_id": exc.guest_stay_account_id},
        )

    if isinstance(exc, ConcurrencyConflict):
        return error_result(
            412,
            code=CONCURRENCY_CONFLICT,
            message=str(exc),
            details={
                "stream_id": exc.stream_id,
                "expected_version": exc.expected_version,
            },
        )

    if isinstance(exc, GuestStayError):
        return error_result(403, code="GUEST_STAY_ERROR", message=str(exc))

    return None
