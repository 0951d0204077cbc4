"""
Folio HTTP API - Framework-Agnostic Handlers
============================================
Pure handler functions over contracts and injected dependencies.
Each returns an HttpApiResult; the adapter turns it into a response.

Checkout outcome is read from the event, not from an error:
GuestCheckedOut -> 204, GuestCheckoutFailed -> 403 CHECKOUT_REJECTED.
"""

from __future__ import annotations

import functools
import logging

from core.http_api.contracts import (
    CheckInHttpRequest,
    GuestStayHttpRequest,
    HttpApiResult,
    RecordAmountHttpRequest,
)
from core.http_api.dependencies import HttpApiDependencies
from core.http_api.errors import (
    CHECKOUT_REJECTED,
    NOT_FOUND,
    error_result,
    map_exception,
    success_response,
)
from core.time.dates import format_date_to_utc_yyyymmdd

logger = logging.getLogger("folio.http_api")


def guest_stay_url(
    guest_id: str, room_id: str, check_in_date, base_path: str = ""
) -> str:
    return (
        f"{base_path.rstrip('/')}/guests/{guest_id}/stays/{room_id}/periods/"
        f"{format_date_to_utc_yyyymmdd(check_in_date)}"
    )


def _mapped_errors(handler):
    @functools.wraps(handler)
    def wrapper(*args, **kwargs) -> HttpApiResult:
        try:
            return handler(*args, **kwargs)
        except Exception as exc:
            result = map_exception(exc)
            if result is None:
                raise
            logger.info(
                f"{handler.__name__} -> {result.status_code} "
                f"({type(exc).__name__}: {exc})"
            )
            return result

    return wrapper


@_mapped_errors
def post_check_in(
    request: CheckInHttpRequest,
    dependencies: HttpApiDependencies,
) -> HttpApiResult:
    result = dependencies.guest_stay_service.check_in(
        request.guest_id, request.room_id
    )
    url = guest_stay_url(
        request.guest_id,
        request.room_id,
        result.check_in_date,
        base_path=dependencies.base_path,
    )
    return HttpApiResult(
        status_code=201,
        body=success_response({
            "guest_stay_account_id": result.guest_stay_account_id,
            "check_in_date": format_date_to_utc_yyyymmdd(result.check_in_date),
            "url": url,
        }),
        headers={"Location": url},
    )


@_mapped_errors
def post_charge(
    request: RecordAmountHttpRequest,
    dependencies: HttpApiDependencies,
) -> HttpApiResult:
    dependencies.guest_stay_service.record_charge(
        request.stay.guest_stay_account_id, request.amount
    )
    return HttpApiResult(status_code=204)


@_mapped_errors
def post_payment(
    request: RecordAmountHttpRequest,
    dependencies: HttpApiDependencies,
) -> HttpApiResult:
    dependencies.guest_stay_service.record_payment(
        request.stay.guest_stay_account_id, request.amount
    )
    return HttpApiResult(status_code=204)


@_mapped_errors
def delete_check_out(
    request: GuestStayHttpRequest,
    dependencies: HttpApiDependencies,
) -> HttpApiResult:
    result = dependencies.guest_stay_service.check_out(
        request.guest_stay_account_id
    )
    if result.checked_out:
        return HttpApiResult(status_code=204)
    return error_result(
        403,
        code=CHECKOUT_REJECTED,
        message="Checkout rejected.",
        details={
            "guest_stay_account_id": request.guest_stay_account_id,
            "reason": result.event.reason,
        },
    )


@_mapped_errors
def get_guest_stay_account(
    request: GuestStayHttpRequest,
    dependencies: HttpApiDependencies,
) -> HttpApiResult:
    state = dependencies.guest_stay_service.get_open_account(
        request.guest_stay_account_id
    )
    if state is None:
        return error_result(
            404,
            code=NOT_FOUND,
            message="No open guest stay account.",
            details={"guest_stay_account_id": request.guest_stay_account_id},
        )
    return HttpApiResult(status_code=200, body=success_response(state.to_dict()))
