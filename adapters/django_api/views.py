"""
Folio Django Adapter Views
==========================
Pass-through HTTP views over core/http_api handlers.
Parsing and contract construction happen here; decisions do not.
"""

from __future__ import annotations

import json
from decimal import Decimal
from typing import Any

from django.http import HttpRequest, HttpResponse, JsonResponse
from django.views.decorators.csrf import csrf_exempt

from adapters.django_api.wiring import build_dependencies
from core.http_api.contracts import (
    CheckInHttpRequest,
    GuestStayHttpRequest,
    HttpApiResult,
    RecordAmountHttpRequest,
)
from core.http_api.errors import (
    INVALID_REQUEST,
    METHOD_NOT_ALLOWED,
    error_response,
)
from core.http_api.handlers import (
    delete_check_out,
    get_guest_stay_account,
    post_charge,
    post_check_in,
    post_payment,
)
from core.validation import ValidationError


def _json_error(code: str, message: str, status: int = 400, details=None) -> JsonResponse:
    return JsonResponse(
        error_response(code=code, message=message, details=details or {}),
        status=status,
    )


def _method_not_allowed() -> JsonResponse:
    return _json_error(
        METHOD_NOT_ALLOWED,
        "Method not allowed for this endpoint.",
        status=405,
    )


def _parse_json_body(request: HttpRequest) -> dict[str, Any]:
    if not request.body:
        return {}
    try:
        parsed = json.loads(request.body.decode("utf-8"), parse_float=Decimal)
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ValidationError("Request body must be valid JSON.") from exc
    if not isinstance(parsed, dict):
        raise ValidationError("Request body must be a JSON object.")
    return parsed


def _to_response(result: HttpApiResult) -> HttpResponse:
    if result.body is None:
        response = HttpResponse(status=result.status_code)
    else:
        response = JsonResponse(result.body, status=result.status_code)
    for name, value in result.headers.items():
        response[name] = value
    return response


def _invalid(exc: ValidationError) -> JsonResponse:
    details = {"field": exc.field} if exc.field else {}
    return _json_error(INVALID_REQUEST, str(exc), status=400, details=details)


def _dispatch_amount(handler, request: HttpRequest, guest_id, room_id, check_in_date):
    try:
        stay = GuestStayHttpRequest.from_path(guest_id, room_id, check_in_date)
        body = _parse_json_body(request)
        contract = RecordAmountHttpRequest.from_raw(stay, body.get("amount"))
    except ValidationError as exc:
        return _invalid(exc)
    return _to_response(handler(contract, build_dependencies()))


@csrf_exempt
def guest_stays_view(request: HttpRequest, guest_id: str, room_id: str) -> HttpResponse:
    if request.method != "POST":
        return _method_not_allowed()
    try:
        contract = CheckInHttpRequest(guest_id=guest_id, room_id=room_id)
    except ValidationError as exc:
        return _invalid(exc)
    return _to_response(post_check_in(contract, build_dependencies()))


@csrf_exempt
def guest_stay_period_view(
    request: HttpRequest, guest_id: str, room_id: str, check_in_date: str
) -> HttpResponse:
    if request.method == "GET":
        handler = get_guest_stay_account
    elif request.method == "DELETE":
        handler = delete_check_out
    else:
        return _method_not_allowed()
    try:
        contract = GuestStayHttpRequest.from_path(guest_id, room_id, check_in_date)
    except ValidationError as exc:
        return _invalid(exc)
    return _to_response(handler(contract, build_dependencies()))


@csrf_exempt
def guest_stay_charges_view(
    request: HttpRequest, guest_id: str, room_id: str, check_in_date: str
) -> HttpResponse:
    if request.method != "POST":
        return _method_not_allowed()
    return _dispatch_amount(post_charge, request, guest_id, room_id, check_in_date)


@csrf_exempt
def guest_stay_payments_view(
    request: HttpRequest, guest_id: str, room_id: str, check_in_date: str
) -> HttpResponse:
    if request.method != "POST":
        return _method_not_allowed()
    return _dispatch_amount(post_payment, request, guest_id, room_id, check_in_date)
