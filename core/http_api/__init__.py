"""
Folio HTTP API - Public API
===========================
"""

from core.http_api.contracts import (
    CheckInHttpRequest,
    GuestStayHttpRequest,
    HttpApiErrorBody,
    HttpApiResponse,
    HttpApiResult,
    RecordAmountHttpRequest,
)
from core.http_api.dependencies import HttpApiDependencies
from core.http_api.errors import (
    error_response,
    error_result,
    map_exception,
    success_response,
)
from core.http_api.handlers import (
    delete_check_out,
    get_guest_stay_account,
    guest_stay_url,
    post_charge,
    post_check_in,
    post_payment,
)

__all__ = [
    "CheckInHttpRequest",
    "GuestStayHttpRequest",
    "RecordAmountHttpRequest",
    "HttpApiErrorBody",
    "HttpApiResponse",
    "HttpApiResult",
    "HttpApiDependencies",
    "error_response",
    "error_result",
    "map_exception",
    "success_response",
    "guest_stay_url",
    "post_check_in",
    "post_charge",
    "post_payment",
    "delete_check_out",
    "get_guest_stay_account",
]
