"""
Manual smoke runner for the guest stay HTTP endpoints.

Start a dev server first (in-memory store, permissive stay oracle):
    python manage.py runserver

Then:
    python scripts/smoke_http_api.py
    python scripts/smoke_http_api.py --base-url http://127.0.0.1:8000 --guest g-7
"""

from __future__ import annotations

import argparse
import json
import uuid
from urllib import error, request


def _call(
    *,
    method: str,
    url: str,
    body: dict | None = None,
) -> tuple[int, dict, str | None]:
    encoded = None
    headers = {}
    if body is not None:
        encoded = json.dumps(body).encode("utf-8")
        headers["Content-Type"] = "application/json"

    req = request.Request(url=url, method=method, headers=headers, data=encoded)
    try:
        with request.urlopen(req) as response:
            raw = response.read().decode("utf-8")
            return response.status, json.loads(raw) if raw else {}, response.headers.get("Location")
    except error.HTTPError as exc:
        raw = exc.read().decode("utf-8")
        return exc.code, json.loads(raw) if raw else {}, None


def _print_case(label: str, status: int, payload: dict) -> None:
    print(f"\n[{label}] status={status}")
    if payload:
        print(json.dumps(payload, indent=2, sort_keys=True))


def _check_in(base_url: str, guest_id: str, room_id: str) -> str:
    status, payload, location = _call(
        method="POST",
        url=f"{base_url}/v1/guests/{guest_id}/stays/{room_id}",
    )
    _print_case(f"check-in {guest_id}/{room_id}", status, payload)
    if status != 201 or not location:
        raise SystemExit(f"check-in failed with status {status}")
    return base_url + location


def run(base_url: str, guest_id: str) -> None:
    base_url = base_url.rstrip("/")

    # Settled stay: charge, pay in full, leave.
    stay = _check_in(base_url, guest_id, "101")
    for label, path, amount in (
        ("charge 100", "charges", "100"),
        ("payment 100", "payments", "100"),
    ):
        status, payload, _ = _call(method="POST", url=f"{stay}/{path}", body={"amount": amount})
        _print_case(label, status, payload)

    status, payload, _ = _call(method="DELETE", url=stay)
    _print_case("check-out settled (expect 204)", status, payload)

    status, payload, _ = _call(method="POST", url=f"{stay}/payments", body={"amount": "10"})
    _print_case("payment after check-out (expect 403)", status, payload)

    # Unsettled stay: checkout is refused and the folio stays open.
    stay = _check_in(base_url, guest_id, "102")
    status, payload, _ = _call(method="POST", url=f"{stay}/charges", body={"amount": "50"})
    _print_case("charge 50", status, payload)

    status, payload, _ = _call(method="DELETE", url=stay)
    _print_case("check-out unsettled (expect 403)", status, payload)

    status, payload, _ = _call(method="GET", url=stay)
    _print_case("folio after rejected check-out", status, payload)

    status, payload, _ = _call(method="POST", url=f"{stay}/charges", body={"amount": "-1"})
    _print_case("negative charge (expect 400)", status, payload)


def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument(
        "--base-url",
        default="http://127.0.0.1:8000",
        help="Server base URL.",
    )
    parser.add_argument(
        "--guest",
        default=f"smoke-{uuid.uuid4().hex[:8]}",
        help="Guest id to check in (fresh by default so reruns do not collide).",
    )
    args = parser.parse_args()
    run(args.base_url, args.guest)


if __name__ == "__main__":
    main()
