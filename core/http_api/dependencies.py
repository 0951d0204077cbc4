"""
Folio HTTP API - Dependencies
=============================
Injected collaborators for handler wiring.
"""

from __future__ import annotations

from dataclasses import dataclass

from engines.guest_stay.services import GuestStayService


@dataclass(frozen=True)
class HttpApiDependencies:
    guest_stay_service: GuestStayService
    base_path: str = ""
