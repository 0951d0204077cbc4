"""
Folio Validation - Errors
=========================
Boundary validation failures. Raised before any command
reaches the decider; the decider never sees malformed input.
"""

from __future__ import annotations

from typing import Optional


class ValidationError(ValueError):
    """Malformed input at the boundary (empty id, bad amount, bad date)."""

    def __init__(self, message: str, field: Optional[str] = None):
        self.field = field
        super().__init__(message)
