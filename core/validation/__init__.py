"""
Folio Validation - Public API
=============================
"""

from core.validation.assertions import (
    AMOUNT_SCALE,
    MAX_AMOUNT,
    MAX_ID_LENGTH,
    assert_not_empty_string,
    assert_positive_amount,
)
from core.validation.errors import ValidationError

__all__ = [
    "AMOUNT_SCALE",
    "MAX_AMOUNT",
    "MAX_ID_LENGTH",
    "ValidationError",
    "assert_not_empty_string",
    "assert_positive_amount",
]
