"""
Folio Validation - Boundary Assertions
======================================
Small guards used by request contracts. Each returns the
normalized value or raises ValidationError.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from core.validation.errors import ValidationError

# Folio amounts are in currency units with cents.
AMOUNT_SCALE = Decimal("0.01")
MAX_AMOUNT = Decimal("999999999.99")

MAX_ID_LENGTH = 64


def assert_not_empty_string(
    value: Any,
    field: Optional[str] = None,
    max_length: Optional[int] = None,
) -> str:
    label = field or "value"
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{label} must be a non-empty string.", field=field)
    if max_length is not None and len(value) > max_length:
        raise ValidationError(
            f"{label} must be at most {max_length} characters.", field=field
        )
    return value


def assert_positive_amount(value: Any, field: Optional[str] = "amount") -> Decimal:
    """
    Parse an amount into a positive Decimal with exactly two places.

    Accepts int, str and Decimal. Floats go through str() so
    that 0.1 stays 0.1. Booleans are refused even though they
    are ints. At most two decimal places and at most MAX_AMOUNT;
    every accepted amount adds and subtracts without rounding.
    """
    label = field or "value"
    if value is None or isinstance(value, bool):
        raise ValidationError(f"{label} must be a positive number.", field=field)

    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except (InvalidOperation, ValueError) as exc:
        raise ValidationError(
            f"{label} '{value}' is not a number.", field=field
        ) from exc

    if not amount.is_finite() or amount <= 0:
        raise ValidationError(f"{label} must be a positive number.", field=field)
    if amount > MAX_AMOUNT:
        raise ValidationError(
            f"{label} must not exceed {MAX_AMOUNT}.", field=field
        )

    cents = amount.quantize(AMOUNT_SCALE)
    if cents != amount:
        raise ValidationError(
            f"{label} must have at most two decimal places.", field=field
        )
    return cents
