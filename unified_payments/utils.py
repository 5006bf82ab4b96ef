"""
Utility functions for the Unified Payments SDK.

Reusable helpers for amount formatting, request validation and log redaction.
"""

import logging
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Iterable, Mapping, Optional

from .exceptions import ValidationError
from .logging_config import SecretRedactor

logger = logging.getLogger(__name__)

TWO_PLACES = Decimal("0.01")
TRUE_VALUES = {"1", "true", "yes", "on"}


def redact_message(msg: str) -> str:
    """Consistent message redaction for ad-hoc strings (error bodies, URLs)."""
    return SecretRedactor.redact(str(msg))


def parse_amount(value: Any, field: str = "amount") -> Decimal:
    """
    Parse a caller-supplied amount into a Decimal.

    Accepts ints, floats, Decimals and numeric strings. Booleans, NaN and
    infinities are rejected.

    Raises:
        ValidationError: If the value is not numeric
    """
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal, str)):
        raise ValidationError(f"{field} must be numeric", field=field, value=value)
    try:
        amount = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise ValidationError(f"{field} must be numeric", field=field, value=value)
    if not amount.is_finite():
        raise ValidationError(f"{field} must be a finite number", field=field, value=value)
    return amount


def format_minor_units(value: Any, field: str = "amount") -> str:
    """Convert an integer minor-unit amount (e.g. cents) to a two-decimal major-unit string."""
    amount = parse_amount(value, field=field) / 100
    return str(amount.quantize(TWO_PLACES, rounding=ROUND_HALF_UP))


def truncate(value: Any, max_length: int) -> str:
    """Truncate a value's string form to at most ``max_length`` characters."""
    if max_length <= 0:
        raise ValueError("max_length must be positive")
    s = "" if value is None else str(value)
    return s[:max_length]


def require_fields(data: Mapping[str, Any], fields: Iterable[str], context: str = "request") -> None:
    """Raise ValidationError for the first field missing (or None) from ``data``."""
    if not isinstance(data, Mapping):
        raise ValidationError(f"{context} data must be a mapping", field=context, value=type(data).__name__)
    for name in fields:
        if data.get(name) is None:
            raise ValidationError(f"Missing required field: {name}", field=name)


def require_identifier(value: Any, field: str) -> str:
    """Validate that an identifier is a non-empty string."""
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field} must be a non-empty string", field=field, value=value)
    return value


def deep_get(data: Any, key_path: str, default: Any = None) -> Any:
    """Get a nested value from a dict using dot notation."""
    if not isinstance(data, Mapping):
        return default
    for key in key_path.split("."):
        if isinstance(data, Mapping) and key in data:
            data = data[key]
        else:
            return default
    return data


def parse_bool(value: Any, default: bool = False) -> bool:
    """Interpret config/env flags such as ``"true"``, ``"1"`` or a real bool."""
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in TRUE_VALUES


def compact(mapping: Mapping[str, Any]) -> dict[str, Any]:
    """Return a copy of ``mapping`` without keys whose value is None."""
    return {k: v for k, v in mapping.items() if v is not None}


def normalize_headers(headers: Optional[Mapping[str, Any]]) -> dict[str, Any]:
    """Lower-case header names so lookups are case-insensitive."""
    return {str(k).lower(): v for k, v in (headers or {}).items()}
