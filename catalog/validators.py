"""
Input validators for product listings

Numeric fields arrive as form text. They are parsed explicitly so that a
value like "abc" is rejected instead of being stored as a non-number.
"""

import math
from datetime import date, datetime
from typing import Optional

from common.errors import InvalidNumeric, ValidationError

# field -> (label, minimum, maximum)
NUMERIC_RULES = {
    "price": ("Price", 0.0, None),
    "quantity": ("Quantity", 0.0, None),
    "moisture": ("Moisture", 0.0, 100.0),
    "protein": ("Protein", 0.0, 100.0),
    "pesticideResidue": ("Pesticide residue", 0.0, None),
    "soilPH": ("Soil pH", 0.0, 14.0),
}


def is_blank(value) -> bool:
    return value is None or (isinstance(value, str) and value.strip() == "")


def parse_number(
    field: str,
    raw,
    required: bool = False,
    minimum: Optional[float] = None,
    maximum: Optional[float] = None
) -> Optional[float]:
    """
    Parse a numeric input.

    Args:
        field: Human-readable field name used in error messages
        raw: Text or number from the request
        required: If True, a blank value is an error
        minimum: Inclusive lower bound
        maximum: Inclusive upper bound

    Returns:
        Parsed float, or None when the value is blank and optional

    Raises:
        InvalidNumeric: Value is not a finite number or is out of range
        ValidationError: Value is required but blank

    Example:
        >>> parse_number("Price", "12.50", required=True, minimum=0)
        12.5
    """
    if is_blank(raw):
        if required:
            raise ValidationError(f"{field} is required")
        return None

    if isinstance(raw, bool):
        raise InvalidNumeric(f"{field} must be a number")

    try:
        value = float(raw.strip() if isinstance(raw, str) else raw)
    except (TypeError, ValueError):
        raise InvalidNumeric(f"{field} must be a number")

    if math.isnan(value) or math.isinf(value):
        raise InvalidNumeric(f"{field} must be a finite number")
    if minimum is not None and value < minimum:
        raise InvalidNumeric(f"{field} must be at least {minimum:g}")
    if maximum is not None and value > maximum:
        raise InvalidNumeric(f"{field} must be at most {maximum:g}")
    return value


def parse_field(name: str, raw, required: bool = False) -> Optional[float]:
    """Parse one of the known product numeric fields using NUMERIC_RULES."""
    label, minimum, maximum = NUMERIC_RULES[name]
    return parse_number(label, raw, required=required, minimum=minimum, maximum=maximum)


def parse_date(field: str, raw) -> Optional[date]:
    """Parse an ISO date (YYYY-MM-DD); blank means absent."""
    if is_blank(raw):
        return None
    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw
    try:
        return date.fromisoformat(str(raw).strip()[:10])
    except ValueError:
        raise ValidationError(f"{field} must be a date in YYYY-MM-DD format")
