"""
Coercion of untrusted form fields.

Every helper raises InvalidInputError so malformed input is rejected before
the database is touched.
"""

from typing import List, Optional

from cinerank.core.errors import InvalidInputError
from cinerank.database.crud import validate_rating


def require_text(value: Optional[str], field: str) -> str:
    """Stripped value, which must not be empty."""
    value = (value or "").strip()
    if not value:
        raise InvalidInputError(f"{field.capitalize()} is required")
    return value


def parse_int(value: Optional[str], field: str) -> int:
    """Parse a whole number or fail with 'Invalid <field>'."""
    try:
        return int((value or "").strip())
    except ValueError:
        raise InvalidInputError(f"Invalid {field}") from None


def parse_optional_float(value: Optional[str], default: float = 0.0) -> float:
    """Parse a float, falling back to default when blank or malformed."""
    try:
        return float((value or "").strip())
    except ValueError:
        return default


def parse_rating(value: Optional[str]) -> int:
    """Parse a star rating from 1 to 5."""
    try:
        return validate_rating(parse_int(value, "rating"))
    except InvalidInputError:
        raise InvalidInputError("Invalid rating (must be 1-5)") from None


def split_tags(value: Optional[str]) -> List[str]:
    """Split a comma-separated tag field, dropping blanks."""
    return [tag.strip() for tag in (value or "").split(",") if tag.strip()]
