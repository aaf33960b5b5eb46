import uuid
from typing import Optional

from catalog_api.core.exceptions import ValidationError


def parse_id(value: Optional[str], label: str = "ID") -> uuid.UUID:
    """
    Parse a path or body identifier.

    Raises ValidationError (400) for anything that is not a UUID, so handlers
    reject malformed ids before touching the database.
    """
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except (ValueError, TypeError, AttributeError):
        raise ValidationError(f"Invalid {label}")


def parse_optional_id(value: Optional[str], label: str = "ID") -> Optional[uuid.UUID]:
    """Like parse_id, but empty values mean "not set"."""
    if value is None or value == "":
        return None
    return parse_id(value, label)
