"""Input coercion shared by the services."""

from typing import TypeVar

from eventhub.domain import EventId, UserId
from eventhub.domain.errors import ValidationError

IdT = TypeVar("IdT", UserId, EventId)


def coerce_id(id_type: type[IdT], value: IdT | int | str, field: str) -> IdT:
    """Accept a typed id or its raw value.

    Raises:
        ValidationError: If the value is not a positive integer.
    """
    if isinstance(value, id_type):
        return value
    try:
        if isinstance(value, str):
            return id_type.from_string(value)
        return id_type(value)
    except (TypeError, ValueError):
        raise ValidationError(field) from None


def require_text(value: str | None, field: str) -> str:
    """Return the trimmed value, or raise ValidationError if blank."""
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(field)
    return value.strip()
