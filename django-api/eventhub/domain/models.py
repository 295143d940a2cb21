"""Domain models representing persisted state.

These are pure domain objects with no API input rules.
Django ORM models are in eventhub/models.py (persistence layer).
"""

from dataclasses import dataclass, field
from datetime import datetime

from eventhub.domain.value_objects import Capacity, Category, EventId, UserId


@dataclass(frozen=True)
class User:
    """Domain representation of an account."""

    id: UserId
    name: str
    email: str
    password: str = field(repr=False)
    is_admin: bool = False


@dataclass(frozen=True)
class Event:
    """Domain representation of an Event."""

    id: EventId
    name: str
    category: Category
    scheduled_at: datetime
    location: str
    capacity: Capacity
    organizer_id: UserId
    description: str

    def is_past(self, now: datetime) -> bool:
        return self.scheduled_at < now


@dataclass(frozen=True)
class EventDetail:
    """Read-only projection of an event with its organizer's display name."""

    event: Event
    organizer_name: str
