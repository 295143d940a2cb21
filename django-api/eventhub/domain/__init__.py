from eventhub.domain.models import Event, EventDetail, User
from eventhub.domain.value_objects import Capacity, Category, EventId, UserId

__all__ = [
    "Event",
    "EventDetail",
    "User",
    "UserId",
    "EventId",
    "Capacity",
    "Category",
]
