"""Event service - event lifecycle rules live here.

Creation validates category, time, capacity and required text in that order
and reports the first failure. Deletion checks ownership against the locked
event row in the same transaction as the cascading delete.
"""

import logging
from collections.abc import Callable
from datetime import datetime

from django.utils import timezone

from eventhub.domain import Capacity, Category, EventDetail, EventId, UserId
from eventhub.domain.errors import NotFoundError, PermissionDeniedError, ValidationError
from eventhub.services.common import coerce_id, require_text
from eventhub.services.details import DetailAssembler
from eventhub.stores.interfaces import AccountStore, EventStore

logger = logging.getLogger(__name__)

DEFAULT_DATETIME_FORMAT = "%d/%m/%Y %H:%M"


class EventService:
    """Service for event creation, deletion and listings."""

    def __init__(
        self,
        events: EventStore,
        accounts: AccountStore,
        *,
        details: DetailAssembler | None = None,
        clock: Callable[[], datetime] = timezone.now,
        datetime_format: str = DEFAULT_DATETIME_FORMAT,
    ) -> None:
        self._events = events
        self._accounts = accounts
        self._details = details or DetailAssembler(accounts)
        self._clock = clock
        self._datetime_format = datetime_format

    def parse_time(self, time_token: str) -> datetime:
        """Parse the fixed textual format in the current time zone.

        Raises:
            ValidationError: If the token does not match the format.
        """
        try:
            naive = datetime.strptime(time_token.strip(), self._datetime_format)
        except (AttributeError, TypeError, ValueError):
            raise ValidationError("scheduled_at") from None
        return timezone.make_aware(naive)

    def create(
        self,
        organizer_id: UserId | int,
        name: str,
        category_token: str,
        time_token: str,
        location: str,
        capacity: int,
        description: str,
    ) -> EventId:
        """Create an event and return its id.

        Raises:
            ValidationError: For the first failing check, naming the field.
            NotFoundError: If the organizer does not exist.
        """
        organizer_id = coerce_id(UserId, organizer_id, "organizer_id")

        category = Category.parse(category_token)
        if category is None:
            raise ValidationError("category")
        scheduled_at = self.parse_time(time_token)
        if scheduled_at <= self._clock():
            raise ValidationError("scheduled_at")
        try:
            seats = Capacity(capacity)
        except ValueError:
            raise ValidationError("capacity") from None
        name = require_text(name, "name")
        location = require_text(location, "location")
        description = require_text(description, "description")

        with self._events.atomic():
            if self._accounts.get_user(organizer_id, lock=True) is None:
                raise NotFoundError("user", organizer_id)
            event = self._events.create_event(
                name=name,
                category=category,
                scheduled_at=scheduled_at,
                location=location,
                capacity=seats,
                organizer_id=organizer_id,
                description=description,
            )

        logger.info("User %s created event %s", organizer_id, event.id)
        return event.id

    def delete(self, event_id: EventId | int, requester_id: UserId | int) -> None:
        """Delete an event and its enrollments.

        Raises:
            NotFoundError: If the event does not exist.
            PermissionDeniedError: If the requester is unknown, or neither the
                organizer nor an admin.
        """
        event_id = coerce_id(EventId, event_id, "event_id")
        requester_id = coerce_id(UserId, requester_id, "requester_id")

        with self._events.atomic():
            event = self._events.get_event(event_id, lock=True)
            if event is None:
                raise NotFoundError("event", event_id)
            requester = self._accounts.get_user(requester_id)
            if requester is None:
                raise PermissionDeniedError("delete_event")
            if event.organizer_id != requester.id and not requester.is_admin:
                logger.debug("User %s may not delete event %s", requester_id, event_id)
                raise PermissionDeniedError("delete_event")
            result = self._events.delete_event(event_id)

        logger.info(
            "User %s deleted event %s (enrollments=%d)",
            requester_id,
            event_id,
            result.count("enrollment"),
        )

    def get(self, event_id: EventId | int) -> EventDetail:
        """Return one event with its organizer name.

        Raises:
            NotFoundError: If the event does not exist.
        """
        event_id = coerce_id(EventId, event_id, "event_id")
        event = self._events.get_event(event_id)
        if event is None:
            raise NotFoundError("event", event_id)
        return self._details.assemble(event)

    def list_all(self) -> list[EventDetail]:
        return self._details.assemble_many(self._events.list_events())

    def list_by_organizer(self, organizer_id: UserId | int) -> list[EventDetail]:
        organizer_id = coerce_id(UserId, organizer_id, "organizer_id")
        return self._details.assemble_many(
            self._events.list_events_by_organizer(organizer_id)
        )

    def list_enrolled_for(self, user_id: UserId | int) -> list[EventDetail]:
        user_id = coerce_id(UserId, user_id, "user_id")
        return self._details.assemble_many(self._events.list_events_enrolled_by(user_id))

    @staticmethod
    def categories() -> list[Category]:
        return list(Category)
