"""Enrollment service - capacity and duplicate rules under concurrency.

Every enrollment first locks its event row, then checks and inserts inside
the same transaction. Concurrent enrollments in one event therefore run one
after another and each sees the count left by the previous commit, while
enrollments in different events lock different rows. The unique constraint
on (user, event) backs up the duplicate check.

Validation order for enroll:
    event exists -> user exists -> event not past -> not the organizer
    -> not already enrolled -> seats left
"""

import logging
from collections.abc import Callable
from datetime import datetime

from django.utils import timezone

from eventhub.domain import EventId, UserId
from eventhub.domain.errors import (
    AlreadyEnrolledError,
    CapacityFullError,
    NotEnrolledError,
    NotFoundError,
    PastEventError,
    SelfOrganizerError,
)
from eventhub.services.common import coerce_id
from eventhub.stores.interfaces import AccountStore, EnrollmentStore, EventStore

logger = logging.getLogger(__name__)


class EnrollmentService:
    """Service for enrolling in and withdrawing from events."""

    def __init__(
        self,
        enrollments: EnrollmentStore,
        events: EventStore,
        accounts: AccountStore,
        *,
        clock: Callable[[], datetime] = timezone.now,
    ) -> None:
        self._enrollments = enrollments
        self._events = events
        self._accounts = accounts
        self._clock = clock

    def enroll(self, user_id: UserId | int, event_id: EventId | int) -> None:
        """Enroll a user in an event.

        Raises:
            NotFoundError: If the event or the user does not exist.
            PastEventError: If the event already took place.
            SelfOrganizerError: If the user organizes the event.
            AlreadyEnrolledError: If the user is already enrolled.
            CapacityFullError: If every seat is taken.
        """
        user_id = coerce_id(UserId, user_id, "user_id")
        event_id = coerce_id(EventId, event_id, "event_id")

        with self._enrollments.atomic():
            event = self._events.get_event(event_id, lock=True)
            if event is None:
                raise NotFoundError("event", event_id)
            if self._accounts.get_user(user_id) is None:
                raise NotFoundError("user", user_id)
            if event.is_past(self._clock()):
                raise PastEventError(event_id)
            if event.organizer_id == user_id:
                raise SelfOrganizerError(event_id)
            if self._enrollments.is_enrolled(user_id, event_id):
                raise AlreadyEnrolledError(user_id, event_id)
            enrolled = self._enrollments.count_for_event(event_id)
            if not event.capacity.admits(enrolled):
                logger.debug("Event %s full (%d seats)", event_id, event.capacity.value)
                raise CapacityFullError(event_id, event.capacity.value)
            self._enrollments.add_enrollment(user_id, event_id)

        logger.info("User %s enrolled in event %s", user_id, event_id)

    def cancel(self, user_id: UserId | int, event_id: EventId | int) -> None:
        """Withdraw a user from an event.

        Raises:
            NotEnrolledError: If the user is not enrolled.
        """
        user_id = coerce_id(UserId, user_id, "user_id")
        event_id = coerce_id(EventId, event_id, "event_id")

        with self._enrollments.atomic():
            removed = self._enrollments.remove_enrollment(user_id, event_id)
        if not removed:
            raise NotEnrolledError(user_id, event_id)
        logger.info("User %s cancelled enrollment in event %s", user_id, event_id)

    def is_enrolled(self, user_id: UserId | int, event_id: EventId | int) -> bool:
        user_id = coerce_id(UserId, user_id, "user_id")
        event_id = coerce_id(EventId, event_id, "event_id")
        return self._enrollments.is_enrolled(user_id, event_id)

    def count_participants(self, event_id: EventId | int) -> int:
        """Return how many users are enrolled.

        Raises:
            NotFoundError: If the event does not exist.
        """
        event_id = coerce_id(EventId, event_id, "event_id")
        if not self._events.event_exists(event_id):
            raise NotFoundError("event", event_id)
        return self._enrollments.count_for_event(event_id)
