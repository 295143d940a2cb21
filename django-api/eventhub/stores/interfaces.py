"""Store interfaces (repository pattern).

Stores must be swappable and return domain models.

Stores that share a database share transactions: a write performed through
any store inside another store's ``atomic()`` block commits or rolls back
with that block. Reads with ``lock=True`` hold their row locks until the
outermost transaction ends, so precondition checks and the write they guard
form one atomic unit.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable
from contextlib import AbstractContextManager
from dataclasses import dataclass, field
from datetime import datetime

from eventhub.domain import Capacity, Category, Event, EventId, User, UserId


@dataclass(frozen=True)
class CascadeResult:
    """What a cascading delete removed, keyed by entity name."""

    removed: dict[str, int] = field(default_factory=dict)

    def count(self, entity: str) -> int:
        return self.removed.get(entity, 0)


class Store(ABC):
    """Transaction boundary shared by every store."""

    @abstractmethod
    def atomic(self) -> AbstractContextManager[None]:
        """Open a transaction, or join the enclosing one.

        Raises:
            StorageError: If the transaction cannot be started or committed.
        """
        ...


class AccountStore(Store):
    """Interface for account persistence operations."""

    @abstractmethod
    def create_user(
        self, *, name: str, email: str, password: str, is_admin: bool = False
    ) -> User:
        """Insert a user; accounts are non-admin unless seeded as admin.

        Raises:
            DuplicateEmailError: If the email is taken (unique constraint).
        """
        ...

    @abstractmethod
    def get_user(self, user_id: UserId, *, lock: bool = False) -> User | None:
        """Return a user by ID, or None. lock=True holds a row lock."""
        ...

    @abstractmethod
    def get_user_by_email(self, email: str) -> User | None:
        """Return a user by exact (normalized) email, or None."""
        ...

    @abstractmethod
    def list_users(self) -> list[User]:
        """Return all users ordered by id ascending."""
        ...

    @abstractmethod
    def lock_admins(self) -> list[User]:
        """Return every admin ordered by id, holding their row locks."""
        ...

    @abstractmethod
    def set_admin(self, user_id: UserId, is_admin: bool) -> None:
        """Update the admin flag of an existing user."""
        ...

    @abstractmethod
    def delete_user(self, user_id: UserId) -> CascadeResult:
        """Delete a user together with their organized events and every
        enrollment referencing the user or those events."""
        ...

    @abstractmethod
    def get_names(self, user_ids: Iterable[UserId]) -> dict[UserId, str]:
        """Return display names for the users that exist."""
        ...


class EventStore(Store):
    """Interface for event persistence operations."""

    @abstractmethod
    def create_event(
        self,
        *,
        name: str,
        category: Category,
        scheduled_at: datetime,
        location: str,
        capacity: Capacity,
        organizer_id: UserId,
        description: str,
    ) -> Event:
        """Insert an event."""
        ...

    @abstractmethod
    def get_event(self, event_id: EventId, *, lock: bool = False) -> Event | None:
        """Return an event by ID, or None. lock=True holds a row lock."""
        ...

    @abstractmethod
    def event_exists(self, event_id: EventId) -> bool:
        """Check if an event exists."""
        ...

    @abstractmethod
    def list_events(self) -> list[Event]:
        """Return all events ordered by scheduled_at, then id."""
        ...

    @abstractmethod
    def list_events_by_organizer(self, organizer_id: UserId) -> list[Event]:
        """Return events organized by a user, same ordering."""
        ...

    @abstractmethod
    def list_events_enrolled_by(self, user_id: UserId) -> list[Event]:
        """Return events a user is enrolled in, same ordering."""
        ...

    @abstractmethod
    def delete_event(self, event_id: EventId) -> CascadeResult:
        """Delete an event together with its enrollments."""
        ...


class EnrollmentStore(Store):
    """Interface for the user/event enrollment relation."""

    @abstractmethod
    def add_enrollment(self, user_id: UserId, event_id: EventId) -> None:
        """Insert the pair.

        Raises:
            AlreadyEnrolledError: If the pair exists (unique constraint).
        """
        ...

    @abstractmethod
    def remove_enrollment(self, user_id: UserId, event_id: EventId) -> bool:
        """Delete the pair. Returns False if it did not exist."""
        ...

    @abstractmethod
    def is_enrolled(self, user_id: UserId, event_id: EventId) -> bool:
        """Check if the pair exists."""
        ...

    @abstractmethod
    def count_for_event(self, event_id: EventId) -> int:
        """Return the number of enrollments for an event."""
        ...
