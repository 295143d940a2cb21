"""Django ORM implementation of the account, event and enrollment stores.

One ``DjangoStore`` serves all three interfaces over the default database.
Row locks use ``select_for_update``; on SQLite that is a no-op and writers
are serialized instead by opening every transaction with ``BEGIN IMMEDIATE``
(see ``DATABASES["default"]["OPTIONS"]["transaction_mode"]``).
"""

import functools
import logging
from collections.abc import Callable, Iterable, Iterator
from contextlib import contextmanager
from datetime import datetime
from typing import ParamSpec, TypeVar

from django.db import DatabaseError, IntegrityError, transaction

from eventhub import models as orm
from eventhub.domain import Capacity, Category, Event, EventId, User, UserId
from eventhub.domain.errors import AlreadyEnrolledError, DuplicateEmailError, StorageError
from eventhub.stores.interfaces import AccountStore, CascadeResult, EnrollmentStore, EventStore

logger = logging.getLogger(__name__)

P = ParamSpec("P")
R = TypeVar("R")


def _translate_errors(operation: str) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """Turn unexpected database failures into StorageError."""

    def decorator(func: Callable[P, R]) -> Callable[P, R]:
        @functools.wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            try:
                return func(*args, **kwargs)
            except DatabaseError as exc:
                logger.error("Storage failure during %s", operation, exc_info=True)
                raise StorageError(operation) from exc

        return wrapper

    return decorator


def _to_user(row: orm.User) -> User:
    return User(
        id=UserId(row.id),
        name=row.name,
        email=row.email,
        password=row.password,
        is_admin=row.is_admin,
    )


def _to_event(row: orm.Event) -> Event:
    return Event(
        id=EventId(row.id),
        name=row.name,
        category=Category[row.category],
        scheduled_at=row.scheduled_at,
        location=row.location,
        capacity=Capacity(row.capacity),
        organizer_id=UserId(row.organizer_id),
        description=row.description,
    )


def _cascade_result(per_model: dict[str, int]) -> CascadeResult:
    # Django reports deletions keyed by "app_label.ModelName".
    return CascadeResult(
        removed={
            label.rsplit(".", 1)[-1].lower(): count
            for label, count in per_model.items()
            if count
        }
    )


class DjangoStore(AccountStore, EventStore, EnrollmentStore):
    """Database-backed store using Django ORM."""

    @contextmanager
    def atomic(self) -> Iterator[None]:
        try:
            with transaction.atomic():
                yield
        except DatabaseError as exc:
            logger.error("Transaction failed", exc_info=True)
            raise StorageError("transaction") from exc

    # Accounts

    @_translate_errors("create_user")
    def create_user(
        self, *, name: str, email: str, password: str, is_admin: bool = False
    ) -> User:
        try:
            with transaction.atomic():
                row = orm.User.objects.create(
                    name=name, email=email, password=password, is_admin=is_admin
                )
        except IntegrityError as exc:
            raise DuplicateEmailError() from exc
        return _to_user(row)

    @_translate_errors("get_user")
    def get_user(self, user_id: UserId, *, lock: bool = False) -> User | None:
        query = orm.User.objects.filter(pk=user_id.value)
        if lock:
            query = query.select_for_update()
        row = query.first()
        return _to_user(row) if row is not None else None

    @_translate_errors("get_user_by_email")
    def get_user_by_email(self, email: str) -> User | None:
        row = orm.User.objects.filter(email=email).first()
        return _to_user(row) if row is not None else None

    @_translate_errors("list_users")
    def list_users(self) -> list[User]:
        return [_to_user(row) for row in orm.User.objects.order_by("id")]

    @_translate_errors("lock_admins")
    def lock_admins(self) -> list[User]:
        rows = orm.User.objects.select_for_update().filter(is_admin=True).order_by("id")
        return [_to_user(row) for row in rows]

    @_translate_errors("set_admin")
    def set_admin(self, user_id: UserId, is_admin: bool) -> None:
        orm.User.objects.filter(pk=user_id.value).update(is_admin=is_admin)

    @_translate_errors("delete_user")
    def delete_user(self, user_id: UserId) -> CascadeResult:
        # Lock organized events so no enrollment lands in them mid-cascade.
        list(
            orm.Event.objects.select_for_update()
            .filter(organizer_id=user_id.value)
            .order_by("id")
            .values_list("id", flat=True)
        )
        _, per_model = orm.User.objects.filter(pk=user_id.value).delete()
        return _cascade_result(per_model)

    @_translate_errors("get_names")
    def get_names(self, user_ids: Iterable[UserId]) -> dict[UserId, str]:
        ids = {user_id.value for user_id in user_ids}
        rows = orm.User.objects.filter(pk__in=ids).values_list("id", "name")
        return {UserId(pk): name for pk, name in rows}

    # Events

    @_translate_errors("create_event")
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
        row = orm.Event.objects.create(
            name=name,
            category=category.name,
            scheduled_at=scheduled_at,
            location=location,
            capacity=capacity.value,
            organizer_id=organizer_id.value,
            description=description,
        )
        return _to_event(row)

    @_translate_errors("get_event")
    def get_event(self, event_id: EventId, *, lock: bool = False) -> Event | None:
        query = orm.Event.objects.filter(pk=event_id.value)
        if lock:
            query = query.select_for_update()
        row = query.first()
        return _to_event(row) if row is not None else None

    @_translate_errors("event_exists")
    def event_exists(self, event_id: EventId) -> bool:
        return orm.Event.objects.filter(pk=event_id.value).exists()

    @_translate_errors("list_events")
    def list_events(self) -> list[Event]:
        return [_to_event(row) for row in orm.Event.objects.order_by("scheduled_at", "id")]

    @_translate_errors("list_events_by_organizer")
    def list_events_by_organizer(self, organizer_id: UserId) -> list[Event]:
        rows = orm.Event.objects.filter(organizer_id=organizer_id.value).order_by(
            "scheduled_at", "id"
        )
        return [_to_event(row) for row in rows]

    @_translate_errors("list_events_enrolled_by")
    def list_events_enrolled_by(self, user_id: UserId) -> list[Event]:
        rows = orm.Event.objects.filter(enrollments__user_id=user_id.value).order_by(
            "scheduled_at", "id"
        )
        return [_to_event(row) for row in rows]

    @_translate_errors("delete_event")
    def delete_event(self, event_id: EventId) -> CascadeResult:
        _, per_model = orm.Event.objects.filter(pk=event_id.value).delete()
        return _cascade_result(per_model)

    # Enrollments

    @_translate_errors("add_enrollment")
    def add_enrollment(self, user_id: UserId, event_id: EventId) -> None:
        try:
            with transaction.atomic():
                orm.Enrollment.objects.create(
                    user_id=user_id.value, event_id=event_id.value
                )
        except IntegrityError as exc:
            raise AlreadyEnrolledError(user_id, event_id) from exc

    @_translate_errors("remove_enrollment")
    def remove_enrollment(self, user_id: UserId, event_id: EventId) -> bool:
        deleted, _ = orm.Enrollment.objects.filter(
            user_id=user_id.value, event_id=event_id.value
        ).delete()
        return deleted > 0

    @_translate_errors("is_enrolled")
    def is_enrolled(self, user_id: UserId, event_id: EventId) -> bool:
        return orm.Enrollment.objects.filter(
            user_id=user_id.value, event_id=event_id.value
        ).exists()

    @_translate_errors("count_for_event")
    def count_for_event(self, event_id: EventId) -> int:
        return orm.Enrollment.objects.filter(event_id=event_id.value).count()
