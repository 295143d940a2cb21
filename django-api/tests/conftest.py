"""Pytest configuration and shared fixtures."""

import threading
from contextlib import contextmanager
from dataclasses import replace
from datetime import timedelta

import pytest
from django.contrib.auth.hashers import make_password
from django.utils import timezone
from rest_framework.test import APIClient

from eventhub import models as orm
from eventhub.domain import Event, EventId, User, UserId
from eventhub.domain.errors import AlreadyEnrolledError, DuplicateEmailError
from eventhub.handlers.authentication import issue_token
from eventhub.stores.interfaces import (
    AccountStore,
    CascadeResult,
    EnrollmentStore,
    EventStore,
)


class InMemoryStore(AccountStore, EventStore, EnrollmentStore):
    """Dict-backed store for service unit tests. ``atomic`` is a re-entrant lock."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self.users: dict[UserId, User] = {}
        self.events: dict[EventId, Event] = {}
        self.enrollments: set[tuple[UserId, EventId]] = set()
        self._next_user = 1
        self._next_event = 1

    @contextmanager
    def atomic(self):
        with self._lock:
            yield

    def create_user(self, *, name, email, password, is_admin=False):
        if self.get_user_by_email(email) is not None:
            raise DuplicateEmailError()
        user = User(
            id=UserId(self._next_user),
            name=name,
            email=email,
            password=password,
            is_admin=is_admin,
        )
        self._next_user += 1
        self.users[user.id] = user
        return user

    def get_user(self, user_id, *, lock=False):
        return self.users.get(user_id)

    def get_user_by_email(self, email):
        return next((u for u in self.users.values() if u.email == email), None)

    def list_users(self):
        return sorted(self.users.values(), key=lambda u: u.id.value)

    def lock_admins(self):
        return [u for u in self.list_users() if u.is_admin]

    def set_admin(self, user_id, is_admin):
        self.users[user_id] = replace(self.users[user_id], is_admin=is_admin)

    def delete_user(self, user_id):
        if self.users.pop(user_id, None) is None:
            return CascadeResult()
        removed = {"user": 1}
        organized = [e.id for e in self.events.values() if e.organizer_id == user_id]
        pairs = {p for p in self.enrollments if p[0] == user_id or p[1] in organized}
        for event_id in organized:
            del self.events[event_id]
        self.enrollments -= pairs
        if organized:
            removed["event"] = len(organized)
        if pairs:
            removed["enrollment"] = len(pairs)
        return CascadeResult(removed=removed)

    def get_names(self, user_ids):
        return {uid: self.users[uid].name for uid in user_ids if uid in self.users}

    def create_event(
        self, *, name, category, scheduled_at, location, capacity, organizer_id, description
    ):
        event = Event(
            id=EventId(self._next_event),
            name=name,
            category=category,
            scheduled_at=scheduled_at,
            location=location,
            capacity=capacity,
            organizer_id=organizer_id,
            description=description,
        )
        self._next_event += 1
        self.events[event.id] = event
        return event

    def get_event(self, event_id, *, lock=False):
        return self.events.get(event_id)

    def event_exists(self, event_id):
        return event_id in self.events

    def list_events(self):
        return sorted(self.events.values(), key=lambda e: (e.scheduled_at, e.id.value))

    def list_events_by_organizer(self, organizer_id):
        return [e for e in self.list_events() if e.organizer_id == organizer_id]

    def list_events_enrolled_by(self, user_id):
        return [e for e in self.list_events() if (user_id, e.id) in self.enrollments]

    def delete_event(self, event_id):
        if self.events.pop(event_id, None) is None:
            return CascadeResult()
        pairs = {p for p in self.enrollments if p[1] == event_id}
        self.enrollments -= pairs
        removed = {"event": 1}
        if pairs:
            removed["enrollment"] = len(pairs)
        return CascadeResult(removed=removed)

    def add_enrollment(self, user_id, event_id):
        if (user_id, event_id) in self.enrollments:
            raise AlreadyEnrolledError(user_id, event_id)
        self.enrollments.add((user_id, event_id))

    def remove_enrollment(self, user_id, event_id):
        if (user_id, event_id) not in self.enrollments:
            return False
        self.enrollments.discard((user_id, event_id))
        return True

    def is_enrolled(self, user_id, event_id):
        return (user_id, event_id) in self.enrollments

    def count_for_event(self, event_id):
        return sum(1 for _, eid in self.enrollments if eid == event_id)


def future_token(days: int = 7) -> str:
    """A scheduled_at token in the default "dd/mm/YYYY HH:MM" format."""
    moment = timezone.localtime(timezone.now() + timedelta(days=days))
    return moment.strftime("%d/%m/%Y %H:%M")


@pytest.fixture(autouse=True)
def fast_password_hashing(settings):
    settings.PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]


@pytest.fixture
def time_token():
    return future_token


@pytest.fixture
def memory_store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture
def make_user():
    """Create a user row directly, bypassing the services."""
    counter = iter(range(1, 10_000))

    def factory(name=None, email=None, password="secret", is_admin=False) -> orm.User:
        n = next(counter)
        return orm.User.objects.create(
            name=name or f"User {n}",
            email=email or f"user{n}@example.com",
            password=make_password(password),
            is_admin=is_admin,
        )

    return factory


@pytest.fixture
def make_event():
    """Create an event row directly, bypassing the services."""

    def factory(organizer, *, days=7, capacity=10, name="Meetup", category="TECNOLOGIA"):
        return orm.Event.objects.create(
            name=name,
            category=category,
            scheduled_at=timezone.now() + timedelta(days=days),
            location="Auditorio",
            capacity=capacity,
            organizer=organizer,
            description="A gathering",
        )

    return factory


@pytest.fixture
def auth_client():
    """Return an APIClient authenticated as the given user row."""

    def factory(user: orm.User) -> APIClient:
        client = APIClient()
        client.credentials(HTTP_AUTHORIZATION=f"Bearer {issue_token(UserId(user.id))}")
        return client

    return factory

