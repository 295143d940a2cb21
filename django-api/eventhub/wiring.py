"""Constructs the services used by the HTTP handlers and commands.

Services are stateless, so one set is built per process and shared by every
request thread.
"""

import threading
from dataclasses import dataclass

from django.conf import settings

from eventhub.services import AccountService, EnrollmentService, EventService
from eventhub.services.event_service import DEFAULT_DATETIME_FORMAT
from eventhub.stores.django_store import DjangoStore


@dataclass(frozen=True)
class Services:
    accounts: AccountService
    events: EventService
    enrollments: EnrollmentService


_SERVICES_LOCK = threading.Lock()
_SERVICES: Services | None = None


def build_services() -> Services:
    global _SERVICES
    with _SERVICES_LOCK:
        if _SERVICES is None:
            store = DjangoStore()
            _SERVICES = Services(
                accounts=AccountService(store),
                events=EventService(
                    store,
                    store,
                    datetime_format=getattr(
                        settings, "EVENTHUB_DATETIME_FORMAT", DEFAULT_DATETIME_FORMAT
                    ),
                ),
                enrollments=EnrollmentService(store, store, store),
            )
        return _SERVICES
