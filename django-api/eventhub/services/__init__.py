from eventhub.services.account_service import AccountService
from eventhub.services.details import UNKNOWN_ORGANIZER, DetailAssembler
from eventhub.services.enrollment_service import EnrollmentService
from eventhub.services.event_service import EventService

__all__ = [
    "AccountService",
    "DetailAssembler",
    "EnrollmentService",
    "EventService",
    "UNKNOWN_ORGANIZER",
]
