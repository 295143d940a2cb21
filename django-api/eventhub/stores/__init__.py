from eventhub.stores.interfaces import (
    AccountStore,
    CascadeResult,
    EnrollmentStore,
    EventStore,
    Store,
)

__all__ = [
    "AccountStore",
    "CascadeResult",
    "EnrollmentStore",
    "EventStore",
    "Store",
]
