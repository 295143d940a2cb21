"""Joins events with their organizer's display name for read paths."""

from collections.abc import Iterable

from eventhub.domain import Event, EventDetail
from eventhub.stores.interfaces import AccountStore

UNKNOWN_ORGANIZER = "Unknown organizer"


class DetailAssembler:
    """Builds EventDetail projections. Stateless."""

    def __init__(self, accounts: AccountStore) -> None:
        self._accounts = accounts

    def assemble(self, event: Event) -> EventDetail:
        names = self._accounts.get_names([event.organizer_id])
        return EventDetail(
            event=event,
            organizer_name=names.get(event.organizer_id, UNKNOWN_ORGANIZER),
        )

    def assemble_many(self, events: Iterable[Event]) -> list[EventDetail]:
        """Same as assemble for each event, with one name lookup."""
        events = list(events)
        if not events:
            return []
        names = self._accounts.get_names({event.organizer_id for event in events})
        return [
            EventDetail(
                event=event,
                organizer_name=names.get(event.organizer_id, UNKNOWN_ORGANIZER),
            )
            for event in events
        ]
