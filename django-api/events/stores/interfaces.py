"""Store interfaces (repository pattern).

Stores must be swappable and return domain models.
"""

from abc import ABC, abstractmethod

from events.domain import Event, EventDraft, EventId, TicketTypeDraft


class EventStore(ABC):
    """Interface for event persistence operations."""

    @abstractmethod
    def list_published_events(self) -> list[Event]:
        """Return published events ordered by date, then created_at."""
        ...

    @abstractmethod
    def list_host_events(self, host_id: int) -> list[Event]:
        """Return every event hosted by a user, newest first."""
        ...

    @abstractmethod
    def get_event(self, event_id: EventId) -> Event | None:
        """Return an event by ID, or None if not found."""
        ...

    @abstractmethod
    def get_event_by_slug(self, slug: str) -> Event | None:
        """Return an event by slug, or None if not found."""
        ...

    @abstractmethod
    def slug_exists(self, slug: str) -> bool:
        """Check if a slug is already taken."""
        ...

    @abstractmethod
    def create_event(self, host_id: int, slug: str, draft: EventDraft) -> Event:
        """Persist an event and its ticket types atomically."""
        ...

    @abstractmethod
    def update_event(
        self,
        event_id: EventId,
        fields: dict,
        ticket_types: list[TicketTypeDraft] | None = None,
    ) -> Event:
        """Apply field changes; when ticket_types is given, replace the set.

        Ticket types are matched by name: existing ones are updated,
        new ones created and missing ones deleted.

        Raises:
            TicketTypeHasSalesError: If a ticket type with orders would be
                removed or shrunk below its sold count.
        """
        ...

    @abstractmethod
    def delete_event(self, event_id: EventId) -> None:
        """Delete an event and its ticket types.

        Raises:
            EventHasSalesError: If any of its ticket types has sold tickets.
        """
        ...

    @abstractmethod
    def set_image_url(self, event_id: EventId, image_url: str) -> Event:
        """Set the main image URL of an event."""
        ...

    @abstractmethod
    def add_gallery_image(self, event_id: EventId, image_url: str) -> Event:
        """Append an image to the event gallery."""
        ...
