"""Event service - all business logic lives here.

Services:
- Depend only on interfaces (stores)
- Validate domain invariants
- Perform orchestration and error mapping
- Return domain models or domain errors
"""

import logging
from dataclasses import replace
from datetime import date
from decimal import Decimal

from django.utils.text import slugify

from core.storage import FileStore, Upload, image_extension
from events.domain import Event, EventDraft, EventId, TicketTypeDraft
from events.domain.errors import (
    EventHasSalesError,
    EventNotFoundError,
    InvalidEventError,
    NotEventHostError,
    TicketTypeHasSalesError,
)
from events.stores.interfaces import EventStore

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = {
    "title",
    "description",
    "date",
    "time",
    "venue",
    "location",
    "country",
    "currency",
    "is_virtual",
    "virtual_details",
    "social_links",
    "status",
}


def validate_ticket_types(ticket_types: list[TicketTypeDraft] | tuple[TicketTypeDraft, ...]) -> None:
    if not ticket_types:
        raise InvalidEventError("At least one valid ticket type is required")
    seen: set[str] = set()
    for ticket in ticket_types:
        if not ticket.name.strip():
            raise InvalidEventError("Ticket type name is required")
        if ticket.name in seen:
            raise InvalidEventError(f"Duplicate ticket type name: {ticket.name}")
        seen.add(ticket.name)
        if ticket.price < Decimal("0"):
            raise InvalidEventError("Ticket price cannot be negative")
        if ticket.quantity <= 0:
            raise InvalidEventError("Ticket quantity must be at least 1")


class EventService:
    """Service for event catalog and hosting operations."""

    def __init__(
        self,
        store: EventStore,
        files: FileStore | None = None,
        max_image_bytes: int = 5 * 1024 * 1024,
        today: date | None = None,
    ) -> None:
        self._store = store
        self._files = files
        self._max_image_bytes = max_image_bytes
        self._today = today

    def _current_date(self) -> date:
        return self._today or date.today()

    def list_events(
        self,
        search: str | None = None,
        country: str | None = None,
        is_virtual: bool | None = None,
        upcoming_only: bool = False,
    ) -> list[Event]:
        """Return published events matching the filters."""
        events = self._store.list_published_events()
        return filter_events(
            events,
            search=search,
            country=country,
            is_virtual=is_virtual,
            upcoming_from=self._current_date() if upcoming_only else None,
        )

    def list_host_events(self, host_id: int) -> list[Event]:
        return self._store.list_host_events(host_id)

    def get_event(self, identifier: str, viewer_id: int | None = None) -> Event:
        """Return an event by ID or slug.

        Drafts are only visible to their host.

        Raises:
            EventNotFoundError: If the event does not exist or is hidden.
        """
        event = self._lookup(identifier)
        if event is None or (not event.is_published and event.host_id != viewer_id):
            raise EventNotFoundError(identifier)
        return event

    def _lookup(self, identifier: str) -> Event | None:
        try:
            event_id = EventId.from_string(identifier)
        except ValueError:
            return self._store.get_event_by_slug(identifier)
        return self._store.get_event(event_id)

    def get_hosted_event(self, identifier: str, host_id: int) -> Event:
        """Return an event the given user hosts.

        Raises:
            EventNotFoundError: If the event does not exist.
            NotEventHostError: If the user is not the host.
        """
        event = self._lookup(identifier)
        if event is None:
            raise EventNotFoundError(identifier)
        if event.host_id != host_id:
            raise NotEventHostError()
        return event

    def create_event(self, host_id: int, draft: EventDraft) -> Event:
        """Validate and create an event with its ticket types.

        Raises:
            InvalidEventError: If any field breaks a domain rule.
        """
        self._validate_draft(draft)
        slug = self._unique_slug(draft.title)
        event = self._store.create_event(host_id, slug, draft)
        logger.info("Event %s created by host %s", event.id, host_id)
        return event

    def _validate_draft(self, draft: EventDraft, check_date: bool = True) -> None:
        if not draft.title.strip():
            raise InvalidEventError("Event title is required")
        if not draft.description.strip():
            raise InvalidEventError("Description is required")
        if check_date and draft.date < self._current_date():
            raise InvalidEventError("Event date must be in the future")
        if not draft.is_virtual and not draft.location.strip():
            raise InvalidEventError("Location is required")
        if draft.status not in ("draft", "published"):
            raise InvalidEventError("Status must be draft or published")
        validate_ticket_types(draft.ticket_types)

    def _unique_slug(self, title: str) -> str:
        base = slugify(title)[:250] or "event"
        slug = base
        suffix = 2
        while self._store.slug_exists(slug):
            slug = f"{base}-{suffix}"
            suffix += 1
        return slug

    def update_event(
        self,
        identifier: str,
        host_id: int,
        changes: dict,
        ticket_types: list[TicketTypeDraft] | None = None,
    ) -> Event:
        """Apply a partial update to an event the user hosts.

        Raises:
            InvalidEventError: If the result breaks a domain rule.
            TicketTypeHasSalesError: If a sold ticket type would be removed
                or shrunk below its sold count.
        """
        event = self.get_hosted_event(identifier, host_id)
        unknown = set(changes) - EDITABLE_FIELDS
        if unknown:
            raise InvalidEventError(f"Cannot update: {', '.join(sorted(unknown))}")

        merged = replace(self._as_draft(event), **changes)
        if ticket_types is not None:
            merged = replace(merged, ticket_types=tuple(ticket_types))
        # past events stay editable as long as the date itself is untouched
        self._validate_draft(merged, check_date="date" in changes)

        if ticket_types is not None:
            self._check_ticket_type_changes(event, ticket_types)

        updated = self._store.update_event(event.id, changes, ticket_types)
        logger.info("Event %s updated by host %s", event.id, host_id)
        return updated

    def _as_draft(self, event: Event) -> EventDraft:
        return EventDraft(
            title=event.title,
            description=event.description,
            date=event.date,
            location=event.location,
            venue=event.venue,
            time=event.time,
            country=event.country,
            currency=event.currency,
            is_virtual=event.is_virtual,
            virtual_details=event.virtual_details,
            social_links=event.social_links,
            status=event.status,
            ticket_types=tuple(
                TicketTypeDraft(
                    name=t.name,
                    price=t.price.amount,
                    quantity=t.quantity.value,
                    details=t.details,
                )
                for t in event.ticket_types
            ),
        )

    def _check_ticket_type_changes(self, event: Event, ticket_types: list[TicketTypeDraft]) -> None:
        wanted = {t.name: t for t in ticket_types}
        for existing in event.ticket_types:
            if existing.sold.value == 0:
                continue
            replacement = wanted.get(existing.name)
            if replacement is None:
                raise TicketTypeHasSalesError(
                    existing.name, f"Ticket type {existing.name} has sales and cannot be removed"
                )
            if replacement.quantity < existing.sold.value:
                raise TicketTypeHasSalesError(
                    existing.name,
                    f"Quantity for {existing.name} cannot be below {existing.sold.value} sold",
                )

    def delete_event(self, identifier: str, host_id: int) -> None:
        """Delete an event the user hosts.

        Raises:
            EventHasSalesError: If any ticket has been sold.
        """
        event = self.get_hosted_event(identifier, host_id)
        if event.tickets_sold > 0:
            raise EventHasSalesError()
        self._store.delete_event(event.id)
        logger.info("Event %s deleted by host %s", event.id, host_id)

    def upload_image(self, identifier: str, host_id: int, upload: Upload) -> Event:
        """Store the main event image and return the updated event."""
        event = self.get_hosted_event(identifier, host_id)
        ext = image_extension(upload, self._max_image_bytes)
        url = self._require_files().save(
            f"events/{host_id}/{event.id}/main.{ext}", upload.content
        )
        return self._store.set_image_url(event.id, url)

    def add_gallery_image(self, identifier: str, host_id: int, upload: Upload) -> Event:
        """Append an image to the event gallery."""
        event = self.get_hosted_event(identifier, host_id)
        ext = image_extension(upload, self._max_image_bytes)
        position = len(event.gallery)
        url = self._require_files().save(
            f"events/{host_id}/{event.id}/gallery-{position}.{ext}", upload.content
        )
        return self._store.add_gallery_image(event.id, url)

    def _require_files(self) -> FileStore:
        if self._files is None:
            raise RuntimeError("EventService was built without a file store")
        return self._files


def filter_events(
    events: list[Event],
    search: str | None = None,
    country: str | None = None,
    is_virtual: bool | None = None,
    upcoming_from: date | None = None,
) -> list[Event]:
    """Filter a list of events in memory.

    search matches title, venue or location case-insensitively.
    """
    needle = (search or "").strip().lower()
    result = []
    for event in events:
        if needle and not any(
            needle in value.lower() for value in (event.title, event.venue, event.location)
        ):
            continue
        if country and event.country.lower() != country.lower():
            continue
        if is_virtual is not None and event.is_virtual != is_virtual:
            continue
        if upcoming_from and event.date < upcoming_from:
            continue
        result.append(event)
    return result
