"""Read-through cache in front of another EventStore.

Keys are invalidated by events/signals.py whenever an Event, TicketType
or gallery image row changes.
"""

from django.core.cache import cache

from events.cache import EVENT_LIST_KEY, event_detail_key
from events.domain import Event, EventDraft, EventId, TicketTypeDraft
from events.stores.interfaces import EventStore


class CachedEventStore(EventStore):
    """Caches public reads; delegates writes unchanged."""

    def __init__(self, inner: EventStore, timeout: int = 300) -> None:
        self._inner = inner
        self._timeout = timeout

    def list_published_events(self) -> list[Event]:
        return cache.get_or_set(EVENT_LIST_KEY, self._inner.list_published_events, self._timeout)

    def list_host_events(self, host_id: int) -> list[Event]:
        return self._inner.list_host_events(host_id)

    def get_event(self, event_id: EventId) -> Event | None:
        key = event_detail_key(str(event_id.value))
        event = cache.get(key)
        if event is None:
            event = self._inner.get_event(event_id)
            if event is not None:
                cache.set(key, event, self._timeout)
        return event

    def get_event_by_slug(self, slug: str) -> Event | None:
        key = event_detail_key(slug)
        event = cache.get(key)
        if event is None:
            event = self._inner.get_event_by_slug(slug)
            if event is not None:
                cache.set(key, event, self._timeout)
        return event

    def slug_exists(self, slug: str) -> bool:
        return self._inner.slug_exists(slug)

    def create_event(self, host_id: int, slug: str, draft: EventDraft) -> Event:
        return self._inner.create_event(host_id, slug, draft)

    def update_event(
        self,
        event_id: EventId,
        fields: dict,
        ticket_types: list[TicketTypeDraft] | None = None,
    ) -> Event:
        return self._inner.update_event(event_id, fields, ticket_types)

    def delete_event(self, event_id: EventId) -> None:
        self._inner.delete_event(event_id)

    def set_image_url(self, event_id: EventId, image_url: str) -> Event:
        return self._inner.set_image_url(event_id, image_url)

    def add_gallery_image(self, event_id: EventId, image_url: str) -> Event:
        return self._inner.add_gallery_image(event_id, image_url)
