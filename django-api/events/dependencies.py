"""Wiring of services to their concrete stores."""

from django.conf import settings

from core.storage import DjangoFileStore
from events.services import EventService
from events.stores import CachedEventStore, DjangoEventStore


def get_event_store() -> CachedEventStore:
    return CachedEventStore(DjangoEventStore(), timeout=settings.EVENT_CACHE_TIMEOUT)


def get_event_service() -> EventService:
    return EventService(
        store=get_event_store(),
        files=DjangoFileStore(),
        max_image_bytes=settings.MAX_IMAGE_BYTES,
    )
