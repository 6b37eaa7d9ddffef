"""Tests for cache behavior.

Run with: pytest tests/test_cache.py -v
"""

from decimal import Decimal

import pytest
from django.core.cache import cache

from events.cache import EVENT_LIST_KEY, event_detail_key
from events.dependencies import get_event_store
from events.domain import EventId
from events.models import EventGalleryImage, TicketType


@pytest.mark.django_db
class TestCachedReads:
    """Tests for the read-through event cache."""

    def test_list_is_cached(self, event):
        store = get_event_store()
        store.list_published_events()
        assert [e.slug for e in cache.get(EVENT_LIST_KEY)] == [event.slug]

    def test_detail_cached_by_id_and_slug(self, event):
        store = get_event_store()
        store.get_event(EventId(event.id))
        store.get_event_by_slug(event.slug)
        assert cache.get(event_detail_key(str(event.id))).title == event.title
        assert cache.get(event_detail_key(event.slug)).title == event.title

    def test_missing_event_not_cached(self, db):
        assert get_event_store().get_event_by_slug("nope") is None
        assert cache.get(event_detail_key("nope")) is None


@pytest.mark.django_db
class TestCacheInvalidation:
    """Tests for cache invalidation on model changes."""

    def _warm(self, event):
        store = get_event_store()
        store.list_published_events()
        store.get_event(EventId(event.id))
        store.get_event_by_slug(event.slug)

    def _assert_cold(self, event):
        assert cache.get(EVENT_LIST_KEY) is None
        assert cache.get(event_detail_key(str(event.id))) is None
        assert cache.get(event_detail_key(event.slug)) is None

    def test_event_save_invalidates_list_and_detail(self, event):
        """Saving an event invalidates the list and both detail keys."""
        self._warm(event)
        event.title = "Renamed"
        event.save()
        self._assert_cold(event)

    def test_event_delete_invalidates(self, event):
        self._warm(event)
        event.delete()
        self._assert_cold(event)

    def test_ticket_type_save_invalidates(self, event):
        """Selling tickets refreshes availability shown by cached reads."""
        self._warm(event)
        ticket_type = TicketType.objects.get(event=event, name="Regular")
        ticket_type.sold = 3
        ticket_type.save()
        self._assert_cold(event)
        fresh = get_event_store().get_event(EventId(event.id))
        assert fresh.ticket_type_named("Regular").available == 7

    def test_gallery_image_save_invalidates(self, event):
        self._warm(event)
        EventGalleryImage.objects.create(event=event, image_url="https://files.test/a.jpg")
        self._assert_cold(event)

    def test_ticket_type_create_invalidates(self, event):
        self._warm(event)
        TicketType.objects.create(event=event, name="Student", price=Decimal("1000"), quantity=5)
        self._assert_cold(event)

    def test_reads_cached_before_commit_are_dropped_on_commit(
        self, event, django_capture_on_commit_callbacks
    ):
        """A read that re-caches during the selling transaction is discarded once it commits."""
        ticket_type = TicketType.objects.get(event=event, name="Regular")
        with django_capture_on_commit_callbacks(execute=True):
            ticket_type.sold = 4
            ticket_type.save()
            self._warm(event)
            assert cache.get(event_detail_key(str(event.id))) is not None
        self._assert_cold(event)
