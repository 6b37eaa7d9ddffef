"""Django signals for cache invalidation.

Keys are dropped immediately and again once the surrounding transaction
commits, so a read that re-caches uncommitted-over rows is discarded.
"""

from django.db import transaction
from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from events.cache import invalidate_event
from events.models import Event, EventGalleryImage, TicketType


def _invalidate(event_id, slug: str | None) -> None:
    invalidate_event(event_id, slug)
    transaction.on_commit(lambda: invalidate_event(event_id, slug))


@receiver([post_save, post_delete], sender=Event)
def invalidate_event_cache(sender, instance, **kwargs):
    """Invalidate caches when an event is saved or deleted."""
    _invalidate(instance.pk, instance.slug)


@receiver([post_save, post_delete], sender=TicketType)
def invalidate_ticket_type_cache(sender, instance, **kwargs):
    """Invalidate caches when a ticket type is saved or deleted."""
    _invalidate(instance.event_id, _event_slug(instance.event_id))


@receiver([post_save, post_delete], sender=EventGalleryImage)
def invalidate_gallery_cache(sender, instance, **kwargs):
    """Invalidate caches when a gallery image is saved or deleted."""
    _invalidate(instance.event_id, _event_slug(instance.event_id))


def _event_slug(event_id) -> str | None:
    return Event.objects.filter(pk=event_id).values_list("slug", flat=True).first()
