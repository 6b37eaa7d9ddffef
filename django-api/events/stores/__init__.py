from events.stores.cached_store import CachedEventStore
from events.stores.django_store import DjangoEventStore
from events.stores.interfaces import EventStore

__all__ = ["EventStore", "DjangoEventStore", "CachedEventStore"]
