"""Cache keys for public event responses."""

from django.core.cache import cache

EVENT_LIST_KEY = "events:list"


def event_detail_key(identifier: str) -> str:
    return f"events:{identifier}"


def invalidate_event(event_id, slug: str | None = None) -> None:
    keys = [EVENT_LIST_KEY, event_detail_key(str(event_id))]
    if slug:
        keys.append(event_detail_key(slug))
    cache.delete_many(keys)
