from events.handlers.views import (
    EventDetailView,
    EventGalleryView,
    EventImageView,
    EventListView,
    HostEventListView,
)

__all__ = [
    "EventListView",
    "EventDetailView",
    "HostEventListView",
    "EventImageView",
    "EventGalleryView",
]
