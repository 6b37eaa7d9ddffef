from django.urls import path

from events.handlers import (
    EventDetailView,
    EventGalleryView,
    EventImageView,
    EventListView,
    HostEventListView,
)

urlpatterns = [
    path("events", EventListView.as_view(), name="event-list"),
    path("me/events", HostEventListView.as_view(), name="host-event-list"),
    path("events/<str:event_id>", EventDetailView.as_view(), name="event-detail"),
    path("events/<str:event_id>/image", EventImageView.as_view(), name="event-image"),
    path("events/<str:event_id>/gallery", EventGalleryView.as_view(), name="event-gallery"),
]
