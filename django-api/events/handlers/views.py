"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Map domain errors to HTTP responses (core/exception_handler.py)
- Never contain business logic
- Never expose internal error details
"""

from rest_framework import status
from rest_framework.pagination import PageNumberPagination
from rest_framework.parsers import FormParser, MultiPartParser
from rest_framework.permissions import IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from core.storage import Upload
from events.dependencies import get_event_service
from events.handlers.serializers import EventSerializer, EventWriteSerializer


def _optional_bool(value: str | None) -> bool | None:
    if value is None or value == "":
        return None
    return value.lower() in ("1", "true", "yes")


def _viewer_id(request: Request) -> int | None:
    return request.user.id if request.user and request.user.is_authenticated else None


def _upload_from(request: Request, field: str = "image") -> Upload:
    uploaded = request.FILES.get(field)
    if uploaded is None:
        return Upload(name="", content_type="", content=b"")
    return Upload.from_file(uploaded)


class EventListView(APIView):
    """Handler for GET/POST /api/events"""

    def get_permissions(self):
        if self.request.method == "POST":
            return [IsAuthenticated()]
        return super().get_permissions()

    def get(self, request: Request) -> Response:
        params = request.query_params
        events = get_event_service().list_events(
            search=params.get("search"),
            country=params.get("country"),
            is_virtual=_optional_bool(params.get("is_virtual")),
            upcoming_only=_optional_bool(params.get("upcoming")) or False,
        )
        paginator = PageNumberPagination()
        page = paginator.paginate_queryset(events, request, view=self)
        return paginator.get_paginated_response(EventSerializer(page, many=True).data)

    def post(self, request: Request) -> Response:
        serializer = EventWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        event = get_event_service().create_event(request.user.id, serializer.to_draft())
        return Response(EventSerializer(event).data, status=status.HTTP_201_CREATED)


class EventDetailView(APIView):
    """Handler for GET/PATCH/DELETE /api/events/{event_id}"""

    def get_permissions(self):
        if self.request.method in ("PATCH", "DELETE"):
            return [IsAuthenticated()]
        return super().get_permissions()

    def get(self, request: Request, event_id: str) -> Response:
        event = get_event_service().get_event(event_id, viewer_id=_viewer_id(request))
        return Response(EventSerializer(event).data)

    def patch(self, request: Request, event_id: str) -> Response:
        serializer = EventWriteSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        event = get_event_service().update_event(
            event_id,
            request.user.id,
            serializer.field_changes(),
            serializer.ticket_type_drafts(),
        )
        return Response(EventSerializer(event).data)

    def delete(self, request: Request, event_id: str) -> Response:
        get_event_service().delete_event(event_id, request.user.id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class HostEventListView(APIView):
    """Handler for GET /api/me/events"""

    permission_classes = [IsAuthenticated]

    def get(self, request: Request) -> Response:
        events = get_event_service().list_host_events(request.user.id)
        return Response(EventSerializer(events, many=True).data)


class EventImageView(APIView):
    """Handler for POST /api/events/{event_id}/image"""

    permission_classes = [IsAuthenticated]
    parser_classes = [MultiPartParser, FormParser]

    def post(self, request: Request, event_id: str) -> Response:
        event = get_event_service().upload_image(event_id, request.user.id, _upload_from(request))
        return Response(EventSerializer(event).data)


class EventGalleryView(APIView):
    """Handler for POST /api/events/{event_id}/gallery"""

    permission_classes = [IsAuthenticated]
    parser_classes = [MultiPartParser, FormParser]

    def post(self, request: Request, event_id: str) -> Response:
        event = get_event_service().add_gallery_image(
            event_id, request.user.id, _upload_from(request)
        )
        return Response(EventSerializer(event).data, status=status.HTTP_201_CREATED)
