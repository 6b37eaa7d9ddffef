"""Django ORM implementation of the EventStore."""

from django.db import transaction
from django.db.models import Max, Prefetch

from events import models
from events.domain import (
    Capacity,
    Event,
    EventDraft,
    EventId,
    Money,
    TicketType,
    TicketTypeDraft,
    TicketTypeId,
)
from events.domain.errors import EventHasSalesError, TicketTypeHasSalesError
from events.stores.interfaces import EventStore


def to_ticket_type(row: models.TicketType) -> TicketType:
    return TicketType(
        id=TicketTypeId(row.id),
        event_id=EventId(row.event_id),
        name=row.name,
        price=Money(row.price),
        quantity=Capacity(row.quantity),
        sold=Capacity(row.sold),
        details=row.details,
        created_at=row.created_at,
    )


def to_event(row: models.Event) -> Event:
    return Event(
        id=EventId(row.id),
        host_id=row.host_id,
        title=row.title,
        slug=row.slug,
        description=row.description,
        date=row.date,
        time=row.time,
        venue=row.venue,
        location=row.location,
        country=row.country,
        currency=row.currency,
        image_url=row.image_url,
        is_virtual=row.is_virtual,
        virtual_details=row.virtual_details or {},
        social_links=row.social_links or {},
        status=row.status,
        created_at=row.created_at,
        updated_at=row.updated_at,
        ticket_types=tuple(to_ticket_type(t) for t in row.ticket_types.all()),
        gallery=tuple(g.image_url for g in row.gallery_images.all()),
    )


class DjangoEventStore(EventStore):
    """PostgreSQL-backed event store using Django ORM."""

    def _queryset(self):
        return models.Event.objects.prefetch_related(
            Prefetch("ticket_types", queryset=models.TicketType.objects.order_by("created_at")),
            Prefetch(
                "gallery_images",
                queryset=models.EventGalleryImage.objects.order_by("position"),
            ),
        )

    def _reload(self, event_id: EventId) -> Event:
        return to_event(self._queryset().get(pk=event_id.value))

    def list_published_events(self) -> list[Event]:
        rows = self._queryset().filter(status=models.Event.Status.PUBLISHED)
        return [to_event(row) for row in rows.order_by("date", "created_at")]

    def list_host_events(self, host_id: int) -> list[Event]:
        rows = self._queryset().filter(host_id=host_id).order_by("-created_at")
        return [to_event(row) for row in rows]

    def get_event(self, event_id: EventId) -> Event | None:
        row = self._queryset().filter(pk=event_id.value).first()
        return to_event(row) if row else None

    def get_event_by_slug(self, slug: str) -> Event | None:
        row = self._queryset().filter(slug=slug).first()
        return to_event(row) if row else None

    def slug_exists(self, slug: str) -> bool:
        return models.Event.objects.filter(slug=slug).exists()

    @transaction.atomic
    def create_event(self, host_id: int, slug: str, draft: EventDraft) -> Event:
        row = models.Event.objects.create(
            host_id=host_id,
            slug=slug,
            title=draft.title,
            description=draft.description,
            date=draft.date,
            time=draft.time,
            venue=draft.venue,
            location=draft.location,
            country=draft.country,
            currency=draft.currency,
            is_virtual=draft.is_virtual,
            virtual_details=draft.virtual_details,
            social_links=draft.social_links,
            status=draft.status,
        )
        for ticket in draft.ticket_types:
            models.TicketType.objects.create(
                event=row,
                name=ticket.name,
                price=ticket.price,
                quantity=ticket.quantity,
                details=ticket.details,
            )
        return self._reload(EventId(row.id))

    @transaction.atomic
    def update_event(
        self,
        event_id: EventId,
        fields: dict,
        ticket_types: list[TicketTypeDraft] | None = None,
    ) -> Event:
        row = models.Event.objects.select_for_update().get(pk=event_id.value)
        for name, value in fields.items():
            setattr(row, name, value)
        row.save()

        if ticket_types is not None:
            existing = {t.name: t for t in row.ticket_types.select_for_update()}
            wanted = {t.name for t in ticket_types}
            # sold is re-checked under the row lock
            for name, ticket_row in existing.items():
                if name in wanted:
                    continue
                if ticket_row.sold or ticket_row.orders.exists():
                    raise TicketTypeHasSalesError(
                        name, f"Ticket type {name} has orders and cannot be removed"
                    )
                ticket_row.delete()
            for ticket in ticket_types:
                ticket_row = existing.get(ticket.name)
                if ticket_row is None:
                    models.TicketType.objects.create(
                        event=row,
                        name=ticket.name,
                        price=ticket.price,
                        quantity=ticket.quantity,
                        details=ticket.details,
                    )
                    continue
                if ticket.quantity < ticket_row.sold:
                    raise TicketTypeHasSalesError(
                        ticket.name,
                        f"Quantity for {ticket.name} cannot be below {ticket_row.sold} sold",
                    )
                ticket_row.price = ticket.price
                ticket_row.quantity = ticket.quantity
                ticket_row.details = ticket.details
                ticket_row.save()
        return self._reload(event_id)

    @transaction.atomic
    def delete_event(self, event_id: EventId) -> None:
        row = models.Event.objects.select_for_update().filter(pk=event_id.value).first()
        if row is None:
            return
        if row.ticket_types.select_for_update().filter(sold__gt=0).exists():
            raise EventHasSalesError()
        row.delete()

    def set_image_url(self, event_id: EventId, image_url: str) -> Event:
        row = models.Event.objects.get(pk=event_id.value)
        row.image_url = image_url
        row.save(update_fields=["image_url", "updated_at"])
        return self._reload(event_id)

    @transaction.atomic
    def add_gallery_image(self, event_id: EventId, image_url: str) -> Event:
        row = models.Event.objects.select_for_update().get(pk=event_id.value)
        last = row.gallery_images.aggregate(last=Max("position"))["last"]
        models.EventGalleryImage.objects.create(
            event=row,
            image_url=image_url,
            position=0 if last is None else last + 1,
        )
        return self._reload(event_id)
