"""Domain models representing persisted state.

These are pure domain objects with no API input rules.
Django ORM models are in events/models.py (persistence layer).
"""

from dataclasses import dataclass
from datetime import date, datetime, time

from events.domain.value_objects import Capacity, EventId, Money, TicketTypeId


@dataclass(frozen=True)
class TicketType:
    """Domain representation of a TicketType."""

    id: TicketTypeId
    event_id: EventId
    name: str
    price: Money
    quantity: Capacity
    sold: Capacity
    details: str
    created_at: datetime

    def __post_init__(self) -> None:
        if self.sold.value > self.quantity.value:
            raise ValueError("Sold cannot exceed quantity")

    @property
    def available(self) -> int:
        return self.quantity.value - self.sold.value

    @property
    def sold_out(self) -> bool:
        return self.available == 0


@dataclass(frozen=True)
class Event:
    """Domain representation of an Event."""

    id: EventId
    host_id: int
    title: str
    slug: str
    description: str
    date: date
    time: time | None
    venue: str
    location: str
    country: str
    currency: str
    image_url: str | None
    is_virtual: bool
    virtual_details: dict
    social_links: dict
    status: str
    created_at: datetime
    updated_at: datetime
    ticket_types: tuple[TicketType, ...] = ()
    gallery: tuple[str, ...] = ()

    @property
    def is_published(self) -> bool:
        return self.status == "published"

    @property
    def tickets_sold(self) -> int:
        return sum(t.sold.value for t in self.ticket_types)

    def ticket_type_named(self, name: str) -> TicketType | None:
        for ticket_type in self.ticket_types:
            if ticket_type.name == name:
                return ticket_type
        return None
