"""Domain models representing persisted order state.

Django ORM models are in orders/models.py (persistence layer).
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum

from events.domain import Event, EventId, Money, TicketTypeId
from orders.domain.value_objects import Attendee, OrderId, TicketCode, TicketId


class OrderStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"
    CANCELLED = "cancelled"
    REFUNDED = "refunded"


class ScanResult(str, Enum):
    SUCCESS = "success"
    ALREADY_SCANNED = "already_scanned"
    INVALID_SIGNATURE = "invalid_signature"


@dataclass(frozen=True)
class Order:
    """Domain representation of an Order."""

    id: OrderId
    event_id: EventId
    ticket_type_id: TicketTypeId
    ticket_type_name: str
    buyer_id: int | None
    buyer: Attendee
    buyer_phone: str
    currency: str
    quantity: int
    unit_price: Money
    total_amount: Money
    attendees: tuple[Attendee, ...]
    status: OrderStatus
    payment_provider: str
    payment_reference: str | None
    created_at: datetime
    updated_at: datetime

    @property
    def is_free(self) -> bool:
        return self.total_amount.is_free

    @property
    def is_pending(self) -> bool:
        return self.status == OrderStatus.PENDING

    @property
    def is_paid(self) -> bool:
        return self.status == OrderStatus.PAID

    def ticket_holders(self) -> list[Attendee]:
        """One holder per seat: buyer first, then named attendees.

        Seats without a named attendee go to the buyer.
        """
        holders = [self.buyer]
        holders.extend(self.attendees[: self.quantity - 1])
        while len(holders) < self.quantity:
            holders.append(self.buyer)
        return holders


@dataclass(frozen=True)
class Ticket:
    """Domain representation of an issued Ticket."""

    id: TicketId
    order_id: OrderId
    event_id: EventId
    ticket_type_id: TicketTypeId
    ticket_type_name: str
    code: TicketCode
    qr_code_url: str
    holder: Attendee
    price: Money
    currency: str
    is_scanned: bool
    scanned_at: datetime | None
    created_at: datetime


@dataclass(frozen=True)
class NewOrder:
    """An order ready to be persisted."""

    event_id: EventId
    ticket_type_id: TicketTypeId
    buyer_id: int | None
    buyer: Attendee
    buyer_phone: str
    currency: str
    quantity: int
    unit_price: Money
    attendees: tuple[Attendee, ...] = ()

    @property
    def total_amount(self) -> Money:
        return self.unit_price.times(self.quantity)


@dataclass(frozen=True)
class TicketTypeSales:
    name: str
    price: Money
    quantity: int
    sold: int

    @property
    def revenue(self) -> Decimal:
        return self.price.amount * self.sold


@dataclass(frozen=True)
class EventStats:
    event_id: EventId
    currency: str
    ticket_types: tuple[TicketTypeSales, ...]
    tickets_scanned: int
    paid_orders: int
    gross_revenue: Decimal

    @property
    def tickets_sold(self) -> int:
        return sum(t.sold for t in self.ticket_types)

    @property
    def capacity(self) -> int:
        return sum(t.quantity for t in self.ticket_types)


@dataclass(frozen=True)
class Receipt:
    """An order with its issued tickets and the event they admit to."""

    order: Order
    tickets: tuple[Ticket, ...]
    event: Event | None
