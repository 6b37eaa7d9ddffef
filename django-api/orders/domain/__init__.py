from orders.domain.models import (
    EventStats,
    NewOrder,
    Order,
    OrderStatus,
    Receipt,
    ScanResult,
    Ticket,
    TicketTypeSales,
)
from orders.domain.value_objects import Attendee, OrderId, TicketCode, TicketId

__all__ = [
    "Order",
    "NewOrder",
    "OrderStatus",
    "Receipt",
    "Ticket",
    "ScanResult",
    "EventStats",
    "TicketTypeSales",
    "Attendee",
    "OrderId",
    "TicketId",
    "TicketCode",
]
