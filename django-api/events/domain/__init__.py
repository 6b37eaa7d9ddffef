from events.domain.commands import EventDraft, TicketTypeDraft
from events.domain.models import Event, TicketType
from events.domain.value_objects import Capacity, EventId, Money, TicketTypeId, format_price

__all__ = [
    "Event",
    "TicketType",
    "EventDraft",
    "TicketTypeDraft",
    "EventId",
    "TicketTypeId",
    "Money",
    "Capacity",
    "format_price",
]
