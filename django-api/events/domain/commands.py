"""Validated inputs for event writes.

Handlers build these from request data; services check domain rules.
"""

import datetime as dt
from dataclasses import dataclass, field
from decimal import Decimal


@dataclass(frozen=True)
class TicketTypeDraft:
    name: str
    price: Decimal
    quantity: int
    details: str = ""


@dataclass(frozen=True)
class EventDraft:
    title: str
    description: str
    date: dt.date
    location: str = ""
    venue: str = ""
    time: dt.time | None = None
    country: str = ""
    currency: str = ""
    is_virtual: bool = False
    virtual_details: dict = field(default_factory=dict)
    social_links: dict = field(default_factory=dict)
    status: str = "published"
    ticket_types: tuple[TicketTypeDraft, ...] = ()
