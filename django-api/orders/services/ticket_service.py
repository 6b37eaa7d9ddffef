"""Ticket lookup, door scanning and host reporting."""

import logging

from events.domain import Event, EventId
from events.domain.errors import EventNotFoundError, NotEventHostError
from events.stores.interfaces import EventStore
from orders.domain import EventStats, ScanResult, Ticket, TicketId, TicketTypeSales
from orders.domain.errors import InvalidTicketSignatureError, TicketNotFoundError
from orders.stores.interfaces import OrderStore

logger = logging.getLogger(__name__)


class TicketService:
    def __init__(self, orders: OrderStore, events: EventStore) -> None:
        self._orders = orders
        self._events = events

    def _ticket(self, ticket_id: str) -> Ticket:
        try:
            parsed = TicketId.from_string(ticket_id)
        except ValueError:
            raise TicketNotFoundError() from None
        ticket = self._orders.get_ticket(parsed)
        if ticket is None:
            raise TicketNotFoundError()
        return ticket

    def get_ticket(self, ticket_id: str, signature: str | None) -> Ticket:
        """Return a ticket when the signature matches its code.

        Raises:
            TicketNotFoundError: If the ticket does not exist.
            InvalidTicketSignatureError: If the signature does not match.
        """
        ticket = self._ticket(ticket_id)
        if not ticket.code.matches(signature):
            raise InvalidTicketSignatureError()
        return ticket

    def scan_ticket(
        self, scanner_id: int, is_staff: bool, ticket_id: str, signature: str | None
    ) -> tuple[Ticket, ScanResult]:
        """Validate a ticket at the door.

        The first valid scan marks the ticket used; later scans report
        ALREADY_SCANNED and leave it unchanged. Every attempt is logged.

        Raises:
            TicketNotFoundError: If the ticket does not exist.
            NotEventHostError: If the scanner neither hosts the event nor is staff.
            InvalidTicketSignatureError: If the signature does not match.
        """
        ticket = self._ticket(ticket_id)
        event = self._events.get_event(ticket.event_id)
        if not is_staff and (event is None or event.host_id != scanner_id):
            raise NotEventHostError()
        if not ticket.code.matches(signature):
            self._orders.record_scan(ticket.id, scanner_id, ScanResult.INVALID_SIGNATURE)
            logger.warning("Ticket %s scanned with an invalid signature", ticket.id)
            raise InvalidTicketSignatureError()
        ticket, result = self._orders.scan_ticket(ticket.id, scanner_id)
        logger.info("Ticket %s scanned by %s: %s", ticket.id, scanner_id, result.value)
        return ticket, result

    def list_my_tickets(self, user_id: int, email: str) -> list[Ticket]:
        return self._orders.list_buyer_tickets(user_id, email)

    def _hosted_event(self, identifier: str, host_id: int) -> Event:
        try:
            event = self._events.get_event(EventId.from_string(identifier))
        except ValueError:
            event = self._events.get_event_by_slug(identifier)
        if event is None:
            raise EventNotFoundError(identifier)
        if event.host_id != host_id:
            raise NotEventHostError()
        return event

    def event_stats(self, identifier: str, host_id: int) -> EventStats:
        """Sales and attendance figures for an event the user hosts."""
        event = self._hosted_event(identifier, host_id)
        paid_orders, revenue = self._orders.paid_totals(event.id)
        return EventStats(
            event_id=event.id,
            currency=event.currency,
            ticket_types=tuple(
                TicketTypeSales(
                    name=t.name,
                    price=t.price,
                    quantity=t.quantity.value,
                    sold=t.sold.value,
                )
                for t in event.ticket_types
            ),
            tickets_scanned=self._orders.count_scanned(event.id),
            paid_orders=paid_orders,
            gross_revenue=revenue,
        )

    def list_attendees(self, identifier: str, host_id: int) -> list[Ticket]:
        event = self._hosted_event(identifier, host_id)
        return self._orders.list_event_tickets(event.id)
