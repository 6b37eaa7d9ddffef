"""Store interfaces (repository pattern).

Stores must be swappable and return domain models.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from decimal import Decimal

from events.domain import EventId
from orders.domain import (
    Attendee,
    NewOrder,
    Order,
    OrderId,
    OrderStatus,
    ScanResult,
    Ticket,
    TicketCode,
    TicketId,
)


class OrderStore(ABC):
    """Interface for order and ticket persistence operations."""

    @abstractmethod
    def create_order(self, new_order: NewOrder) -> Order:
        ...

    @abstractmethod
    def get_order(self, order_id: OrderId) -> Order | None:
        ...

    @abstractmethod
    def get_order_by_reference(self, reference: str) -> Order | None:
        ...

    @abstractmethod
    def set_payment_reference(self, order_id: OrderId, reference: str, provider: str) -> Order:
        ...

    @abstractmethod
    def set_status(self, order_id: OrderId, status: OrderStatus, only_if_pending: bool = True) -> Order:
        """Move an order to a new status.

        With only_if_pending, orders that already left `pending` are
        returned unchanged.
        """
        ...

    @abstractmethod
    def issue_tickets(
        self,
        order_id: OrderId,
        holders: list[Attendee],
        codes: list[TicketCode],
        reference: str,
        provider: str,
    ) -> tuple[Order, list[Ticket], bool]:
        """Atomically mark an order paid and create its tickets.

        Locks the order and its ticket type, re-checks availability and
        increments the sold count. An order that is already paid is
        returned with its existing tickets and False.

        Raises:
            InsufficientTicketsError: If the ticket type no longer has
                enough seats left.
        """
        ...

    @abstractmethod
    def set_qr_code_url(self, ticket_id: TicketId, url: str) -> None:
        ...

    @abstractmethod
    def list_order_tickets(self, order_id: OrderId) -> list[Ticket]:
        ...

    @abstractmethod
    def get_ticket(self, ticket_id: TicketId) -> Ticket | None:
        ...

    @abstractmethod
    def scan_ticket(self, ticket_id: TicketId, scanner_id: int | None) -> tuple[Ticket, ScanResult]:
        """Atomically mark a ticket scanned on first use and log the attempt."""
        ...

    @abstractmethod
    def record_scan(self, ticket_id: TicketId, scanner_id: int | None, result: ScanResult) -> None:
        """Log a scan attempt that did not touch the ticket."""
        ...

    @abstractmethod
    def list_buyer_tickets(self, user_id: int, email: str) -> list[Ticket]:
        """Tickets from orders the user placed or addressed to their email."""
        ...

    @abstractmethod
    def list_event_tickets(self, event_id: EventId) -> list[Ticket]:
        ...

    @abstractmethod
    def count_scanned(self, event_id: EventId) -> int:
        ...

    @abstractmethod
    def paid_totals(self, event_id: EventId) -> tuple[int, Decimal]:
        """Return (paid order count, sum of paid order totals) for an event."""
        ...

    @abstractmethod
    def list_abandoned_orders(self, created_before: datetime, limit: int) -> list[Order]:
        """Pending orders older than the cutoff that were never reminded."""
        ...

    @abstractmethod
    def mark_abandoned_email_sent(self, order_id: OrderId, sent_at: datetime) -> None:
        ...
