from orders.services.checkout_service import CheckoutService
from orders.services.ticket_service import TicketService

__all__ = ["CheckoutService", "TicketService"]
