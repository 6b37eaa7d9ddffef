"""Wiring of services to their concrete stores."""

from django.conf import settings

from accounts.stores import DjangoAccountStore
from core.mailer import DjangoMailer
from core.storage import DjangoFileStore
from events.dependencies import get_event_store
from orders.services import CheckoutService, TicketService
from orders.stores import DjangoOrderStore
from payments import get_gateway


def get_checkout_service(with_gateway: bool = True) -> CheckoutService:
    return CheckoutService(
        orders=DjangoOrderStore(),
        events=get_event_store(),
        gateway=get_gateway() if with_gateway else None,
        files=DjangoFileStore(),
        mailer=DjangoMailer(),
        accounts=DjangoAccountStore(),
        public_base_url=settings.PUBLIC_BASE_URL,
        default_currency=settings.DEFAULT_CURRENCY,
    )


def get_ticket_service() -> TicketService:
    return TicketService(orders=DjangoOrderStore(), events=get_event_store())
