"""Checkout: orders, payment links, payment confirmation and ticket issuance.

Services:
- Depend only on interfaces (stores, gateway, file store, mailer)
- Validate domain invariants
- Perform orchestration and error mapping
- Return domain models or domain errors
"""

import json
import logging
from collections.abc import Callable
from dataclasses import replace
from datetime import datetime, timedelta

from django.core.exceptions import ValidationError
from django.core.validators import validate_email
from django.utils import timezone

from accounts.stores.interfaces import AccountStore
from core.mailer import Mailer
from core.storage import FileStore
from events.domain import Event, EventId, Money, format_price
from events.domain.errors import EventNotFoundError
from events.stores.interfaces import EventStore
from orders.domain import (
    Attendee,
    NewOrder,
    Order,
    OrderId,
    OrderStatus,
    Receipt,
    Ticket,
    TicketCode,
)
from orders.domain.errors import (
    InsufficientTicketsError,
    InvalidOrderError,
    InvalidSignatureError,
    OrderNotFoundError,
    OrderNotPayableError,
    PaymentNotSuccessfulError,
    TicketTypeNotFoundError,
)
from orders.services.qr_codes import render_qr_png, validation_url
from orders.stores.interfaces import OrderStore
from payments import InitializedTransaction, PaymentGateway
from payments.gateway import from_minor_units

logger = logging.getLogger(__name__)

FREE_PROVIDER = "free"
FAILED_PAYMENT_STATUSES = {"failed", "abandoned"}


def checked_attendee(name: str, email: str, label: str) -> Attendee:
    name = name.strip()
    email = email.strip().lower()
    if not name:
        raise InvalidOrderError(f"{label} name is required")
    try:
        validate_email(email)
    except ValidationError:
        raise InvalidOrderError(f"{label} email is invalid") from None
    return Attendee(name=name, email=email)


def millis(moment: datetime) -> int:
    return int(moment.timestamp() * 1000)


class CheckoutService:
    """Service for the checkout flow from ticket selection to receipt."""

    def __init__(
        self,
        orders: OrderStore,
        events: EventStore,
        gateway: PaymentGateway | None = None,
        files: FileStore | None = None,
        mailer: Mailer | None = None,
        accounts: AccountStore | None = None,
        public_base_url: str = "http://localhost:3000",
        default_currency: str = "NGN",
        now: Callable[[], datetime] = timezone.now,
    ) -> None:
        self._orders = orders
        self._events = events
        self._gateway = gateway
        self._files = files
        self._mailer = mailer
        self._accounts = accounts
        self._base_url = public_base_url.rstrip("/")
        self._default_currency = default_currency
        self._now = now

    def _find_event(self, identifier: str) -> Event | None:
        try:
            event_id = EventId.from_string(identifier)
        except ValueError:
            return self._events.get_event_by_slug(identifier)
        return self._events.get_event(event_id)

    def create_order(
        self,
        event_identifier: str,
        ticket_type_name: str,
        quantity: int,
        buyer: Attendee,
        buyer_id: int | None = None,
        buyer_phone: str = "",
        attendees: list[Attendee] | tuple[Attendee, ...] = (),
        currency: str | None = None,
    ) -> Receipt:
        """Create a pending order for a published event.

        Free orders are completed in the same call and come back with
        their tickets.

        Raises:
            EventNotFoundError: If the event does not exist or is a draft.
            TicketTypeNotFoundError: If the event has no such ticket type.
            InsufficientTicketsError: If fewer seats than requested remain.
            InvalidOrderError: If quantity, buyer or attendees are invalid.
        """
        event = self._find_event(event_identifier)
        if event is None or not event.is_published:
            raise EventNotFoundError(event_identifier)
        ticket_type = event.ticket_type_named(ticket_type_name)
        if ticket_type is None:
            raise TicketTypeNotFoundError(ticket_type_name)
        if quantity < 1:
            raise InvalidOrderError("Quantity must be at least 1")
        if quantity > ticket_type.available:
            raise InsufficientTicketsError(ticket_type.available)

        buyer = checked_attendee(buyer.name, buyer.email, "Buyer")
        if len(attendees) > quantity - 1:
            raise InvalidOrderError(f"At most {quantity - 1} additional attendee(s) allowed")
        extra = tuple(
            checked_attendee(a.name, a.email, f"Attendee {i}")
            for i, a in enumerate(attendees, start=2)
        )

        order = self._orders.create_order(
            NewOrder(
                event_id=event.id,
                ticket_type_id=ticket_type.id,
                buyer_id=buyer_id,
                buyer=buyer,
                buyer_phone=buyer_phone.strip(),
                currency=currency or event.currency or self._default_currency,
                quantity=quantity,
                unit_price=Money(ticket_type.price.amount),
                attendees=extra,
            )
        )
        logger.info(
            "Order %s created for %d x %s (event %s)", order.id, quantity, ticket_type.name, event.id
        )
        if order.is_free:
            return self._complete(order, f"FREE-{order.id}", FREE_PROVIDER, event)
        return Receipt(order=order, tickets=(), event=event)

    def _get_order(self, order_id: OrderId) -> Order:
        order = self._orders.get_order(order_id)
        if order is None:
            raise OrderNotFoundError()
        return order

    def initialize_payment(
        self, order_id: OrderId, callback_url: str | None = None
    ) -> InitializedTransaction:
        """Create a hosted payment link for a pending order.

        Raises:
            OrderNotFoundError: If the order does not exist.
            OrderNotPayableError: If the order is free or no longer pending.
            PaymentGatewayError: If the provider rejects the request.
        """
        order = self._get_order(order_id)
        if not order.is_pending or order.is_free:
            raise OrderNotPayableError(order.status.value)

        gateway = self._require_gateway()
        reference = f"ORD-{order.id}-{millis(self._now())}"
        transaction = gateway.initialize_transaction(
            email=order.buyer.email,
            amount=order.total_amount.amount,
            currency=order.currency,
            reference=reference,
            callback_url=callback_url or f"{self._base_url}/success?orderId={order.id}",
            metadata={
                "orderId": str(order.id),
                "eventId": str(order.event_id),
                "ticketType": order.ticket_type_name,
                "quantity": order.quantity,
            },
        )
        self._orders.set_payment_reference(order.id, transaction.reference, gateway.name)
        logger.info("Payment initialized for order %s (%s)", order.id, transaction.reference)
        return transaction

    def confirm_payment(self, reference: str) -> Receipt:
        """Verify a payment with the provider and issue tickets on success.

        Confirming an order that is already paid returns its tickets.

        Raises:
            OrderNotFoundError: If no order matches the reference.
            PaymentNotSuccessfulError: If the provider reports the payment
                as not successful.
        """
        order = self._orders.get_order_by_reference(reference)
        if order is not None and order.is_paid:
            return self.get_receipt(order.id)

        verification = self._require_gateway().verify_transaction(reference)
        if order is None:
            order = self._order_from_metadata(verification.order_id)
        if order is None:
            raise OrderNotFoundError()
        if order.is_paid:
            return self.get_receipt(order.id)

        if not verification.succeeded:
            if verification.status in FAILED_PAYMENT_STATUSES:
                self._orders.set_status(order.id, OrderStatus.FAILED)
                logger.info("Order %s payment %s", order.id, verification.status)
            raise PaymentNotSuccessfulError(verification.status)
        if verification.amount is not None and verification.amount < order.total_amount.amount:
            logger.error(
                "Order %s paid %s but owes %s", order.id, verification.amount, order.total_amount
            )
            raise PaymentNotSuccessfulError("amount_mismatch")

        return self._complete(order, reference, self._require_gateway().name)

    def _order_from_metadata(self, order_id: str | None) -> Order | None:
        if not order_id:
            return None
        try:
            return self._orders.get_order(OrderId.from_string(order_id))
        except ValueError:
            return None

    def handle_webhook(self, raw_body: bytes, signature: str | None) -> dict:
        """Process a signed payment-provider webhook.

        Raises:
            InvalidSignatureError: If the signature does not match the body.
            InvalidOrderError: If the body or its charge data is not a JSON object.
        """
        gateway = self._require_gateway()
        if not gateway.verify_signature(raw_body, signature):
            logger.warning("Rejected webhook with invalid signature")
            raise InvalidSignatureError()
        try:
            payload = json.loads(raw_body)
        except ValueError:
            raise InvalidOrderError("Malformed webhook payload") from None
        if not isinstance(payload, dict):
            raise InvalidOrderError("Malformed webhook payload")

        event_name = payload.get("event", "")
        if event_name == "charge.success":
            data = payload.get("data")
            if not isinstance(data, dict):
                raise InvalidOrderError("Malformed webhook payload")
            reference = data.get("reference")
            if not isinstance(reference, str):
                reference = ""
            metadata = data.get("metadata")
            order = self._orders.get_order_by_reference(reference) if reference else None
            if order is None and isinstance(metadata, dict):
                order = self._order_from_metadata(metadata.get("orderId"))
            if order is None:
                logger.warning("Webhook charge.success for unknown reference %s", reference)
            elif not order.is_paid:
                amount = data.get("amount")
                paid = from_minor_units(amount) if isinstance(amount, int) else None
                if paid is not None and paid < order.total_amount.amount:
                    logger.error(
                        "Webhook for order %s paid %s but owes %s",
                        order.id,
                        paid,
                        order.total_amount,
                    )
                else:
                    self._complete(order, reference, gateway.name)
        else:
            logger.info("Ignoring webhook event %s", event_name)
        return {"received": True, "event": event_name}

    def _complete(
        self, order: Order, reference: str, provider: str, event: Event | None = None
    ) -> Receipt:
        holders = order.ticket_holders()
        codes = self._new_codes(len(holders))
        try:
            order, tickets, issued = self._orders.issue_tickets(
                order.id, holders, codes, reference, provider
            )
        except InsufficientTicketsError:
            logger.error("Order %s (%s) was paid but tickets sold out", order.id, reference)
            raise
        event = event or self._events.get_event(order.event_id)
        if issued:
            logger.info("Order %s paid; issued %d ticket(s)", order.id, len(tickets))
            tickets = self._attach_qr_codes(tickets)
            self._notify_host(order, event)
            self._send_tickets(order, tickets, event)
        return Receipt(order=order, tickets=tuple(tickets), event=event)

    def _new_codes(self, count: int) -> list[TicketCode]:
        codes: dict[str, TicketCode] = {}
        while len(codes) < count:
            code = TicketCode.generate()
            codes[code.value] = code
        return list(codes.values())

    def _attach_qr_codes(self, tickets: list[Ticket]) -> list[Ticket]:
        if self._files is None:
            return tickets
        result = []
        for ticket in tickets:
            url = validation_url(self._base_url, str(ticket.id), ticket.code.value)
            try:
                stored = self._files.save(f"tickets/{ticket.id}/qr-code.png", render_qr_png(url))
            except Exception:
                logger.exception("QR code upload failed for ticket %s", ticket.id)
                result.append(ticket)
                continue
            self._orders.set_qr_code_url(ticket.id, stored)
            result.append(replace(ticket, qr_code_url=stored))
        return result

    def _send_tickets(self, order: Order, tickets: list[Ticket], event: Event | None) -> None:
        if self._mailer is None:
            return
        title = event.title if event else "your event"
        lines = [f"Hi {order.buyer.name},", "", f"Here are your tickets for {title}.", ""]
        if event:
            where = event.venue or event.location or "Online"
            lines += [f"When: {event.date.isoformat()}", f"Where: {where}", ""]
        for ticket in tickets:
            lines.append(
                f"- {ticket.holder.name} ({ticket.ticket_type_name}): {ticket.code} "
                f"{validation_url(self._base_url, str(ticket.id), ticket.code.value)}"
            )
        lines += ["", f"Order reference: {order.payment_reference}"]
        self._mailer.send([order.buyer.email], f"Your tickets for {title}", "\n".join(lines))

    def _notify_host(self, order: Order, event: Event | None) -> None:
        if self._mailer is None or self._accounts is None or event is None:
            return
        host = self._accounts.get_profile(event.host_id)
        if host is None or not host.notify_ticket_sales:
            return
        total = format_price(order.total_amount.amount, order.currency)
        body = (
            f"Hi {host.display_name},\n\n"
            f"{order.buyer.name} just bought {order.quantity} x {order.ticket_type_name} "
            f"for {event.title} ({total}).\n\n"
            f"Order reference: {order.payment_reference}\n"
        )
        self._mailer.send([host.email], f"New ticket sale for {event.title}", body)

    def cancel_order(self, order_id: OrderId) -> Order:
        """Cancel a pending order.

        Raises:
            InvalidOrderError: If the order is no longer pending.
        """
        order = self._get_order(order_id)
        if not order.is_pending:
            raise InvalidOrderError(f"Order is {order.status.value} and cannot be cancelled")
        order = self._orders.set_status(order.id, OrderStatus.CANCELLED)
        logger.info("Order %s cancelled", order.id)
        return order

    def get_receipt(self, order_id: OrderId) -> Receipt:
        order = self._get_order(order_id)
        return Receipt(
            order=order,
            tickets=tuple(self._orders.list_order_tickets(order.id)),
            event=self._events.get_event(order.event_id),
        )

    def send_abandoned_cart_emails(self, minutes: int = 5, limit: int = 50) -> int:
        """Remind buyers of pending orders older than `minutes`.

        Each order is reminded at most once. Returns the number of emails sent.
        """
        if self._mailer is None:
            return 0
        now = self._now()
        sent = 0
        for order in self._orders.list_abandoned_orders(now - timedelta(minutes=minutes), limit):
            event = self._events.get_event(order.event_id)
            if event is None:
                continue
            body = (
                f"Hi {order.buyer.name},\n\n"
                f"You started buying {order.quantity} x {order.ticket_type_name} for "
                f"{event.title} but did not finish checking out.\n"
                f"Your tickets are not reserved; complete your purchase here:\n"
                f"{self._base_url}/events/{event.slug}\n"
            )
            if self._mailer.send([order.buyer.email], f"Complete Your Purchase - {event.title}", body):
                self._orders.mark_abandoned_email_sent(order.id, now)
                sent += 1
        logger.info("Sent %d abandoned cart email(s)", sent)
        return sent

    def _require_gateway(self) -> PaymentGateway:
        if self._gateway is None:
            raise RuntimeError("CheckoutService was built without a payment gateway")
        return self._gateway
