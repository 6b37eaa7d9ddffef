"""Django ORM implementation of the OrderStore."""

from datetime import datetime
from decimal import Decimal

from django.db import transaction
from django.db.models import Count, Q, Sum
from django.utils import timezone

from events.domain import EventId, Money, TicketTypeId
from events.models import TicketType as TicketTypeRow
from orders import models
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
from orders.domain.errors import InsufficientTicketsError
from orders.stores.interfaces import OrderStore


def to_order(row: models.Order) -> Order:
    return Order(
        id=OrderId(row.id),
        event_id=EventId(row.event_id),
        ticket_type_id=TicketTypeId(row.ticket_type_id),
        ticket_type_name=row.ticket_type.name,
        buyer_id=row.buyer_id,
        buyer=Attendee(name=row.buyer_full_name, email=row.buyer_email),
        buyer_phone=row.buyer_phone,
        currency=row.currency,
        quantity=row.quantity,
        unit_price=Money(row.unit_price),
        total_amount=Money(row.total_amount),
        attendees=tuple(Attendee(name=a["name"], email=a["email"]) for a in row.attendees or []),
        status=OrderStatus(row.status),
        payment_provider=row.payment_provider,
        payment_reference=row.payment_reference,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def to_ticket(row: models.Ticket) -> Ticket:
    return Ticket(
        id=TicketId(row.id),
        order_id=OrderId(row.order_id),
        event_id=EventId(row.event_id),
        ticket_type_id=TicketTypeId(row.ticket_type_id),
        ticket_type_name=row.ticket_type.name,
        code=TicketCode(row.code),
        qr_code_url=row.qr_code_url,
        holder=Attendee(name=row.attendee_name, email=row.attendee_email),
        price=Money(row.price),
        currency=row.currency,
        is_scanned=row.is_scanned,
        scanned_at=row.scanned_at,
        created_at=row.created_at,
    )


class DjangoOrderStore(OrderStore):
    """PostgreSQL-backed order store using Django ORM."""

    def _orders(self):
        return models.Order.objects.select_related("ticket_type")

    def _tickets(self):
        return models.Ticket.objects.select_related("ticket_type")

    def create_order(self, new_order: NewOrder) -> Order:
        row = models.Order.objects.create(
            event_id=new_order.event_id.value,
            ticket_type_id=new_order.ticket_type_id.value,
            buyer_id=new_order.buyer_id,
            buyer_full_name=new_order.buyer.name,
            buyer_email=new_order.buyer.email,
            buyer_phone=new_order.buyer_phone,
            currency=new_order.currency,
            quantity=new_order.quantity,
            unit_price=new_order.unit_price.amount,
            total_amount=new_order.total_amount.amount,
            attendees=[{"name": a.name, "email": a.email} for a in new_order.attendees],
        )
        return to_order(self._orders().get(pk=row.pk))

    def get_order(self, order_id: OrderId) -> Order | None:
        row = self._orders().filter(pk=order_id.value).first()
        return to_order(row) if row else None

    def get_order_by_reference(self, reference: str) -> Order | None:
        row = self._orders().filter(payment_reference=reference).first()
        return to_order(row) if row else None

    def set_payment_reference(self, order_id: OrderId, reference: str, provider: str) -> Order:
        models.Order.objects.filter(pk=order_id.value).update(
            payment_reference=reference,
            payment_provider=provider,
            updated_at=timezone.now(),
        )
        return to_order(self._orders().get(pk=order_id.value))

    @transaction.atomic
    def set_status(self, order_id: OrderId, status: OrderStatus, only_if_pending: bool = True) -> Order:
        row = models.Order.objects.select_for_update().get(pk=order_id.value)
        if not only_if_pending or row.status == models.Order.Status.PENDING:
            row.status = status.value
            row.save(update_fields=["status", "updated_at"])
        return to_order(self._orders().get(pk=row.pk))

    @transaction.atomic
    def issue_tickets(
        self,
        order_id: OrderId,
        holders: list[Attendee],
        codes: list[TicketCode],
        reference: str,
        provider: str,
    ) -> tuple[Order, list[Ticket], bool]:
        row = models.Order.objects.select_for_update().get(pk=order_id.value)
        if row.status == models.Order.Status.PAID:
            return to_order(self._orders().get(pk=row.pk)), self.list_order_tickets(order_id), False

        ticket_type = TicketTypeRow.objects.select_for_update().get(pk=row.ticket_type_id)
        available = ticket_type.quantity - ticket_type.sold
        if available < row.quantity:
            raise InsufficientTicketsError(available)

        rows = models.Ticket.objects.bulk_create(
            [
                models.Ticket(
                    order=row,
                    event_id=row.event_id,
                    ticket_type=ticket_type,
                    code=code.value,
                    attendee_name=holder.name,
                    attendee_email=holder.email,
                    price=row.unit_price,
                    currency=row.currency,
                )
                for holder, code in zip(holders, codes, strict=True)
            ]
        )
        ticket_type.sold += row.quantity
        ticket_type.save(update_fields=["sold", "updated_at"])

        row.status = models.Order.Status.PAID
        row.payment_reference = reference
        row.payment_provider = provider
        row.save(update_fields=["status", "payment_reference", "payment_provider", "updated_at"])
        return to_order(self._orders().get(pk=row.pk)), [to_ticket(t) for t in rows], True

    def set_qr_code_url(self, ticket_id: TicketId, url: str) -> None:
        models.Ticket.objects.filter(pk=ticket_id.value).update(qr_code_url=url)

    def list_order_tickets(self, order_id: OrderId) -> list[Ticket]:
        rows = self._tickets().filter(order_id=order_id.value).order_by("created_at", "id")
        return [to_ticket(row) for row in rows]

    def get_ticket(self, ticket_id: TicketId) -> Ticket | None:
        row = self._tickets().filter(pk=ticket_id.value).first()
        return to_ticket(row) if row else None

    @transaction.atomic
    def scan_ticket(self, ticket_id: TicketId, scanner_id: int | None) -> tuple[Ticket, ScanResult]:
        row = models.Ticket.objects.select_for_update().get(pk=ticket_id.value)
        if row.is_scanned:
            result = ScanResult.ALREADY_SCANNED
        else:
            row.is_scanned = True
            row.scanned_at = timezone.now()
            row.save(update_fields=["is_scanned", "scanned_at"])
            result = ScanResult.SUCCESS
        models.TicketScan.objects.create(ticket=row, scanned_by_id=scanner_id, result=result.value)
        return to_ticket(self._tickets().get(pk=row.pk)), result

    def record_scan(self, ticket_id: TicketId, scanner_id: int | None, result: ScanResult) -> None:
        models.TicketScan.objects.create(
            ticket_id=ticket_id.value, scanned_by_id=scanner_id, result=result.value
        )

    def list_buyer_tickets(self, user_id: int, email: str) -> list[Ticket]:
        rows = (
            self._tickets()
            .filter(Q(order__buyer_id=user_id) | Q(attendee_email__iexact=email))
            .order_by("-created_at")
        )
        return [to_ticket(row) for row in rows]

    def list_event_tickets(self, event_id: EventId) -> list[Ticket]:
        rows = self._tickets().filter(event_id=event_id.value).order_by("created_at", "id")
        return [to_ticket(row) for row in rows]

    def count_scanned(self, event_id: EventId) -> int:
        return models.Ticket.objects.filter(event_id=event_id.value, is_scanned=True).count()

    def paid_totals(self, event_id: EventId) -> tuple[int, Decimal]:
        totals = models.Order.objects.filter(
            event_id=event_id.value, status=models.Order.Status.PAID
        ).aggregate(count=Count("id"), revenue=Sum("total_amount"))
        return totals["count"], totals["revenue"] or Decimal("0")

    def list_abandoned_orders(self, created_before: datetime, limit: int) -> list[Order]:
        rows = (
            self._orders()
            .filter(
                status=models.Order.Status.PENDING,
                created_at__lt=created_before,
                abandoned_email_sent_at__isnull=True,
            )
            .exclude(buyer_email="")
            .order_by("created_at")[:limit]
        )
        return [to_order(row) for row in rows]

    def mark_abandoned_email_sent(self, order_id: OrderId, sent_at: datetime) -> None:
        models.Order.objects.filter(pk=order_id.value).update(abandoned_email_sent_at=sent_at)
