"""Django ORM implementation of the PayoutStore."""

from contextlib import contextmanager
from datetime import datetime
from decimal import Decimal

from django.db import transaction
from django.db.models import Sum

from orders.models import Order
from payouts import models
from payouts.domain import WithdrawalId, WithdrawalRequest, WithdrawalStatus
from payouts.stores.interfaces import PayoutStore


def to_withdrawal(row: models.WithdrawalRequest) -> WithdrawalRequest:
    return WithdrawalRequest(
        id=WithdrawalId(row.id),
        user_id=row.user_id,
        amount=row.amount,
        currency=row.currency,
        status=WithdrawalStatus(row.status),
        admin_note=row.admin_note,
        reference=row.reference,
        transfer_code=row.transfer_code,
        recipient_code=row.recipient_code,
        resolved_at=row.resolved_at,
        created_at=row.created_at,
    )


class DjangoPayoutStore(PayoutStore):
    def gross_revenue(self, host_id: int) -> Decimal:
        total = Order.objects.filter(
            event__host_id=host_id, status=Order.Status.PAID
        ).aggregate(total=Sum("total_amount"))["total"]
        return total or Decimal("0")

    def withdrawal_totals(self, user_id: int) -> tuple[Decimal, Decimal]:
        rows = (
            models.WithdrawalRequest.objects.filter(
                user_id=user_id,
                status__in=[
                    models.WithdrawalRequest.Status.PENDING,
                    models.WithdrawalRequest.Status.APPROVED,
                ],
            )
            .values("status")
            .annotate(total=Sum("amount"))
        )
        totals = {row["status"]: row["total"] for row in rows}
        return (
            totals.get(models.WithdrawalRequest.Status.PENDING, Decimal("0")),
            totals.get(models.WithdrawalRequest.Status.APPROVED, Decimal("0")),
        )

    def create_withdrawal(
        self, user_id: int, amount: Decimal, currency: str, recipient_code: str
    ) -> WithdrawalRequest:
        row = models.WithdrawalRequest.objects.create(
            user_id=user_id, amount=amount, currency=currency, recipient_code=recipient_code
        )
        return to_withdrawal(row)

    def list_withdrawals(self, user_id: int) -> list[WithdrawalRequest]:
        rows = models.WithdrawalRequest.objects.filter(user_id=user_id).order_by("-created_at")
        return [to_withdrawal(row) for row in rows]

    def list_all_withdrawals(self, status: WithdrawalStatus | None = None) -> list[WithdrawalRequest]:
        rows = models.WithdrawalRequest.objects.order_by("-created_at")
        if status is not None:
            rows = rows.filter(status=status.value)
        return [to_withdrawal(row) for row in rows]

    @contextmanager
    def locked(self, withdrawal_id: WithdrawalId):
        with transaction.atomic():
            row = (
                models.WithdrawalRequest.objects.select_for_update()
                .filter(pk=withdrawal_id.value)
                .first()
            )
            yield to_withdrawal(row) if row else None

    def resolve(
        self,
        withdrawal_id: WithdrawalId,
        status: WithdrawalStatus,
        note: str,
        resolved_at: datetime,
        reference: str = "",
        transfer_code: str = "",
        recipient_code: str = "",
    ) -> WithdrawalRequest:
        row = models.WithdrawalRequest.objects.get(pk=withdrawal_id.value)
        row.status = status.value
        row.admin_note = note
        row.resolved_at = resolved_at
        row.reference = reference or row.reference
        row.transfer_code = transfer_code or row.transfer_code
        row.recipient_code = recipient_code or row.recipient_code
        row.save()
        return to_withdrawal(row)
