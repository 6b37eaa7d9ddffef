"""Domain models for host earnings and withdrawals."""

from dataclasses import dataclass
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Self
from uuid import UUID

CENTS = Decimal("0.01")


def round_amount(amount: Decimal) -> Decimal:
    return Decimal(amount).quantize(CENTS, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class WithdrawalId:
    """Unique identifier for a WithdrawalRequest."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(str(value)))

    def __str__(self) -> str:
        return str(self.value)


class WithdrawalStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


@dataclass(frozen=True)
class WithdrawalRequest:
    id: WithdrawalId
    user_id: int
    amount: Decimal
    currency: str
    status: WithdrawalStatus
    admin_note: str
    reference: str
    transfer_code: str
    recipient_code: str
    resolved_at: datetime | None
    created_at: datetime

    @property
    def is_pending(self) -> bool:
        return self.status == WithdrawalStatus.PENDING


@dataclass(frozen=True)
class Balance:
    """A host's earnings after the platform fee and earlier withdrawals."""

    gross_revenue: Decimal
    platform_fee: Decimal
    net_revenue: Decimal
    pending: Decimal
    approved: Decimal
    available: Decimal

    @classmethod
    def compute(
        cls, gross: Decimal, fee_rate: Decimal, pending: Decimal, approved: Decimal
    ) -> Self:
        gross = round_amount(gross)
        fee = round_amount(gross * fee_rate)
        net = gross - fee
        pending = round_amount(pending)
        approved = round_amount(approved)
        available = max(Decimal("0.00"), net - pending - approved)
        return cls(
            gross_revenue=gross,
            platform_fee=fee,
            net_revenue=net,
            pending=pending,
            approved=approved,
            available=available,
        )
