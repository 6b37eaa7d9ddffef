"""Store interfaces (repository pattern).

Stores must be swappable and return domain models.
"""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from datetime import datetime
from decimal import Decimal

from payouts.domain import WithdrawalId, WithdrawalRequest, WithdrawalStatus


class PayoutStore(ABC):
    """Interface for earnings lookups and withdrawal persistence."""

    @abstractmethod
    def gross_revenue(self, host_id: int) -> Decimal:
        """Sum of paid order totals across every event the user hosts."""
        ...

    @abstractmethod
    def withdrawal_totals(self, user_id: int) -> tuple[Decimal, Decimal]:
        """Return (pending total, approved total) of the user's withdrawals."""
        ...

    @abstractmethod
    def create_withdrawal(
        self, user_id: int, amount: Decimal, currency: str, recipient_code: str
    ) -> WithdrawalRequest:
        ...

    @abstractmethod
    def list_withdrawals(self, user_id: int) -> list[WithdrawalRequest]:
        """The user's requests, newest first."""
        ...

    @abstractmethod
    def list_all_withdrawals(self, status: WithdrawalStatus | None = None) -> list[WithdrawalRequest]:
        ...

    @abstractmethod
    def locked(self, withdrawal_id: WithdrawalId) -> AbstractContextManager[WithdrawalRequest | None]:
        """Open a transaction holding a row lock on one request."""
        ...

    @abstractmethod
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
        ...
