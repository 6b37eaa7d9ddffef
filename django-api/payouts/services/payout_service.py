"""Payout service - host balances and withdrawal requests.

Services:
- Depend only on interfaces (stores, gateway, mailer)
- Validate domain invariants
- Perform orchestration and error mapping
- Return domain models or domain errors
"""

import logging
from collections.abc import Callable
from datetime import datetime
from decimal import Decimal

from django.utils import timezone

from accounts.domain import Profile
from accounts.domain.errors import ProfileNotFoundError
from accounts.stores.interfaces import AccountStore
from core.mailer import Mailer
from payments import PaymentGateway
from payouts.domain import (
    Balance,
    WithdrawalId,
    WithdrawalRequest,
    WithdrawalStatus,
    round_amount,
)
from payouts.domain.errors import (
    BankDetailsRequiredError,
    InsufficientBalanceError,
    InvalidAmountError,
    WithdrawalNotFoundError,
    WithdrawalNotPendingError,
)
from payouts.stores.interfaces import PayoutStore

logger = logging.getLogger(__name__)


class PayoutService:
    def __init__(
        self,
        store: PayoutStore,
        accounts: AccountStore,
        gateway: PaymentGateway | None = None,
        mailer: Mailer | None = None,
        fee_rate: Decimal = Decimal("0.06"),
        now: Callable[[], datetime] = timezone.now,
    ) -> None:
        self._store = store
        self._accounts = accounts
        self._gateway = gateway
        self._mailer = mailer
        self._fee_rate = fee_rate
        self._now = now

    def get_balance(self, user_id: int) -> Balance:
        pending, approved = self._store.withdrawal_totals(user_id)
        return Balance.compute(
            gross=self._store.gross_revenue(user_id),
            fee_rate=self._fee_rate,
            pending=pending,
            approved=approved,
        )

    def _profile(self, user_id: int) -> Profile:
        profile = self._accounts.get_profile(user_id)
        if profile is None:
            raise ProfileNotFoundError()
        return profile

    def request_withdrawal(self, user_id: int, amount: Decimal) -> WithdrawalRequest:
        """Ask for a payout of part of the available balance.

        The balance check and insert run under the account lock so two
        concurrent requests cannot both spend the same balance.

        Raises:
            BankDetailsRequiredError: If the user has no payout account.
            InvalidAmountError: If amount is not positive.
            InsufficientBalanceError: If amount exceeds the available balance.
        """
        profile = self._profile(user_id)
        if not profile.has_bank_details:
            raise BankDetailsRequiredError()
        amount = round_amount(amount)
        if amount <= 0:
            raise InvalidAmountError()

        with self._accounts.lock(user_id):
            balance = self.get_balance(user_id)
            if amount > balance.available:
                raise InsufficientBalanceError(balance.available)
            withdrawal = self._store.create_withdrawal(
                user_id, amount, profile.currency, profile.bank.recipient_code
            )
        logger.info("Withdrawal %s of %s requested by %s", withdrawal.id, amount, user_id)

        if self._mailer:
            self._mailer.send_admins(
                f"Withdrawal request: {amount} {profile.currency}",
                f"{profile.display_name} ({profile.email}) requested {amount} {profile.currency}.\n"
                f"Bank: {profile.bank.bank_name} {profile.bank.masked_number} "
                f"({profile.bank.account_name})\n"
                f"Request: {withdrawal.id}\n",
            )
        return withdrawal

    def list_withdrawals(self, user_id: int) -> list[WithdrawalRequest]:
        return self._store.list_withdrawals(user_id)

    def list_all_withdrawals(self, status: WithdrawalStatus | None = None) -> list[WithdrawalRequest]:
        return self._store.list_all_withdrawals(status)

    def approve(self, withdrawal_id: WithdrawalId, note: str = "") -> WithdrawalRequest:
        """Pay out a pending request through the payment provider.

        A provider failure leaves the request pending.

        Raises:
            WithdrawalNotFoundError: If the request does not exist.
            WithdrawalNotPendingError: If it was already resolved.
            BankDetailsRequiredError: If the host removed their bank details.
            PaymentGatewayError: If the provider rejects the transfer.
        """
        gateway = self._require_gateway()
        with self._store.locked(withdrawal_id) as withdrawal:
            self._check_pending(withdrawal)
            profile = self._profile(withdrawal.user_id)
            if not profile.has_bank_details:
                raise BankDetailsRequiredError()

            recipient_code = profile.bank.recipient_code
            if not recipient_code:
                recipient_code = gateway.create_transfer_recipient(
                    name=profile.bank.account_name,
                    account_number=profile.bank.account_number,
                    bank_code=profile.bank.bank_code,
                    currency=withdrawal.currency,
                )
                self._accounts.set_recipient_code(withdrawal.user_id, recipient_code)

            now = self._now()
            transfer = gateway.initiate_transfer(
                amount=withdrawal.amount,
                recipient_code=recipient_code,
                reference=f"WD-{withdrawal.user_id}-{int(now.timestamp() * 1000)}",
                reason=f"Withdrawal {withdrawal.id}",
            )
            resolved = self._store.resolve(
                withdrawal.id,
                WithdrawalStatus.APPROVED,
                note,
                now,
                reference=transfer.reference,
                transfer_code=transfer.transfer_code or "",
                recipient_code=recipient_code,
            )
        logger.info("Withdrawal %s approved (%s)", resolved.id, transfer.reference)
        self._notify(profile, resolved)
        return resolved

    def reject(self, withdrawal_id: WithdrawalId, note: str = "") -> WithdrawalRequest:
        """Reject a pending request, releasing its amount back to the balance."""
        with self._store.locked(withdrawal_id) as withdrawal:
            self._check_pending(withdrawal)
            resolved = self._store.resolve(
                withdrawal.id, WithdrawalStatus.REJECTED, note, self._now()
            )
        logger.info("Withdrawal %s rejected", resolved.id)
        profile = self._accounts.get_profile(resolved.user_id)
        if profile is not None:
            self._notify(profile, resolved)
        return resolved

    def _check_pending(self, withdrawal: WithdrawalRequest | None) -> None:
        if withdrawal is None:
            raise WithdrawalNotFoundError()
        if not withdrawal.is_pending:
            raise WithdrawalNotPendingError(withdrawal.status.value)

    def _notify(self, profile: Profile, withdrawal: WithdrawalRequest) -> None:
        if self._mailer is None or not profile.notify_withdrawals:
            return
        body = (
            f"Hi {profile.display_name},\n\n"
            f"Your withdrawal of {withdrawal.amount} {withdrawal.currency} "
            f"was {withdrawal.status.value}.\n"
        )
        if withdrawal.admin_note:
            body += f"\nNote: {withdrawal.admin_note}\n"
        self._mailer.send([profile.email], f"Withdrawal {withdrawal.status.value}", body)

    def _require_gateway(self) -> PaymentGateway:
        if self._gateway is None:
            raise RuntimeError("PayoutService was built without a payment gateway")
        return self._gateway
