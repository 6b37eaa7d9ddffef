"""Domain models for user accounts."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class BankAccount:
    """Payout destination of a host."""

    bank_name: str
    bank_code: str
    account_number: str
    account_name: str
    recipient_code: str = ""

    @property
    def masked_number(self) -> str:
        return f"****{self.account_number[-4:]}" if self.account_number else ""


@dataclass(frozen=True)
class Profile:
    user_id: int
    email: str
    full_name: str
    phone: str
    country: str
    currency: str
    bio: str
    avatar_url: str
    bank: BankAccount | None
    notify_ticket_sales: bool
    notify_withdrawals: bool
    notify_marketing: bool
    updated_at: datetime

    @property
    def has_bank_details(self) -> bool:
        return bool(self.bank and self.bank.account_number and self.bank.bank_code)

    @property
    def display_name(self) -> str:
        return self.full_name or self.email
