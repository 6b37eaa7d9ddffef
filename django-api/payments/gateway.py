"""Payment gateway interface.

Amounts crossing this interface are in major units (e.g. naira); the
implementation converts to the provider's minor units.
"""

import hashlib
import hmac
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal

from django.conf import settings
from django.utils.module_loading import import_string

from core.errors import DomainError, ErrorCode

# Transaction references travel in URL paths; no slashes, no dot segments.
REFERENCE_PATTERN = r"^[A-Za-z0-9][A-Za-z0-9._=-]*$"


class PaymentGatewayError(DomainError):
    """Raised when the payment provider rejects or fails a request."""

    def __init__(self, message: str) -> None:
        super().__init__(code=ErrorCode.PAYMENT_GATEWAY_ERROR, message=message)


@dataclass(frozen=True)
class InitializedTransaction:
    authorization_url: str
    access_code: str | None
    reference: str


@dataclass(frozen=True)
class VerifiedTransaction:
    reference: str
    status: str  # success | failed | abandoned
    amount: Decimal | None
    order_id: str | None
    raw: dict = field(default_factory=dict, compare=False)

    @property
    def succeeded(self) -> bool:
        return self.status == "success"


@dataclass(frozen=True)
class Bank:
    code: str
    name: str


@dataclass(frozen=True)
class ResolvedAccount:
    account_name: str
    account_number: str


@dataclass(frozen=True)
class Transfer:
    reference: str
    transfer_code: str | None
    status: str


def to_minor_units(amount: Decimal) -> int:
    """Convert a major-unit amount to integer minor units (x100, half-up)."""
    return int((Decimal(amount) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def from_minor_units(amount: int) -> Decimal:
    return (Decimal(amount) / 100).quantize(Decimal("0.01"))


def compute_signature(secret: str, body: bytes) -> str:
    """HMAC-SHA512 hex digest of body, as sent in x-paystack-signature."""
    return hmac.new(secret.encode(), body, hashlib.sha512).hexdigest()


class PaymentGateway(ABC):
    """Interface for the payment provider."""

    name = "gateway"

    @abstractmethod
    def initialize_transaction(
        self,
        *,
        email: str,
        amount: Decimal,
        currency: str,
        reference: str,
        callback_url: str,
        metadata: dict,
    ) -> InitializedTransaction:
        """Create a hosted payment link."""
        ...

    @abstractmethod
    def verify_transaction(self, reference: str) -> VerifiedTransaction:
        """Look up the outcome of a transaction by reference."""
        ...

    @abstractmethod
    def list_banks(self, country: str) -> list[Bank]:
        """Return the banks available in a country."""
        ...

    @abstractmethod
    def resolve_account(self, account_number: str, bank_code: str) -> ResolvedAccount:
        """Resolve the holder name of a bank account."""
        ...

    @abstractmethod
    def create_transfer_recipient(
        self, *, name: str, account_number: str, bank_code: str, currency: str
    ) -> str:
        """Register a payout recipient and return its recipient code."""
        ...

    @abstractmethod
    def initiate_transfer(
        self, *, amount: Decimal, recipient_code: str, reference: str, reason: str
    ) -> Transfer:
        """Send a payout from the platform balance."""
        ...

    def verify_signature(self, body: bytes, signature: str | None) -> bool:
        """Check a webhook signature against the configured secret."""
        secret = settings.PAYSTACK_WEBHOOK_SECRET
        if not secret or not signature:
            return False
        return hmac.compare_digest(compute_signature(secret, body), signature)


def get_gateway() -> PaymentGateway:
    """Instantiate the gateway named by settings.PAYMENT_GATEWAY."""
    return import_string(settings.PAYMENT_GATEWAY)()
