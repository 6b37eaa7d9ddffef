"""Paystack implementation of the payment gateway."""

import logging
import re
from decimal import Decimal
from functools import lru_cache
from urllib.parse import quote

import httpx
from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

from payments.gateway import (
    REFERENCE_PATTERN,
    Bank,
    InitializedTransaction,
    PaymentGateway,
    PaymentGatewayError,
    ResolvedAccount,
    Transfer,
    VerifiedTransaction,
    from_minor_units,
    to_minor_units,
)

logger = logging.getLogger(__name__)


@lru_cache(maxsize=None)
def shared_client(base_url: str, timeout: float) -> httpx.Client:
    """Connection-pooled client reused by every gateway built for base_url."""
    return httpx.Client(base_url=base_url, timeout=timeout)


class PaystackGateway(PaymentGateway):
    """Talks to the Paystack REST API.

    Every Paystack response carries a boolean ``status`` and a ``message``;
    anything but an HTTP success with ``status: true`` becomes a
    PaymentGatewayError carrying the provider's message.
    """

    name = "paystack"

    def __init__(self, client: httpx.Client | None = None) -> None:
        secret = settings.PAYSTACK_SECRET_KEY
        if not secret:
            raise ImproperlyConfigured("PAYSTACK_SECRET_KEY is not configured")
        self._client = client or shared_client(
            settings.PAYSTACK_BASE_URL, settings.PAYSTACK_TIMEOUT
        )
        self._headers = {
            "Authorization": f"Bearer {secret}",
            "Content-Type": "application/json",
        }

    def _request(self, method: str, path: str, fallback: str, **kwargs) -> dict:
        try:
            response = self._client.request(method, path, headers=self._headers, **kwargs)
        except httpx.HTTPError as exc:
            logger.error("Paystack %s %s failed: %s", method, path, exc)
            raise PaymentGatewayError(fallback) from exc

        try:
            payload = response.json()
        except ValueError:
            payload = None

        if response.is_error or not isinstance(payload, dict) or not payload.get("status"):
            message = (payload or {}).get("message") if isinstance(payload, dict) else None
            logger.warning(
                "Paystack %s %s rejected (%s): %s", method, path, response.status_code, message
            )
            raise PaymentGatewayError(message or response.text or fallback)
        return payload

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
        minor = to_minor_units(amount)
        if minor <= 0:
            raise PaymentGatewayError("Amount must be positive")
        payload = self._request(
            "POST",
            "/transaction/initialize",
            "Failed to initialize transaction",
            json={
                "email": email,
                "amount": minor,
                "currency": currency,
                "reference": reference,
                "callback_url": callback_url,
                "metadata": metadata,
            },
        )
        data = payload.get("data") or {}
        if not data.get("authorization_url"):
            raise PaymentGatewayError("Missing authorization_url from Paystack")
        return InitializedTransaction(
            authorization_url=data["authorization_url"],
            access_code=data.get("access_code"),
            reference=data.get("reference") or reference,
        )

    def verify_transaction(self, reference: str) -> VerifiedTransaction:
        if not re.fullmatch(REFERENCE_PATTERN, reference):
            raise PaymentGatewayError("Invalid transaction reference")
        payload = self._request(
            "GET", f"/transaction/verify/{quote(reference, safe='')}", "Verification failed"
        )
        data = payload.get("data")
        if not isinstance(data, dict):
            raise PaymentGatewayError("Unexpected verification response from Paystack")
        amount = data.get("amount")
        metadata = data.get("metadata") or {}
        return VerifiedTransaction(
            reference=reference,
            status=data.get("status", ""),
            amount=from_minor_units(amount) if isinstance(amount, int) else None,
            order_id=metadata.get("orderId") if isinstance(metadata, dict) else None,
            raw=data,
        )

    def list_banks(self, country: str) -> list[Bank]:
        payload = self._request(
            "GET", "/bank", "Failed to fetch banks", params={"country": country.lower()}
        )
        return [Bank(code=b["code"], name=b["name"]) for b in payload.get("data") or []]

    def resolve_account(self, account_number: str, bank_code: str) -> ResolvedAccount:
        payload = self._request(
            "GET",
            "/bank/resolve",
            "Failed to verify bank account",
            params={"account_number": account_number, "bank_code": bank_code},
        )
        data = payload["data"]
        return ResolvedAccount(
            account_name=data["account_name"],
            account_number=data["account_number"],
        )

    def create_transfer_recipient(
        self, *, name: str, account_number: str, bank_code: str, currency: str
    ) -> str:
        payload = self._request(
            "POST",
            "/transferrecipient",
            "Failed to create transfer recipient",
            json={
                "type": "nuban",
                "name": name,
                "account_number": account_number,
                "bank_code": bank_code,
                "currency": currency,
            },
        )
        recipient_code = (payload.get("data") or {}).get("recipient_code")
        if not recipient_code:
            raise PaymentGatewayError("Recipient setup failed")
        return recipient_code

    def initiate_transfer(
        self, *, amount: Decimal, recipient_code: str, reference: str, reason: str
    ) -> Transfer:
        payload = self._request(
            "POST",
            "/transfer",
            "Transfer initiation failed",
            json={
                "source": "balance",
                "amount": to_minor_units(amount),
                "recipient": recipient_code,
                "reason": reason,
                "reference": reference,
            },
        )
        data = payload.get("data") or {}
        return Transfer(
            reference=reference,
            transfer_code=data.get("transfer_code"),
            status=data.get("status", "pending"),
        )
