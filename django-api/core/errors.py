"""Domain error base shared by every app.

Concrete errors live in each app's domain/errors.py.
"""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    # accounts
    EMAIL_TAKEN = "EMAIL_TAKEN"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    PROFILE_NOT_FOUND = "PROFILE_NOT_FOUND"
    WEAK_PASSWORD = "WEAK_PASSWORD"
    INVALID_RESET_LINK = "INVALID_RESET_LINK"

    # events
    EVENT_NOT_FOUND = "EVENT_NOT_FOUND"
    INVALID_EVENT = "INVALID_EVENT"
    INVALID_IMAGE = "INVALID_IMAGE"
    NOT_EVENT_HOST = "NOT_EVENT_HOST"
    EVENT_HAS_SALES = "EVENT_HAS_SALES"
    TICKET_TYPE_HAS_SALES = "TICKET_TYPE_HAS_SALES"

    # orders
    TICKET_TYPE_NOT_FOUND = "TICKET_TYPE_NOT_FOUND"
    INSUFFICIENT_TICKETS = "INSUFFICIENT_TICKETS"
    INVALID_ORDER = "INVALID_ORDER"
    ORDER_NOT_FOUND = "ORDER_NOT_FOUND"
    ORDER_NOT_PAYABLE = "ORDER_NOT_PAYABLE"
    PAYMENT_NOT_SUCCESSFUL = "PAYMENT_NOT_SUCCESSFUL"
    INVALID_SIGNATURE = "INVALID_SIGNATURE"
    TICKET_NOT_FOUND = "TICKET_NOT_FOUND"
    INVALID_TICKET_SIGNATURE = "INVALID_TICKET_SIGNATURE"

    # payouts
    BANK_DETAILS_REQUIRED = "BANK_DETAILS_REQUIRED"
    INVALID_AMOUNT = "INVALID_AMOUNT"
    INSUFFICIENT_BALANCE = "INSUFFICIENT_BALANCE"
    WITHDRAWAL_NOT_FOUND = "WITHDRAWAL_NOT_FOUND"
    WITHDRAWAL_NOT_PENDING = "WITHDRAWAL_NOT_PENDING"

    # payments
    PAYMENT_GATEWAY_ERROR = "PAYMENT_GATEWAY_ERROR"


@dataclass(frozen=True)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"
