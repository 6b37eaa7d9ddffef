"""Payment-provider integration (payment links, bank lookup, transfers)."""

from payments.gateway import (
    Bank,
    InitializedTransaction,
    PaymentGateway,
    PaymentGatewayError,
    ResolvedAccount,
    Transfer,
    VerifiedTransaction,
    get_gateway,
)

__all__ = [
    "Bank",
    "InitializedTransaction",
    "PaymentGateway",
    "PaymentGatewayError",
    "ResolvedAccount",
    "Transfer",
    "VerifiedTransaction",
    "get_gateway",
]
