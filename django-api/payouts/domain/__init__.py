from payouts.domain.models import (
    Balance,
    WithdrawalId,
    WithdrawalRequest,
    WithdrawalStatus,
    round_amount,
)

__all__ = [
    "Balance",
    "WithdrawalId",
    "WithdrawalRequest",
    "WithdrawalStatus",
    "round_amount",
]
