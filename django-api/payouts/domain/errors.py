"""Domain errors for payouts."""

from decimal import Decimal

from core.errors import DomainError, ErrorCode


class BankDetailsRequiredError(DomainError):
    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.BANK_DETAILS_REQUIRED,
            message="Add your bank details before requesting a withdrawal",
        )


class InvalidAmountError(DomainError):
    def __init__(self) -> None:
        super().__init__(code=ErrorCode.INVALID_AMOUNT, message="Amount must be greater than 0")


class InsufficientBalanceError(DomainError):
    def __init__(self, available: Decimal) -> None:
        super().__init__(
            code=ErrorCode.INSUFFICIENT_BALANCE,
            message=f"Amount exceeds available balance of {available:.2f}",
        )
        self.available = available


class WithdrawalNotFoundError(DomainError):
    def __init__(self) -> None:
        super().__init__(code=ErrorCode.WITHDRAWAL_NOT_FOUND, message="Withdrawal request not found")


class WithdrawalNotPendingError(DomainError):
    def __init__(self, status: str) -> None:
        super().__init__(
            code=ErrorCode.WITHDRAWAL_NOT_PENDING,
            message=f"Withdrawal request is already {status}",
        )
