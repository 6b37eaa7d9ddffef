"""Domain errors for the orders module."""

from core.errors import DomainError, ErrorCode


class TicketTypeNotFoundError(DomainError):
    def __init__(self, name: str) -> None:
        super().__init__(
            code=ErrorCode.TICKET_TYPE_NOT_FOUND,
            message=f"Ticket type not found: {name}",
        )
        self.name = name


class InsufficientTicketsError(DomainError):
    def __init__(self, available: int) -> None:
        super().__init__(
            code=ErrorCode.INSUFFICIENT_TICKETS,
            message=f"Only {available} ticket(s) available",
        )
        self.available = available


class InvalidOrderError(DomainError):
    def __init__(self, message: str) -> None:
        super().__init__(code=ErrorCode.INVALID_ORDER, message=message)


class OrderNotFoundError(DomainError):
    def __init__(self) -> None:
        super().__init__(code=ErrorCode.ORDER_NOT_FOUND, message="Order not found")


class OrderNotPayableError(DomainError):
    def __init__(self, status: str) -> None:
        super().__init__(
            code=ErrorCode.ORDER_NOT_PAYABLE,
            message=f"Order is {status} and cannot be paid",
        )


class PaymentNotSuccessfulError(DomainError):
    def __init__(self, status: str) -> None:
        super().__init__(
            code=ErrorCode.PAYMENT_NOT_SUCCESSFUL,
            message=f"Payment was not successful ({status or 'unknown'})",
        )


class InvalidSignatureError(DomainError):
    def __init__(self) -> None:
        super().__init__(code=ErrorCode.INVALID_SIGNATURE, message="Invalid signature")


class TicketNotFoundError(DomainError):
    def __init__(self) -> None:
        super().__init__(code=ErrorCode.TICKET_NOT_FOUND, message="Ticket not found")


class InvalidTicketSignatureError(DomainError):
    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_TICKET_SIGNATURE,
            message="Invalid ticket signature",
        )
