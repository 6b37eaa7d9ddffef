"""Domain errors for the events module."""

from core.errors import DomainError, ErrorCode


class EventNotFoundError(DomainError):
    """Raised when an event is not found."""

    def __init__(self, event_id: str) -> None:
        super().__init__(
            code=ErrorCode.EVENT_NOT_FOUND,
            message="Event not found",
        )
        self.event_id = event_id


class InvalidEventError(DomainError):
    """Raised when event data breaks a domain rule."""

    def __init__(self, message: str) -> None:
        super().__init__(code=ErrorCode.INVALID_EVENT, message=message)


class NotEventHostError(DomainError):
    """Raised when a user acts on an event they do not host."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.NOT_EVENT_HOST,
            message="Only the event host can do this",
        )


class EventHasSalesError(DomainError):
    """Raised when deleting an event that already sold tickets."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.EVENT_HAS_SALES,
            message="Events with sold tickets cannot be deleted",
        )


class TicketTypeHasSalesError(DomainError):
    """Raised when a ticket type change would invalidate sold tickets."""

    def __init__(self, name: str, message: str) -> None:
        super().__init__(code=ErrorCode.TICKET_TYPE_HAS_SALES, message=message)
        self.name = name
