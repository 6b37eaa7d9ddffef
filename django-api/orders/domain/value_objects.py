"""Domain primitives for orders and tickets."""

import secrets
import string
from dataclasses import dataclass
from typing import Self
from uuid import UUID

TICKET_CODE_ALPHABET = string.ascii_uppercase + string.digits
TICKET_CODE_LENGTH = 8


@dataclass(frozen=True)
class OrderId:
    """Unique identifier for an Order."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(str(value)))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class TicketId:
    """Unique identifier for a Ticket."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(str(value)))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class TicketCode:
    """Short code printed on a ticket and embedded in its QR signature."""

    value: str

    def __post_init__(self) -> None:
        if len(self.value) != TICKET_CODE_LENGTH or any(
            ch not in TICKET_CODE_ALPHABET for ch in self.value
        ):
            raise ValueError("Ticket code must be 8 characters of A-Z0-9")

    @classmethod
    def generate(cls) -> Self:
        return cls("".join(secrets.choice(TICKET_CODE_ALPHABET) for _ in range(TICKET_CODE_LENGTH)))

    def matches(self, signature: str | None) -> bool:
        if not signature or not signature.isascii():
            return False
        return secrets.compare_digest(self.value, signature)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Attendee:
    """A named ticket holder."""

    name: str
    email: str
