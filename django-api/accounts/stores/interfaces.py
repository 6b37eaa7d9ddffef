"""Store interfaces (repository pattern)."""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager

from accounts.domain import BankAccount, Profile


class AccountStore(ABC):
    """Interface for users, credentials and profiles."""

    @abstractmethod
    def email_taken(self, email: str) -> bool:
        ...

    @abstractmethod
    def create_user(self, email: str, password: str, full_name: str, currency: str) -> Profile:
        """Create a user with its profile."""
        ...

    @abstractmethod
    def authenticate(self, email: str, password: str) -> int | None:
        """Return the user id for valid credentials, else None."""
        ...

    @abstractmethod
    def check_password(self, user_id: int, password: str) -> bool:
        ...

    @abstractmethod
    def set_password(self, user_id: int, password: str) -> None:
        ...

    @abstractmethod
    def validate_password(self, user_id: int, password: str) -> list[str]:
        """Return password validator messages; empty when acceptable."""
        ...

    @abstractmethod
    def find_user_id(self, email: str) -> int | None:
        """Return the id of the active user registered with email."""
        ...

    @abstractmethod
    def make_reset_token(self, user_id: int) -> tuple[str, str]:
        """Return (uid, token) for a one-time password-reset link."""
        ...

    @abstractmethod
    def check_reset_token(self, uid: str, token: str) -> int | None:
        """Return the user id the reset link belongs to, or None if invalid.

        A token stops working once the password it was issued against changes.
        """
        ...

    @abstractmethod
    def issue_token(self, user_id: int) -> str:
        """Return the API token for a user, creating it if needed."""
        ...

    @abstractmethod
    def get_profile(self, user_id: int) -> Profile | None:
        ...

    @abstractmethod
    def update_profile(self, user_id: int, fields: dict) -> Profile:
        ...

    @abstractmethod
    def set_bank_account(self, user_id: int, bank: BankAccount) -> Profile:
        ...

    @abstractmethod
    def set_recipient_code(self, user_id: int, recipient_code: str) -> None:
        ...

    @abstractmethod
    def lock(self, user_id: int) -> AbstractContextManager[None]:
        """Open a transaction holding a row lock on the user's profile."""
        ...
