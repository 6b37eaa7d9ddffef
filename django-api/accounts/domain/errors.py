"""Domain errors for the accounts module."""

from core.errors import DomainError, ErrorCode


class EmailTakenError(DomainError):
    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.EMAIL_TAKEN,
            message="An account with this email already exists",
        )


class InvalidCredentialsError(DomainError):
    def __init__(self, message: str = "Invalid email or password") -> None:
        super().__init__(code=ErrorCode.INVALID_CREDENTIALS, message=message)


class ProfileNotFoundError(DomainError):
    def __init__(self) -> None:
        super().__init__(code=ErrorCode.PROFILE_NOT_FOUND, message="Profile not found")


class WeakPasswordError(DomainError):
    """Raised when a new password fails the configured validators."""

    def __init__(self, message: str) -> None:
        super().__init__(code=ErrorCode.WEAK_PASSWORD, message=message)


class InvalidResetLinkError(DomainError):
    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_RESET_LINK,
            message="This password reset link is invalid or has expired",
        )
