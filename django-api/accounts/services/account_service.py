"""Account service: signup, login, profile settings and bank details."""

import logging
from urllib.parse import urlencode

from accounts.domain import BankAccount, Profile
from accounts.domain.errors import (
    EmailTakenError,
    InvalidCredentialsError,
    InvalidResetLinkError,
    ProfileNotFoundError,
    WeakPasswordError,
)
from accounts.stores.interfaces import AccountStore
from core.mailer import Mailer
from core.storage import FileStore, Upload, image_extension
from payments import Bank, PaymentGateway, ResolvedAccount

logger = logging.getLogger(__name__)

PROFILE_FIELDS = {
    "full_name",
    "phone",
    "country",
    "currency",
    "bio",
    "notify_ticket_sales",
    "notify_withdrawals",
    "notify_marketing",
}


def normalize_email(email: str) -> str:
    return email.strip().lower()


class AccountService:
    def __init__(
        self,
        store: AccountStore,
        gateway: PaymentGateway | None = None,
        files: FileStore | None = None,
        mailer: Mailer | None = None,
        default_currency: str = "NGN",
        max_image_bytes: int = 5 * 1024 * 1024,
        public_base_url: str = "",
    ) -> None:
        self._store = store
        self._gateway = gateway
        self._files = files
        self._mailer = mailer
        self._default_currency = default_currency
        self._max_image_bytes = max_image_bytes
        self._base_url = public_base_url.rstrip("/")

    def signup(self, email: str, password: str, full_name: str) -> tuple[Profile, str]:
        """Create an account and return its profile and API token.

        Raises:
            EmailTakenError: If the email is already registered.
        """
        email = normalize_email(email)
        if self._store.email_taken(email):
            raise EmailTakenError()
        profile = self._store.create_user(email, password, full_name.strip(), self._default_currency)
        token = self._store.issue_token(profile.user_id)
        logger.info("User %s signed up", profile.user_id)
        if self._mailer:
            self._mailer.send(
                [email],
                "Welcome to the ticketing platform",
                f"Hi {profile.display_name},\n\n"
                "Your account is ready. You can now create events, sell tickets "
                "and request payouts from your dashboard.\n",
            )
        return profile, token

    def login(self, email: str, password: str) -> tuple[Profile, str]:
        """Exchange credentials for an API token.

        Raises:
            InvalidCredentialsError: If the credentials do not match.
        """
        user_id = self._store.authenticate(normalize_email(email), password)
        if user_id is None:
            raise InvalidCredentialsError()
        return self.get_profile(user_id), self._store.issue_token(user_id)

    def get_profile(self, user_id: int) -> Profile:
        profile = self._store.get_profile(user_id)
        if profile is None:
            raise ProfileNotFoundError()
        return profile

    def update_profile(self, user_id: int, changes: dict) -> Profile:
        fields = {k: v for k, v in changes.items() if k in PROFILE_FIELDS}
        if "currency" in fields:
            fields["currency"] = fields["currency"].upper()
        return self._store.update_profile(user_id, fields)

    def change_password(self, user_id: int, current: str, new: str) -> str:
        """Change the password and return a fresh API token.

        Raises:
            InvalidCredentialsError: If the current password is wrong.
            WeakPasswordError: If the new password fails validation.
        """
        if not self._store.check_password(user_id, current):
            raise InvalidCredentialsError("Current password is incorrect")
        self._set_password(user_id, new)
        logger.info("User %s changed password", user_id)
        return self._store.issue_token(user_id)

    def _set_password(self, user_id: int, new: str) -> None:
        problems = self._store.validate_password(user_id, new)
        if problems:
            raise WeakPasswordError(" ".join(problems))
        self._store.set_password(user_id, new)

    def request_password_reset(self, email: str) -> None:
        """Email a password-reset link to the account registered with email.

        Unknown addresses are accepted silently and nothing is sent.
        """
        user_id = self._store.find_user_id(normalize_email(email))
        if user_id is None:
            logger.info("Password reset requested for unknown email")
            return
        uid, token = self._store.make_reset_token(user_id)
        link = f"{self._base_url}/password-reset?{urlencode({'uid': uid, 'token': token})}"
        logger.info("Password reset requested for user %s", user_id)
        if self._mailer:
            profile = self.get_profile(user_id)
            self._mailer.send(
                [profile.email],
                "Reset your password",
                f"Hi {profile.display_name},\n\n"
                "We received a request to reset your password. Use the link below "
                f"to choose a new one:\n\n{link}\n\n"
                "If you did not ask for this, you can ignore this email.\n",
            )

    def confirm_password_reset(self, uid: str, token: str, new_password: str) -> str:
        """Set a new password from a reset link and return a fresh API token.

        Raises:
            InvalidResetLinkError: If the link is malformed, expired or used.
            WeakPasswordError: If the new password fails validation.
        """
        user_id = self._store.check_reset_token(uid, token)
        if user_id is None:
            raise InvalidResetLinkError()
        self._set_password(user_id, new_password)
        logger.info("User %s reset password", user_id)
        return self._store.issue_token(user_id)

    def upload_avatar(self, user_id: int, upload: Upload) -> Profile:
        ext = image_extension(upload, self._max_image_bytes)
        if self._files is None:
            raise RuntimeError("AccountService was built without a file store")
        url = self._files.save(f"avatars/{user_id}/avatar.{ext}", upload.content)
        return self._store.update_profile(user_id, {"avatar_url": url})

    def list_banks(self, country: str | None = None) -> list[Bank]:
        return self._require_gateway().list_banks((country or "nigeria").lower())

    def verify_bank_account(self, bank_code: str, account_number: str) -> ResolvedAccount:
        return self._require_gateway().resolve_account(account_number, bank_code)

    def set_bank_account(
        self, user_id: int, bank_code: str, account_number: str, bank_name: str
    ) -> Profile:
        """Resolve and save payout bank details.

        The provider's account name is authoritative. A previously
        registered transfer recipient is dropped since it points at the
        old account.
        """
        resolved = self.verify_bank_account(bank_code, account_number)
        profile = self._store.set_bank_account(
            user_id,
            BankAccount(
                bank_name=bank_name,
                bank_code=bank_code,
                account_number=resolved.account_number,
                account_name=resolved.account_name,
                recipient_code="",
            ),
        )
        logger.info("User %s updated bank details", user_id)
        return profile

    def _require_gateway(self) -> PaymentGateway:
        if self._gateway is None:
            raise RuntimeError("AccountService was built without a payment gateway")
        return self._gateway
