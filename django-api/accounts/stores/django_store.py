"""Django ORM implementation of the AccountStore."""

from contextlib import contextmanager

from django.contrib.auth import authenticate, get_user_model, password_validation
from django.contrib.auth.tokens import default_token_generator
from django.core.exceptions import ValidationError
from django.db import transaction
from django.utils.encoding import force_bytes
from django.utils.http import urlsafe_base64_decode, urlsafe_base64_encode
from rest_framework.authtoken.models import Token

from accounts import models
from accounts.domain import BankAccount, Profile
from accounts.stores.interfaces import AccountStore

User = get_user_model()


def to_profile(row: models.Profile) -> Profile:
    bank = None
    if row.account_number or row.bank_code:
        bank = BankAccount(
            bank_name=row.bank_name,
            bank_code=row.bank_code,
            account_number=row.account_number,
            account_name=row.account_name,
            recipient_code=row.recipient_code,
        )
    return Profile(
        user_id=row.user_id,
        email=row.user.email,
        full_name=row.full_name,
        phone=row.phone,
        country=row.country,
        currency=row.currency,
        bio=row.bio,
        avatar_url=row.avatar_url,
        bank=bank,
        notify_ticket_sales=row.notify_ticket_sales,
        notify_withdrawals=row.notify_withdrawals,
        notify_marketing=row.notify_marketing,
        updated_at=row.updated_at,
    )


class DjangoAccountStore(AccountStore):
    """Accounts backed by django.contrib.auth and the Profile table."""

    def _profile_row(self, user_id: int) -> models.Profile:
        row, _ = models.Profile.objects.select_related("user").get_or_create(user_id=user_id)
        return row

    def email_taken(self, email: str) -> bool:
        return User.objects.filter(username__iexact=email).exists()

    @transaction.atomic
    def create_user(self, email: str, password: str, full_name: str, currency: str) -> Profile:
        user = User.objects.create_user(username=email, email=email, password=password)
        row = models.Profile.objects.create(user=user, full_name=full_name, currency=currency)
        return to_profile(row)

    def authenticate(self, email: str, password: str) -> int | None:
        user = authenticate(username=email, password=password)
        return user.pk if user is not None else None

    def check_password(self, user_id: int, password: str) -> bool:
        return User.objects.get(pk=user_id).check_password(password)

    def set_password(self, user_id: int, password: str) -> None:
        user = User.objects.get(pk=user_id)
        user.set_password(password)
        user.save(update_fields=["password"])
        Token.objects.filter(user=user).delete()

    def validate_password(self, user_id: int, password: str) -> list[str]:
        try:
            password_validation.validate_password(password, User.objects.get(pk=user_id))
        except ValidationError as exc:
            return list(exc.messages)
        return []

    def find_user_id(self, email: str) -> int | None:
        user = User.objects.filter(username__iexact=email, is_active=True).first()
        return user.pk if user is not None else None

    def make_reset_token(self, user_id: int) -> tuple[str, str]:
        user = User.objects.get(pk=user_id)
        return urlsafe_base64_encode(force_bytes(user.pk)), default_token_generator.make_token(user)

    def check_reset_token(self, uid: str, token: str) -> int | None:
        try:
            user = User.objects.get(pk=urlsafe_base64_decode(uid).decode())
        except (ValueError, TypeError, OverflowError, User.DoesNotExist, ValidationError):
            return None
        if not default_token_generator.check_token(user, token):
            return None
        return user.pk

    def issue_token(self, user_id: int) -> str:
        token, _ = Token.objects.get_or_create(user_id=user_id)
        return token.key

    def get_profile(self, user_id: int) -> Profile | None:
        if not User.objects.filter(pk=user_id).exists():
            return None
        return to_profile(self._profile_row(user_id))

    def update_profile(self, user_id: int, fields: dict) -> Profile:
        row = self._profile_row(user_id)
        for name, value in fields.items():
            setattr(row, name, value)
        row.save()
        return to_profile(row)

    def set_bank_account(self, user_id: int, bank: BankAccount) -> Profile:
        return self.update_profile(
            user_id,
            {
                "bank_name": bank.bank_name,
                "bank_code": bank.bank_code,
                "account_number": bank.account_number,
                "account_name": bank.account_name,
                "recipient_code": bank.recipient_code,
            },
        )

    def set_recipient_code(self, user_id: int, recipient_code: str) -> None:
        models.Profile.objects.filter(user_id=user_id).update(recipient_code=recipient_code)

    @contextmanager
    def lock(self, user_id: int):
        self._profile_row(user_id)
        with transaction.atomic():
            models.Profile.objects.select_for_update().get(user_id=user_id)
            yield
