"""Wiring of services to their concrete stores."""

from django.conf import settings

from accounts.services import AccountService
from accounts.stores import DjangoAccountStore
from core.mailer import DjangoMailer
from core.storage import DjangoFileStore
from payments import get_gateway


def get_account_service(with_gateway: bool = False) -> AccountService:
    return AccountService(
        store=DjangoAccountStore(),
        gateway=get_gateway() if with_gateway else None,
        files=DjangoFileStore(),
        mailer=DjangoMailer(),
        default_currency=settings.DEFAULT_CURRENCY,
        max_image_bytes=settings.MAX_IMAGE_BYTES,
        public_base_url=settings.PUBLIC_BASE_URL,
    )
