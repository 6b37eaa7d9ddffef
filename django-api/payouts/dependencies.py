"""Wiring of services to their concrete stores."""

from django.conf import settings

from accounts.stores import DjangoAccountStore
from core.mailer import DjangoMailer
from payments import get_gateway
from payouts.services import PayoutService
from payouts.stores import DjangoPayoutStore


def get_payout_service(with_gateway: bool = False) -> PayoutService:
    return PayoutService(
        store=DjangoPayoutStore(),
        accounts=DjangoAccountStore(),
        gateway=get_gateway() if with_gateway else None,
        mailer=DjangoMailer(),
        fee_rate=settings.PLATFORM_FEE_RATE,
    )
