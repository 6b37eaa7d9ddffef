from payouts.stores.django_store import DjangoPayoutStore
from payouts.stores.interfaces import PayoutStore

__all__ = ["PayoutStore", "DjangoPayoutStore"]
