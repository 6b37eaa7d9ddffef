from accounts.stores.django_store import DjangoAccountStore
from accounts.stores.interfaces import AccountStore

__all__ = ["AccountStore", "DjangoAccountStore"]
