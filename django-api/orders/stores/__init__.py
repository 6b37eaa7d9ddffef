from orders.stores.django_store import DjangoOrderStore
from orders.stores.interfaces import OrderStore

__all__ = ["OrderStore", "DjangoOrderStore"]
