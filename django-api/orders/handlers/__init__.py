from orders.handlers.views import (
    EventAttendeeListView,
    EventStatsView,
    MyTicketListView,
    OrderCancelView,
    OrderDetailView,
    OrderListView,
    OrderPaymentView,
    PaymentConfirmView,
    PaymentWebhookView,
    TicketDetailView,
    TicketScanView,
)

__all__ = [
    "OrderListView",
    "OrderDetailView",
    "OrderPaymentView",
    "OrderCancelView",
    "PaymentConfirmView",
    "PaymentWebhookView",
    "TicketDetailView",
    "TicketScanView",
    "MyTicketListView",
    "EventStatsView",
    "EventAttendeeListView",
]
