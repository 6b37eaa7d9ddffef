from django.urls import path

from orders.handlers import (
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

urlpatterns = [
    path("orders", OrderListView.as_view(), name="order-list"),
    path("orders/<uuid:order_id>", OrderDetailView.as_view(), name="order-detail"),
    path("orders/<uuid:order_id>/pay", OrderPaymentView.as_view(), name="order-pay"),
    path("orders/<uuid:order_id>/cancel", OrderCancelView.as_view(), name="order-cancel"),
    path("payments/confirm", PaymentConfirmView.as_view(), name="payment-confirm"),
    path("payments/webhook", PaymentWebhookView.as_view(), name="payment-webhook"),
    path("tickets/<str:ticket_id>", TicketDetailView.as_view(), name="ticket-detail"),
    path("tickets/<str:ticket_id>/scan", TicketScanView.as_view(), name="ticket-scan"),
    path("me/tickets", MyTicketListView.as_view(), name="my-tickets"),
    path("events/<str:event_id>/stats", EventStatsView.as_view(), name="event-stats"),
    path("events/<str:event_id>/attendees", EventAttendeeListView.as_view(), name="event-attendees"),
]
