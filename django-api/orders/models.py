"""Django ORM models (persistence layer).

These models handle database concerns. Domain logic lives in domain/models.py.
"""

import uuid

from django.conf import settings
from django.db import models

from events.models import Event, TicketType


class Order(models.Model):
    """Persistence model for ticket orders."""

    class Status(models.TextChoices):
        PENDING = "pending"
        PAID = "paid"
        FAILED = "failed"
        CANCELLED = "cancelled"
        REFUNDED = "refunded"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name="orders")
    ticket_type = models.ForeignKey(TicketType, on_delete=models.RESTRICT, related_name="orders")
    buyer = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="orders",
    )
    buyer_full_name = models.CharField(max_length=255)
    buyer_email = models.EmailField()
    buyer_phone = models.CharField(max_length=32, blank=True)
    currency = models.CharField(max_length=3)
    quantity = models.PositiveIntegerField()
    unit_price = models.DecimalField(max_digits=12, decimal_places=2)
    total_amount = models.DecimalField(max_digits=12, decimal_places=2)
    attendees = models.JSONField(default=list, blank=True)
    status = models.CharField(max_length=16, choices=Status.choices, default=Status.PENDING)
    payment_provider = models.CharField(max_length=32, blank=True)
    payment_reference = models.CharField(max_length=120, unique=True, null=True, blank=True)
    abandoned_email_sent_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["status", "created_at"], name="order_status_created_idx"),
            models.Index(fields=["buyer_email"], name="order_buyer_email_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.buyer_email} x{self.quantity} ({self.status})"


class Ticket(models.Model):
    """Persistence model for issued tickets."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name="tickets")
    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name="tickets")
    ticket_type = models.ForeignKey(TicketType, on_delete=models.RESTRICT, related_name="tickets")
    code = models.CharField(max_length=16, unique=True)
    qr_code_url = models.CharField(max_length=500, blank=True)
    attendee_name = models.CharField(max_length=255)
    attendee_email = models.EmailField()
    price = models.DecimalField(max_digits=12, decimal_places=2)
    currency = models.CharField(max_length=3)
    is_scanned = models.BooleanField(default=False)
    scanned_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["created_at"]
        indexes = [
            models.Index(fields=["event", "is_scanned"], name="ticket_event_scanned_idx"),
            models.Index(fields=["attendee_email"], name="ticket_attendee_email_idx"),
        ]

    def __str__(self) -> str:
        return self.code


class TicketScan(models.Model):
    """One validation attempt at the door."""

    class Result(models.TextChoices):
        SUCCESS = "success"
        ALREADY_SCANNED = "already_scanned"
        INVALID_SIGNATURE = "invalid_signature"

    ticket = models.ForeignKey(Ticket, on_delete=models.CASCADE, related_name="scans")
    scanned_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True
    )
    result = models.CharField(max_length=32, choices=Result.choices)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return f"{self.ticket_id}: {self.result}"
