"""Django ORM models (persistence layer)."""

from django.conf import settings
from django.db import models


class Profile(models.Model):
    """Per-user settings, payout bank details and notification preferences."""

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="profile"
    )
    full_name = models.CharField(max_length=255, blank=True)
    phone = models.CharField(max_length=32, blank=True)
    country = models.CharField(max_length=100, blank=True)
    currency = models.CharField(max_length=3, default="NGN")
    bio = models.TextField(blank=True)
    avatar_url = models.CharField(max_length=500, blank=True)

    bank_name = models.CharField(max_length=255, blank=True)
    bank_code = models.CharField(max_length=32, blank=True)
    account_number = models.CharField(max_length=32, blank=True)
    account_name = models.CharField(max_length=255, blank=True)
    recipient_code = models.CharField(max_length=64, blank=True)

    notify_ticket_sales = models.BooleanField(default=True)
    notify_withdrawals = models.BooleanField(default=True)
    notify_marketing = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:
        return self.full_name or str(self.user)
