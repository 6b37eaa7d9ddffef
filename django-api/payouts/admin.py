from django.contrib import admin

from payouts.models import WithdrawalRequest


@admin.register(WithdrawalRequest)
class WithdrawalRequestAdmin(admin.ModelAdmin):
    list_display = ["user", "amount", "currency", "status", "created_at", "resolved_at"]
    list_filter = ["status", "currency"]
    search_fields = ["user__email", "reference", "transfer_code"]
    readonly_fields = ["reference", "transfer_code", "recipient_code", "created_at"]
