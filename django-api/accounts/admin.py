from django.contrib import admin

from accounts.models import Profile


@admin.register(Profile)
class ProfileAdmin(admin.ModelAdmin):
    list_display = ["user", "full_name", "country", "currency", "bank_name"]
    search_fields = ["user__email", "full_name", "account_name"]
    readonly_fields = ["recipient_code", "created_at", "updated_at"]
