from django.contrib import admin

from orders.models import Order, Ticket, TicketScan


class TicketInline(admin.TabularInline):
    model = Ticket
    extra = 0
    fields = ["code", "attendee_name", "attendee_email", "is_scanned", "scanned_at"]
    readonly_fields = fields


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = ["buyer_email", "event", "ticket_type", "quantity", "total_amount", "status", "created_at"]
    list_filter = ["status", "payment_provider"]
    search_fields = ["buyer_email", "buyer_full_name", "payment_reference"]
    readonly_fields = ["payment_reference", "abandoned_email_sent_at", "created_at", "updated_at"]
    inlines = [TicketInline]


@admin.register(Ticket)
class TicketAdmin(admin.ModelAdmin):
    list_display = ["code", "event", "ticket_type", "attendee_name", "is_scanned"]
    list_filter = ["is_scanned", "event"]
    search_fields = ["code", "attendee_email", "attendee_name"]


@admin.register(TicketScan)
class TicketScanAdmin(admin.ModelAdmin):
    list_display = ["ticket", "scanned_by", "result", "created_at"]
    list_filter = ["result"]
