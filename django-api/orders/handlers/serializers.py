"""Serializers for checkout input and order/ticket responses."""

from rest_framework import serializers

from events.domain import format_price
from orders.domain import Attendee
from payments.gateway import REFERENCE_PATTERN


class AttendeeSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    email = serializers.EmailField()


class TicketSerializer(serializers.Serializer):
    """Serializer for Ticket domain model."""

    id = serializers.UUIDField(source="id.value")
    order_id = serializers.UUIDField(source="order_id.value")
    event_id = serializers.UUIDField(source="event_id.value")
    ticket_type_id = serializers.UUIDField(source="ticket_type_id.value")
    ticket_type = serializers.CharField(source="ticket_type_name")
    code = serializers.CharField(source="code.value")
    qr_code_url = serializers.CharField()
    attendee_name = serializers.CharField(source="holder.name")
    attendee_email = serializers.EmailField(source="holder.email")
    price = serializers.DecimalField(source="price.amount", max_digits=12, decimal_places=2)
    currency = serializers.CharField()
    is_scanned = serializers.BooleanField()
    scanned_at = serializers.DateTimeField(allow_null=True)
    created_at = serializers.DateTimeField()


class OrderSerializer(serializers.Serializer):
    """Serializer for Order domain model."""

    id = serializers.UUIDField(source="id.value")
    event_id = serializers.UUIDField(source="event_id.value")
    ticket_type = serializers.CharField(source="ticket_type_name")
    buyer_full_name = serializers.CharField(source="buyer.name")
    buyer_email = serializers.EmailField(source="buyer.email")
    buyer_phone = serializers.CharField()
    attendees = AttendeeSerializer(many=True)
    quantity = serializers.IntegerField()
    unit_price = serializers.DecimalField(source="unit_price.amount", max_digits=12, decimal_places=2)
    total_amount = serializers.DecimalField(
        source="total_amount.amount", max_digits=12, decimal_places=2
    )
    display_total = serializers.SerializerMethodField()
    currency = serializers.CharField()
    status = serializers.CharField(source="status.value")
    payment_provider = serializers.CharField()
    payment_reference = serializers.CharField(allow_null=True)
    created_at = serializers.DateTimeField()

    def get_display_total(self, obj) -> str:
        return format_price(obj.total_amount.amount, obj.currency)


class EventSummarySerializer(serializers.Serializer):
    id = serializers.UUIDField(source="id.value")
    title = serializers.CharField()
    slug = serializers.CharField()
    date = serializers.DateField()
    time = serializers.TimeField(allow_null=True)
    venue = serializers.CharField()
    location = serializers.CharField()
    is_virtual = serializers.BooleanField()


class ReceiptSerializer(serializers.Serializer):
    order = OrderSerializer()
    tickets = TicketSerializer(many=True)
    event = EventSummarySerializer(allow_null=True)


class CreateOrderSerializer(serializers.Serializer):
    event = serializers.CharField(max_length=280)
    ticket_type = serializers.CharField(max_length=100)
    quantity = serializers.IntegerField()
    buyer_full_name = serializers.CharField(max_length=255)
    buyer_email = serializers.EmailField()
    buyer_phone = serializers.CharField(max_length=32, required=False, allow_blank=True, default="")
    attendees = AttendeeSerializer(many=True, required=False, default=list)
    currency = serializers.CharField(max_length=3, required=False, allow_blank=True)

    def to_kwargs(self) -> dict:
        data = self.validated_data
        return {
            "event_identifier": data["event"],
            "ticket_type_name": data["ticket_type"],
            "quantity": data["quantity"],
            "buyer": Attendee(name=data["buyer_full_name"], email=data["buyer_email"]),
            "buyer_phone": data["buyer_phone"],
            "attendees": [Attendee(name=a["name"], email=a["email"]) for a in data["attendees"]],
            "currency": (data.get("currency") or "").upper() or None,
        }


class InitializePaymentSerializer(serializers.Serializer):
    callback_url = serializers.URLField(required=False)


class ConfirmPaymentSerializer(serializers.Serializer):
    reference = serializers.RegexField(REFERENCE_PATTERN, max_length=120)


class ScanTicketSerializer(serializers.Serializer):
    signature = serializers.CharField(max_length=64)


class TicketTypeSalesSerializer(serializers.Serializer):
    name = serializers.CharField()
    price = serializers.DecimalField(source="price.amount", max_digits=12, decimal_places=2)
    quantity = serializers.IntegerField()
    sold = serializers.IntegerField()
    revenue = serializers.DecimalField(max_digits=14, decimal_places=2)


class EventStatsSerializer(serializers.Serializer):
    event_id = serializers.UUIDField(source="event_id.value")
    currency = serializers.CharField()
    ticket_types = TicketTypeSalesSerializer(many=True)
    tickets_sold = serializers.IntegerField()
    capacity = serializers.IntegerField()
    tickets_scanned = serializers.IntegerField()
    paid_orders = serializers.IntegerField()
    gross_revenue = serializers.DecimalField(max_digits=14, decimal_places=2)
