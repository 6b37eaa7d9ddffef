"""Serializers for transforming domain models to API responses."""

from rest_framework import serializers

from events.domain import EventDraft, TicketTypeDraft, format_price


class TicketTypeSerializer(serializers.Serializer):
    """Serializer for TicketType domain model."""

    id = serializers.UUIDField(source="id.value")
    name = serializers.CharField()
    price = serializers.DecimalField(source="price.amount", max_digits=12, decimal_places=2)
    quantity = serializers.IntegerField(source="quantity.value")
    sold = serializers.IntegerField(source="sold.value")
    available = serializers.IntegerField()
    details = serializers.CharField()
    display_price = serializers.SerializerMethodField()

    def get_display_price(self, obj) -> str:
        currency = self.context.get("currency") or "NGN"
        return format_price(obj.price.amount, currency)


class EventSerializer(serializers.Serializer):
    """Serializer for Event domain model."""

    id = serializers.UUIDField(source="id.value")
    host_id = serializers.IntegerField()
    title = serializers.CharField()
    slug = serializers.CharField()
    description = serializers.CharField()
    date = serializers.DateField()
    time = serializers.TimeField(allow_null=True)
    venue = serializers.CharField()
    location = serializers.CharField()
    country = serializers.CharField()
    currency = serializers.CharField()
    image_url = serializers.CharField(allow_null=True)
    is_virtual = serializers.BooleanField()
    virtual_details = serializers.DictField()
    social_links = serializers.DictField()
    status = serializers.CharField()
    created_at = serializers.DateTimeField()
    updated_at = serializers.DateTimeField()
    gallery = serializers.ListField(child=serializers.CharField())
    ticket_types = serializers.SerializerMethodField()

    def get_ticket_types(self, obj) -> list[dict]:
        return TicketTypeSerializer(
            obj.ticket_types, many=True, context={"currency": obj.currency}
        ).data


class TicketTypeInputSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=100)
    price = serializers.DecimalField(max_digits=12, decimal_places=2)
    quantity = serializers.IntegerField()
    details = serializers.CharField(required=False, allow_blank=True, default="")

    def to_draft(self, data: dict) -> TicketTypeDraft:
        return TicketTypeDraft(
            name=data["name"].strip(),
            price=data["price"],
            quantity=data["quantity"],
            details=data.get("details", ""),
        )


class VirtualDetailsSerializer(serializers.Serializer):
    platform = serializers.ChoiceField(
        choices=["google-meet", "zoom", "meets", "custom"], required=False
    )
    meeting_url = serializers.URLField(required=False)
    meeting_id = serializers.CharField(required=False, allow_blank=True)


class SocialLinksSerializer(serializers.Serializer):
    twitter = serializers.URLField(required=False, allow_blank=True)
    facebook = serializers.URLField(required=False, allow_blank=True)
    instagram = serializers.URLField(required=False, allow_blank=True)
    linkedin = serializers.URLField(required=False, allow_blank=True)
    website = serializers.URLField(required=False, allow_blank=True)


class EventWriteSerializer(serializers.Serializer):
    """Validates the shape of create/update payloads.

    Domain rules (future date, ticket type sanity) are checked by the service.
    """

    title = serializers.CharField(max_length=255)
    description = serializers.CharField()
    date = serializers.DateField()
    time = serializers.TimeField(required=False, allow_null=True)
    venue = serializers.CharField(required=False, allow_blank=True, max_length=255)
    location = serializers.CharField(required=False, allow_blank=True, max_length=255)
    country = serializers.CharField(required=False, allow_blank=True, max_length=100)
    currency = serializers.CharField(required=False, allow_blank=True, max_length=3)
    is_virtual = serializers.BooleanField(required=False)
    virtual_details = VirtualDetailsSerializer(required=False)
    social_links = SocialLinksSerializer(required=False)
    status = serializers.ChoiceField(choices=["draft", "published"], required=False)
    ticket_types = TicketTypeInputSerializer(many=True, required=False)

    def ticket_type_drafts(self) -> list[TicketTypeDraft] | None:
        rows = self.validated_data.get("ticket_types")
        if rows is None:
            return None
        return [TicketTypeInputSerializer().to_draft(row) for row in rows]

    def field_changes(self) -> dict:
        changes = {k: v for k, v in self.validated_data.items() if k != "ticket_types"}
        for key in ("virtual_details", "social_links"):
            if key in changes:
                changes[key] = dict(changes[key])
        if "currency" in changes:
            changes["currency"] = changes["currency"].upper()
        return changes

    def to_draft(self) -> EventDraft:
        changes = self.field_changes()
        return EventDraft(
            **changes,
            ticket_types=tuple(self.ticket_type_drafts() or ()),
        )
