from decimal import Decimal

from rest_framework import serializers


class BalanceSerializer(serializers.Serializer):
    gross_revenue = serializers.DecimalField(max_digits=14, decimal_places=2)
    platform_fee = serializers.DecimalField(max_digits=14, decimal_places=2)
    net_revenue = serializers.DecimalField(max_digits=14, decimal_places=2)
    pending = serializers.DecimalField(max_digits=14, decimal_places=2)
    approved = serializers.DecimalField(max_digits=14, decimal_places=2)
    available = serializers.DecimalField(max_digits=14, decimal_places=2)


class WithdrawalSerializer(serializers.Serializer):
    id = serializers.UUIDField(source="id.value")
    user_id = serializers.IntegerField()
    amount = serializers.DecimalField(max_digits=12, decimal_places=2)
    currency = serializers.CharField()
    status = serializers.CharField(source="status.value")
    admin_note = serializers.CharField()
    reference = serializers.CharField()
    transfer_code = serializers.CharField()
    resolved_at = serializers.DateTimeField(allow_null=True)
    created_at = serializers.DateTimeField()


class WithdrawalRequestInputSerializer(serializers.Serializer):
    amount = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=Decimal("0"))


class ResolveWithdrawalSerializer(serializers.Serializer):
    note = serializers.CharField(required=False, allow_blank=True, default="")
