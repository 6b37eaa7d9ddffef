from rest_framework import serializers


class SignupSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(min_length=8, write_only=True)
    full_name = serializers.CharField(max_length=255)


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True)


class PasswordChangeSerializer(serializers.Serializer):
    current_password = serializers.CharField()
    new_password = serializers.CharField(min_length=8)


class PasswordResetRequestSerializer(serializers.Serializer):
    email = serializers.EmailField()


class PasswordResetConfirmSerializer(serializers.Serializer):
    uid = serializers.CharField(max_length=64)
    token = serializers.CharField(max_length=128)
    new_password = serializers.CharField(min_length=8)


class BankAccountSerializer(serializers.Serializer):
    bank_name = serializers.CharField()
    bank_code = serializers.CharField()
    account_number = serializers.CharField()
    account_name = serializers.CharField()
    masked_number = serializers.CharField()


class ProfileSerializer(serializers.Serializer):
    user_id = serializers.IntegerField(read_only=True)
    email = serializers.EmailField(read_only=True)
    full_name = serializers.CharField(max_length=255, required=False, allow_blank=True)
    phone = serializers.RegexField(
        r"^\+?[0-9 ()-]{7,20}$", required=False, allow_blank=True
    )
    country = serializers.CharField(max_length=100, required=False, allow_blank=True)
    currency = serializers.CharField(min_length=3, max_length=3, required=False)
    bio = serializers.CharField(required=False, allow_blank=True)
    avatar_url = serializers.CharField(read_only=True)
    bank = BankAccountSerializer(read_only=True, allow_null=True)
    has_bank_details = serializers.BooleanField(read_only=True)
    notify_ticket_sales = serializers.BooleanField(required=False)
    notify_withdrawals = serializers.BooleanField(required=False)
    notify_marketing = serializers.BooleanField(required=False)


class BankSerializer(serializers.Serializer):
    code = serializers.CharField()
    name = serializers.CharField()


class BankAccountInputSerializer(serializers.Serializer):
    bank_code = serializers.CharField(max_length=32)
    account_number = serializers.RegexField(r"^[0-9]{6,20}$")
    bank_name = serializers.CharField(max_length=255, required=False, allow_blank=True, default="")
