"""HTTP handlers for accounts and settings."""

from rest_framework import status
from rest_framework.parsers import FormParser, MultiPartParser
from rest_framework.permissions import IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.dependencies import get_account_service
from accounts.handlers.serializers import (
    BankAccountInputSerializer,
    BankSerializer,
    LoginSerializer,
    PasswordChangeSerializer,
    PasswordResetConfirmSerializer,
    PasswordResetRequestSerializer,
    ProfileSerializer,
    SignupSerializer,
)
from core.storage import Upload


class SignupView(APIView):
    """Handler for POST /api/auth/signup"""

    def post(self, request: Request) -> Response:
        serializer = SignupSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        profile, token = get_account_service().signup(**serializer.validated_data)
        return Response(
            {"token": token, "profile": ProfileSerializer(profile).data},
            status=status.HTTP_201_CREATED,
        )


class LoginView(APIView):
    """Handler for POST /api/auth/login"""

    def post(self, request: Request) -> Response:
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        profile, token = get_account_service().login(**serializer.validated_data)
        return Response({"token": token, "profile": ProfileSerializer(profile).data})


class ProfileView(APIView):
    """Handler for GET/PATCH /api/me/profile"""

    permission_classes = [IsAuthenticated]

    def get(self, request: Request) -> Response:
        profile = get_account_service().get_profile(request.user.id)
        return Response(ProfileSerializer(profile).data)

    def patch(self, request: Request) -> Response:
        serializer = ProfileSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        profile = get_account_service().update_profile(request.user.id, serializer.validated_data)
        return Response(ProfileSerializer(profile).data)


class PasswordView(APIView):
    """Handler for POST /api/me/password"""

    permission_classes = [IsAuthenticated]

    def post(self, request: Request) -> Response:
        serializer = PasswordChangeSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        token = get_account_service().change_password(
            request.user.id,
            serializer.validated_data["current_password"],
            serializer.validated_data["new_password"],
        )
        return Response({"token": token})


class PasswordResetRequestView(APIView):
    """Handler for POST /api/auth/password-reset"""

    def post(self, request: Request) -> Response:
        serializer = PasswordResetRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        get_account_service().request_password_reset(serializer.validated_data["email"])
        return Response(
            {"message": "If an account exists for that email, a reset link has been sent"},
            status=status.HTTP_202_ACCEPTED,
        )


class PasswordResetConfirmView(APIView):
    """Handler for POST /api/auth/password-reset/confirm"""

    def post(self, request: Request) -> Response:
        serializer = PasswordResetConfirmSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        token = get_account_service().confirm_password_reset(**serializer.validated_data)
        return Response({"token": token})


class AvatarView(APIView):
    """Handler for POST /api/me/avatar"""

    permission_classes = [IsAuthenticated]
    parser_classes = [MultiPartParser, FormParser]

    def post(self, request: Request) -> Response:
        uploaded = request.FILES.get("image")
        upload = Upload.from_file(uploaded) if uploaded else Upload("", "", b"")
        profile = get_account_service().upload_avatar(request.user.id, upload)
        return Response(ProfileSerializer(profile).data)


class BankListView(APIView):
    """Handler for GET /api/banks?country=nigeria"""

    def get(self, request: Request) -> Response:
        banks = get_account_service(with_gateway=True).list_banks(
            request.query_params.get("country")
        )
        return Response({"banks": BankSerializer(banks, many=True).data})


class VerifyBankAccountView(APIView):
    """Handler for POST /api/banks/verify"""

    permission_classes = [IsAuthenticated]

    def post(self, request: Request) -> Response:
        serializer = BankAccountInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        resolved = get_account_service(with_gateway=True).verify_bank_account(
            serializer.validated_data["bank_code"],
            serializer.validated_data["account_number"],
        )
        return Response(
            {"account_name": resolved.account_name, "account_number": resolved.account_number}
        )


class BankAccountView(APIView):
    """Handler for PUT /api/me/bank-account"""

    permission_classes = [IsAuthenticated]

    def put(self, request: Request) -> Response:
        serializer = BankAccountInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        profile = get_account_service(with_gateway=True).set_bank_account(
            request.user.id, **serializer.validated_data
        )
        return Response(ProfileSerializer(profile).data)
