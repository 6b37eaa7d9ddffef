"""HTTP handlers for balances and withdrawals."""

from uuid import UUID

from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.permissions import IsAdminUser, IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from payouts.dependencies import get_payout_service
from payouts.domain import WithdrawalId, WithdrawalStatus
from payouts.handlers.serializers import (
    BalanceSerializer,
    ResolveWithdrawalSerializer,
    WithdrawalRequestInputSerializer,
    WithdrawalSerializer,
)


class BalanceView(APIView):
    """Handler for GET /api/me/balance"""

    permission_classes = [IsAuthenticated]

    def get(self, request: Request) -> Response:
        balance = get_payout_service().get_balance(request.user.id)
        return Response(BalanceSerializer(balance).data)


class WithdrawalListView(APIView):
    """Handler for GET/POST /api/me/withdrawals"""

    permission_classes = [IsAuthenticated]

    def get(self, request: Request) -> Response:
        withdrawals = get_payout_service().list_withdrawals(request.user.id)
        return Response(WithdrawalSerializer(withdrawals, many=True).data)

    def post(self, request: Request) -> Response:
        serializer = WithdrawalRequestInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        withdrawal = get_payout_service().request_withdrawal(
            request.user.id, serializer.validated_data["amount"]
        )
        return Response(WithdrawalSerializer(withdrawal).data, status=status.HTTP_201_CREATED)


class AdminWithdrawalListView(APIView):
    """Handler for GET /api/admin/withdrawals?status=..."""

    permission_classes = [IsAdminUser]

    def get(self, request: Request) -> Response:
        raw_status = request.query_params.get("status")
        try:
            status_filter = WithdrawalStatus(raw_status) if raw_status else None
        except ValueError:
            raise ValidationError({"status": f"Unknown status: {raw_status}"}) from None
        withdrawals = get_payout_service().list_all_withdrawals(status_filter)
        return Response(WithdrawalSerializer(withdrawals, many=True).data)


class AdminWithdrawalApproveView(APIView):
    """Handler for POST /api/admin/withdrawals/{withdrawal_id}/approve"""

    permission_classes = [IsAdminUser]

    def post(self, request: Request, withdrawal_id: UUID) -> Response:
        serializer = ResolveWithdrawalSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        withdrawal = get_payout_service(with_gateway=True).approve(
            WithdrawalId(withdrawal_id), serializer.validated_data["note"]
        )
        return Response(WithdrawalSerializer(withdrawal).data)


class AdminWithdrawalRejectView(APIView):
    """Handler for POST /api/admin/withdrawals/{withdrawal_id}/reject"""

    permission_classes = [IsAdminUser]

    def post(self, request: Request, withdrawal_id: UUID) -> Response:
        serializer = ResolveWithdrawalSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        withdrawal = get_payout_service().reject(
            WithdrawalId(withdrawal_id), serializer.validated_data["note"]
        )
        return Response(WithdrawalSerializer(withdrawal).data)
