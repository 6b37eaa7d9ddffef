from django.urls import path

from payouts.handlers import (
    AdminWithdrawalApproveView,
    AdminWithdrawalListView,
    AdminWithdrawalRejectView,
    BalanceView,
    WithdrawalListView,
)

urlpatterns = [
    path("me/balance", BalanceView.as_view(), name="balance"),
    path("me/withdrawals", WithdrawalListView.as_view(), name="withdrawal-list"),
    path("admin/withdrawals", AdminWithdrawalListView.as_view(), name="admin-withdrawal-list"),
    path(
        "admin/withdrawals/<uuid:withdrawal_id>/approve",
        AdminWithdrawalApproveView.as_view(),
        name="admin-withdrawal-approve",
    ),
    path(
        "admin/withdrawals/<uuid:withdrawal_id>/reject",
        AdminWithdrawalRejectView.as_view(),
        name="admin-withdrawal-reject",
    ),
]
