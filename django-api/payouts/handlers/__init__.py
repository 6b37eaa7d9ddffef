from payouts.handlers.views import (
    AdminWithdrawalApproveView,
    AdminWithdrawalListView,
    AdminWithdrawalRejectView,
    BalanceView,
    WithdrawalListView,
)

__all__ = [
    "BalanceView",
    "WithdrawalListView",
    "AdminWithdrawalListView",
    "AdminWithdrawalApproveView",
    "AdminWithdrawalRejectView",
]
