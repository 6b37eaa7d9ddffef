from accounts.handlers.views import (
    AvatarView,
    BankAccountView,
    BankListView,
    LoginView,
    PasswordResetConfirmView,
    PasswordResetRequestView,
    PasswordView,
    ProfileView,
    SignupView,
    VerifyBankAccountView,
)

__all__ = [
    "SignupView",
    "LoginView",
    "ProfileView",
    "PasswordView",
    "PasswordResetRequestView",
    "PasswordResetConfirmView",
    "AvatarView",
    "BankListView",
    "BankAccountView",
    "VerifyBankAccountView",
]
