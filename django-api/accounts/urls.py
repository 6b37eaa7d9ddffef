from django.urls import path

from accounts.handlers import (
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

urlpatterns = [
    path("auth/signup", SignupView.as_view(), name="signup"),
    path("auth/login", LoginView.as_view(), name="login"),
    path("auth/password-reset", PasswordResetRequestView.as_view(), name="password-reset"),
    path(
        "auth/password-reset/confirm",
        PasswordResetConfirmView.as_view(),
        name="password-reset-confirm",
    ),
    path("me/profile", ProfileView.as_view(), name="profile"),
    path("me/password", PasswordView.as_view(), name="password"),
    path("me/avatar", AvatarView.as_view(), name="avatar"),
    path("me/bank-account", BankAccountView.as_view(), name="bank-account"),
    path("banks", BankListView.as_view(), name="bank-list"),
    path("banks/verify", VerifyBankAccountView.as_view(), name="bank-verify"),
]
