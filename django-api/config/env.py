"""Environment-backed settings.

Values come from the process environment and, when present, a `.env` file
at the project root. Django settings read from `env` (config/settings.py).
"""

from decimal import Decimal
from pathlib import Path

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_PROJECT_ROOT = Path(__file__).resolve().parents[2]
_ENV_PATH = _PROJECT_ROOT / ".env"


class EnvSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(_ENV_PATH),
        env_ignore_empty=True,
        extra="ignore",
    )

    DEBUG: bool = True
    SECRET_KEY: SecretStr = SecretStr("django-insecure-change-me")
    ALLOWED_HOSTS: str = "localhost,127.0.0.1"
    LOG_LEVEL: str = "INFO"

    # Database; SQLite is used when POSTGRES_DB is unset
    POSTGRES_DB: str | None = None
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: SecretStr = SecretStr("")
    POSTGRES_SERVER: str = "localhost"
    POSTGRES_PORT: int = 5432

    # Cache; local memory when unset
    REDIS_URL: str | None = None
    EVENT_CACHE_TIMEOUT: int = 300

    PUBLIC_BASE_URL: str = "http://localhost:3000"
    MEDIA_URL: str = "/media/"

    # Payment provider
    PAYSTACK_SECRET_KEY: SecretStr | None = None
    PAYSTACK_WEBHOOK_SECRET: SecretStr | None = None
    PAYSTACK_BASE_URL: str = "https://api.paystack.co"
    PAYSTACK_TIMEOUT: float = 15.0
    PAYMENT_GATEWAY: str = "payments.paystack.PaystackGateway"

    DEFAULT_CURRENCY: str = "NGN"
    PLATFORM_FEE_RATE: Decimal = Decimal("0.06")
    MAX_IMAGE_BYTES: int = 5 * 1024 * 1024

    # Email
    EMAIL_BACKEND: str = "django.core.mail.backends.console.EmailBackend"
    EMAIL_HOST: str = "localhost"
    EMAIL_PORT: int = 25
    EMAIL_HOST_USER: str = ""
    EMAIL_HOST_PASSWORD: SecretStr = SecretStr("")
    EMAIL_USE_TLS: bool = False
    DEFAULT_FROM_EMAIL: str = "tickets@localhost"
    ADMIN_EMAILS: str = ""

    @field_validator("PLATFORM_FEE_RATE")
    @classmethod
    def fee_rate_in_range(cls, v: Decimal) -> Decimal:
        if not Decimal("0") <= v < Decimal("1"):
            raise ValueError("PLATFORM_FEE_RATE must be in [0, 1)")
        return v

    @staticmethod
    def split_list(value: str) -> list[str]:
        return [item.strip() for item in value.split(",") if item.strip()]

    @property
    def paystack_webhook_secret(self) -> str | None:
        secret = self.PAYSTACK_WEBHOOK_SECRET or self.PAYSTACK_SECRET_KEY
        return secret.get_secret_value() if secret else None


env = EnvSettings()
