"""Application configuration."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    # Database
    database_url: str = "sqlite:///./authcore.db"

    # Session tokens
    jwt_secret_key: str = "change-me-in-production"  # Generate with: openssl rand -hex 32
    jwt_algorithm: str = "HS256"
    jwt_expire_days: int = 30
    jwt_cookie_expire_days: int = 30

    # Single-use secrets
    reset_token_expire_minutes: int = 10
    bvn_code_expire_minutes: int = 10

    # Email (SendGrid)
    sendgrid_api_key: str = ""
    email_from_address: str = "noreply@authcore.local"
    email_from_name: str = "Authcore"

    # SMS (Twilio)
    twilio_account_sid: str = ""
    twilio_auth_token: str = ""
    twilio_phone_number: str = ""

    # Paystack identity lookup
    paystack_secret_key: str = ""
    paystack_base_url: str = "https://api.paystack.co"
    paystack_timeout: float = 10.0

    # Application
    environment: str = "development"
    log_level: str = "INFO"

    # CORS
    allowed_origins: list[str] = ["*"]

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @property
    def is_development(self) -> bool:
        return self.environment.lower() == "development"


@lru_cache
def get_settings() -> Settings:
    """Return the process settings (cached; override in tests via dependency_overrides)."""
    return Settings()


settings = get_settings()
