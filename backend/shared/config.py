"""
Centralized configuration for the CourseVault backend.

All settings are loaded from environment variables with sensible defaults.
Module-specific settings are namespaced (e.g., STORAGE_*, BREVO_*, RAZORPAY_*).
"""

from functools import lru_cache
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "CourseVault API"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False

    # CORS settings
    cors_origins: list[str] = ["http://localhost:5173", "http://localhost:3000"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = ["GET", "POST", "PUT", "DELETE", "OPTIONS"]
    cors_allow_headers: list[str] = ["Content-Type", "Authorization", "Range"]

    # Supabase
    supabase_url: str = ""
    supabase_service_role_key: str = ""
    supabase_db_url: str = ""  # Direct Postgres URL, migrations only

    # Session tokens
    jwt_secret: str = ""
    jwt_algorithm: str = "HS256"
    access_token_ttl_seconds: int = 7 * 24 * 3600

    # Passwords
    bcrypt_rounds: int = 10

    # Signup codes
    otp_ttl_seconds: int = 300
    otp_length: int = 4
    expose_dev_otp: Optional[bool] = None  # Falls back to debug

    # Object storage (S3-compatible, e.g. Cloudflare R2)
    storage_endpoint_url: str = ""
    storage_account_id: str = ""
    storage_access_key_id: str = ""
    storage_secret_access_key: str = ""
    storage_bucket: str = ""
    storage_region: str = "auto"
    signing_fail_closed: bool = False

    # Media delivery
    document_url_ttl_seconds: int = 3 * 3600
    thumbnail_url_ttl_seconds: int = 3600
    stream_chunk_size: int = 64 * 1024
    upload_max_bytes: int = 500 * 1024 * 1024

    # Transactional email (Brevo)
    brevo_api_key: str = ""
    brevo_api_url: str = "https://api.brevo.com/v3/smtp/email"
    sender_email: str = "no-reply@coursevault.local"
    sender_name: str = "CourseVault"

    # Payments (Razorpay)
    razorpay_key_id: str = ""
    razorpay_key_secret: str = ""
    razorpay_api_url: str = "https://api.razorpay.com/v1"
    payment_currency: str = "INR"

    # Accounts created with these emails get the admin role
    admin_emails: list[str] = []

    @property
    def resolved_storage_endpoint(self) -> Optional[str]:
        """Explicit endpoint wins; otherwise derive the R2 endpoint from the account ID."""
        if self.storage_endpoint_url:
            return self.storage_endpoint_url
        if self.storage_account_id:
            return f"https://{self.storage_account_id}.r2.cloudflarestorage.com"
        return None

    @property
    def storage_configured(self) -> bool:
        return bool(
            self.storage_bucket
            and self.storage_access_key_id
            and self.storage_secret_access_key
        )

    @property
    def email_configured(self) -> bool:
        return bool(self.brevo_api_key)

    @property
    def dev_otp_enabled(self) -> bool:
        if self.expose_dev_otp is None:
            return self.debug
        return self.expose_dev_otp


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
