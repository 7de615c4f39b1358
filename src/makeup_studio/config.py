"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")

DEFAULT_MAX_UPLOAD_BYTES = 10 * 1024 * 1024


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    storage_bucket: str = "portfolio-images"
    admin_emails: str = ""
    primary_admin_email: str | None = None
    admin_registration_secret: str
    site_url: str = "http://localhost:8000"
    session_cookie_name: str = "studio_session"
    session_cookie_secure: bool = False
    oauth_verifier_cookie_name: str = "studio_oauth_verifier"
    contact_relay_url: str | None = None
    max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_admin_emails(raw: str | None) -> frozenset[str]:
    """Parse the comma-separated admin allow-list from env."""
    if raw is None:
        return frozenset()
    emails: set[str] = set()
    for chunk in raw.split(","):
        value = chunk.strip().lower()
        if value and "@" in value:
            emails.add(value)
    return frozenset(emails)
