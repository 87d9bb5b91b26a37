"""Application settings and configuration.

This module defines all configuration options for the bulletin board service.
Settings are loaded from environment variables with sensible defaults.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Settings can be overridden via environment variables or .env files.
    """

    # Application metadata
    app_name: str = Field(default="Community Bulletin Board", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # The first sign-in with this address is given the admin role.
    admin_email: str | None = Field(default=None, alias="ADMIN_EMAIL")

    # Security and authentication
    secret_key: str = Field(alias="SECRET_KEY")
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    access_token_expire_minutes: int = Field(
        default=60 * 24 * 7,
        alias="ACCESS_TOKEN_EXPIRE_MINUTES",
    )

    # Database configuration
    database_url: str = Field(default="sqlite:///./bulletin_board.db", alias="DATABASE_URL")
    test_database_url: str | None = Field(default=None, alias="TEST_DATABASE_URL")
    use_testing_database: bool = Field(default=False, alias="USE_TEST_DATABASE")
    sql_debug: bool = Field(default=False, alias="SQL_DEBUG")

    # Values used when the settings row is first seeded
    default_community_name: str = Field(
        default="Community Bulletin Board",
        alias="DEFAULT_COMMUNITY_NAME",
    )
    default_community_subtitle: str = Field(
        default="Your Source for Local Updates and Announcements",
        alias="DEFAULT_COMMUNITY_SUBTITLE",
    )

    # Sidebar listing sizes
    upcoming_events_limit: int = Field(default=3, alias="UPCOMING_EVENTS_LIMIT")
    past_events_limit: int = Field(default=2, alias="PAST_EVENTS_LIMIT")

    # Email dispatch: Resend when an API key is present, SMTP otherwise
    resend_api_key: str | None = Field(default=None, alias="RESEND_API_KEY")
    resend_api_url: str = Field(
        default="https://api.resend.com/emails",
        alias="RESEND_API_URL",
    )
    email_default_from: str = Field(
        default="Notification <notifications@yourdomain.com>",
        alias="EMAIL_DEFAULT_FROM",
    )
    email_http_timeout_seconds: float = Field(
        default=10.0,
        alias="EMAIL_HTTP_TIMEOUT_SECONDS",
    )
    smtp_host: str | None = Field(default=None, alias="SMTP_HOST")
    smtp_port: int | None = Field(default=None, alias="SMTP_PORT")
    smtp_user: str | None = Field(default=None, alias="SMTP_USER")
    smtp_pass: str | None = Field(default=None, alias="SMTP_PASS")
    smtp_from: str | None = Field(default=None, alias="SMTP_FROM")

    # CORS configuration for web frontend access
    cors_origins: list[str] = Field(
        default=["*"],
        alias="CORS_ORIGINS",
    )
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(
        default=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        alias="CORS_ALLOW_METHODS",
    )
    cors_allow_headers: list[str] = Field(
        default=["authorization", "x-client-info", "apikey", "content-type"],
        alias="CORS_ALLOW_HEADERS",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        validate_assignment=True,
        extra="ignore",
        populate_by_name=True,
    )

    @property
    def effective_database_url(self) -> str:
        """Return the database URL respecting testing overrides."""
        if self.use_testing_database and self.test_database_url:
            return self.test_database_url
        return self.database_url

    @property
    def database_url_sync(self) -> str:
        """Return a sync-compatible database URL for Alembic.

        Strips async driver suffixes so Alembic can use the default driver.
        """
        url = self.effective_database_url
        for async_scheme, sync_scheme in (
            ("postgresql+asyncpg", "postgresql"),
            ("sqlite+aiosqlite", "sqlite"),
        ):
            if url.startswith(async_scheme):
                return url.replace(async_scheme, sync_scheme, 1)
        return url

    @property
    def resend_configured(self) -> bool:
        """Return True when the transactional email API can be used."""
        return bool(self.resend_api_key)

    @property
    def smtp_configured(self) -> bool:
        """Return True when a complete SMTP credential set is present."""
        return all((self.smtp_host, self.smtp_port, self.smtp_user, self.smtp_pass))


settings = Settings()  # type: ignore[call-arg]
