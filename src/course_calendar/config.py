"""Application configuration.

Configuration is loaded from environment variables using pydantic-settings.
Google OAuth credentials should be provided via environment variables, not
config files.

## Optional Environment Variables

- GOOGLE_CLIENT_ID: Google OAuth client ID
- GOOGLE_CLIENT_SECRET: Google OAuth client secret
- GOOGLE_REDIRECT_URI: OAuth callback handled by the external auth service
- COURSE_TAG: Course code used as milestone prefix (default: "CPEN 321")
- TIMEZONE: IANA zone that defines "today" (default: server local zone)
- API_BASE_URL: Server URL used by the client and CLI
- DEBUG: Enable debug mode (default: false)

## Example .env file

```
GOOGLE_CLIENT_ID=your-google-client-id.apps.googleusercontent.com
GOOGLE_CLIENT_SECRET=your-google-client-secret
COURSE_TAG=CPEN 321
TIMEZONE=America/Vancouver
```
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator
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
    app_name: str = "Course Calendar"
    app_version: str = "0.1.0"
    debug: bool = False
    environment: Literal["development", "staging", "production"] = "development"
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    allowed_origins: list[str] = Field(
        default=["http://localhost:3000", "http://localhost:8000"],
        description="CORS allowed origins",
    )

    # Google OAuth
    google_client_id: str | None = None
    google_client_secret: str | None = None
    google_redirect_uri: str = "http://localhost:3001/api/auth/google/callback"

    # Google Calendar API
    google_calendar_scopes: list[str] = Field(
        default=[
            "https://www.googleapis.com/auth/calendar",
            "https://www.googleapis.com/auth/userinfo.email",
            "https://www.googleapis.com/auth/userinfo.profile",
        ],
        description="Scopes requested on the consent screen",
    )
    calendar_id: str = "primary"

    # Milestones and schedule
    course_tag: str = Field(default="CPEN 321", min_length=1)
    milestone_window_months: int = Field(default=1, ge=1, le=12)
    milestone_fetch_limit: int = Field(default=50, ge=1, le=2500)
    default_milestone_limit: int = Field(default=10, ge=1, le=2500)
    schedule_fetch_limit: int = Field(default=20, ge=1, le=2500)
    timezone: str | None = None

    # Client
    api_base_url: str = "http://localhost:8000"
    request_timeout_seconds: float = Field(default=30.0, gt=0)

    @field_validator("timezone", mode="before")
    @classmethod
    def validate_timezone(cls, v: str | None) -> str | None:
        """Reject unknown IANA zone names early."""
        if not v:
            return None
        try:
            ZoneInfo(v)
        except ZoneInfoNotFoundError as e:
            raise ValueError(f"Unknown timezone: {v}") from e
        return v

    @field_validator("api_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @property
    def google_oauth_configured(self) -> bool:
        """Check if Google OAuth is configured."""
        return bool(self.google_client_id and self.google_client_secret)


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Settings are loaded once and cached. To reload, clear the cache:
    ```python
    get_settings.cache_clear()
    ```
    """
    return Settings()

