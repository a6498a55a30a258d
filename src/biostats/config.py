"""Application settings, read once from the environment and ``.env``."""
from __future__ import annotations

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from biostats.domain.exceptions import ConfigurationError


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore",
    )

    STATS_API_BASE_URL: str | None = None
    STATS_FILE_TYPE: str = "json"
    # None means requests never time out; a recompute can take minutes.
    STATS_HTTP_TIMEOUT: float | None = None
    STATS_DISPLAY_TZ: str = "UTC"
    STATS_SHOW_ERRORS: bool = False
    LOG_LEVEL: str = "INFO"

    @field_validator("STATS_API_BASE_URL")
    @classmethod
    def _strip_base_url(cls, value: str | None) -> str | None:
        if value is None:
            return None
        value = value.strip().rstrip("/")
        return value or None

    def require_api_base_url(self) -> str:
        """Return the backend base URL or raise ``ConfigurationError``."""
        if not self.STATS_API_BASE_URL:
            raise ConfigurationError(
                "STATS_API_BASE_URL is not set — add it to the environment or .env"
            )
        if not self.STATS_API_BASE_URL.startswith(("http://", "https://")):
            raise ConfigurationError(
                f"STATS_API_BASE_URL must be an http(s) URL, got {self.STATS_API_BASE_URL!r}"
            )
        return self.STATS_API_BASE_URL

    def require_display_tz(self) -> ZoneInfo:
        """Return the display time zone or raise ``ConfigurationError``."""
        try:
            return ZoneInfo(self.STATS_DISPLAY_TZ.strip())
        except (ZoneInfoNotFoundError, ValueError, OSError) as exc:
            raise ConfigurationError(
                f"STATS_DISPLAY_TZ is not a known time zone: {self.STATS_DISPLAY_TZ!r}"
            ) from exc


settings = Settings()
