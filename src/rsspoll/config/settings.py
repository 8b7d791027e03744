"""Configuration management using pydantic-settings.

Supports environment variables and .env file loading.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration.

    Notification is enabled only when both ``notification_endpoint`` and
    ``notification_sender`` are set; polling runs either way.
    """

    model_config = SettingsConfigDict(
        env_file=(".env", ".env.local"),  # .env.local overrides .env
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "rsspoll"
    debug: bool = False
    log_level: str = "INFO"
    log_json: bool = False  # Set True in production for structured logs

    # Polling
    poll_interval_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Seconds between poll cycles",
    )
    feed_urls: list[str] = Field(
        default_factory=list,
        description="Feed URLs to poll at startup (can be replaced via /config)",
    )

    # RSS
    rss_fetch_timeout: int = 30
    rss_user_agent: str = "rsspoll/1.0 (RSS Poller)"

    # Notification
    notification_endpoint: str | None = Field(
        default=None,
        description="Destination webhook the new items are meant for",
    )
    notification_sender: str | None = Field(
        default=None,
        description="URL of the notify service the payload is posted to",
    )
    notification_timeout: float = Field(default=10.0, gt=0)

    # API
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    cors_origins: list[str] = Field(
        default=["http://localhost:4321"],
        description="Frontend origins allowed to read /rss",
    )

    @property
    def notification_enabled(self) -> bool:
        return bool(self.notification_endpoint and self.notification_sender)


# Global singleton instance
settings = Settings()
