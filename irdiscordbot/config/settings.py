"""
Application settings and configuration management.

Uses Pydantic Settings for validation and environment variable support.
"""

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class BotSettings(BaseSettings):
    """Discord bot configuration."""

    name: str = Field(default="iRdiscordbot", description="Bot display name")
    token: str = Field(default="", description="Discord bot token")
    allowed_channel_ids: list[int] = Field(
        default_factory=list,
        description="If non-empty, bot only responds in these channel IDs. "
                    "Set via BOT__ALLOWED_CHANNEL_IDS='[123456,789012]'",
    )


class APISettings(BaseSettings):
    """Remote services the bot reads from and links to."""

    visualizer_url: str = Field(
        default="https://irvisualizer.jamesclonk.io",
        description="Base URL of the iRacing visualizer. Serves the series listing "
                    "(/series_json) and renders every image the bot links to.",
    )
    joke_url: str = Field(
        default="http://api.apekool.nl/services/jokes/getjoke.php",
        description="Joke endpoint, called with a ?type=xxx|nl query parameter",
    )
    timeout: float = Field(default=10.0, gt=0, description="HTTP timeout in seconds")

    model_config = SettingsConfigDict(env_prefix="API_")


class HealthSettings(BaseSettings):
    """Health endpoint configuration."""

    enabled: bool = Field(default=True, description="Serve GET /health while the bot runs")
    host: str = Field(default="0.0.0.0", description="Interface to bind the health server to")
    port: int = Field(default=8080, description="Port of the health server")
    max_latency_seconds: float = Field(
        default=300.0,
        description="Heartbeat latency above which /health reports failure",
    )

    model_config = SettingsConfigDict(env_prefix="HEALTH_")


class Settings(BaseSettings):
    """Main application settings."""

    # Environment
    environment: Literal["development", "production"] = Field(
        default="development", description="Deployment environment"
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Logging level"
    )
    log_file: Path | None = Field(default=None, description="Log file path")

    # Sub-configurations
    bot: BotSettings = Field(default_factory=BotSettings)
    api: APISettings = Field(default_factory=APISettings)
    health: HealthSettings = Field(default_factory=HealthSettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def load_settings(env_file: str | Path | None = None) -> Settings:
    """
    Load settings from file and environment.

    Args:
        env_file: Path to .env file (optional)

    Returns:
        Loaded settings instance
    """
    global _settings
    if env_file:
        _settings = Settings(_env_file=env_file)
    else:
        _settings = Settings()
    return _settings
