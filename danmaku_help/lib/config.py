"""Configuration management via environment variables and pydantic-settings."""

from pathlib import Path
from pydantic_settings import BaseSettings
from pydantic import Field


class HelpSettings(BaseSettings):
    """
    Help registry configuration loaded from environment variables.

    Priority (highest to lowest):
    1. CLI arguments (handled separately)
    2. Environment variables
    3. .env file
    4. Defaults defined here
    """

    content_path: str | None = Field(
        default=None,
        alias="HELP_CONTENT_PATH",
        description="JSON payload to load instead of the bundled help content",
    )

    forum_db: str | None = Field(
        default=None,
        alias="HELP_FORUM_DB",
        description="SQLite database holding the forum tables to seed",
    )

    system_author: str = Field(
        default="system",
        alias="HELP_SYSTEM_AUTHOR",
        description="Author recorded on seeded manual threads and posts",
    )

    verbose: bool = Field(
        default=False, alias="HELP_VERBOSE", description="Enable verbose output"
    )

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
        "populate_by_name": True,
    }

    @property
    def content_file(self) -> Path | None:
        """Get the external payload as Path, if configured."""
        return Path(self.content_path) if self.content_path else None

    def require_forum_db(self) -> str:
        """
        Return the forum database path.

        Raises:
            ConfigError: If no database is configured
        """
        from danmaku_help.lib.exceptions import ConfigError

        if not self.forum_db:
            raise ConfigError(
                "No forum database configured. "
                "Set the HELP_FORUM_DB environment variable or pass --db."
            )
        return self.forum_db


# Global settings instance (lazy loaded)
_settings: HelpSettings | None = None


def get_settings() -> HelpSettings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        _settings = HelpSettings()
    return _settings


def reset_settings() -> None:
    """Reset settings (useful for testing)."""
    global _settings
    _settings = None
