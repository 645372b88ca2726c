"""Configuration management for timerbot."""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Timerbot config directory
TIMERBOT_DIR = Path.home() / ".timerbot"
TIMERBOT_ENV_FILE = TIMERBOT_DIR / ".env"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="TIMERBOT_",
        # Load from multiple locations (later files override earlier)
        env_file=(str(TIMERBOT_ENV_FILE), ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Storage settings
    data_dir: Path = Field(
        default=Path("~/mcp-data"),
        description="Directory holding the timers file",
    )
    timers_file: str = Field(
        default="timers.json",
        description="File name of the timers store inside data_dir",
    )

    # Server settings
    server_name: str = Field(
        default="carolines-mcp",
        description="Name reported to MCP clients during initialization",
    )
    log_level: str = Field(
        default="WARNING",
        description="Log level used when --verbose is not given",
    )

    def get_timers_path(self) -> Path:
        """Get the full path of the timers store file."""
        return self.data_dir.expanduser() / self.timers_file


# Global settings instance
settings = Settings()
