"""Configuration management for Tasker MCP"""

from typing import Any

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support"""

    # Tool definitions
    tools_path: str | None = None

    # Tasker backend
    tasker_host: str = "0.0.0.0"
    tasker_port: int = 1821
    tasker_api_key: str | None = None
    request_timeout: float = 30.0

    # Transport
    mode: str = "stdio"
    host: str = "0.0.0.0"
    port: int = 8000

    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="TASKER_MCP_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def has_api_key(self) -> bool:
        """Check if a Tasker API key is configured"""
        return bool(self.tasker_api_key)

    @property
    def tasker_url(self) -> str:
        """Base URL of the Tasker HTTP server"""
        return f"http://{self.tasker_host}:{self.tasker_port}"


def load_settings(**overrides: Any) -> Settings:
    """Build settings from env/.env, letting explicit non-None values win."""
    return Settings(**{key: value for key, value in overrides.items() if value is not None})
