"""Application settings using Pydantic Settings."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Defaults for the command-line options, loaded from the environment."""

    model_config = SettingsConfigDict(
        env_prefix="PERIBOLOS_SYNC_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Logging
    log_level: str = "INFO"
    json_logs: bool = False

    # GitHub
    github_endpoint: str = "https://api.github.com"
    github_token_path: str = "/etc/github/oauth"
    http_timeout: float = 30.0


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
