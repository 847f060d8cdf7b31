"""Pydantic Settings model for application configuration."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment variable settings for the application."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Generic application-wide settings
    DEBUG: bool = False
    LOG_FORMAT: str = "console"

    # GitHub API settings
    GITHUB_API_URL: str = "https://api.github.com"
    GITHUB_PAT_TOKEN: str | None = None

    # Discovery settings
    SEARCH_QUERY: str = "location:ethiopia"
    MAX_DEVELOPERS: int = 100
    SEARCH_PAGE_SIZE: int = 100
    SEARCH_PAGE_DELAY: float = 1.0

    # Enrichment settings
    REPO_SAMPLE_LIMIT: int = 50
    LANGUAGE_LIMIT: int = 5
    ACCOUNT_DELAY: float = 0.15
    DETAIL_REPO_PAGE_SIZE: int = 30
    FOLLOWERS_PAGE_SIZE: int = 30
    FOLLOWERS_PREVIEW_LIMIT: int = 8
    LANGUAGE_SAMPLE_REPOS: int = 10
    LANGUAGE_STAGGER: float = 0.1
    MIN_RATE_BUDGET: int = 50

    # Cache settings
    CACHE_TTL_SECONDS: float = 3600.0

    # HTTP server settings
    HOST: str = "0.0.0.0"
    PORT: int = 3000
    CORS_ORIGINS: list[str] = ["*"]


def get_settings() -> Settings:
    """Load settings from the environment and the .env file."""
    return Settings()
