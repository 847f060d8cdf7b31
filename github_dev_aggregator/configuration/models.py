"""Models for configuration between CLI arguments and environment variables."""

from dataclasses import dataclass, field
from enum import Enum


class AuthenticationMode(str, Enum):
    """Enum for GitHub authentication modes."""

    TOKEN = "token"
    ANONYMOUS = "anonymous"


class LogFormat(str, Enum):
    """Enum for log output formats."""

    CONSOLE = "console"
    JSON = "json"


@dataclass
class AggregatorConfig:
    """Resolved configuration for the developer aggregator."""

    debug: bool
    github_api_url: str
    authentication_mode: AuthenticationMode
    github_pat_token: str | None

    # Discovery
    search_query: str = "location:ethiopia"
    max_developers: int = 100
    search_page_size: int = 100
    search_page_delay: float = 1.0

    # Bulk enrichment
    repo_sample_limit: int = 50
    language_limit: int = 5
    account_delay: float = 0.15

    # Single-account enrichment
    detail_repo_page_size: int = 30
    followers_page_size: int = 30
    followers_preview_limit: int = 8
    language_sample_repos: int = 10
    language_stagger: float = 0.1
    min_rate_budget: int = 50

    # Caching
    cache_ttl_seconds: float = 3600.0

    # HTTP surface
    cors_origins: list[str] = field(default_factory=lambda: ["*"])
    host: str = "0.0.0.0"
    port: int = 3000
    log_format: LogFormat = LogFormat.CONSOLE
