"""Base ABC for upstream GitHub clients."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Mapping


@dataclass(frozen=True)
class RateLimitHeaders:
    """Rate limit information GitHub attaches to every response."""

    limit: int | None = None
    remaining: int | None = None
    reset_at: datetime | None = None

    @classmethod
    def from_headers(cls, headers: Mapping[str, str]) -> "RateLimitHeaders":
        """Parse the x-ratelimit-* headers, ignoring absent or malformed values."""
        return cls(
            limit=_parse_int(headers.get("x-ratelimit-limit")),
            remaining=_parse_int(headers.get("x-ratelimit-remaining")),
            reset_at=epoch_to_datetime(headers.get("x-ratelimit-reset")),
        )


@dataclass(frozen=True)
class UpstreamResponse:
    """A successful GitHub response."""

    status_code: int
    body: Any
    rate: RateLimitHeaders = field(default_factory=RateLimitHeaders)


def _parse_int(value: str | None) -> int | None:
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None


def epoch_to_datetime(value: str | int | None) -> datetime | None:
    """Convert a Unix epoch (as GitHub reports resets) to an aware UTC datetime."""
    if value is None:
        return None
    try:
        return datetime.fromtimestamp(int(value), tz=timezone.utc)
    except (TypeError, ValueError):
        return None


class UpstreamClientBase(ABC):
    """Base ABC for upstream GitHub clients.

    Every typed operation issues exactly one GET request. Implementations never
    cache and never retry; failures surface as subclasses of
    ``github_dev_aggregator.github.exceptions.UpstreamError``.
    """

    @abstractmethod
    async def request(
        self,
        path: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> UpstreamResponse:
        """Issue a GET request against the API."""
        pass

    # Search
    @abstractmethod
    async def search_users(
        self,
        query: str,
        per_page: int,
        page: int = 1,
        sort: str = "followers",
        order: str = "desc",
    ) -> dict[str, Any]:
        """Search users, returning the raw page with total_count and items."""
        pass

    # Accounts
    @abstractmethod
    async def get_user(self, username: str) -> dict[str, Any]:
        """Get the full public profile of a user."""
        pass

    @abstractmethod
    async def list_user_repositories(
        self,
        username: str,
        per_page: int,
        sort: str = "pushed",
        direction: str = "desc",
    ) -> list[dict[str, Any]]:
        """List one page of repositories owned by a user."""
        pass

    @abstractmethod
    async def list_followers(self, username: str, per_page: int) -> list[dict[str, Any]]:
        """List one page of a user's followers."""
        pass

    @abstractmethod
    async def list_organizations(self, username: str) -> list[dict[str, Any]]:
        """List a user's public organization memberships."""
        pass

    # Repositories
    @abstractmethod
    async def list_repository_languages(self, owner: str, repo: str) -> dict[str, int]:
        """Get the language byte counts of a repository."""
        pass

    # Rate limit
    @abstractmethod
    async def get_rate_limit(self) -> dict[str, Any]:
        """Get the current rate limit status."""
        pass
