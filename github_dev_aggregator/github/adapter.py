"""GitHub client adapter for the githubkit library."""

from datetime import datetime, timezone
from functools import wraps
from typing import Any, Awaitable, Callable, Self, TypeVar
from urllib.parse import quote

import structlog
from githubkit import Response
from githubkit.exception import (
    GitHubException,
    RateLimitExceeded,
    RequestError,
    RequestFailed,
    RequestTimeout,
)

from github_dev_aggregator.configuration.models import AuthenticationMode

from .abc import RateLimitHeaders, UpstreamClientBase, UpstreamResponse
from .client import GitHubClient, get_github_client
from .exceptions import (
    NotFoundError,
    RateLimitedError,
    UnexpectedUpstreamError,
    UpstreamError,
    UpstreamUnavailableError,
)

logger = structlog.get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Awaitable[Any]])


def _response_message(response: Response[Any]) -> str:
    """Extract GitHub's error message from a failed response."""
    try:
        error_data = response.json()
    except Exception:
        error_data = {}
    if isinstance(error_data, dict) and error_data.get("message"):
        return str(error_data["message"])
    return f"GitHub responded with HTTP {response.status_code}"


def classify_github_exception(exc: GitHubException) -> UpstreamError:
    """Translate a githubkit exception into the upstream error hierarchy."""
    if isinstance(exc, RateLimitExceeded):
        rate = RateLimitHeaders.from_headers(exc.response.headers)
        reset_at = rate.reset_at
        if reset_at is None and exc.retry_after:
            reset_at = datetime.now(timezone.utc) + exc.retry_after
        return RateLimitedError(_response_message(exc.response), reset_at=reset_at, remaining=rate.remaining)

    if isinstance(exc, RequestFailed):
        status_code = exc.response.status_code
        message = _response_message(exc.response)
        if status_code == 404:
            return NotFoundError(message)
        if status_code in (403, 429) and "rate limit" in message.lower():
            rate = RateLimitHeaders.from_headers(exc.response.headers)
            return RateLimitedError(message, reset_at=rate.reset_at, remaining=rate.remaining)
        if status_code >= 500:
            return UpstreamUnavailableError(message)
        return UnexpectedUpstreamError(message, upstream_status_code=status_code)

    if isinstance(exc, (RequestError, RequestTimeout)):
        return UpstreamUnavailableError(f"GitHub could not be reached: {exc}")

    return UnexpectedUpstreamError(str(exc) or type(exc).__name__)


def expect_payload(body: Any, expected_type: type, description: str) -> Any:
    """Return ``body`` if it has the JSON shape the endpoint documents.

    Raises:
        UnexpectedUpstreamError: If GitHub answered with a differently shaped payload.
    """
    if not isinstance(body, expected_type):
        raise UnexpectedUpstreamError(f"Malformed GitHub {description}: expected {expected_type.__name__}, got {type(body).__name__}")
    return body


def translate_github_errors(func: F) -> F:
    """Decorator to translate githubkit exceptions into typed upstream errors."""

    @wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)
        except GitHubException as exc:
            error = classify_github_exception(exc)
            logger.debug(
                "GitHub request failed",
                function=func.__name__,
                error_tag=error.error_tag,
                error=error.message,
            )
            raise error from exc

    return wrapper  # type: ignore


class GitHubKitAdapter(UpstreamClientBase):
    """GitHub client adapter for the githubkit library."""

    def __init__(self, client: GitHubClient) -> None:
        """Initialize the adapter with an already-initialized client."""
        self.client = client

    def _omit_null_parameters(self, **kwargs: Any) -> dict[str, Any]:
        """Omit parameters that are None."""
        return {k: v for k, v in kwargs.items() if v is not None}

    @classmethod
    def create(
        cls,
        authentication_mode: AuthenticationMode,
        github_pat_token: str | None = None,
        github_api_url: str = "https://api.github.com",
    ) -> Self:
        """Create a new GitHub client adapter.

        Args:
            authentication_mode: Whether to authenticate with a token or anonymously
            github_pat_token: Personal access token (required for token auth)
            github_api_url: GitHub API URL (defaults to https://api.github.com)

        Returns:
            Configured GitHubKitAdapter instance
        """
        logger.info(
            "Creating client for GitHub instance",
            github_api_url=github_api_url,
            authentication_mode=authentication_mode.value,
        )
        client = get_github_client(
            authentication_mode=authentication_mode,
            github_pat_token=github_pat_token,
            github_api_url=github_api_url,
        )
        return cls(client)

    @translate_github_errors
    async def request(
        self,
        path: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> UpstreamResponse:
        """Issue a GET request and surface the rate limit headers of the response."""
        response: Response[Any] = await self.client.arequest(
            "GET",
            path,
            params=self._omit_null_parameters(**(params or {})),
            headers=headers,
        )
        rate = RateLimitHeaders.from_headers(response.headers)
        if rate.remaining is not None:
            logger.debug("GitHub rate limit remaining", path=path, remaining=rate.remaining, limit=rate.limit)
        try:
            body = response.json()
        except ValueError as exc:
            raise UnexpectedUpstreamError(f"GitHub returned a non-JSON body for {path}", upstream_status_code=response.status_code) from exc
        return UpstreamResponse(status_code=response.status_code, body=body, rate=rate)

    # Search
    async def search_users(
        self,
        query: str,
        per_page: int,
        page: int = 1,
        sort: str = "followers",
        order: str = "desc",
    ) -> dict[str, Any]:
        """Search users, returning the raw page with total_count and items."""
        response = await self.request(
            "/search/users",
            params={"q": query, "sort": sort, "order": order, "per_page": per_page, "page": page},
        )
        return expect_payload(response.body, dict, "user search page")

    # Accounts
    async def get_user(self, username: str) -> dict[str, Any]:
        """Get the full public profile of a user."""
        response = await self.request(f"/users/{quote(username)}")
        return expect_payload(response.body, dict, "user profile")

    async def list_user_repositories(
        self,
        username: str,
        per_page: int,
        sort: str = "pushed",
        direction: str = "desc",
    ) -> list[dict[str, Any]]:
        """List one page of repositories owned by a user."""
        response = await self.request(
            f"/users/{quote(username)}/repos",
            params={"per_page": per_page, "sort": sort, "direction": direction},
        )
        return expect_payload(response.body, list, "repository list")

    async def list_followers(self, username: str, per_page: int) -> list[dict[str, Any]]:
        """List one page of a user's followers."""
        response = await self.request(f"/users/{quote(username)}/followers", params={"per_page": per_page})
        return expect_payload(response.body, list, "follower list")

    async def list_organizations(self, username: str) -> list[dict[str, Any]]:
        """List a user's public organization memberships."""
        response = await self.request(f"/users/{quote(username)}/orgs")
        return expect_payload(response.body, list, "organization list")

    # Repositories
    async def list_repository_languages(self, owner: str, repo: str) -> dict[str, int]:
        """Get the language byte counts of a repository."""
        response = await self.request(f"/repos/{quote(owner)}/{quote(repo)}/languages")
        return expect_payload(response.body, dict, "repository languages")

    # Rate limit
    async def get_rate_limit(self) -> dict[str, Any]:
        """Get the current rate limit status."""
        response = await self.request("/rate_limit")
        return expect_payload(response.body, dict, "rate limit status")
