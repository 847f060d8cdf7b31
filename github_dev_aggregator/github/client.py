# This file is intended to hold the setup for the githubkit client.

"""Sets up the githubkit client used to talk to the GitHub REST API."""

from typing import TypeAlias

import structlog
from githubkit import GitHub
from githubkit.auth import TokenAuthStrategy, UnauthAuthStrategy

from github_dev_aggregator.configuration.models import AuthenticationMode

logger = structlog.get_logger(__name__)

GitHubClient: TypeAlias = GitHub[TokenAuthStrategy] | GitHub[UnauthAuthStrategy]


def get_github_pat_client(github_pat_token: str, github_api_url: str) -> GitHub[TokenAuthStrategy]:
    """Returns a GitHub client authenticated with a personal access token."""
    if not github_pat_token:
        raise RuntimeError("GitHub PAT authentication requires github_pat_token in config.")
    # No HTTP caching and no automatic retries; caching and retry policy live above the client.
    return GitHub(auth=TokenAuthStrategy(github_pat_token), base_url=github_api_url, http_cache=False, auto_retry=False)


def get_github_anonymous_client(github_api_url: str) -> GitHub[UnauthAuthStrategy]:
    """Returns an unauthenticated GitHub client with the low anonymous rate budget."""
    logger.warning(
        "GITHUB_PAT_TOKEN is not set, GitHub rate limits will be very low",
        github_api_url=github_api_url,
    )
    return GitHub(auth=UnauthAuthStrategy(), base_url=github_api_url, http_cache=False, auto_retry=False)


def get_github_client(
    authentication_mode: AuthenticationMode,
    github_pat_token: str | None,
    github_api_url: str,
) -> GitHubClient:
    """Returns a GitHub client for the resolved authentication mode.

    A missing token is not an error: the client falls back to anonymous access
    and a single warning is logged when it is constructed.
    """
    if authentication_mode == AuthenticationMode.TOKEN:
        if not github_pat_token:
            raise RuntimeError("Token authentication requires github_pat_token in config.")
        return get_github_pat_client(github_pat_token, github_api_url)
    return get_github_anonymous_client(github_api_url)
