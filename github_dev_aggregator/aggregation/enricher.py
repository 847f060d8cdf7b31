"""Per-developer enrichment: profile, repositories, followers, organizations and languages."""

from typing import Any, Sequence

import structlog
from pydantic import ValidationError

from github_dev_aggregator.aggregation.languages import LanguageByteTally, rank_languages_by_repository_count
from github_dev_aggregator.aggregation.models import (
    AccountDetail,
    AccountReference,
    AccountStatistics,
    AccountSummary,
    EnrichedAccount,
    ProfileDetail,
    RepositoryRecord,
)
from github_dev_aggregator.aggregation.results import Degraded, Enriched, EnrichmentOutcome, collect_accounts
from github_dev_aggregator.github.abc import UpstreamClientBase
from github_dev_aggregator.github.exceptions import NotFoundError, UnexpectedUpstreamError, UpstreamError
from github_dev_aggregator.utils.constants import GITHUB_USERNAME_PATTERN
from github_dev_aggregator.utils.helpers import gather_or_raise
from github_dev_aggregator.utils.pacing import FixedIntervalPacer

logger = structlog.get_logger(__name__)


def own_repositories(repositories: Sequence[dict[str, Any]]) -> list[dict[str, Any]]:
    """Drop forks, keeping upstream order."""
    return [repo for repo in repositories if not repo.get("fork")]


def total_contributions(repositories: Sequence[dict[str, Any]]) -> int:
    """Stars plus forks received across the given repositories."""
    return sum((repo.get("stargazers_count") or 0) + (repo.get("forks_count") or 0) for repo in repositories)


class AccountEnricher:
    """Enrich developer accounts with data from several GitHub endpoints.

    Bulk enrichment works through accounts one at a time and never fails as a
    whole: an account whose lookups fail is served as its bare search summary.
    Single-account enrichment has no such isolation; any failed lookup fails
    the request.
    """

    def __init__(
        self,
        upstream: UpstreamClientBase,
        repo_sample_limit: int = 50,
        language_limit: int = 5,
        detail_repo_page_size: int = 30,
        followers_page_size: int = 30,
        followers_preview_limit: int = 8,
        language_sample_repos: int = 10,
        account_pacer: FixedIntervalPacer | None = None,
        language_pacer: FixedIntervalPacer | None = None,
    ) -> None:
        """Initialize the enricher.

        Args:
            upstream: Client used for every lookup
            repo_sample_limit: Repositories sampled per account in bulk mode
            language_limit: Languages kept per account in bulk mode
            detail_repo_page_size: Repositories fetched for a single account
            followers_page_size: Followers fetched for a single account
            followers_preview_limit: Followers kept in the preview
            language_sample_repos: Most recently pushed repositories whose language bytes are summed
            account_pacer: Pacer applied between accounts in bulk mode (default: 150ms)
            language_pacer: Stagger of per-repository language lookups (default: 100ms)
        """
        self.upstream = upstream
        self.repo_sample_limit = repo_sample_limit
        self.language_limit = language_limit
        self.detail_repo_page_size = detail_repo_page_size
        self.followers_page_size = followers_page_size
        self.followers_preview_limit = followers_preview_limit
        self.language_sample_repos = language_sample_repos
        self.account_pacer = account_pacer or FixedIntervalPacer(0.15, name="accounts")
        self.language_pacer = language_pacer or FixedIntervalPacer(0.1, name="languages")

    # Bulk mode
    async def enrich_all(self, summaries: Sequence[AccountSummary]) -> list[EnrichedAccount]:
        """Enrich every account in order; the result has one row per input summary."""
        outcomes = await self.enrich_outcomes(summaries)
        return collect_accounts(outcomes)

    async def enrich_outcomes(self, summaries: Sequence[AccountSummary]) -> list[EnrichmentOutcome]:
        """Enrich every account in order, keeping each account's success or degradation."""
        outcomes: list[EnrichmentOutcome] = []
        for index, summary in enumerate(summaries):
            if index > 0:
                await self.account_pacer.pause()
            outcomes.append(await self.enrich_account(summary))

        degraded = sum(1 for outcome in outcomes if isinstance(outcome, Degraded))
        logger.info("Bulk enrichment complete", accounts=len(outcomes), degraded=degraded)
        return outcomes

    async def enrich_account(self, summary: AccountSummary) -> EnrichmentOutcome:
        """Enrich one account of the bulk listing, degrading to its summary on failure."""
        try:
            user, repositories = await gather_or_raise(
                self.upstream.get_user(summary.username),
                self.upstream.list_user_repositories(summary.username, per_page=self.repo_sample_limit),
            )
            sampled = own_repositories(repositories)[: self.repo_sample_limit]
            account = EnrichedAccount(
                username=summary.username,
                avatar=user["avatar_url"],
                profile=user["html_url"],
                repos_url=summary.repos_url,
                followers=user.get("followers") or 0,
                languages=rank_languages_by_repository_count(sampled, self.language_limit),
            )
        except (UpstreamError, ValidationError, KeyError, TypeError, AttributeError, ValueError) as exc:
            logger.warning(
                "Failed to enrich developer, serving summary only",
                username=summary.username,
                error=str(exc),
                error_type=type(exc).__name__,
            )
            return Degraded(summary=summary, reason=str(exc))
        return Enriched(account=account)

    # Single-account mode
    async def enrich_one(self, username: str) -> AccountDetail:
        """Build the full detail of one developer.

        Raises:
            NotFoundError: If no such account exists.
            UpstreamError: If any lookup fails.
        """
        if not GITHUB_USERNAME_PATTERN.match(username):
            raise NotFoundError(f"'{username}' is not a valid GitHub username")

        user = await self.upstream.get_user(username)
        login = user.get("login", username)

        repositories, followers, organizations = await gather_or_raise(
            self.upstream.list_user_repositories(login, per_page=self.detail_repo_page_size),
            self.upstream.list_followers(login, per_page=self.followers_page_size),
            self.upstream.list_organizations(login),
        )
        owned = own_repositories(repositories)
        tally = await self.tally_language_bytes(login, owned[: self.language_sample_repos])

        try:
            profile = ProfileDetail.from_github(
                user,
                organizations=[AccountReference.from_github(org) for org in organizations],
                followers_preview=[AccountReference.from_github(follower) for follower in followers[: self.followers_preview_limit]],
            )
            detail = AccountDetail(
                profile=profile,
                statistics=AccountStatistics(
                    total_repos=profile.public_repos,
                    total_contributions=total_contributions(owned),
                    follower_count=profile.followers,
                    following_count=profile.following,
                ),
                languages=tally.ranked(),
                repositories=[RepositoryRecord.from_github(repo) for repo in owned],
            )
        except (ValidationError, KeyError, TypeError, AttributeError) as exc:
            raise UnexpectedUpstreamError(f"Malformed GitHub data for '{login}': {exc}") from exc

        logger.info(
            "Enriched developer detail",
            username=login,
            repositories=len(owned),
            languages=len(tally),
            organizations=len(organizations),
        )
        return detail

    async def tally_language_bytes(self, owner: str, repositories: Sequence[dict[str, Any]]) -> LanguageByteTally:
        """Sum language bytes across an owner's repositories, with lookups staggered to avoid bursts."""

        async def fetch_languages(index: int, repo: dict[str, Any]) -> dict[str, int]:
            await self.language_pacer.stagger(index)
            return await self.upstream.list_repository_languages(owner, repo["name"])

        byte_maps = await gather_or_raise(*(fetch_languages(index, repo) for index, repo in enumerate(repositories)))
        tally = LanguageByteTally()
        for byte_map in byte_maps:
            tally.add(byte_map)
        return tally
