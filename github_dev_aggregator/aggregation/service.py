"""Orchestrates discovery, enrichment and caching for the two read endpoints."""

from typing import Self

import structlog

from github_dev_aggregator.aggregation.budget import BudgetDeny, RateBudgetGuard
from github_dev_aggregator.aggregation.cache import ResultCache, account_key, developers_key
from github_dev_aggregator.aggregation.enricher import AccountEnricher
from github_dev_aggregator.aggregation.models import AccountDetail, EnrichedAccount, RateBudgetSnapshot
from github_dev_aggregator.aggregation.results import all_degraded, collect_accounts
from github_dev_aggregator.configuration.models import AggregatorConfig
from github_dev_aggregator.github.abc import UpstreamClientBase
from github_dev_aggregator.github.adapter import GitHubKitAdapter
from github_dev_aggregator.github.exceptions import BudgetExhaustedError
from github_dev_aggregator.github.search import AccountDiscoverer
from github_dev_aggregator.utils.pacing import FixedIntervalPacer, SleepFunc

logger = structlog.get_logger(__name__)


class AggregationService:
    """Serve the developer listing and per-developer details, cached for one TTL.

    Each request runs start to finish: check the cache, fetch on a miss, write
    the cache, serve. Failed fetches propagate to the caller and are never
    cached. The single-developer path checks the remaining rate budget before
    issuing any enrichment call.
    """

    def __init__(
        self,
        discoverer: AccountDiscoverer,
        enricher: AccountEnricher,
        budget_guard: RateBudgetGuard,
        cache: ResultCache,
        search_query: str = "location:ethiopia",
        max_developers: int = 100,
        min_rate_budget: int = 50,
    ) -> None:
        """Initialize the service with its explicitly owned collaborators."""
        self.discoverer = discoverer
        self.enricher = enricher
        self.budget_guard = budget_guard
        self.cache = cache
        self.search_query = search_query
        self.max_developers = max_developers
        self.min_rate_budget = min_rate_budget

    @classmethod
    def create(
        cls,
        config: AggregatorConfig,
        upstream: UpstreamClientBase | None = None,
        cache: ResultCache | None = None,
        sleep: SleepFunc | None = None,
    ) -> Self:
        """Wire every collaborator from a reconciled configuration.

        Args:
            config: Reconciled aggregator configuration
            upstream: Client to use instead of a githubkit adapter built from config
            cache: Cache to use instead of a fresh one with the configured TTL
            sleep: Sleep used by every pacer (default: asyncio.sleep)
        """
        if upstream is None:
            upstream = GitHubKitAdapter.create(
                authentication_mode=config.authentication_mode,
                github_pat_token=config.github_pat_token,
                github_api_url=config.github_api_url,
            )
        pacer_options = {"sleep": sleep} if sleep is not None else {}

        discoverer = AccountDiscoverer(
            upstream,
            page_size=config.search_page_size,
            pacer=FixedIntervalPacer(config.search_page_delay, name="search-pages", **pacer_options),
        )
        enricher = AccountEnricher(
            upstream,
            repo_sample_limit=config.repo_sample_limit,
            language_limit=config.language_limit,
            detail_repo_page_size=config.detail_repo_page_size,
            followers_page_size=config.followers_page_size,
            followers_preview_limit=config.followers_preview_limit,
            language_sample_repos=config.language_sample_repos,
            account_pacer=FixedIntervalPacer(config.account_delay, name="accounts", **pacer_options),
            language_pacer=FixedIntervalPacer(config.language_stagger, name="languages", **pacer_options),
        )
        return cls(
            discoverer=discoverer,
            enricher=enricher,
            budget_guard=RateBudgetGuard(upstream),
            cache=cache if cache is not None else ResultCache(ttl_seconds=config.cache_ttl_seconds),
            search_query=config.search_query,
            max_developers=config.max_developers,
            min_rate_budget=config.min_rate_budget,
        )

    async def list_developers(self) -> list[EnrichedAccount]:
        """Return the enriched developer listing, from cache when fresh."""
        key = developers_key()
        cached = self.cache.get(key)
        if cached is not None:
            logger.debug("Serving developers from cache", count=len(cached))
            return list(cached)

        summaries = await self.discoverer.discover(self.search_query, self.max_developers)
        outcomes = await self.enricher.enrich_outcomes(summaries)
        developers = collect_accounts(outcomes)

        if all_degraded(outcomes):
            logger.warning("Every developer failed enrichment, not caching the listing", count=len(developers))
        else:
            self.cache.set(key, tuple(developers))
            logger.info("Cached developers", count=len(developers), ttl_seconds=self.cache.ttl_seconds)
        return developers

    async def get_developer(self, username: str) -> AccountDetail:
        """Return one developer's detail, from cache when fresh.

        Raises:
            BudgetExhaustedError: If too little rate budget remains to enrich the developer.
            NotFoundError: If the developer does not exist.
            UpstreamError: If any lookup fails.
        """
        key = account_key(username)
        cached = self.cache.get(key)
        if cached is not None:
            logger.debug("Serving developer from cache", username=username)
            return cached

        decision = await self.budget_guard.check_budget(self.min_rate_budget)
        if isinstance(decision, BudgetDeny):
            raise BudgetExhaustedError(
                f"GitHub rate limit nearly exhausted. Please try again after {decision.reset_at.isoformat()}",
                reset_at=decision.reset_at,
                remaining=decision.snapshot.remaining,
            )

        detail = await self.enricher.enrich_one(username)
        self.cache.set(key, detail)
        logger.info("Cached developer", username=username, ttl_seconds=self.cache.ttl_seconds)
        return detail

    async def rate_budget(self) -> RateBudgetSnapshot:
        """Return the current rate budget, always freshly queried."""
        return await self.budget_guard.snapshot()
