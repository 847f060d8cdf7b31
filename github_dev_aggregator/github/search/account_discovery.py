"""Developer account discovery using the GitHub Search API."""

import math

import structlog

from github_dev_aggregator.aggregation.models import AccountSummary
from github_dev_aggregator.github.abc import UpstreamClientBase
from github_dev_aggregator.utils.pacing import FixedIntervalPacer

logger = structlog.get_logger(__name__)

DEFAULT_PAGE_SIZE = 100
DEFAULT_PAGE_DELAY_SECONDS = 1.0


def count_pages(total_count: int, max_total: int, page_size: int) -> int:
    """Number of search pages needed to read ``min(total_count, max_total)`` results."""
    return math.ceil(min(total_count, max_total) / page_size) if total_count > 0 else 0


class AccountDiscoverer:
    """Discover developer accounts matching a search query, most followed first."""

    def __init__(
        self,
        upstream: UpstreamClientBase,
        page_size: int = DEFAULT_PAGE_SIZE,
        pacer: FixedIntervalPacer | None = None,
    ) -> None:
        """Initialize the discoverer.

        Args:
            upstream: Client used for search requests
            page_size: Results per search page (max 100)
            pacer: Pacer applied between consecutive pages (default: one second)
        """
        self.upstream = upstream
        self.page_size = page_size
        self.pacer = pacer or FixedIntervalPacer(DEFAULT_PAGE_DELAY_SECONDS, name="search-pages")

    async def count_matches(self, query: str) -> int:
        """Learn the total match count with a single-result probe."""
        probe = await self.upstream.search_users(query, per_page=1)
        return int(probe.get("total_count") or 0)

    async def discover(self, query: str, max_total: int) -> list[AccountSummary]:
        """Discover up to ``max_total`` accounts matching ``query``.

        Pages are fetched strictly in order, one at a time, and the upstream
        descending-by-followers order is kept. Any failed page aborts the whole
        discovery.

        Args:
            query: GitHub user search query, e.g. ``location:ethiopia``
            max_total: Maximum number of accounts to return

        Returns:
            Account summaries in upstream order
        """
        total_count = await self.count_matches(query)
        pages = count_pages(total_count, max_total, self.page_size)

        logger.info(
            "Starting developer discovery",
            query=query,
            total_count=total_count,
            max_total=max_total,
            pages=pages,
        )

        accounts: list[AccountSummary] = []
        for page in range(1, pages + 1):
            response = await self.upstream.search_users(query, per_page=self.page_size, page=page)
            items = response.get("items") or []
            accounts.extend(AccountSummary.from_github_search_item(item) for item in items)
            logger.debug("Fetched search page", query=query, page=page, items=len(items), accumulated=len(accounts))

            if len(accounts) >= max_total:
                accounts = accounts[:max_total]
                break
            if not items:
                logger.warning("Search returned an empty page before the expected total", query=query, page=page)
                break

            if page < pages:
                await self.pacer.pause()

        logger.info("Developer discovery complete", query=query, discovered=len(accounts))
        return accounts
