"""Gate expensive multi-call operations on GitHub's remaining rate budget."""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import TypeAlias

import structlog

from github_dev_aggregator.aggregation.models import RateBudgetSnapshot
from github_dev_aggregator.github.abc import UpstreamClientBase, epoch_to_datetime
from github_dev_aggregator.github.exceptions import UnexpectedUpstreamError

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class BudgetAllow:
    """Enough budget remains; the gated operation may proceed."""

    snapshot: RateBudgetSnapshot


@dataclass(frozen=True)
class BudgetDeny:
    """Too little budget remains; the gated operation must not be attempted."""

    snapshot: RateBudgetSnapshot

    @property
    def reset_at(self) -> datetime:
        """When GitHub refills the budget."""
        return self.snapshot.reset_at


BudgetDecision: TypeAlias = BudgetAllow | BudgetDeny


class RateBudgetGuard:
    """Query the remaining core budget before a gated operation."""

    def __init__(self, upstream: UpstreamClientBase) -> None:
        """Initialize the guard with the client whose budget is checked."""
        self.upstream = upstream

    async def snapshot(self) -> RateBudgetSnapshot:
        """Fetch the current core rate budget. Never cached."""
        body = await self.upstream.get_rate_limit()
        try:
            core = body["resources"]["core"]
            reset_at = epoch_to_datetime(core["reset"]) or datetime.now(timezone.utc)
            return RateBudgetSnapshot(remaining=int(core["remaining"]), limit=int(core["limit"]), reset_at=reset_at)
        except (KeyError, TypeError, ValueError) as exc:
            raise UnexpectedUpstreamError(f"Malformed rate limit response: {exc}") from exc

    async def check_budget(self, minimum_required: int) -> BudgetDecision:
        """Allow when at least ``minimum_required`` calls remain, deny otherwise."""
        snapshot = await self.snapshot()
        if snapshot.remaining < minimum_required:
            logger.warning(
                "GitHub rate budget too low for gated operation",
                remaining=snapshot.remaining,
                minimum_required=minimum_required,
                reset_at=snapshot.reset_at.isoformat(),
            )
            return BudgetDeny(snapshot)
        logger.debug("GitHub rate budget sufficient", remaining=snapshot.remaining, minimum_required=minimum_required)
        return BudgetAllow(snapshot)
