"""Contains per-account results of bulk enrichment."""

from dataclasses import dataclass
from typing import Iterable, TypeAlias

from github_dev_aggregator.aggregation.models import AccountSummary, EnrichedAccount


@dataclass(frozen=True)
class Enriched:
    """An account whose enrichment succeeded."""

    account: EnrichedAccount

    def to_account(self) -> EnrichedAccount:
        """Return the row to serve for this account."""
        return self.account


@dataclass(frozen=True)
class Degraded:
    """An account whose enrichment failed and falls back to its search summary."""

    summary: AccountSummary
    reason: str

    def to_account(self) -> EnrichedAccount:
        """Return the summary as a row with no languages."""
        return EnrichedAccount(**self.summary.model_dump(), languages=[])


EnrichmentOutcome: TypeAlias = Enriched | Degraded


def collect_accounts(outcomes: Iterable[EnrichmentOutcome]) -> list[EnrichedAccount]:
    """Reduce per-account outcomes into the ordered listing, one row per outcome."""
    return [outcome.to_account() for outcome in outcomes]


def all_degraded(outcomes: list[EnrichmentOutcome]) -> bool:
    """Whether a non-empty batch contains no successfully enriched account."""
    return bool(outcomes) and all(isinstance(outcome, Degraded) for outcome in outcomes)
